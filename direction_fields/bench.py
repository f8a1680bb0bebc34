# region Header
"""
bench.py — time the all-pairs fan-out on random grids

  python -m direction_fields.bench 20 50 60 --workers 8 --pool process
"""
# endregion

# region Imports
import argparse
import logging
import time
from typing import Dict, List, Optional, Sequence

from .config import BENCH_SIZES, DEFAULT_POOL, OBSTRUCTION_P
from .connectivity import label_components
from .fanout import build_all_direction_fields
from .grid import random_grid
# endregion

logger = logging.getLogger(__name__)


# region Timing Harness
def time_all_fields(
    sizes: Sequence[int] = BENCH_SIZES,
    p: float = OBSTRUCTION_P,
    seed: Optional[int] = 0,
    max_workers: Optional[int] = None,
    pool: str = DEFAULT_POOL,
) -> List[Dict]:
    records = []
    for n in sizes:
        grid = random_grid(n, p, rng=seed)
        t0 = time.perf_counter()
        result = build_all_direction_fields(grid, max_workers=max_workers, pool=pool, max_free_cells=None)
        elapsed = time.perf_counter() - t0
        rec = {
            "size": n,
            "free_cells": grid.free_count,
            "components": int(label_components(grid).max()) + 1,
            "entries": result.total_entries,
            "seconds": elapsed,
        }
        logger.info("n=%d free=%d components=%d entries=%d %.3fs",
                    n, rec["free_cells"], rec["components"], rec["entries"], elapsed)
        records.append(rec)
    return records
# endregion


# region Main
def main(argv=None):
    ap = argparse.ArgumentParser(description="Time all-pairs direction fields on random grids")
    ap.add_argument("sizes", nargs="*", type=int, default=list(BENCH_SIZES))
    ap.add_argument("--p", type=float, default=OBSTRUCTION_P)
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--pool", choices=("thread", "process"), default=DEFAULT_POOL)
    args = ap.parse_args(argv)

    for rec in time_all_fields(args.sizes, args.p, args.seed, args.workers, args.pool):
        print(f"{rec['size']:>4}  free={rec['free_cells']:>6}  components={rec['components']:>4}  entries={rec['entries']:>10}  {rec['seconds']:.3f}s")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    main()
# endregion
