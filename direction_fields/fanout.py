# region Imports
import logging
import os
import time
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from collections import deque
from itertools import islice, repeat
from typing import Iterator, List, Optional, Tuple

from .config import DEFAULT_POOL, MAX_FREE_CELLS, MAX_WORKERS
from .errors import ObstructedSource, TooManySources
from .models import AggregateResult, Coordinate, DirectionField, GridModel
from .wavefront_core import build_direction_field, trace_path
# endregion

logger = logging.getLogger(__name__)


# region Executor Selection
def _make_executor(pool: str, max_workers: Optional[int]) -> Executor:
    if pool == "thread":
        return ThreadPoolExecutor(max_workers=max_workers)
    if pool == "process":
        return ProcessPoolExecutor(max_workers=max_workers)
    raise ValueError(f"pool must be 'thread' or 'process', got {pool!r}")


def _map_fields(ex: Executor, grid: GridModel, sources: List[Coordinate], chunksize: int):
    # one private field per task; the grid is only read
    return ex.map(build_direction_field, sources, repeat(grid), chunksize=chunksize)
# endregion


# region Streaming Fan-out
def iter_direction_fields(
    grid: GridModel,
    *,
    max_workers: Optional[int] = MAX_WORKERS,
    pool: str = DEFAULT_POOL,
    window: Optional[int] = None,
) -> Iterator[Tuple[Coordinate, DirectionField]]:
    """
    Yield (source, field) for every free cell in row-major order without keeping them.

    At most `window` builds are in flight or waiting to be consumed (default
    twice the worker count). Closing the generator cancels builds not yet started.
    """
    if window is None:
        window = 2 * (max_workers or os.cpu_count() or 1)
    if window < 1:
        raise ValueError(f"window must be at least 1, got {window}")

    sources = iter(grid.free_cells())
    pending = deque()
    ex = _make_executor(pool, max_workers)
    try:
        for s in islice(sources, window):
            pending.append((s, ex.submit(build_direction_field, s, grid)))
        while pending:
            s, fut = pending.popleft()
            field = fut.result()
            for nxt in islice(sources, 1):
                pending.append((nxt, ex.submit(build_direction_field, nxt, grid)))
            yield s, field
    finally:
        ex.shutdown(wait=True, cancel_futures=True)
# endregion


# region All-pairs Fan-out
def build_all_direction_fields(
    grid: GridModel,
    *,
    max_workers: Optional[int] = MAX_WORKERS,
    pool: str = DEFAULT_POOL,
    max_free_cells: Optional[int] = MAX_FREE_CELLS,
    chunksize: int = 16,
) -> AggregateResult:
    """
    Direction field for every free cell taken as its own source.

    Tasks share nothing but the immutable grid, so the result does not depend
    on worker count, pool type or scheduling. Memory is O(F^2) in the number
    of free cells F; grids above max_free_cells raise TooManySources.
    """
    sources = grid.free_cells()
    if max_free_cells is not None and len(sources) > max_free_cells:
        raise TooManySources(len(sources), max_free_cells)

    t0 = time.perf_counter()
    with _make_executor(pool, max_workers) as ex:
        fields = list(_map_fields(ex, grid, sources, chunksize))
    result = AggregateResult(grid, dict(zip(sources, fields)))

    logger.info(
        "built %d direction fields on %dx%d grid (%s pool) in %.3fs, %d entries",
        len(result), grid.n, grid.n, pool, time.perf_counter() - t0, result.total_entries,
    )
    return result
# endregion


# region Path Lookup
def path_between(result: AggregateResult, a: Coordinate, b: Coordinate) -> Optional[List[Coordinate]]:
    """Cells from a to b following b's direction field; None if not connected."""
    b = result.grid.check_bounds(b)
    if b not in result:
        raise ObstructedSource(b)
    return trace_path(result[b], a)
# endregion
