# region Imports
from collections import deque
from typing import Dict, Tuple

import numpy as np

from .config import SNAP_RADIUS
from .models import Coordinate, GridModel
# endregion


# region Reference BFS
def bfs_distances(grid: GridModel, source: Coordinate) -> Dict[Coordinate, int]:
    """Plain cell-by-cell BFS; includes the source at distance 0."""
    if not grid.is_free(source):
        return {}
    dist = {source: 0}
    q = deque([source])
    while q:
        u = q.popleft()
        du = dist[u]
        for v in grid.neighbors(u):
            if v not in dist:
                dist[v] = du + 1
                q.append(v)
    return dist
# endregion


# region Component Labelling
def label_components(grid: GridModel) -> np.ndarray:
    """(n, n) int array: -1 on obstructions, else a 4-connected component id."""
    labels = np.full((grid.n, grid.n), -1, dtype=np.int32)
    next_id = 0
    for c in grid.free_cells():
        if labels[c[1], c[0]] != -1:
            continue
        for x, y in bfs_distances(grid, c):
            labels[y, x] = next_id
        next_id += 1
    return labels
# endregion


# region Nearest Free Cell Search
def nearest_free(
    c: Coordinate,
    grid: GridModel,
    max_radius: int = SNAP_RADIUS,
) -> Tuple[int, int]:
    c = grid.check_bounds(c)
    if grid.is_free(c):
        return c

    x, y = c
    best = None
    best_d2 = 1e18

    for rad in range(1, max_radius + 1):
        x0, x1 = max(0, x - rad), min(grid.n - 1, x + rad)
        y0, y1 = max(0, y - rad), min(grid.n - 1, y + rad)
        for yy in range(y0, y1 + 1):
            for xx in range(x0, x1 + 1):
                if grid.is_free((xx, yy)):
                    d2 = (xx - x) * (xx - x) + (yy - y) * (yy - y)
                    if d2 < best_d2:
                        best = (xx, yy)
                        best_d2 = d2
        if best is not None:
            return best

    return c
# endregion
