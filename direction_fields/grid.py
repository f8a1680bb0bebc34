# region Imports
from numbers import Integral
from typing import Callable, Iterable, Optional, Union

import numpy as np

from .config import OBSTRUCTION_P
from .errors import InvalidDimension, InvalidInput, OutOfBounds
from .models import Coordinate, GridModel
# endregion

Obstruction = Union[None, Callable[[int, int], bool], Iterable[Coordinate], np.ndarray]


# region Validation
def _check_dimension(n) -> int:
    if isinstance(n, bool) or not isinstance(n, Integral) or n <= 0:
        raise InvalidDimension(f"grid dimension must be a positive integer, got {n!r}")
    return int(n)
# endregion


# region Grid Construction
def build_grid(n: int, obstruction: Obstruction = None) -> GridModel:
    """
    Build an n x n GridModel.

    obstruction may be a predicate (x, y) -> bool, an iterable of obstructed
    (x, y) coordinates, a boolean array of shape (n, n) indexed [y, x], or None.
    """
    n = _check_dimension(n)
    blocked = np.zeros((n, n), dtype=bool)

    if obstruction is None:
        pass
    elif isinstance(obstruction, np.ndarray):
        if obstruction.shape != (n, n):
            raise InvalidDimension(f"mask shape {obstruction.shape} does not match ({n}, {n})")
        blocked[:] = obstruction.astype(bool)
    elif callable(obstruction):
        for y in range(n):
            for x in range(n):
                blocked[y, x] = bool(obstruction(x, y))
    else:
        for x, y in obstruction:
            if not (0 <= x < n and 0 <= y < n):
                raise OutOfBounds((x, y), n)
            blocked[y, x] = True

    return GridModel(n, blocked)


def random_grid(
    n: int,
    p: float = OBSTRUCTION_P,
    rng: Optional[Union[int, np.random.Generator]] = None,
) -> GridModel:
    """One coin flip per cell; a cell is obstructed with probability p."""
    n = _check_dimension(n)
    if not (0.0 <= p < 1.0):
        raise InvalidInput(f"obstruction probability must be in [0, 1), got {p}")
    if not isinstance(rng, np.random.Generator):
        rng = np.random.default_rng(rng)
    return GridModel(n, rng.random((n, n)) < p)


def parse_grid(text: str) -> GridModel:
    """Parse rows of '.' (free) and '#' (obstructed) into a square GridModel."""
    rows = [line.strip() for line in text.strip().splitlines() if line.strip()]
    n = _check_dimension(len(rows))
    blocked = np.zeros((n, n), dtype=bool)
    for y, row in enumerate(rows):
        if len(row) != n:
            raise InvalidDimension(f"row {y} has {len(row)} cells, expected {n}")
        for x, ch in enumerate(row):
            if ch == "#":
                blocked[y, x] = True
            elif ch != ".":
                raise InvalidInput(f"unexpected cell {ch!r} at ({x}, {y})")
    return GridModel(n, blocked)
# endregion
