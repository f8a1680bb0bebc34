# models.py
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from .errors import FieldOverwrite, OutOfBounds

Coordinate = Tuple[int, int]  # (x, y); y grows downward


# region Cardinal
class Cardinal(Enum):
    """Grid-aligned step. Declaration order UP < RIGHT < DOWN < LEFT breaks ties."""

    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def delta(self) -> Coordinate:
        return self.value

    @property
    def inverse(self) -> "Cardinal":
        return _INVERSE[self]

    @property
    def glyph(self) -> str:
        return _GLYPH[self]

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    def perpendicular(self) -> Tuple["Cardinal", "Cardinal"]:
        if self in (Cardinal.UP, Cardinal.DOWN):
            return (Cardinal.RIGHT, Cardinal.LEFT)
        return (Cardinal.UP, Cardinal.DOWN)

    def __lt__(self, other):
        if not isinstance(other, Cardinal):
            return NotImplemented
        return self.rank < other.rank


_ORDER = list(Cardinal)
_INVERSE = {
    Cardinal.UP: Cardinal.DOWN,
    Cardinal.RIGHT: Cardinal.LEFT,
    Cardinal.DOWN: Cardinal.UP,
    Cardinal.LEFT: Cardinal.RIGHT,
}
_GLYPH = {
    Cardinal.UP: "↑",
    Cardinal.RIGHT: "→",
    Cardinal.DOWN: "↓",
    Cardinal.LEFT: "←",
}


def step(c: Coordinate, d: Cardinal) -> Coordinate:
    dx, dy = d.value
    return (c[0] + dx, c[1] + dy)
# endregion


# region Grid Model
@dataclass(frozen=True, eq=False)
class GridModel:
    """Immutable n x n obstruction mask, indexed blocked[y, x]."""

    n: int
    blocked: np.ndarray  # (n, n) bool, read-only
    _free: frozenset = field(init=False, repr=False)

    def __post_init__(self):
        mask = np.array(self.blocked, dtype=bool, copy=True)
        mask.setflags(write=False)
        object.__setattr__(self, "blocked", mask)
        ys, xs = np.nonzero(~mask)
        object.__setattr__(self, "_free", frozenset(zip(xs.tolist(), ys.tolist())))

    def in_bounds(self, c: Coordinate) -> bool:
        x, y = c
        return 0 <= x < self.n and 0 <= y < self.n

    def is_free(self, c: Coordinate) -> bool:
        return c in self._free

    def is_obstructed(self, c: Coordinate) -> bool:
        self.check_bounds(c)
        return bool(self.blocked[c[1], c[0]])

    def check_bounds(self, c: Coordinate) -> Coordinate:
        c = (int(c[0]), int(c[1]))
        if not self.in_bounds(c):
            raise OutOfBounds(c, self.n)
        return c

    @property
    def free_count(self) -> int:
        return len(self._free)

    def free_cells(self) -> List[Coordinate]:
        """Free coordinates in row-major order."""
        return sorted(self._free, key=lambda c: (c[1], c[0]))

    def neighbors(self, c: Coordinate) -> Iterator[Coordinate]:
        for d in Cardinal:
            v = step(c, d)
            if v in self._free:
                yield v

    def __eq__(self, other):
        if not isinstance(other, GridModel):
            return NotImplemented
        return self.n == other.n and np.array_equal(self.blocked, other.blocked)

    def __hash__(self):
        return hash((self.n, self.blocked.tobytes()))
# endregion


# region Direction Field
@dataclass(frozen=True)
class FieldEntry:
    distance: int
    predecessor: Cardinal


class DirectionField(Mapping):
    """Reachable cell -> FieldEntry for one source.

    The source itself is never an entry; use distance_to() to get 0 for it.
    Cells are recorded at most once and the field is read-only once sealed.
    """

    def __init__(self, source: Coordinate, size: int):
        self.source = source
        self.size = size
        self._entries: Dict[Coordinate, FieldEntry] = {}
        self._sealed = False

    def record(self, c: Coordinate, distance: int, predecessor: Cardinal) -> FieldEntry:
        if self._sealed:
            raise FieldOverwrite(f"field for {self.source} is sealed")
        if c in self._entries or c == self.source:
            raise FieldOverwrite(f"{c} already recorded for source {self.source}")
        entry = FieldEntry(distance, predecessor)
        self._entries[c] = entry
        return entry

    def seal(self) -> "DirectionField":
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    def distance_to(self, c: Coordinate) -> Optional[int]:
        if c == self.source:
            return 0
        entry = self._entries.get(c)
        return None if entry is None else entry.distance

    def distance_array(self) -> np.ndarray:
        """(size, size) int array; -1 where unreached or obstructed."""
        out = np.full((self.size, self.size), -1, dtype=np.int32)
        for (x, y), entry in self._entries.items():
            out[y, x] = entry.distance
        sx, sy = self.source
        out[sy, sx] = 0
        return out

    def __getitem__(self, c: Coordinate) -> FieldEntry:
        return self._entries[c]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __eq__(self, other):
        if not isinstance(other, DirectionField):
            return NotImplemented
        return (self.source, self.size) == (other.source, other.size) and self._entries == other._entries

    __hash__ = None

    def __repr__(self):
        return f"DirectionField(source={self.source}, size={self.size}, entries={len(self)})"
# endregion


# region Aggregate Result
class AggregateResult(Mapping):
    """Source coordinate -> DirectionField for every free cell of one grid."""

    def __init__(self, grid: GridModel, fields: Dict[Coordinate, DirectionField]):
        self.grid = grid
        self._fields = dict(fields)

    def __getitem__(self, source: Coordinate) -> DirectionField:
        return self._fields[source]

    def __iter__(self):
        return iter(self._fields)

    def __len__(self):
        return len(self._fields)

    @property
    def total_entries(self) -> int:
        return sum(len(f) for f in self._fields.values())

    def __repr__(self):
        return f"AggregateResult(n={self.grid.n}, sources={len(self)}, entries={self.total_entries})"
# endregion
