# region Imports and Typing
import logging
from collections import deque
from typing import Dict, List, NamedTuple, Optional

from .errors import ObstructedSource, OutOfBounds
from .models import Cardinal, Coordinate, DirectionField, GridModel, step
# endregion

logger = logging.getLogger(__name__)


# region Cast Queue
class Cast(NamedTuple):
    origin: Coordinate
    direction: Cardinal
    base_distance: int


class CastQueue:
    """First-in first-out queue of casts. Push to the back, pop from the front."""

    __slots__ = ("_casts", "pushed")

    def __init__(self):
        self._casts = deque()
        self.pushed = 0

    def push(self, cast: Cast) -> None:
        self._casts.append(cast)
        self.pushed += 1

    def pop(self) -> Cast:
        return self._casts.popleft()

    def __len__(self):
        return len(self._casts)

    def __bool__(self):
        return bool(self._casts)
# endregion


# region Predecessor Choice
def _predecessor(cell: Coordinate, distance: int, dist: Dict[Coordinate, int]) -> Cardinal:
    # first neighbour one step closer, in UP, RIGHT, DOWN, LEFT order
    for d in Cardinal:
        if dist.get(step(cell, d)) == distance - 1:
            return d
    raise RuntimeError(f"{cell} recorded at {distance} without a closer neighbour")
# endregion


# region Wavefront Traversal
def build_direction_field(source: Coordinate, grid: GridModel) -> DirectionField:
    """
    Shortest 4-connected distance and predecessor direction from every cell
    reachable from source.

    Casts carry a direction and advance one cell per pop, then rejoin the back
    of the queue, so the queue stays ordered by distance. A newly recorded cell
    spawns casts only for its two perpendicular directions; the straight
    continuation is the cast itself. Raises OutOfBounds / ObstructedSource
    before any traversal.
    """
    source = grid.check_bounds(source)
    if not grid.is_free(source):
        raise ObstructedSource(source)

    field = DirectionField(source, grid.n)
    dist: Dict[Coordinate, int] = {source: 0}
    queue = CastQueue()

    for d in Cardinal:
        if grid.is_free(step(source, d)):
            queue.push(Cast(source, d, 0))

    while queue:
        origin, direction, base = queue.pop()
        cell = step(origin, direction)
        if cell in dist or not grid.is_free(cell):
            continue

        distance = base + 1
        dist[cell] = distance
        field.record(cell, distance, _predecessor(cell, distance, dist))

        # region Branches and Continuation
        for d2 in direction.perpendicular():
            side = step(cell, d2)
            if side not in dist and grid.is_free(side):
                queue.push(Cast(cell, d2, distance))

        ahead = step(cell, direction)
        if ahead not in dist and grid.is_free(ahead):
            queue.push(Cast(cell, direction, distance))
        # endregion

    logger.debug("source %s: %d cells reached, %d casts queued", source, len(field), queue.pushed)
    return field.seal()
# endregion


# region Path Reconstruction
def trace_path(field: DirectionField, target: Coordinate) -> Optional[List[Coordinate]]:
    """Cells from target back to the field's source, both inclusive; None if unreached."""
    x, y = int(target[0]), int(target[1])
    if not (0 <= x < field.size and 0 <= y < field.size):
        raise OutOfBounds((x, y), field.size)
    target = (x, y)

    if target == field.source:
        return [target]
    if target not in field:
        return None

    path = [target]
    c = target
    while c != field.source:
        c = step(c, field[c].predecessor)
        path.append(c)
    return path
# endregion
