from .errors import (
    DirectionFieldError,
    FieldOverwrite,
    InvalidInput,
    InvalidDimension,
    ObstructedSource,
    OutOfBounds,
    TooManySources,
)
from .models import AggregateResult, Cardinal, Coordinate, DirectionField, FieldEntry, GridModel
from .grid import build_grid, parse_grid, random_grid
from .wavefront_core import CastQueue, build_direction_field, trace_path
from .fanout import build_all_direction_fields, iter_direction_fields, path_between

__all__ = [
    "AggregateResult",
    "Cardinal",
    "CastQueue",
    "Coordinate",
    "DirectionField",
    "DirectionFieldError",
    "FieldEntry",
    "FieldOverwrite",
    "GridModel",
    "InvalidDimension",
    "InvalidInput",
    "ObstructedSource",
    "OutOfBounds",
    "TooManySources",
    "build_all_direction_fields",
    "build_direction_field",
    "build_grid",
    "iter_direction_fields",
    "parse_grid",
    "path_between",
    "random_grid",
    "trace_path",
]
