# errors.py
class DirectionFieldError(Exception):
    """Base class for every error raised by direction_fields."""


class InvalidDimension(DirectionFieldError, ValueError):
    pass


class OutOfBounds(DirectionFieldError, IndexError):
    def __init__(self, coord, size):
        super().__init__(f"coordinate {tuple(coord)} outside {size}x{size} grid")
        self.coord = tuple(coord)
        self.size = size


class ObstructedSource(DirectionFieldError, ValueError):
    def __init__(self, coord):
        super().__init__(f"source {tuple(coord)} is obstructed")
        self.coord = tuple(coord)


class TooManySources(DirectionFieldError, RuntimeError):
    def __init__(self, free_cells, limit):
        super().__init__(
            f"{free_cells} free cells exceeds limit of {limit}; "
            "raise max_free_cells or stream with iter_direction_fields"
        )
        self.free_cells = free_cells
        self.limit = limit


class FieldOverwrite(DirectionFieldError, RuntimeError):
    pass


class InvalidInput(DirectionFieldError, ValueError):
    """Malformed grid text, probability or request value."""
