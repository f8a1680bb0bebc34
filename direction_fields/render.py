# render.py
from .config import OBSTRUCTED_GLYPH, SOURCE_GLYPH, UNREACHED_GLYPH
from .models import DirectionField, GridModel


def render_cardinals(field: DirectionField, grid: GridModel) -> str:
    rows = []
    for y in range(grid.n):
        row = []
        for x in range(grid.n):
            c = (x, y)
            if c == field.source:
                row.append(SOURCE_GLYPH)
            elif not grid.is_free(c):
                row.append(OBSTRUCTED_GLYPH)
            elif c in field:
                row.append(field[c].predecessor.glyph)
            else:
                row.append(UNREACHED_GLYPH)
        rows.append("".join(row))
    return "\n".join(rows)


def render_distances(field: DirectionField, grid: GridModel) -> str:
    """Three characters per cell; distances of 100 or more print as '#'."""
    rows = []
    for y in range(grid.n):
        row = []
        for x in range(grid.n):
            c = (x, y)
            if c == field.source:
                row.append(f"{SOURCE_GLYPH:>3}")
            elif c in field and field[c].distance < 100:
                row.append(f"{field[c].distance:>3}")
            elif c in field or not grid.is_free(c):
                row.append(f"{OBSTRUCTED_GLYPH:>3}")
            else:
                row.append(f"{UNREACHED_GLYPH:>3}")
        rows.append("".join(row))
    return "\n".join(rows)
