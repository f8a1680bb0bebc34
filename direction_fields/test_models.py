"""Tests for Cardinal and DirectionField."""

import numpy as np
import pytest

from direction_fields.errors import FieldOverwrite
from direction_fields.models import Cardinal, DirectionField, FieldEntry, step


class TestCardinal:
    """Tests for the Cardinal enum."""

    def test_inverse(self) -> None:
        """Each direction inverts to its opposite and back."""
        assert Cardinal.UP.inverse is Cardinal.DOWN
        assert Cardinal.RIGHT.inverse is Cardinal.LEFT
        for d in Cardinal:
            assert d.inverse.inverse is d
            dx, dy = d.delta
            ix, iy = d.inverse.delta
            assert (dx + ix, dy + iy) == (0, 0)

    def test_delta_screen_coordinates(self) -> None:
        """UP decreases y, RIGHT increases x."""
        assert step((2, 2), Cardinal.UP) == (2, 1)
        assert step((2, 2), Cardinal.RIGHT) == (3, 2)
        assert step((2, 2), Cardinal.DOWN) == (2, 3)
        assert step((2, 2), Cardinal.LEFT) == (1, 2)

    def test_order(self) -> None:
        """UP < RIGHT < DOWN < LEFT."""
        assert sorted([Cardinal.LEFT, Cardinal.DOWN, Cardinal.UP, Cardinal.RIGHT]) == list(Cardinal)
        assert Cardinal.UP < Cardinal.LEFT

    def test_perpendicular(self) -> None:
        """Perpendicular pairs exclude the direction and its inverse."""
        for d in Cardinal:
            perp = d.perpendicular()
            assert d not in perp
            assert d.inverse not in perp
            assert len(set(perp)) == 2

    def test_glyphs(self) -> None:
        """Each direction renders as an arrow."""
        assert "".join(d.glyph for d in Cardinal) == "↑→↓←"


class TestDirectionField:
    """Tests for DirectionField recording and queries."""

    def test_write_once(self) -> None:
        """A cell cannot be recorded twice."""
        field = DirectionField((0, 0), 3)
        field.record((1, 0), 1, Cardinal.LEFT)
        with pytest.raises(FieldOverwrite):
            field.record((1, 0), 1, Cardinal.LEFT)
        assert field[(1, 0)] == FieldEntry(1, Cardinal.LEFT)

    def test_source_cannot_be_recorded(self) -> None:
        """The source stays out of the entries."""
        field = DirectionField((0, 0), 3)
        with pytest.raises(FieldOverwrite):
            field.record((0, 0), 0, Cardinal.UP)

    def test_sealed(self) -> None:
        """Sealing stops further writes."""
        field = DirectionField((0, 0), 3).seal()
        with pytest.raises(FieldOverwrite):
            field.record((1, 0), 1, Cardinal.LEFT)

    def test_distance_to(self) -> None:
        """Source is 0, unreached is None."""
        field = DirectionField((1, 1), 3)
        field.record((1, 0), 1, Cardinal.DOWN)
        assert field.distance_to((1, 1)) == 0
        assert field.distance_to((1, 0)) == 1
        assert field.distance_to((2, 2)) is None

    def test_distance_array(self) -> None:
        """Array is indexed [y, x] with -1 for unreached."""
        field = DirectionField((0, 0), 2)
        field.record((1, 0), 1, Cardinal.LEFT)
        arr = field.distance_array()
        assert arr.tolist() == [[0, 1], [-1, -1]]
        assert arr.dtype == np.int32

    def test_equality_includes_source(self) -> None:
        """Empty fields for different sources are not equal."""
        assert DirectionField((0, 0), 2) != DirectionField((1, 1), 2)
        assert DirectionField((0, 0), 2) == DirectionField((0, 0), 2)
