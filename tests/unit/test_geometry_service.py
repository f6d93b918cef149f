"""
Unit tests for the geometry calculator.
"""

import pytest

from weekgrid.core.exceptions import ValidationError
from weekgrid.models.geometry import GridGeometry, GridSize
from weekgrid.services.geometry_service import (
    compute_geometry,
    geometry_matches,
    parse_size,
)


def test_remainder_columns_are_one_pixel_wider():
    """Leftover width goes to the first columns."""
    geometry = compute_geometry(100, 48)

    assert geometry.col_w == [15, 15, 14, 14, 14, 14, 14]
    assert sum(geometry.col_w) == 100
    assert geometry.col_x == [0, 15, 30, 44, 58, 72, 86, 100]


def test_rows_sum_to_height():
    """Hour rows exactly fill the grid height."""
    geometry = compute_geometry(100, 48)

    assert geometry.row_h == [2] * 24
    assert sum(geometry.row_h) == 48
    assert geometry.row_y[-1] == 48
    assert len(geometry.row_y) == 25


def test_quarter_remainder_rotates_with_hour():
    """Quarter-slot remainders rotate with the hour index."""
    geometry = compute_geometry(100, 48)
    quarters = [
        geometry.slot_y[index + 1] - geometry.slot_y[index]
        for index in range(16)
    ]

    # Each 2px hour spreads its remainder starting at quarter hour % 4.
    assert quarters[0:4] == [1, 1, 0, 0]
    assert quarters[4:8] == [0, 1, 1, 0]
    assert quarters[8:12] == [0, 0, 1, 1]
    assert quarters[12:16] == [1, 0, 0, 1]


def test_slot_offsets_cover_full_day():
    """Slot offsets start at 0 and end at the total height."""
    geometry = compute_geometry(701, 1000)

    assert len(geometry.slot_y) == 97
    assert geometry.slot_y[0] == 0
    assert geometry.slot_y[-1] == 1000
    for hour in range(25):
        assert geometry.slot_y[hour * 4] == geometry.row_y[hour]


def test_rows_with_remainder():
    geometry = compute_geometry(70, 50)

    assert geometry.row_h[:2] == [3, 3]
    assert geometry.row_h[2:] == [2] * 22
    assert sum(geometry.row_h) == 50


@pytest.mark.parametrize("width,height", [(0, 100), (100, 0), (-5, 10)])
def test_non_positive_dimensions_rejected(width, height):
    """Zero or negative sizes raise ValidationError."""
    with pytest.raises(ValidationError):
        compute_geometry(width, height)


class TestParseSize:
    """Tests for parse_size and geometry_matches."""

    def test_accepts_mapping(self):
        assert parse_size({"width": 300, "height": 200}) == GridSize(width=300, height=200)

    def test_zero_dimension_is_not_ready(self):
        """A zero dimension means the grid cannot be measured yet."""
        assert parse_size({"width": 300, "height": 0}) is None
        assert parse_size(GridSize(width=0, height=10)) is None

    def test_missing_values_are_not_ready(self):
        """Missing or invalid values mean the grid cannot be measured yet."""
        assert parse_size(None) is None
        assert parse_size({}) is None
        assert parse_size({"width": "wide", "height": 10}) is None

    def test_geometry_matches_size(self):
        """Cached geometry matches only the size it was built for."""
        geometry = compute_geometry(300, 200)

        assert geometry_matches(geometry, GridSize(width=300, height=200))
        assert not geometry_matches(geometry, GridSize(width=301, height=200))
        assert not geometry_matches(None, GridSize(width=300, height=200))


def test_geometry_is_a_model():
    assert isinstance(compute_geometry(7, 24), GridGeometry)
