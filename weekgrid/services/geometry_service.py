"""
Geometry calculation for the weekly grid.

Splits a pixel area into 7 day columns, 24 hour rows and 96 quarter-hour
slot boundaries without fractional pixels.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from weekgrid.core.exceptions import ValidationError
from weekgrid.interfaces.render_target import MeasuredSize
from weekgrid.models.geometry import GridGeometry, GridSize
from weekgrid.models.ranges import DAYS_PER_WEEK

HOURS_PER_DAY = 24
QUARTERS_PER_HOUR = 4


def _split_evenly(total: int, parts: int) -> list[int]:
    """Split total into parts; the first ``total % parts`` get one extra pixel."""
    base, extra = divmod(total, parts)
    return [base + (1 if index < extra else 0) for index in range(parts)]


def _cumulative(sizes: list[int]) -> list[int]:
    offsets = [0]
    for size in sizes:
        offsets.append(offsets[-1] + size)
    return offsets


def _quarter_heights(row_height: int, hour: int) -> list[int]:
    # Rotate where the remainder lands so rounding error spreads across quarters.
    base, extra = divmod(row_height, QUARTERS_PER_HOUR)
    parts = [base] * QUARTERS_PER_HOUR
    start = hour % QUARTERS_PER_HOUR
    for step in range(extra):
        parts[(start + step) % QUARTERS_PER_HOUR] += 1
    return parts


def compute_geometry(width: int, height: int) -> GridGeometry:
    """
    Compute the pixel layout for a drawable area.

    Args:
        width: Total drawable width in pixels
        height: Total drawable height in pixels

    Returns:
        GridGeometry with column, row and slot offsets

    Raises:
        ValidationError: If a dimension is not positive
    """
    if width <= 0 or height <= 0:
        raise ValidationError(
            "Grid dimensions must be positive",
            details={"width": width, "height": height},
        )

    col_w = _split_evenly(width, DAYS_PER_WEEK)
    row_h = _split_evenly(height, HOURS_PER_DAY)

    slot_heights: list[int] = []
    for hour, row_height in enumerate(row_h):
        slot_heights.extend(_quarter_heights(row_height, hour))

    return GridGeometry(
        total_w=width,
        total_h=height,
        col_w=col_w,
        col_x=_cumulative(col_w),
        row_h=row_h,
        row_y=_cumulative(row_h),
        slot_y=_cumulative(slot_heights),
    )


def parse_size(measured: MeasuredSize) -> Optional[GridSize]:
    """
    Normalize a probe result, returning None when the area is not measurable.

    Zero or missing dimensions mean "not ready yet" rather than an error.
    """
    if measured is None:
        return None
    if isinstance(measured, GridSize):
        size = measured
    elif isinstance(measured, Mapping):
        try:
            size = GridSize.model_validate(_size_fields(measured))
        except (PydanticValidationError, TypeError, ValueError):
            return None
    else:
        return None
    if not size.width or not size.height:
        return None
    return size


def _size_fields(measured: Mapping[str, Any]) -> dict:
    return {
        "width": int(measured.get("width") or 0),
        "height": int(measured.get("height") or 0),
    }


def geometry_matches(geometry: Optional[GridGeometry], size: GridSize) -> bool:
    return (
        geometry is not None
        and geometry.total_w == size.width
        and geometry.total_h == size.height
    )
