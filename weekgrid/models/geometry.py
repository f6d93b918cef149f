"""
Layout models handed to the render target.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GridSize(BaseModel):
    """Drawable size reported by the render target's probe."""

    width: int = Field(0, ge=0)
    height: int = Field(0, ge=0)


class GridGeometry(BaseModel):
    """
    Pixel layout of the weekly grid.

    col_x, row_y and slot_y are cumulative offsets and carry one more entry
    than the matching size list (the closing edge).
    """

    total_w: int
    total_h: int
    col_w: list[int]
    col_x: list[int]
    row_h: list[int]
    row_y: list[int]
    slot_y: list[int]


class NowRect(BaseModel):
    """Rectangle of the current-hour highlight."""

    left: int
    top: int
    width: int
    height: int
