"""
Slot grid types.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

# 7 days x 96 quarter-hour slots, each holding a task key or None.
SlotGrid = list[list[Optional[str]]]


class SlotSegment(BaseModel):
    """Run of consecutive slots in one day held by the same task (or empty)."""

    task_key: Optional[str] = None
    start_slot: int = Field(..., ge=0)
    length: int = Field(..., ge=1)
