"""
Time range models and WeekRanges helpers.

A WeekRanges value is a Sunday-first list of 7 day lists. Every helper here
returns fresh objects so callers never alias stored ranges.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

SLOT_MINUTES = 15
SLOTS_PER_DAY = 96
MINUTES_PER_DAY = 24 * 60
DAYS_PER_WEEK = 7


class TimeRange(BaseModel):
    """Minutes within a day. end_min < start_min marks an overnight span."""

    model_config = ConfigDict(populate_by_name=True)

    start_min: int = Field(..., alias="startMin")
    end_min: int = Field(..., alias="endMin")

    def copy_range(self) -> "TimeRange":
        return TimeRange(start_min=self.start_min, end_min=self.end_min)


WeekRanges = list[list[TimeRange]]
RangeLike = Union[TimeRange, Mapping[str, Any]]


def _read_minutes(value: Mapping[str, Any], camel: str, snake: str) -> int:
    raw = value.get(camel, value.get(snake, 0))
    return int(raw or 0)


def coerce_range(value: RangeLike) -> TimeRange:
    """Build a TimeRange from a model or a ``{startMin, endMin}`` mapping."""
    if isinstance(value, TimeRange):
        return value.copy_range()
    return TimeRange(
        start_min=_read_minutes(value, "startMin", "start_min"),
        end_min=_read_minutes(value, "endMin", "end_min"),
    )


def blank_week_ranges() -> WeekRanges:
    return [[] for _ in range(DAYS_PER_WEEK)]


def copy_day(ranges: Optional[Iterable[RangeLike]]) -> list[TimeRange]:
    return [coerce_range(item) for item in (ranges or [])]


def copy_week(week: Optional[Iterable[Optional[Iterable[RangeLike]]]]) -> WeekRanges:
    """
    Deep-copy a WeekRanges value, reshaping it to exactly 7 days.

    Missing days become empty lists and extra days are dropped.
    """
    days = list(week or [])
    return [
        copy_day(days[index] if index < len(days) else None)
        for index in range(DAYS_PER_WEEK)
    ]


def round_to_slot(minutes: float) -> int:
    """Round minutes to the nearest 15-minute mark (halves round up)."""
    return int(math.floor(minutes / SLOT_MINUTES + 0.5)) * SLOT_MINUTES


def minutes_to_slot(minutes: float) -> int:
    """Convert minutes to a slot boundary index clamped to [0, 96]."""
    slot = int(math.floor(minutes / SLOT_MINUTES + 0.5))
    return max(0, min(SLOTS_PER_DAY, slot))
