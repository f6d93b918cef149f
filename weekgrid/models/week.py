"""
Visible-week context.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from weekgrid.utils.datetime_utils import (
    format_date_key,
    format_month_key,
    format_week_key,
    start_of_week,
)


@dataclass(frozen=True)
class WeekContext:
    """A Sunday-first week and the store keys that address it."""

    first_day: date

    @classmethod
    def containing(cls, value: date) -> "WeekContext":
        return cls(start_of_week(value))

    @property
    def week_key(self) -> str:
        return format_week_key(self.first_day)

    @property
    def month_key(self) -> str:
        # A week spanning two months belongs to the month of its Sunday.
        return format_month_key(self.first_day)

    @property
    def last_day(self) -> date:
        return self.first_day + timedelta(days=6)

    def day(self, index: int) -> date:
        return self.first_day + timedelta(days=index)

    def date_key(self, index: int) -> str:
        return format_date_key(self.day(index))

    def contains(self, value: date) -> bool:
        return self.first_day <= value <= self.last_day

    def shifted(self, weeks: int) -> "WeekContext":
        return WeekContext(self.first_day + timedelta(days=7 * weeks))
