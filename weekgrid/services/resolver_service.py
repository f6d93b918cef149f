"""
Effective-range resolution and placement priority.

Layers apply narrowest-last: recurring, then month, then week (wholesale),
then single dates (per day).
"""

from __future__ import annotations

import sys

from weekgrid.models.ranges import DAYS_PER_WEEK, WeekRanges, copy_day, copy_week
from weekgrid.models.store import RangeStore
from weekgrid.models.week import WeekContext

UNSTAMPED_SEQUENCE = sys.maxsize


def effective_ranges(store: RangeStore, task_key: str, week: WeekContext) -> WeekRanges:
    """
    Resolve a task's ranges for the given week.

    Args:
        store: Range store to read (never mutated)
        task_key: Task to resolve
        week: Visible week

    Returns:
        Fresh 7-day WeekRanges
    """
    layers = store.exceptions
    resolved = store.recurring.get(task_key)

    month_override = layers.by_month.get(week.month_key, {}).get(task_key)
    if month_override is not None:
        resolved = month_override
    week_override = layers.by_week.get(week.week_key, {}).get(task_key)
    if week_override is not None:
        resolved = week_override

    result = copy_week(resolved)
    for index in range(DAYS_PER_WEEK):
        day_override = layers.by_date.get(week.date_key(index), {}).get(task_key)
        if day_override is not None:
            result[index] = copy_day(day_override)
    return result


def priority_sequence(store: RangeStore, task_key: str, week: WeekContext) -> int:
    """Lowest stamp among the week, month and recurring scopes."""
    order = store.order
    candidates = [
        order.week.get(week.week_key, {}).get(task_key),
        order.month.get(week.month_key, {}).get(task_key),
        order.recurring.get(task_key),
    ]
    stamped = [value for value in candidates if isinstance(value, int)]
    return min(stamped, default=UNSTAMPED_SEQUENCE)


def ordered_task_keys(
    store: RangeStore, task_keys: list[str], week: WeekContext
) -> list[str]:
    """Task keys by ascending priority; equal priorities keep catalog order."""
    return sorted(task_keys, key=lambda key: priority_sequence(store, key, week))
