"""
Slot grid construction.

Applies every task's effective ranges to a 7x96 grid in priority order.
A slot keeps the first task that claims it. merge_day_segments is a
caller-side helper for painters that draw runs instead of single slots.
"""

from __future__ import annotations

from typing import Optional

from weekgrid.models.ranges import (
    DAYS_PER_WEEK,
    MINUTES_PER_DAY,
    SLOT_MINUTES,
    SLOTS_PER_DAY,
    WeekRanges,
    minutes_to_slot,
    round_to_slot,
)
from weekgrid.models.slots import SlotGrid, SlotSegment
from weekgrid.models.store import RangeStore
from weekgrid.models.week import WeekContext
from weekgrid.services.resolver_service import effective_ranges, ordered_task_keys


def blank_slot_grid() -> SlotGrid:
    return [[None] * SLOTS_PER_DAY for _ in range(DAYS_PER_WEEK)]


def _claim(grid: SlotGrid, day: int, start_slot: int, end_slot: int, task_key: str) -> None:
    row = grid[day]
    for slot in range(start_slot, end_slot):
        if row[slot] is None:
            row[slot] = task_key


def apply_ranges(grid: SlotGrid, task_key: str, week_ranges: WeekRanges) -> None:
    """
    Claim free slots for every range of a task.

    Endpoints are rounded to the 15-minute grid. Zero-length ranges are
    skipped and a wrapped range continues on the next day (Saturday wraps to
    Sunday of the same grid).
    """
    for day in range(DAYS_PER_WEEK):
        for time_range in week_ranges[day] if day < len(week_ranges) else []:
            start = round_to_slot(time_range.start_min)
            end = round_to_slot(time_range.end_min)
            if start == end:
                continue
            if end > start:
                _claim(grid, day, minutes_to_slot(start), minutes_to_slot(end), task_key)
                continue
            _claim(grid, day, minutes_to_slot(start), minutes_to_slot(MINUTES_PER_DAY), task_key)
            _claim(grid, (day + 1) % DAYS_PER_WEEK, 0, minutes_to_slot(end), task_key)


def build_slot_grid(
    store: RangeStore,
    task_keys: list[str],
    week: WeekContext,
    exclude: Optional[str] = None,
) -> SlotGrid:
    """
    Build the slot grid for a week.

    Args:
        store: Range store to read
        task_keys: Catalog keys in catalog order
        week: Week to build
        exclude: Task to leave out (occupancy map for saving that task)

    Returns:
        7x96 grid of task keys or None
    """
    grid = blank_slot_grid()
    for task_key in ordered_task_keys(store, task_keys, week):
        if task_key == exclude:
            continue
        apply_ranges(grid, task_key, effective_ranges(store, task_key, week))
    return grid


def count_minutes(grid: SlotGrid, task_key: str) -> int:
    return sum(row.count(task_key) for row in grid) * SLOT_MINUTES


def merge_day_segments(day: list[Optional[str]]) -> list[SlotSegment]:
    """Collapse one day of the grid into runs of identical slots."""
    segments: list[SlotSegment] = []
    index = 0
    while index < len(day):
        current = day[index]
        end = index + 1
        while end < len(day) and day[end] == current:
            end += 1
        segments.append(SlotSegment(task_key=current, start_slot=index, length=end - index))
        index = end
    return segments
