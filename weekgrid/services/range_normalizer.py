"""
Range normalization and clipping for the save path.

Turns caller-submitted ranges into a 15-minute aligned, conflict-free set
with at most a fixed number of ranges per day. Conflicts are resolved by
clipping, never by rejecting the save.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from weekgrid.core.logger import setup_logger
from weekgrid.models.ranges import (
    DAYS_PER_WEEK,
    MINUTES_PER_DAY,
    SLOT_MINUTES,
    SLOTS_PER_DAY,
    RangeLike,
    TimeRange,
    WeekRanges,
    blank_week_ranges,
    copy_week,
    minutes_to_slot,
    round_to_slot,
)
from weekgrid.models.slots import SlotGrid

logger = setup_logger(__name__)


@dataclass
class ClipResult:
    """
    Outcome of normalize_and_clip.

    ``spill`` maps each day that had an overnight range to the requested
    next-day pieces (before clipping, possibly empty).
    """

    week: WeekRanges
    spill: dict[int, list[TimeRange]] = field(default_factory=dict)


def split_and_quantize(
    week_ranges: Iterable[Optional[Iterable[RangeLike]]],
) -> tuple[WeekRanges, dict[int, list[TimeRange]]]:
    """
    Round submitted ranges to the slot grid and split overnight spans.

    Returns:
        Tuple of (same-day ranges per day, next-day pieces keyed by the day
        whose ranges wrapped past midnight)
    """
    submitted = copy_week(week_ranges)
    normalized = blank_week_ranges()
    spill: dict[int, list[TimeRange]] = {}

    for day, ranges in enumerate(submitted):
        for time_range in ranges:
            start = round_to_slot(time_range.start_min)
            end = round_to_slot(time_range.end_min)
            if end > start:
                normalized[day].append(TimeRange(start_min=start, end_min=end))
            elif end < start:
                pieces = spill.setdefault(day, [])
                if start < MINUTES_PER_DAY:
                    normalized[day].append(TimeRange(start_min=start, end_min=MINUTES_PER_DAY))
                if end > 0:
                    piece = TimeRange(start_min=0, end_min=end)
                    pieces.append(piece)
                    normalized[(day + 1) % DAYS_PER_WEEK].append(piece.copy_range())
    return normalized, spill


def merge_ranges(ranges: list[TimeRange]) -> list[TimeRange]:
    """Sort and merge touching or overlapping ranges."""
    merged: list[TimeRange] = []
    for time_range in sorted(ranges, key=lambda item: item.start_min):
        if merged and time_range.start_min <= merged[-1].end_min:
            merged[-1].end_min = max(merged[-1].end_min, time_range.end_min)
        else:
            merged.append(time_range.copy_range())
    return merged


class RangeNormalizer:
    """Clips requested ranges against the slots other tasks already hold."""

    def __init__(self, max_ranges_per_day: int = 4):
        self.max_ranges_per_day = max_ranges_per_day

    def clip_day(
        self,
        requested: list[TimeRange],
        occupancy: list[Optional[str]],
        task_key: str,
    ) -> list[TimeRange]:
        """
        Keep the requested slots that are free or already owned by the task.

        Args:
            requested: Same-day ranges on the slot grid
            occupancy: One day of an occupancy grid
            task_key: Task being saved

        Returns:
            Sorted, merged ranges capped at max_ranges_per_day
        """
        wanted = [False] * SLOTS_PER_DAY
        for time_range in requested:
            for slot in range(
                minutes_to_slot(time_range.start_min), minutes_to_slot(time_range.end_min)
            ):
                wanted[slot] = True

        def available(slot: int) -> bool:
            return wanted[slot] and occupancy[slot] in (None, task_key)

        runs: list[TimeRange] = []
        slot = 0
        while slot < SLOTS_PER_DAY:
            if not available(slot):
                slot += 1
                continue
            end = slot + 1
            while end < SLOTS_PER_DAY and available(end):
                end += 1
            runs.append(TimeRange(start_min=slot * SLOT_MINUTES, end_min=end * SLOT_MINUTES))
            slot = end

        merged = merge_ranges(runs)
        if len(merged) > self.max_ranges_per_day:
            logger.debug(
                f"Dropping {len(merged) - self.max_ranges_per_day} range(s) "
                f"over the daily cap for {task_key}"
            )
        return merged[: self.max_ranges_per_day]

    def normalize_and_clip(
        self,
        task_key: str,
        week_ranges: Iterable[Optional[Iterable[RangeLike]]],
        occupancy: SlotGrid,
    ) -> ClipResult:
        """
        Normalize a submitted week and clip it against an occupancy grid.

        Args:
            task_key: Task being saved
            week_ranges: Submitted ranges, possibly unsorted or overnight
            occupancy: Slot grid built without ``task_key``

        Returns:
            ClipResult with the persisted-ready week
        """
        requested, spill = split_and_quantize(week_ranges)
        clipped = [
            self.clip_day(requested[day], occupancy[day], task_key)
            for day in range(DAYS_PER_WEEK)
        ]

        requested_minutes = _total_minutes(requested)
        kept_minutes = _total_minutes(clipped)
        if kept_minutes < requested_minutes:
            logger.debug(
                f"Clipped {task_key}: kept {kept_minutes}/{requested_minutes} min"
            )
        return ClipResult(week=clipped, spill=spill)


def _total_minutes(week: WeekRanges) -> int:
    return sum(item.end_min - item.start_min for day in week for item in day)
