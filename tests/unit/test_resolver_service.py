"""
Unit tests for effective-range resolution and priority ordering.
"""

from datetime import date

from weekgrid.models.ranges import TimeRange, blank_week_ranges
from weekgrid.models.store import RangeStore
from weekgrid.models.week import WeekContext
from weekgrid.services.resolver_service import (
    UNSTAMPED_SEQUENCE,
    effective_ranges,
    ordered_task_keys,
    priority_sequence,
)

WEEK = WeekContext(date(2025, 3, 9))


def _week(day: int, start: int, end: int):
    week = blank_week_ranges()
    week[day] = [TimeRange(start_min=start, end_min=end)]
    return week


def _pairs(day_ranges):
    return [(item.start_min, item.end_min) for item in day_ranges]


def test_week_context_keys():
    """WeekContext exposes week, month and date keys."""
    assert WEEK.week_key == "2025-03-09"
    assert WEEK.month_key == "2025-03"
    assert WEEK.date_key(3) == "2025-03-12"
    assert WEEK.contains(date(2025, 3, 15))
    assert not WEEK.contains(date(2025, 3, 16))
    assert WeekContext.containing(date(2025, 3, 12)) == WEEK
    assert WEEK.shifted(1).first_day == date(2025, 3, 16)


def test_week_spanning_months_uses_sunday_month():
    """A week spanning two months belongs to its Sunday's month."""
    week = WeekContext(date(2025, 3, 30))

    assert week.month_key == "2025-03"
    assert week.date_key(6) == "2025-04-05"


class TestEffectiveRanges:
    """Tests for effective_ranges layering."""

    def test_recurring_only(self):
        store = RangeStore(recurring={"a": _week(1, 540, 600)})

        result = effective_ranges(store, "a", WEEK)

        assert _pairs(result[1]) == [(540, 600)]
        assert len(result) == 7

    def test_unknown_task_is_blank(self):
        """An unknown task resolves to an empty week."""
        assert effective_ranges(RangeStore(), "missing", WEEK) == blank_week_ranges()

    def test_month_replaces_recurring_wholesale(self):
        """A month override replaces the whole recurring week."""
        store = RangeStore(recurring={"a": _week(1, 540, 600)})
        store.exceptions.by_month["2025-03"] = {"a": _week(2, 60, 120)}

        result = effective_ranges(store, "a", WEEK)

        assert result[1] == []
        assert _pairs(result[2]) == [(60, 120)]

    def test_week_beats_month(self):
        """A week override wins over a month override."""
        store = RangeStore(recurring={"a": _week(1, 540, 600)})
        store.exceptions.by_month["2025-03"] = {"a": _week(2, 60, 120)}
        store.exceptions.by_week["2025-03-09"] = {"a": _week(4, 900, 960)}

        result = effective_ranges(store, "a", WEEK)

        assert result[2] == []
        assert _pairs(result[4]) == [(900, 960)]

    def test_empty_week_override_still_applies(self):
        """An empty week override clears the task for that week."""
        store = RangeStore(recurring={"a": _week(1, 540, 600)})
        store.exceptions.by_week["2025-03-09"] = {"a": blank_week_ranges()}

        assert effective_ranges(store, "a", WEEK) == blank_week_ranges()

    def test_date_override_replaces_only_its_day(self):
        """A date override affects only its own day."""
        recurring = _week(1, 540, 600)
        recurring[3] = [TimeRange(start_min=540, end_min=600)]
        store = RangeStore(recurring={"a": recurring})
        store.exceptions.by_date["2025-03-12"] = {"a": [TimeRange(start_min=0, end_min=30)]}

        result = effective_ranges(store, "a", WEEK)

        assert _pairs(result[1]) == [(540, 600)]
        assert _pairs(result[3]) == [(0, 30)]

    def test_date_override_outside_week_is_ignored(self):
        """Date overrides for other weeks are ignored."""
        store = RangeStore(recurring={"a": _week(0, 540, 600)})
        store.exceptions.by_date["2025-03-16"] = {"a": [TimeRange(start_min=0, end_min=30)]}

        assert _pairs(effective_ranges(store, "a", WEEK)[0]) == [(540, 600)]

    def test_result_does_not_alias_store(self):
        """Resolved ranges are copies of the stored ones."""
        store = RangeStore(recurring={"a": _week(1, 540, 600)})

        result = effective_ranges(store, "a", WEEK)
        result[1][0].end_min = 1440
        result[2].append(TimeRange(start_min=0, end_min=15))

        assert _pairs(store.recurring["a"][1]) == [(540, 600)]
        assert store.recurring["a"][2] == []


class TestPriority:
    """Tests for priority_sequence and ordered_task_keys."""

    def test_minimum_defined_stamp_wins(self):
        store = RangeStore()
        store.order.recurring["a"] = 5
        store.order.month["2025-03"] = {"a": 3}
        store.order.week["2025-03-09"] = {"a": 7}

        assert priority_sequence(store, "a", WEEK) == 3

    def test_unstamped_sorts_last(self):
        """Tasks without any stamp come after stamped ones."""
        store = RangeStore()
        store.order.recurring["c"] = 9

        assert priority_sequence(store, "a", WEEK) == UNSTAMPED_SEQUENCE
        assert ordered_task_keys(store, ["a", "b", "c"], WEEK) == ["c", "a", "b"]

    def test_ties_keep_catalog_order(self):
        """Equal sequences keep catalog order."""
        store = RangeStore()
        store.order.recurring["a"] = 1
        store.order.week["2025-03-09"] = {"b": 1}

        assert ordered_task_keys(store, ["a", "b"], WEEK) == ["a", "b"]
        assert ordered_task_keys(store, ["b", "a"], WEEK) == ["b", "a"]

    def test_week_stamp_only_counts_in_its_week(self):
        """A week stamp only applies to that week."""
        store = RangeStore()
        store.order.recurring["a"] = 2
        store.order.recurring["b"] = 3
        store.order.week["2025-03-09"] = {"b": 1}

        assert ordered_task_keys(store, ["a", "b"], WEEK) == ["b", "a"]
        assert ordered_task_keys(store, ["a", "b"], WEEK.shifted(1)) == ["a", "b"]
