"""
Week core: render orchestration and the public engine API.

Drives geometry, effective-range resolution and slot grid building for the
visible week and pushes the results to a render target. All operations are
synchronous; render hooks run inside the call that triggered them.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from weekgrid.core.config import Settings, get_settings
from weekgrid.core.exceptions import (
    ConfigurationError,
    StateImportError,
    ValidationError,
)
from weekgrid.core.logger import setup_logger
from weekgrid.interfaces.render_target import IRenderTarget
from weekgrid.models.enums import EditScope
from weekgrid.models.geometry import GridGeometry, NowRect
from weekgrid.models.ranges import (
    DAYS_PER_WEEK,
    RangeLike,
    TimeRange,
    WeekRanges,
    blank_week_ranges,
    copy_day,
    copy_week,
)
from weekgrid.models.slots import SlotGrid
from weekgrid.models.store import RangeStore
from weekgrid.models.task import TaskDefinition, default_task_catalog
from weekgrid.models.week import WeekContext
from weekgrid.services.geometry_service import (
    compute_geometry,
    geometry_matches,
    parse_size,
)
from weekgrid.services.range_normalizer import RangeNormalizer
from weekgrid.services.resolver_service import effective_ranges
from weekgrid.services.slot_grid_service import (
    blank_slot_grid,
    build_slot_grid,
    count_minutes,
)
from weekgrid.utils.datetime_utils import (
    SHORT_DOW,
    format_date_key,
    format_week_title,
    hour_stamps,
    now_local,
    sunday_index,
)

logger = setup_logger(__name__)

TaskLike = Union[TaskDefinition, Mapping[str, Any]]
ScopeLike = Union[EditScope, str]

# Top-level state sections: (wire key, field name).
_STATE_SECTIONS = [
    ("recurring", "recurring"),
    ("exceptions", "exceptions"),
    ("order", "order"),
    ("lastScope", "last_scope"),
    ("nextSeq", "next_seq"),
]


def _coerce_task(task: TaskLike) -> TaskDefinition:
    if isinstance(task, TaskDefinition):
        return task.model_copy()
    return TaskDefinition.model_validate(task)


def _coerce_scope(scope: ScopeLike) -> EditScope:
    try:
        return EditScope(scope)
    except ValueError as exc:
        raise ValidationError(f"Unknown edit scope: {scope!r}", details={"scope": scope}) from exc


def _reshape_week_payload(week: Any) -> list[list[Any]]:
    """Pad or truncate a raw per-task array to 7 day lists."""
    days = list(week) if isinstance(week, (list, tuple)) else []
    return [
        list(days[index] or []) if index < len(days) else []
        for index in range(DAYS_PER_WEEK)
    ]


def _reshape_layer(layer: Any) -> dict:
    if not isinstance(layer, Mapping):
        return {}
    return {
        scope_key: {
            task_key: _reshape_week_payload(week)
            for task_key, week in (entries or {}).items()
        }
        for scope_key, entries in layer.items()
    }


class WeekCore:
    """
    Weekly time-block allocation engine.

    Provides:
    - Week navigation and rendering through an IRenderTarget
    - Scoped saving (recurring / month / week / today) with conflict clipping
    - State export / import for persistence by the caller
    """

    def __init__(
        self,
        render_target: IRenderTarget,
        tasks: Optional[Iterable[TaskLike]] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the engine and render the current week.

        Args:
            render_target: Painter; its measure_grid probe is required
            tasks: Task catalog (None = default catalog)
            settings: Engine settings (None = cached environment settings)
            clock: Wall-clock provider used for "today" and the now indicator

        Raises:
            ConfigurationError: If render_target is missing or has no probe
        """
        if not isinstance(render_target, IRenderTarget) or not callable(
            getattr(render_target, "measure_grid", None)
        ):
            raise ConfigurationError("A render target with measure_grid() is required")

        self.render_target = render_target
        self.settings = settings or get_settings()
        self._clock = clock or (lambda: now_local(self.settings.TIMEZONE))
        self.normalizer = RangeNormalizer(self.settings.MAX_RANGES_PER_DAY)

        self.tasks: list[TaskDefinition] = [
            _coerce_task(task) for task in (tasks if tasks is not None else default_task_catalog())
        ]
        self.store = RangeStore(
            recurring={task.key: blank_week_ranges() for task in self.tasks}
        )

        self.week_offset = 0
        self.week = WeekContext.containing(self._today())
        self._geometry: Optional[GridGeometry] = None
        self._slots: SlotGrid = blank_slot_grid()

        self.goto_week(0)

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    @property
    def task_keys(self) -> list[str]:
        return [task.key for task in self.tasks]

    @property
    def colors(self) -> dict[str, str]:
        return {task.key: task.color for task in self.tasks}

    @property
    def labels(self) -> dict[str, str]:
        return {task.key: task.label for task in self.tasks}

    def _find_task(self, task_key: str) -> Optional[TaskDefinition]:
        return next((task for task in self.tasks if task.key == task_key), None)

    def set_color(self, task_key: str, color: str) -> None:
        task = self._find_task(task_key)
        if task is None:
            logger.warning(f"set_color ignored for unknown task {task_key}")
            return
        task.color = color

    def set_label(self, task_key: str, label: str) -> None:
        task = self._find_task(task_key)
        if task is None:
            logger.warning(f"set_label ignored for unknown task {task_key}")
            return
        task.label = label

    def replace_catalog(self, tasks: Iterable[TaskLike]) -> None:
        """
        Replace the task catalog.

        Stored ranges are kept as-is; data for removed or renamed keys is not
        migrated. New keys get an empty recurring template.
        """
        self.tasks = [_coerce_task(task) for task in tasks]
        self._ensure_recurring_entries(self.store)
        logger.info(f"Task catalog replaced ({len(self.tasks)} tasks)")
        self._render()

    def _ensure_recurring_entries(self, store: RangeStore) -> None:
        for task in self.tasks:
            store.recurring.setdefault(task.key, blank_week_ranges())

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _today(self) -> date:
        return self._clock().date()

    @property
    def visible_week_first(self) -> date:
        return self.week.first_day

    def goto_week(self, delta: int = 0) -> None:
        """Navigate weeks: -1 previous, +1 next, 0 re-anchor on the current week."""
        self.week_offset += delta
        self.week = WeekContext.containing(self._today()).shifted(self.week_offset)
        self._render()

    def rebuild(self) -> None:
        """Force geometry recomputation and a full paint (e.g. after resize)."""
        self._render(force_geometry=True)

    def get_week_title(self) -> str:
        return format_week_title(self.week.first_day)

    def _today_target(self) -> tuple[date, int]:
        """Today's date and index if it is in the visible week, else the week's Sunday."""
        today = self._today()
        if self.week.contains(today):
            return today, sunday_index(today)
        return self.week.first_day, 0

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    def get_durations(self) -> dict[str, int]:
        """Minutes held by each catalog task in the visible week."""
        grid = build_slot_grid(self.store, self.task_keys, self.week)
        return {key: count_minutes(grid, key) for key in self.task_keys}

    def active_scope_for_task(self, task_key: str) -> EditScope:
        layers = self.store.exceptions
        today_key = format_date_key(self._today())
        if task_key in layers.by_date.get(today_key, {}):
            return EditScope.TODAY
        if task_key in layers.by_week.get(self.week.week_key, {}):
            return EditScope.WEEK
        if task_key in layers.by_month.get(self.week.month_key, {}):
            return EditScope.MONTH
        return EditScope.RECURRING

    def get_exact_for_scope(self, task_key: str, scope: ScopeLike) -> WeekRanges:
        """
        Load editable ranges for a task at a scope.

        Week and month fall back to the recurring template when no override
        exists. Today returns a blank week with only the resolved day filled.
        """
        scope = _coerce_scope(scope)
        layers = self.store.exceptions
        recurring = self.store.recurring.get(task_key)

        if scope == EditScope.RECURRING:
            return copy_week(recurring)
        if scope == EditScope.WEEK:
            override = layers.by_week.get(self.week.week_key, {}).get(task_key)
            return copy_week(override if override is not None else recurring)
        if scope == EditScope.MONTH:
            override = layers.by_month.get(self.week.month_key, {}).get(task_key)
            return copy_week(override if override is not None else recurring)

        result = blank_week_ranges()
        target_date, index = self._today_target()
        override = layers.by_date.get(format_date_key(target_date), {}).get(task_key)
        if override is not None:
            result[index] = copy_day(override)
        else:
            result[index] = effective_ranges(self.store, task_key, self.week)[index]
        return result

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def save_ranges(
        self,
        task_key: str,
        scope: ScopeLike,
        week_ranges: Iterable[Optional[Iterable[RangeLike]]],
    ) -> WeekRanges:
        """
        Save edited ranges for a task at a scope.

        Submitted ranges are quantized, split at midnight and clipped so they
        never displace slots held by other tasks. Order stamps are set on the
        first save at each scope only.

        Args:
            task_key: Task being edited
            scope: recurring / month / week / today
            week_ranges: Sunday-first 7-day ranges

        Returns:
            The ranges now stored for the scope (as get_exact_for_scope)
        """
        scope = _coerce_scope(scope)
        self.store.last_scope[task_key] = scope

        occupancy = build_slot_grid(self.store, self.task_keys, self.week, exclude=task_key)
        result = self.normalizer.normalize_and_clip(task_key, week_ranges, occupancy)
        order = self.store.order
        layers = self.store.exceptions

        if scope == EditScope.RECURRING:
            self.store.recurring[task_key] = result.week
            self.store.stamp_once(order.recurring, task_key)
        elif scope == EditScope.WEEK:
            week_key = self.week.week_key
            layers.by_week.setdefault(week_key, {})[task_key] = result.week
            self.store.stamp_once(order.week.setdefault(week_key, {}), task_key)
        elif scope == EditScope.MONTH:
            month_key = self.week.month_key
            layers.by_month.setdefault(month_key, {})[task_key] = result.week
            self.store.stamp_once(order.month.setdefault(month_key, {}), task_key)
        else:
            target_date, index = self._today_target()
            self._write_date_override(format_date_key(target_date), task_key, result.week[index])
            if index in result.spill:
                next_date = target_date + timedelta(days=1)
                spill = self._clip_spill(task_key, next_date, result.spill[index], occupancy)
                self._write_date_override(format_date_key(next_date), task_key, spill)

        logger.info(f"Saved {task_key} at {scope.value} scope for week {self.week.week_key}")
        self._render()
        return self.get_exact_for_scope(task_key, scope)

    def _clip_spill(
        self,
        task_key: str,
        next_date: date,
        requested: list[TimeRange],
        occupancy: SlotGrid,
    ) -> list[TimeRange]:
        next_week = WeekContext.containing(next_date)
        if next_week != self.week:
            # Saturday spills into the following week's Sunday.
            occupancy = build_slot_grid(self.store, self.task_keys, next_week, exclude=task_key)
        return self.normalizer.clip_day(requested, occupancy[sunday_index(next_date)], task_key)

    def _write_date_override(
        self, date_key: str, task_key: str, ranges: list[TimeRange]
    ) -> None:
        """Store a date override, or drop it (and an emptied date) when ranges is empty."""
        by_date = self.store.exceptions.by_date
        if ranges:
            by_date.setdefault(date_key, {})[task_key] = copy_day(ranges)
            return
        entries = by_date.get(date_key)
        if entries is None or task_key not in entries:
            return
        del entries[task_key]
        if not entries:
            del by_date[date_key]

    # ------------------------------------------------------------------
    # Persistence boundary
    # ------------------------------------------------------------------

    def get_state(self) -> dict:
        """Export the full Range Store as a JSON-ready deep copy."""
        return self.store.to_state()

    def set_state(self, state: Union[RangeStore, Mapping[str, Any]]) -> None:
        """
        Replace the Range Store from exported state.

        Sections missing from ``state`` are kept. Per-task arrays are reshaped
        to 7 days; range bounds and ordering are trusted, not validated.

        Raises:
            StateImportError: If values cannot be coerced to the store model
        """
        incoming = state.to_state() if isinstance(state, RangeStore) else dict(state)
        merged = self.store.to_state()
        for wire_key, field_name in _STATE_SECTIONS:
            value = incoming.get(wire_key, incoming.get(field_name))
            if value is not None:
                merged[wire_key] = value

        try:
            merged["recurring"] = {
                task_key: _reshape_week_payload(week)
                for task_key, week in dict(merged["recurring"]).items()
            }
            exceptions = dict(merged["exceptions"])
            for layer_key, snake_key in (("byWeek", "by_week"), ("byMonth", "by_month")):
                layer = exceptions.pop(snake_key, None)
                exceptions[layer_key] = _reshape_layer(exceptions.get(layer_key, layer))
            merged["exceptions"] = exceptions
            # Caller-owned TimeRange instances pass validation as-is.
            store = RangeStore.model_validate(merged).model_copy(deep=True)
        except (PydanticValidationError, AttributeError, TypeError, ValueError) as exc:
            raise StateImportError("Imported state has the wrong shape", details=str(exc)) from exc

        self._ensure_recurring_entries(store)
        store.next_seq = max(store.next_seq, store.order.max_stamp() + 1)
        self.store = store
        logger.info(
            f"Imported state: {len(store.recurring)} recurring task(s), "
            f"{len(store.exceptions.by_date)} date override(s)"
        )
        self._render(force_geometry=True)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self, force_geometry: bool = False) -> None:
        target = self.render_target
        target.on_render_title(self.get_week_title())
        target.on_render_labels(list(SHORT_DOW))
        target.on_render_hours(hour_stamps())

        size = parse_size(target.measure_grid())
        if size is None:
            logger.debug("Render skipped: grid area not measurable yet")
            return
        if force_geometry or not geometry_matches(self._geometry, size):
            self._geometry = compute_geometry(size.width, size.height)
            target.on_render_mask(self._geometry)

        self._slots = build_slot_grid(self.store, self.task_keys, self.week)
        target.on_render_blocks(self._slots, self._geometry, self.colors)
        target.on_render_now_hint(self._now_rect(self._geometry))

    def _now_rect(self, geometry: GridGeometry) -> Optional[NowRect]:
        """Highlight around the current hour row, or None outside the visible week."""
        now = self._clock()
        today = now.date()
        if not self.week.contains(today):
            return None

        day = sunday_index(today)
        hour = now.hour
        hour_top = geometry.row_y[hour]
        hour_height = geometry.row_y[hour + 1] - hour_top
        extra = min(
            self.settings.NOW_HINT_MAX_EXTRA_PX,
            math.floor(hour_height * self.settings.NOW_HINT_ROW_RATIO),
        )
        top = max(0, min(geometry.total_h - (hour_height + extra), hour_top - extra // 2))
        height = min(geometry.total_h - top, hour_height + extra)
        width = geometry.col_w[day]
        if day == DAYS_PER_WEEK - 1:
            width = max(0, width - 1)
        return NowRect(left=geometry.col_x[day], top=top, width=width, height=height)
