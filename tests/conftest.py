"""
Shared fixtures for engine tests.
"""

from datetime import datetime
from typing import Callable, Optional

import pytest

from weekgrid.core.config import Settings
from weekgrid.interfaces.render_target import IRenderTarget
from weekgrid.models.geometry import GridGeometry, GridSize, NowRect
from weekgrid.models.slots import SlotGrid
from weekgrid.models.task import TaskDefinition
from weekgrid.services.week_core import WeekCore

# Wednesday; the visible week runs Sun 2025-03-09 .. Sat 2025-03-15.
DEFAULT_NOW = datetime(2025, 3, 12, 10, 30)


class RecordingRenderTarget(IRenderTarget):
    """Render target that remembers every hook call."""

    def __init__(self, width: int = 700, height: int = 960):
        self.size: Optional[GridSize] = GridSize(width=width, height=height)
        self.titles: list[str] = []
        self.labels: list[list[str]] = []
        self.hours: list[list[str]] = []
        self.blocks: list[tuple[SlotGrid, GridGeometry, dict[str, str]]] = []
        self.masks: list[GridGeometry] = []
        self.now_hints: list[Optional[NowRect]] = []

    def measure_grid(self) -> Optional[GridSize]:
        return self.size

    def on_render_title(self, title: str) -> None:
        self.titles.append(title)

    def on_render_labels(self, labels: list[str]) -> None:
        self.labels.append(labels)

    def on_render_hours(self, stamps: list[str]) -> None:
        self.hours.append(stamps)

    def on_render_blocks(self, slots, geometry, colors) -> None:
        self.blocks.append((slots, geometry, colors))

    def on_render_mask(self, geometry: GridGeometry) -> None:
        self.masks.append(geometry)

    def on_render_now_hint(self, rect: Optional[NowRect]) -> None:
        self.now_hints.append(rect)


class MutableClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def small_catalog() -> list[TaskDefinition]:
    return [
        TaskDefinition(key="a", label="Alpha", color="#111111"),
        TaskDefinition(key="b", label="Beta", color="#222222"),
        TaskDefinition(key="c", label="Gamma", color="#333333", hard=True),
    ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        LOG_LEVEL="INFO",
        TIMEZONE="",
        MAX_RANGES_PER_DAY=4,
        NOW_HINT_MAX_EXTRA_PX=10,
        NOW_HINT_ROW_RATIO=0.25,
    )


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock(DEFAULT_NOW)


@pytest.fixture
def recorder() -> RecordingRenderTarget:
    return RecordingRenderTarget()


@pytest.fixture
def make_core(
    settings: Settings, clock: MutableClock, recorder: RecordingRenderTarget
) -> Callable[..., WeekCore]:
    def _make(tasks=None, now: Optional[datetime] = None, **overrides) -> WeekCore:
        if now is not None:
            clock.now = now
        return WeekCore(
            recorder,
            tasks=tasks if tasks is not None else small_catalog(),
            settings=overrides.get("settings", settings),
            clock=clock,
        )

    return _make
