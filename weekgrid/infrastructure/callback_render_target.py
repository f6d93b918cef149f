"""
Render target built from plain callables.
"""

from __future__ import annotations

from typing import Callable, Optional

from weekgrid.core.exceptions import ConfigurationError
from weekgrid.interfaces.render_target import IRenderTarget, MeasuredSize
from weekgrid.models.geometry import GridGeometry, NowRect
from weekgrid.models.slots import SlotGrid


def _noop(*_args) -> None:
    return None


class CallbackRenderTarget(IRenderTarget):
    """Adapts loose functions to IRenderTarget; only measure_grid is required."""

    def __init__(
        self,
        measure_grid: Optional[Callable[[], MeasuredSize]],
        on_render_title: Optional[Callable[[str], None]] = None,
        on_render_labels: Optional[Callable[[list[str]], None]] = None,
        on_render_hours: Optional[Callable[[list[str]], None]] = None,
        on_render_blocks: Optional[
            Callable[[SlotGrid, GridGeometry, dict[str, str]], None]
        ] = None,
        on_render_mask: Optional[Callable[[GridGeometry], None]] = None,
        on_render_now_hint: Optional[Callable[[Optional[NowRect]], None]] = None,
    ):
        if not callable(measure_grid):
            raise ConfigurationError("measure_grid callable is required")
        self._measure_grid = measure_grid
        self._title = on_render_title or _noop
        self._labels = on_render_labels or _noop
        self._hours = on_render_hours or _noop
        self._blocks = on_render_blocks or _noop
        self._mask = on_render_mask or _noop
        self._now_hint = on_render_now_hint or _noop

    def measure_grid(self) -> MeasuredSize:
        return self._measure_grid()

    def on_render_title(self, title: str) -> None:
        self._title(title)

    def on_render_labels(self, labels: list[str]) -> None:
        self._labels(labels)

    def on_render_hours(self, stamps: list[str]) -> None:
        self._hours(stamps)

    def on_render_blocks(
        self,
        slots: SlotGrid,
        geometry: GridGeometry,
        colors: dict[str, str],
    ) -> None:
        self._blocks(slots, geometry, colors)

    def on_render_mask(self, geometry: GridGeometry) -> None:
        self._mask(geometry)

    def on_render_now_hint(self, rect: Optional[NowRect]) -> None:
        self._now_hint(rect)
