"""
Render target interface.

Defines the contract between the engine and whatever paints the week grid.
Only the size probe is mandatory; every paint hook defaults to a no-op.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

from weekgrid.models.geometry import GridGeometry, GridSize, NowRect
from weekgrid.models.slots import SlotGrid

MeasuredSize = Union[GridSize, Mapping[str, Any], None]


class IRenderTarget(ABC):
    """Abstract interface for the caller-side painter."""

    @abstractmethod
    def measure_grid(self) -> MeasuredSize:
        """
        Measure the drawable area of the weekly grid.

        Returns:
            GridSize or ``{"width": ..., "height": ...}``; None or a zero
            dimension means the area is not ready and the pass is skipped
        """
        pass

    def on_render_title(self, title: str) -> None:
        pass

    def on_render_labels(self, labels: list[str]) -> None:
        pass

    def on_render_hours(self, stamps: list[str]) -> None:
        pass

    def on_render_blocks(
        self,
        slots: SlotGrid,
        geometry: GridGeometry,
        colors: dict[str, str],
    ) -> None:
        """
        Paint task blocks.

        Args:
            slots: ``slots[day][slot]`` is a task key or None
            geometry: Pixel layout for the current size
            colors: Task key to color
        """
        pass

    def on_render_mask(self, geometry: GridGeometry) -> None:
        """Called only when the geometry was recomputed (grid lines etc.)."""
        pass

    def on_render_now_hint(self, rect: Optional[NowRect]) -> None:
        pass
