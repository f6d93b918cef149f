"""Pydantic models (schemas) for the engine."""

from weekgrid.models.enums import EditScope
from weekgrid.models.geometry import GridGeometry, GridSize, NowRect
from weekgrid.models.ranges import TimeRange, WeekRanges
from weekgrid.models.slots import SlotGrid, SlotSegment
from weekgrid.models.store import ExceptionLayers, OrderStamps, RangeStore
from weekgrid.models.task import TaskDefinition, default_task_catalog
from weekgrid.models.week import WeekContext

__all__ = [
    # Enums
    "EditScope",
    # Catalog
    "TaskDefinition",
    "default_task_catalog",
    # Ranges and store
    "TimeRange",
    "WeekRanges",
    "RangeStore",
    "ExceptionLayers",
    "OrderStamps",
    "WeekContext",
    # Rendering data
    "GridGeometry",
    "GridSize",
    "NowRect",
    "SlotGrid",
    "SlotSegment",
]
