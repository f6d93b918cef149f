"""Weekly time-block allocation engine."""

from weekgrid.infrastructure.callback_render_target import CallbackRenderTarget
from weekgrid.interfaces.render_target import IRenderTarget
from weekgrid.models.enums import EditScope
from weekgrid.models.task import TaskDefinition
from weekgrid.services.geometry_service import compute_geometry
from weekgrid.services.week_core import WeekCore

__version__ = "0.1.0"

__all__ = [
    "WeekCore",
    "IRenderTarget",
    "CallbackRenderTarget",
    "EditScope",
    "TaskDefinition",
    "compute_geometry",
]
