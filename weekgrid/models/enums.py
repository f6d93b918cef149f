"""
Enum definitions for the engine.
"""

from enum import Enum


class EditScope(str, Enum):
    """
    Granularity at which a task's ranges are edited.

    RECURRING = permanent weekly template
    MONTH = override for the visible week's month
    WEEK = override for the visible week only
    TODAY = override for a single calendar date
    """

    RECURRING = "recurring"
    MONTH = "month"
    WEEK = "week"
    TODAY = "today"
