"""
Task catalog models.

A task is a named, colored category that can claim quarter-hour slots.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class TaskDefinition(BaseModel):
    """Catalog entry for a schedulable task."""

    key: str = Field(..., min_length=1)
    label: str
    color: str
    hard: bool = Field(False, description="Semantic flag only, not enforced")


DEFAULT_TASKS: list[tuple[str, str, str, bool]] = [
    ("work", "Work", "#D33C36", True),
    ("commute", "Commute", "#E86A13", True),
    ("chores", "Chores", "#3B41C5", True),
    ("errands", "Errands", "#1D8F2E", True),
    ("meals", "Meal Time", "#E0B21B", False),
    ("hygiene", "Hygiene", "#0EA5E9", False),
    ("selfcare", "Self care", "#A3A3A3", False),
    ("exercise", "Exercise", "#1DB954", False),
    ("family", "Family Time", "#E3326B", False),
    ("hobbies", "Hobbies", "#F39C12", False),
    ("leisure", "Leisure", "#6B5B95", False),
    ("school", "School", "#3269E6", True),
    ("relax", "Relaxation", "#24C3D6", False),
    ("free", "Free Time", "#77C043", False),
    ("routines", "Routines", "#7A5C2E", False),
    ("sleep", "Sleep", "#6AA6FF", False),
]


def default_task_catalog() -> list[TaskDefinition]:
    return [
        TaskDefinition(key=key, label=label, color=color, hard=hard)
        for key, label, color, hard in DEFAULT_TASKS
    ]
