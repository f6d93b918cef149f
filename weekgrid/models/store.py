"""
Range Store models.

The store is the only state a caller has to persist: the recurring template,
three layers of scoped exceptions, first-save order stamps and the last edit
scope per task.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from weekgrid.models.enums import EditScope
from weekgrid.models.ranges import TimeRange, WeekRanges


class ExceptionLayers(BaseModel):
    """Scoped overrides of the recurring template."""

    model_config = ConfigDict(populate_by_name=True)

    by_date: dict[str, dict[str, list[TimeRange]]] = Field(
        default_factory=dict, alias="byDate"
    )
    by_week: dict[str, dict[str, WeekRanges]] = Field(
        default_factory=dict, alias="byWeek"
    )
    by_month: dict[str, dict[str, WeekRanges]] = Field(
        default_factory=dict, alias="byMonth"
    )


class OrderStamps(BaseModel):
    """First-writer-wins sequence numbers per scope (lower wins)."""

    recurring: dict[str, int] = Field(default_factory=dict)
    week: dict[str, dict[str, int]] = Field(default_factory=dict)
    month: dict[str, dict[str, int]] = Field(default_factory=dict)

    def max_stamp(self) -> int:
        values = list(self.recurring.values())
        for layer in (self.week, self.month):
            for stamps in layer.values():
                values.extend(stamps.values())
        return max(values, default=0)


class RangeStore(BaseModel):
    """Complete persisted state of one engine instance."""

    model_config = ConfigDict(populate_by_name=True)

    recurring: dict[str, WeekRanges] = Field(default_factory=dict)
    exceptions: ExceptionLayers = Field(default_factory=ExceptionLayers)
    order: OrderStamps = Field(default_factory=OrderStamps)
    last_scope: dict[str, EditScope] = Field(default_factory=dict, alias="lastScope")
    next_seq: int = Field(1, ge=1, alias="nextSeq")

    def next_stamp(self) -> int:
        """Hand out the next order sequence number."""
        seq = self.next_seq
        self.next_seq += 1
        return seq

    def stamp_once(self, stamps: dict[str, int], task_key: str) -> Optional[int]:
        """Stamp ``task_key`` in ``stamps`` unless it already has a stamp."""
        if task_key in stamps:
            return None
        stamps[task_key] = self.next_stamp()
        return stamps[task_key]

    def to_state(self) -> dict:
        """JSON-ready deep copy using the camelCase wire keys."""
        return self.model_dump(mode="json", by_alias=True)
