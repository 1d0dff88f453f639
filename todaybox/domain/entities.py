from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional, Union

from .enums import RecurrenceType


@dataclass(frozen=True)
class WeeklyRecurrence:
    """Repeat on the given weekdays (Sunday=0 .. Saturday=6)."""

    weekdays: tuple[int, ...]

    @property
    def type(self) -> RecurrenceType:
        return RecurrenceType.WEEKLY


@dataclass(frozen=True)
class MonthlyRecurrence:
    """Repeat on a day of the month, clamped to the month's length."""

    day_of_month: int

    @property
    def type(self) -> RecurrenceType:
        return RecurrenceType.MONTHLY


RecurrenceRule = Union[WeeklyRecurrence, MonthlyRecurrence]


@dataclass
class Task:
    id: str
    title: str
    created_at: datetime
    completed: bool = False
    completed_at: Optional[datetime] = None
    due_date: Optional[date] = None
    recurrence: RecurrenceRule | None = None
    next_occurrence_generated: bool = False
    is_today: bool = False
    memo: str | None = None


@dataclass(frozen=True)
class TodayTaskItem:
    id: str
    title: str
    completed: bool
    due_date_iso: str | None = None
    has_recurrence: bool = False
    recurrence_label: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "hasRecurrence": self.has_recurrence,
        }
        if self.due_date_iso is not None:
            data["dueDateIso"] = self.due_date_iso
        if self.recurrence_label is not None:
            data["recurrenceLabel"] = self.recurrence_label
        return data


@dataclass(frozen=True)
class TodayTasksPayload:
    count: int
    items: tuple[TodayTaskItem, ...] = field(default_factory=tuple)
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "items": [item.to_dict() for item in self.items],
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
