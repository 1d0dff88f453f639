"""Platform-neutral model of the tray menu.

The model is rebuilt from a today payload (or the error/absent state) on
every refresh and is never stored.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Optional, Union

from todaybox.domain.calendar import format_due_date_iso_for_menu
from todaybox.domain.entities import TodayTaskItem, TodayTasksPayload
from todaybox.domain.enums import MenuEntryKind
from todaybox.domain.recurrence import RECURRENCE_GLYPH

STRIKETHROUGH_MARK = "\u0336"

SUMMARY_LABEL = "Today's tasks: {count}"
EMPTY_LABEL = "No tasks"
ERROR_LABEL = "Failed to load"
OVERFLOW_LABEL = "+{hidden} more"
OPEN_LABEL = "Open window"
REFRESH_LABEL = "Refresh"
QUIT_LABEL = "Quit"


@dataclass(frozen=True)
class SummaryEntry:
    count: int
    kind: ClassVar[MenuEntryKind] = MenuEntryKind.SUMMARY

    @property
    def label(self) -> str:
        return SUMMARY_LABEL.format(count=self.count)


@dataclass(frozen=True)
class TaskEntry:
    task_id: str
    label: str
    completed: bool
    sublabel: str | None = None
    kind: ClassVar[MenuEntryKind] = MenuEntryKind.TASK


@dataclass(frozen=True)
class OverflowEntry:
    hidden: int
    kind: ClassVar[MenuEntryKind] = MenuEntryKind.OVERFLOW

    @property
    def label(self) -> str:
        return OVERFLOW_LABEL.format(hidden=self.hidden)


@dataclass(frozen=True)
class EmptyEntry:
    label: str = EMPTY_LABEL
    kind: ClassVar[MenuEntryKind] = MenuEntryKind.EMPTY


@dataclass(frozen=True)
class ErrorEntry:
    label: str = ERROR_LABEL
    kind: ClassVar[MenuEntryKind] = MenuEntryKind.ERROR


@dataclass(frozen=True)
class SeparatorEntry:
    kind: ClassVar[MenuEntryKind] = MenuEntryKind.SEPARATOR


@dataclass(frozen=True)
class OpenEntry:
    label: str = OPEN_LABEL
    kind: ClassVar[MenuEntryKind] = MenuEntryKind.OPEN


@dataclass(frozen=True)
class RefreshEntry:
    label: str = REFRESH_LABEL
    kind: ClassVar[MenuEntryKind] = MenuEntryKind.REFRESH


@dataclass(frozen=True)
class QuitEntry:
    label: str = QUIT_LABEL
    kind: ClassVar[MenuEntryKind] = MenuEntryKind.QUIT


TrayMenuModelEntry = Union[
    SummaryEntry,
    TaskEntry,
    OverflowEntry,
    EmptyEntry,
    ErrorEntry,
    SeparatorEntry,
    OpenEntry,
    RefreshEntry,
    QuitEntry,
]


def to_strikethrough_label(value: str) -> str:
    return "".join(f"{char}{STRIKETHROUGH_MARK}" for char in value)


def format_task_sublabel(item: TodayTaskItem, today: Optional[date] = None) -> str | None:
    parts = []
    due_label = format_due_date_iso_for_menu(item.due_date_iso, today)
    if due_label:
        parts.append(due_label)
    if item.recurrence_label:
        parts.append(f"{RECURRENCE_GLYPH} {item.recurrence_label}")
    return "  ".join(parts) if parts else None


def _task_entry(item: TodayTaskItem, today: Optional[date]) -> TaskEntry:
    return TaskEntry(
        task_id=item.id,
        label=to_strikethrough_label(item.title) if item.completed else item.title,
        completed=item.completed,
        sublabel=format_task_sublabel(item, today),
    )


def _footer() -> list[TrayMenuModelEntry]:
    return [SeparatorEntry(), OpenEntry(), RefreshEntry(), SeparatorEntry(), QuitEntry()]


def build_tray_menu_model(
    payload: TodayTasksPayload | None,
    error: bool = False,
    today: Optional[date] = None,
    max_items: int | None = None,
) -> list[TrayMenuModelEntry]:
    """Ordered menu entries for the error, absent and loaded states.

    ``error`` wins over any payload. Task entries keep the payload's item
    order; with ``max_items`` set, the remainder collapses into a single
    overflow entry.
    """
    if error:
        return [ErrorEntry(), *_footer()]

    if payload is None:
        return [SummaryEntry(count=0), EmptyEntry(), *_footer()]

    entries: list[TrayMenuModelEntry] = [SummaryEntry(count=payload.count)]
    items = list(payload.items)
    if not items:
        entries.append(EmptyEntry())
    else:
        shown = items if max_items is None else items[:max_items]
        entries.extend(_task_entry(item, today) for item in shown)
        hidden = len(items) - len(shown)
        if hidden > 0:
            entries.append(OverflowEntry(hidden=hidden))
    entries.extend(_footer())
    return entries
