from __future__ import annotations

from enum import StrEnum


class RecurrenceType(StrEnum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class FilterMode(StrEnum):
    ALL = ""
    TODAY = "today"


class SortMode(StrEnum):
    CREATED = "created"
    DUE = "due"


class RelativeDay(StrEnum):
    YESTERDAY = "yesterday"
    TODAY = "today"
    TOMORROW = "tomorrow"


class MenuEntryKind(StrEnum):
    SUMMARY = "summary"
    TASK = "task"
    OVERFLOW = "overflow"
    EMPTY = "empty"
    ERROR = "error"
    SEPARATOR = "separator"
    OPEN = "open"
    REFRESH = "refresh"
    QUIT = "quit"
