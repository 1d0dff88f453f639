"""Next-occurrence resolution for recurring tasks.

Resolution is a pure function of ``(rule, base_date)``; it never reads the
wall clock.
"""
from __future__ import annotations

from datetime import date, timedelta

from .calendar import last_day_of_month
from .entities import MonthlyRecurrence, RecurrenceRule, WeeklyRecurrence

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
RECURRENCE_GLYPH = "🔄"


def sunday_based_weekday(value: date) -> int:
    return value.isoweekday() % 7


def canonical_weekdays(weekdays) -> tuple[int, ...]:
    return tuple(sorted({int(day) for day in weekdays if 0 <= int(day) <= 6}))


def canonicalize(rule: RecurrenceRule | None) -> RecurrenceRule | None:
    if isinstance(rule, WeeklyRecurrence):
        return WeeklyRecurrence(weekdays=canonical_weekdays(rule.weekdays))
    return rule


def next_due_date(rule: RecurrenceRule | None, base_date: date) -> date | None:
    if isinstance(rule, WeeklyRecurrence):
        return _next_weekly(rule, base_date)
    if isinstance(rule, MonthlyRecurrence):
        return _next_monthly(rule, base_date)
    return None


def recurrence_label(rule: RecurrenceRule | None) -> str | None:
    rule = canonicalize(rule)
    if isinstance(rule, WeeklyRecurrence):
        if not rule.weekdays:
            return None
        return ",".join(WEEKDAY_LABELS[day] for day in rule.weekdays)
    if isinstance(rule, MonthlyRecurrence):
        return f"Day {rule.day_of_month}"
    return None


def _next_weekly(rule: WeeklyRecurrence, base_date: date) -> date | None:
    weekdays = canonical_weekdays(rule.weekdays)
    if not weekdays:
        return None
    current = sunday_based_weekday(base_date)
    # an offset of 0 means "same weekday next week"
    offsets = [((day - current) % 7) or 7 for day in weekdays]
    return base_date + timedelta(days=min(offsets))


def _next_monthly(rule: MonthlyRecurrence, base_date: date) -> date:
    target = max(int(rule.day_of_month), 1)
    candidate = _clamped(base_date.year, base_date.month, target)
    if candidate <= base_date:
        year = base_date.year + base_date.month // 12
        month = base_date.month % 12 + 1
        candidate = _clamped(year, month, target)
    return candidate


def _clamped(year: int, month: int, day: int) -> date:
    return date(year, month, min(day, last_day_of_month(year, month)))
