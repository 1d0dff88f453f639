"""Calendar arithmetic over plain dates.

All helpers assume already-valid dates. Clamping an out-of-range day of
month is left to the recurrence resolver.
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional

from .enums import RelativeDay

CALENDAR_GLYPH = "📅"

RELATIVE_DAY_LABELS = {
    RelativeDay.YESTERDAY: "Yesterday",
    RelativeDay.TODAY: "Today",
    RelativeDay.TOMORROW: "Tomorrow",
}

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def compare_dates(left: date, right: date) -> int:
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def relative_day(value: date, today: date) -> RelativeDay | None:
    offset = (value - today).days
    if offset == -1:
        return RelativeDay.YESTERDAY
    if offset == 0:
        return RelativeDay.TODAY
    if offset == 1:
        return RelativeDay.TOMORROW
    return None


def format_due_date_label(value: date, today: Optional[date] = None) -> str:
    """Relative label near ``today``, ``M/D`` within its year, else ``Y/M/D``."""
    today = today or date.today()
    relative = relative_day(value, today)
    if relative is not None:
        return RELATIVE_DAY_LABELS[relative]
    if value.year == today.year:
        return f"{value.month}/{value.day}"
    return f"{value.year}/{value.month}/{value.day}"


def parse_iso_date(value: str | None) -> date | None:
    if not value:
        return None
    value = value.strip()
    if not _ISO_DATE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def format_due_date_iso_for_menu(value: str | None, today: Optional[date] = None) -> str | None:
    due_date = parse_iso_date(value)
    if due_date is None:
        return None
    return f"{CALENDAR_GLYPH} {format_due_date_label(due_date, today)}"


def format_completed_at_label(
    instant: datetime,
    today: Optional[date] = None,
    tz: tzinfo | None = None,
) -> str:
    """Due-date style day label followed by a 24h ``HH:MM`` time in ``tz``."""
    local = instant.astimezone(tz)
    return f"{format_due_date_label(local.date(), today)} {local:%H:%M}"


def last_day_of_month(year: int, month: int) -> int:
    if month == 12:
        next_month = date(year + 1, 1, 1)
    else:
        next_month = date(year, month + 1, 1)
    return (next_month - timedelta(days=1)).day


def combine_date_time(value: date, at: time = time.min, tz: tzinfo | None = None) -> datetime:
    combined = datetime.combine(value, at)
    if tz is None:
        return combined.astimezone()
    return combined.replace(tzinfo=tz)


def due_timestamp(value: date | None, at: time = time.min, tz: tzinfo | None = None) -> float:
    if value is None:
        return math.inf
    return combine_date_time(value, at, tz).timestamp()
