from __future__ import annotations

from datetime import date, timedelta

import pytest

from todaybox.domain.entities import MonthlyRecurrence, WeeklyRecurrence
from todaybox.domain.recurrence import (
    canonicalize,
    next_due_date,
    recurrence_label,
    sunday_based_weekday,
)

MONDAY = date(2026, 2, 16)


def test_sunday_based_weekday() -> None:
    assert sunday_based_weekday(date(2026, 2, 15)) == 0
    assert sunday_based_weekday(MONDAY) == 1
    assert sunday_based_weekday(date(2026, 2, 21)) == 6


def test_weekly_picks_nearest_configured_weekday() -> None:
    rule = WeeklyRecurrence(weekdays=(1, 3, 5))
    assert next_due_date(rule, MONDAY) == date(2026, 2, 18)


def test_weekly_same_weekday_moves_a_full_week() -> None:
    rule = WeeklyRecurrence(weekdays=(1,))
    assert next_due_date(rule, MONDAY) == date(2026, 2, 23)


def test_weekly_wraps_past_saturday() -> None:
    rule = WeeklyRecurrence(weekdays=(0,))
    assert next_due_date(rule, date(2026, 2, 21)) == date(2026, 2, 22)


def test_weekly_empty_set_has_no_next_date() -> None:
    assert next_due_date(WeeklyRecurrence(weekdays=()), MONDAY) is None


@pytest.mark.parametrize("weekdays", [(0,), (6,), (2, 4), (0, 1, 2, 3, 4, 5, 6), (5, 5, 1)])
def test_weekly_result_is_after_base_and_on_a_configured_day(weekdays) -> None:
    rule = WeeklyRecurrence(weekdays=weekdays)
    for offset in range(14):
        base = MONDAY + timedelta(days=offset)
        result = next_due_date(rule, base)
        assert result > base
        assert (result - base).days <= 7
        assert sunday_based_weekday(result) in weekdays


def test_monthly_clamps_to_short_month() -> None:
    rule = MonthlyRecurrence(day_of_month=31)
    assert next_due_date(rule, date(2026, 3, 31)) == date(2026, 4, 30)


def test_monthly_later_in_same_month() -> None:
    rule = MonthlyRecurrence(day_of_month=20)
    assert next_due_date(rule, date(2026, 3, 5)) == date(2026, 3, 20)


def test_monthly_same_day_advances() -> None:
    rule = MonthlyRecurrence(day_of_month=15)
    assert next_due_date(rule, date(2026, 3, 15)) == date(2026, 4, 15)


def test_monthly_clamped_day_already_passed() -> None:
    rule = MonthlyRecurrence(day_of_month=31)
    assert next_due_date(rule, date(2026, 2, 28)) == date(2026, 3, 31)
    assert next_due_date(rule, date(2024, 2, 10)) == date(2024, 2, 29)


def test_monthly_rolls_over_year_end() -> None:
    rule = MonthlyRecurrence(day_of_month=10)
    assert next_due_date(rule, date(2026, 12, 20)) == date(2027, 1, 10)


def test_no_rule_has_no_next_date() -> None:
    assert next_due_date(None, MONDAY) is None


def test_resolution_is_deterministic() -> None:
    rule = WeeklyRecurrence(weekdays=(3,))
    assert next_due_date(rule, MONDAY) == next_due_date(rule, MONDAY)


def test_canonicalize_weekdays() -> None:
    assert canonicalize(WeeklyRecurrence(weekdays=(5, 1, 5, 3))) == WeeklyRecurrence(weekdays=(1, 3, 5))
    assert canonicalize(MonthlyRecurrence(day_of_month=4)) == MonthlyRecurrence(day_of_month=4)
    assert canonicalize(None) is None


def test_recurrence_labels() -> None:
    assert recurrence_label(WeeklyRecurrence(weekdays=(3, 1, 1))) == "Mon,Wed"
    assert recurrence_label(WeeklyRecurrence(weekdays=(6, 0))) == "Sun,Sat"
    assert recurrence_label(MonthlyRecurrence(day_of_month=15)) == "Day 15"
    assert recurrence_label(WeeklyRecurrence(weekdays=())) is None
    assert recurrence_label(None) is None
