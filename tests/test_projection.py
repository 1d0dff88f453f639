from __future__ import annotations

from datetime import date, datetime, timezone

from todaybox.domain.entities import MonthlyRecurrence, Task, WeeklyRecurrence
from todaybox.domain.enums import FilterMode, SortMode
from todaybox.domain.filters import TaskFilters
from todaybox.services.projection import (
    build_today_payload,
    filter_by_today_flag,
    format_count_label,
    project_task_list,
    sort_by_created,
    sort_by_due,
    sort_completed_by_recent,
    split_by_completion,
)


def instant(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def make_task(task_id: str, **kwargs) -> Task:
    kwargs.setdefault("title", task_id)
    kwargs.setdefault("created_at", instant(int(task_id) if task_id.isdigit() else 0))
    return Task(id=task_id, **kwargs)


def ids(tasks) -> list[str]:
    return [task.id for task in tasks]


def test_split_by_completion_preserves_order() -> None:
    tasks = [
        make_task("1"),
        make_task("2", completed=True),
        make_task("3"),
    ]

    incomplete, completed = split_by_completion(tasks)

    assert ids(incomplete) == ["1", "3"]
    assert ids(completed) == ["2"]


def test_sort_by_created() -> None:
    tasks = [
        make_task("a", created_at=instant(1)),
        make_task("b", created_at=instant(3)),
        make_task("c", created_at=instant(2)),
        make_task("d", created_at=instant(1)),
    ]
    assert ids(sort_by_created(tasks)) == ["a", "d", "c", "b"]


def test_sort_by_due_puts_undated_last() -> None:
    tasks = [
        make_task("1", due_date=date(2024, 1, 2)),
        make_task("2"),
        make_task("3", due_date=date(2024, 1, 1)),
        make_task("4"),
        make_task("5", due_date=date(2024, 1, 1)),
    ]
    assert ids(sort_by_due(tasks)) == ["3", "5", "1", "2", "4"]


def test_sort_completed_by_recent() -> None:
    tasks = [
        make_task("A", completed=True, completed_at=instant(1000)),
        make_task("B", completed=True, completed_at=instant(3000)),
        make_task("C", completed=True),
    ]
    assert ids(sort_completed_by_recent(tasks)) == ["B", "A", "C"]


def test_sort_completed_by_recent_keeps_undated_order() -> None:
    tasks = [make_task("x"), make_task("A", completed_at=instant(5)), make_task("y")]
    assert ids(sort_completed_by_recent(iter(tasks))) == ["A", "x", "y"]


def test_filter_by_today_flag() -> None:
    tasks = [
        make_task("1", is_today=True),
        make_task("2"),
        make_task("3", completed=True),
    ]
    assert filter_by_today_flag(tasks, FilterMode.ALL) == tasks
    assert filter_by_today_flag(tasks, "") == tasks
    assert ids(filter_by_today_flag(tasks, FilterMode.TODAY)) == ["1"]
    assert ids(filter_by_today_flag(tasks, "today")) == ["1"]


def test_project_task_list() -> None:
    tasks = [
        make_task("1", due_date=date(2024, 1, 2), is_today=True),
        make_task("2", is_today=True),
        make_task("3", due_date=date(2024, 1, 1), is_today=True),
        make_task("4", is_today=False),
        make_task("5", completed=True, completed_at=instant(10), is_today=True),
        make_task("6", completed=True, completed_at=instant(20), is_today=True),
    ]

    result = project_task_list(tasks, TaskFilters(filter_mode=FilterMode.TODAY, sort_mode=SortMode.DUE))

    assert ids(result.incomplete) == ["3", "1", "2"]
    assert ids(result.completed) == ["6", "5"]


def test_format_count_label() -> None:
    assert format_count_label("Open", 0) == "Open (0)"
    assert format_count_label("Done", 10) == "Done (10)"


def test_today_payload_orders_incomplete_first() -> None:
    tasks = [
        make_task("X", completed=True, is_today=True),
        make_task("Y", is_today=True),
    ]

    payload = build_today_payload(tasks)

    assert [item.id for item in payload.items] == ["Y", "X"]
    assert payload.count == 2
    assert payload.updated_at is not None


def test_today_payload_does_not_resort_by_due_date() -> None:
    tasks = [
        make_task("late", due_date=date(2026, 3, 1), is_today=True),
        make_task("skip", due_date=date(2026, 1, 1)),
        make_task("early", due_date=date(2026, 2, 1), is_today=True),
    ]

    payload = build_today_payload(tasks)

    assert [item.id for item in payload.items] == ["late", "early"]


def test_today_payload_items() -> None:
    generated = datetime(2026, 2, 16, tzinfo=timezone.utc)
    tasks = [
        make_task("1", title="Gym", is_today=True, due_date=date(2026, 2, 16),
                  recurrence=WeeklyRecurrence(weekdays=(3, 1, 3))),
        make_task("2", title="Rent", is_today=True, recurrence=MonthlyRecurrence(day_of_month=25)),
        make_task("3", title="Odd", is_today=True, recurrence=WeeklyRecurrence(weekdays=())),
        make_task("4", title="Plain", is_today=True),
    ]

    payload = build_today_payload(tasks, generated_at=generated)

    gym, rent, odd, plain = payload.items
    assert gym.due_date_iso == "2026-02-16"
    assert gym.has_recurrence is True
    assert gym.recurrence_label == "Mon,Wed"
    assert rent.recurrence_label == "Day 25"
    assert odd.has_recurrence is True
    assert odd.recurrence_label is None
    assert plain.has_recurrence is False
    assert plain.due_date_iso is None
    assert payload.updated_at == generated


def test_today_payload_to_dict() -> None:
    generated = datetime(2026, 2, 16, tzinfo=timezone.utc)
    tasks = [make_task("1", title="Gym", is_today=True, due_date=date(2026, 2, 16),
                       recurrence=WeeklyRecurrence(weekdays=(1,)))]

    data = build_today_payload(tasks, generated_at=generated).to_dict()

    assert data == {
        "count": 1,
        "items": [
            {
                "id": "1",
                "title": "Gym",
                "completed": False,
                "dueDateIso": "2026-02-16",
                "hasRecurrence": True,
                "recurrenceLabel": "Mon",
            }
        ],
        "updatedAt": "2026-02-16T00:00:00+00:00",
    }


def test_empty_today_payload() -> None:
    payload = build_today_payload([make_task("1")])
    assert payload.count == 0
    assert payload.items == ()
