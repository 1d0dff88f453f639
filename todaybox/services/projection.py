"""Read-only projections of the task collection.

Every helper returns new lists and leaves its input untouched. Python's
sort is stable, so ties keep their input order throughout.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, NamedTuple, Optional

from todaybox.domain.calendar import due_timestamp
from todaybox.domain.entities import Task, TodayTaskItem, TodayTasksPayload
from todaybox.domain.enums import FilterMode, SortMode
from todaybox.domain.filters import TaskFilters
from todaybox.domain.recurrence import recurrence_label


class TaskSplit(NamedTuple):
    incomplete: list[Task]
    completed: list[Task]


def split_by_completion(tasks: Iterable[Task]) -> TaskSplit:
    incomplete: list[Task] = []
    completed: list[Task] = []
    for task in tasks:
        (completed if task.completed else incomplete).append(task)
    return TaskSplit(incomplete, completed)


def sort_by_created(tasks: Iterable[Task]) -> list[Task]:
    return sorted(tasks, key=lambda task: task.created_at)


def sort_by_due(tasks: Iterable[Task]) -> list[Task]:
    # undated tasks map to +inf and therefore sort last
    return sorted(tasks, key=lambda task: due_timestamp(task.due_date, tz=timezone.utc))


def sort_completed_by_recent(tasks: Iterable[Task]) -> list[Task]:
    tasks = list(tasks)
    dated = [task for task in tasks if task.completed_at is not None]
    undated = [task for task in tasks if task.completed_at is None]
    dated.sort(key=lambda task: task.completed_at, reverse=True)
    return dated + undated


def sort_tasks(tasks: Iterable[Task], sort_mode: SortMode) -> list[Task]:
    if sort_mode == SortMode.DUE:
        return sort_by_due(tasks)
    return sort_by_created(tasks)


def filter_by_today_flag(tasks: Iterable[Task], filter_mode: FilterMode | str) -> list[Task]:
    if filter_mode == FilterMode.TODAY:
        return [task for task in tasks if task.is_today]
    return list(tasks)


def project_task_list(tasks: Iterable[Task], filters: TaskFilters) -> TaskSplit:
    """Sort, apply the today filter, then split for the two-section list."""
    ordered = sort_tasks(tasks, filters.sort_mode)
    filtered = filter_by_today_flag(ordered, filters.filter_mode)
    incomplete, completed = split_by_completion(filtered)
    return TaskSplit(incomplete, sort_completed_by_recent(completed))


def format_count_label(label: str, count: int) -> str:
    return f"{label} ({count})"


def to_today_item(task: Task) -> TodayTaskItem:
    return TodayTaskItem(
        id=task.id,
        title=task.title,
        completed=task.completed,
        due_date_iso=task.due_date.isoformat() if task.due_date else None,
        has_recurrence=task.recurrence is not None,
        recurrence_label=recurrence_label(task.recurrence),
    )


def build_today_payload(
    tasks: Iterable[Task],
    generated_at: Optional[datetime] = None,
) -> TodayTasksPayload:
    """Condensed view of today-pinned tasks, incomplete first.

    Relative order within each group is the collection order; items are
    not re-sorted by due date.
    """
    pinned = [task for task in tasks if task.is_today]
    incomplete, completed = split_by_completion(pinned)
    items = tuple(to_today_item(task) for task in incomplete + completed)
    return TodayTasksPayload(
        count=len(items),
        items=items,
        updated_at=generated_at or datetime.now(timezone.utc),
    )
