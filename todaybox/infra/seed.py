from __future__ import annotations

from datetime import date, timedelta

from todaybox.domain.entities import MonthlyRecurrence, WeeklyRecurrence
from todaybox.services.task_service import TaskService


def seed_demo_tasks(service: TaskService, today: date | None = None) -> None:
    """Populate an empty store with a handful of tasks for local runs."""
    if service.list_tasks():
        return
    today = today or date.today()
    service.create_task("Buy groceries", due_date=today + timedelta(days=1), is_today=True)
    service.create_task("Send invoice", due_date=today + timedelta(days=2))
    service.create_task(
        "Go to the gym",
        due_date=today,
        recurrence=WeeklyRecurrence(weekdays=(1, 3, 5)),
        is_today=True,
    )
    service.create_task("Pay rent", recurrence=MonthlyRecurrence(day_of_month=31))
    service.create_task("Read a book", memo="Chapter 4 onwards")
