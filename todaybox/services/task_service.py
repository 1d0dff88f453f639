from __future__ import annotations

import logging
import threading
from datetime import date, datetime, timezone
from typing import Callable, Optional

from todaybox.domain.entities import RecurrenceRule, Task, TodayTasksPayload
from todaybox.domain.recurrence import canonicalize, next_due_date
from todaybox.infra.events import ChangeNotifier, Listener
from todaybox.infra.repository import TaskRepository

from .projection import build_today_payload

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskService:
    """Owns the task collection and its lifecycle rules.

    Mutations run under a single lock and publish at most one change
    notification each, after the lock is released. Unknown ids are ignored.
    """

    def __init__(
        self,
        repo: TaskRepository | None = None,
        clock: Clock = utcnow,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self._repo = repo if repo is not None else TaskRepository()
        self._clock = clock
        self._notifier = notifier if notifier is not None else ChangeNotifier()
        self._lock = threading.RLock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._notifier.subscribe(listener)

    def list_tasks(self) -> list[Task]:
        with self._lock:
            return self._repo.list_tasks()

    def get_task(self, task_id: str) -> Task | None:
        with self._lock:
            return self._repo.get_task(task_id)

    def today_payload(self) -> TodayTasksPayload:
        with self._lock:
            tasks = self._repo.list_tasks()
        return build_today_payload(tasks, generated_at=self._clock())

    def create_task(
        self,
        title: str,
        due_date: Optional[date] = None,
        recurrence: RecurrenceRule | None = None,
        is_today: bool = False,
        memo: str | None = None,
    ) -> Task | None:
        title = (title or "").strip()
        if not title:
            return None
        with self._lock:
            task = self._repo.create_task({
                "title": title,
                "created_at": self._clock(),
                "due_date": due_date,
                "recurrence": canonicalize(recurrence),
                "is_today": is_today,
                "memo": memo or None,
            })
        logger.debug("Created task %s", task.id)
        self._notifier.publish()
        return task

    def toggle_completion(self, task_id: str) -> None:
        with self._lock:
            task = self._repo.get_task(task_id)
            if not task:
                return
            if task.completed:
                self._repo.update_task(task_id, {"completed": False, "completed_at": None})
            else:
                self._repo.update_task(task_id, {"completed": True, "completed_at": self._clock()})
                self._handle_recurrence(task)
        self._notifier.publish()

    def toggle_today(self, task_id: str) -> None:
        with self._lock:
            task = self._repo.get_task(task_id)
            if not task:
                return
            self._repo.update_task(task_id, {"is_today": not task.is_today})
        self._notifier.publish()

    def set_due_date(self, task_id: str, due_date: Optional[date]) -> None:
        with self._lock:
            if not self._repo.update_task(task_id, {"due_date": due_date}):
                return
        self._notifier.publish()

    def set_recurrence(self, task_id: str, rule: RecurrenceRule | None) -> None:
        with self._lock:
            task = self._repo.get_task(task_id)
            if not task:
                return
            new_rule = canonicalize(rule)
            data: dict = {"recurrence": new_rule}
            if new_rule is None:
                data["next_occurrence_generated"] = False
            elif new_rule != canonicalize(task.recurrence):
                data["next_occurrence_generated"] = False
            self._repo.update_task(task_id, data)
        self._notifier.publish()

    def delete_task(self, task_id: str) -> None:
        with self._lock:
            if not self._repo.delete_task(task_id):
                return
        logger.debug("Deleted task %s", task_id)
        self._notifier.publish()

    def _handle_recurrence(self, task: Task) -> None:
        if task.recurrence is None or task.next_occurrence_generated:
            return

        base_date = task.due_date or task.created_at.date()
        next_due = next_due_date(task.recurrence, base_date)
        if next_due is None:
            return

        sibling = self._repo.create_task({
            "title": task.title,
            "created_at": self._clock(),
            "due_date": next_due,
            "recurrence": task.recurrence,
            "is_today": False,
            "memo": task.memo,
        })
        self._repo.update_task(task.id, {"next_occurrence_generated": True})
        logger.info("Generated next occurrence %s of task %s due %s", sibling.id, task.id, next_due)
