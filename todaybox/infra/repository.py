from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Optional

from todaybox.domain.entities import Task


def _new_task_id() -> str:
    return uuid.uuid4().hex


def snapshot(task: Task) -> Task:
    return replace(task)


class TaskRepository:
    """In-process task collection. Insertion order is the creation order."""

    def __init__(self) -> None:
        self._tasks: list[Task] = []

    def list_tasks(self) -> list[Task]:
        return [snapshot(task) for task in self._tasks]

    def get_task(self, task_id: str) -> Optional[Task]:
        task = self._find(task_id)
        return snapshot(task) if task else None

    def create_task(self, data: dict) -> Task:
        task = Task(id=_new_task_id(), **data)
        self._tasks.append(task)
        return snapshot(task)

    def update_task(self, task_id: str, data: dict) -> Optional[Task]:
        task = self._find(task_id)
        if not task:
            return None
        for key, value in data.items():
            setattr(task, key, value)
        return snapshot(task)

    def delete_task(self, task_id: str) -> bool:
        task = self._find(task_id)
        if not task:
            return False
        self._tasks.remove(task)
        return True

    def __len__(self) -> int:
        return len(self._tasks)

    def _find(self, task_id: str) -> Optional[Task]:
        return next((task for task in self._tasks if task.id == task_id), None)
