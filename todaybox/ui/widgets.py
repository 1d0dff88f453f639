from __future__ import annotations

from datetime import date

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QSizePolicy, QVBoxLayout, QWidget

from todaybox.domain.calendar import format_completed_at_label, format_due_date_label
from todaybox.domain.entities import Task
from todaybox.domain.recurrence import RECURRENCE_GLYPH, recurrence_label

TODAY_PIN = "📍"


def task_meta_parts(task: Task, today: date) -> list[str]:
    parts = []
    if task.due_date:
        parts.append(f"Due: {format_due_date_label(task.due_date, today)}")
    label = recurrence_label(task.recurrence)
    if label:
        parts.append(f"{RECURRENCE_GLYPH} {label}")
    if task.completed_at:
        parts.append(f"Done: {format_completed_at_label(task.completed_at, today)}")
    if task.memo:
        parts.append(task.memo.splitlines()[0])
    return parts


class TaskItemWidget(QWidget):
    def __init__(self, task: Task, today: date | None = None):
        super().__init__()
        self.task = task
        today = today or date.today()

        self.setObjectName("TaskCard")
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        self.setMinimumHeight(48)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 6, 12, 6)
        layout.setSpacing(2)

        title = QLabel(task.title)
        title.setProperty("class", "task-title")
        title.setWordWrap(True)
        if task.completed:
            font = title.font()
            font.setStrikeOut(True)
            title.setFont(font)

        pin = QLabel(TODAY_PIN if task.is_today else "")
        pin.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)

        header = QHBoxLayout()
        header.setSpacing(8)
        header.addWidget(title, 1)
        header.addWidget(pin, 0, Qt.AlignTop)
        layout.addLayout(header)

        parts = task_meta_parts(task, today)
        if parts:
            meta = QLabel(" | ".join(parts))
            meta.setProperty("class", "task-meta")
            meta.setWordWrap(True)
            layout.addWidget(meta)

    def set_selected(self, selected: bool) -> None:
        self.setProperty("selected", selected)
        self.style().unpolish(self)
        self.style().polish(self)
