from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, assert_never

from PySide6.QtWidgets import QMenu, QWidget

from todaybox.services.tray_menu import (
    EmptyEntry,
    ErrorEntry,
    OpenEntry,
    OverflowEntry,
    QuitEntry,
    RefreshEntry,
    SeparatorEntry,
    SummaryEntry,
    TaskEntry,
    TrayMenuModelEntry,
)


@dataclass(frozen=True)
class MenuHandlers:
    on_open: Callable[[str | None], None]
    on_refresh: Callable[[], None]
    on_quit: Callable[[], None]


def task_action_text(entry: TaskEntry) -> str:
    if entry.sublabel:
        return f"{entry.label}\t{entry.sublabel}"
    return entry.label


def create_menu(
    model: Iterable[TrayMenuModelEntry],
    handlers: MenuHandlers,
    parent: QWidget | None = None,
) -> QMenu:
    menu = QMenu(parent)
    for entry in model:
        if isinstance(entry, SeparatorEntry):
            menu.addSeparator()
        elif isinstance(entry, TaskEntry):
            action = menu.addAction(task_action_text(entry))
            action.setData(entry.task_id)
            if entry.sublabel:
                action.setToolTip(entry.sublabel)
            action.triggered.connect(
                lambda _checked=False, task_id=entry.task_id: handlers.on_open(task_id)
            )
        elif isinstance(entry, OpenEntry):
            action = menu.addAction(entry.label)
            action.triggered.connect(lambda _checked=False: handlers.on_open(None))
        elif isinstance(entry, RefreshEntry):
            action = menu.addAction(entry.label)
            action.triggered.connect(lambda _checked=False: handlers.on_refresh())
        elif isinstance(entry, QuitEntry):
            action = menu.addAction(entry.label)
            action.triggered.connect(lambda _checked=False: handlers.on_quit())
        elif isinstance(entry, (SummaryEntry, EmptyEntry, ErrorEntry, OverflowEntry)):
            action = menu.addAction(entry.label)
            action.setEnabled(False)
        else:
            assert_never(entry)
    return menu
