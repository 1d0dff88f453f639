from __future__ import annotations

import pytest

pytest.importorskip("PySide6.QtWidgets")

from todaybox.services.tray_menu import (  # noqa: E402
    ErrorEntry,
    OpenEntry,
    OverflowEntry,
    QuitEntry,
    RefreshEntry,
    SeparatorEntry,
    SummaryEntry,
    TaskEntry,
)
from todaybox.ui.menu_template import MenuHandlers, create_menu  # noqa: E402


class Recorder:
    def __init__(self) -> None:
        self.opened: list[str | None] = []
        self.refreshed = 0
        self.quit = 0

    def handlers(self) -> MenuHandlers:
        return MenuHandlers(on_open=self.on_open, on_refresh=self.on_refresh, on_quit=self.on_quit)

    def on_open(self, task_id: str | None = None) -> None:
        self.opened.append(task_id)

    def on_refresh(self) -> None:
        self.refreshed += 1

    def on_quit(self) -> None:
        self.quit += 1


def test_task_entry_maps_to_clickable_action(qapp) -> None:
    recorder = Recorder()
    model = [TaskEntry(task_id="t1", label="task", completed=True, sublabel="📅 Today")]

    menu = create_menu(model, recorder.handlers())
    actions = menu.actions()

    assert len(actions) == 1
    assert actions[0].text() == "task\t📅 Today"
    assert actions[0].data() == "t1"
    assert actions[0].isEnabled()

    actions[0].trigger()
    assert recorder.opened == ["t1"]


def test_task_without_sublabel(qapp) -> None:
    menu = create_menu([TaskEntry(task_id="t2", label="plain", completed=False)], Recorder().handlers())
    assert menu.actions()[0].text() == "plain"


def test_control_entries_and_separator(qapp) -> None:
    recorder = Recorder()
    model = [
        SeparatorEntry(),
        OpenEntry(),
        RefreshEntry(),
        QuitEntry(),
        ErrorEntry(),
        SummaryEntry(count=3),
        OverflowEntry(hidden=2),
    ]

    menu = create_menu(model, recorder.handlers())
    actions = menu.actions()

    assert actions[0].isSeparator()
    assert [action.text() for action in actions[1:]] == [
        "Open window",
        "Refresh",
        "Quit",
        "Failed to load",
        "Today's tasks: 3",
        "+2 more",
    ]
    assert all(not action.isEnabled() for action in actions[4:])

    actions[1].trigger()
    actions[2].trigger()
    actions[3].trigger()
    assert recorder.opened == [None]
    assert recorder.refreshed == 1
    assert recorder.quit == 1
