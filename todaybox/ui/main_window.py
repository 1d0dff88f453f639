from __future__ import annotations

from datetime import date

from PySide6.QtCore import QDate, Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDateEdit,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QSplitter,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from todaybox.domain.entities import MonthlyRecurrence, RecurrenceRule, Task, WeeklyRecurrence
from todaybox.domain.enums import FilterMode, RecurrenceType, SortMode
from todaybox.domain.filters import TaskFilters
from todaybox.domain.recurrence import WEEKDAY_LABELS
from todaybox.services.projection import format_count_label, project_task_list
from todaybox.services.task_service import TaskService

from .widgets import TaskItemWidget

FILTERS = [
    ("All", FilterMode.ALL),
    ("Today", FilterMode.TODAY),
]

SORT_OPTIONS = [
    ("Created", SortMode.CREATED),
    ("Due date", SortMode.DUE),
]

RECURRENCE_OPTIONS = [
    ("No repeat", None),
    ("Weekly", RecurrenceType.WEEKLY),
    ("Monthly", RecurrenceType.MONTHLY),
]

MEMO_MAX_LENGTH = 2000


class MainWindow(QWidget):
    def __init__(self, service: TaskService, hide_on_close: bool = False):
        super().__init__()
        self.setWindowTitle("todaybox")
        self.resize(1040, 680)

        self.service = service
        self.filters = TaskFilters()
        self.current_task_id: str | None = None
        self._hide_on_close = hide_on_close

        main_layout = QHBoxLayout(self)
        main_layout.setContentsMargins(12, 12, 12, 12)

        splitter = QSplitter(Qt.Horizontal)
        main_layout.addWidget(splitter)

        splitter.addWidget(self._build_sidebar())
        splitter.addWidget(self._build_center())
        splitter.addWidget(self._build_detail_panel())
        splitter.setStretchFactor(1, 2)
        splitter.setStretchFactor(2, 1)
        splitter.setSizes([180, 520, 340])

        self._unsubscribe = self.service.subscribe(self.refresh_tasks)
        self.refresh_tasks()

        QShortcut(QKeySequence("Ctrl+N"), self, self.title_input.setFocus)

    def _build_sidebar(self) -> QWidget:
        frame = QFrame()
        frame.setObjectName("Sidebar")
        layout = QVBoxLayout(frame)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        title = QLabel("Filters")
        title.setProperty("class", "sidebar-title")
        layout.addWidget(title)

        self.filter_list = QListWidget()
        self.filter_list.setObjectName("FilterList")
        for label, key in FILTERS:
            item = QListWidgetItem(label)
            item.setData(Qt.UserRole, key.value)
            self.filter_list.addItem(item)
        self.filter_list.setCurrentRow(0)
        self.filter_list.currentItemChanged.connect(self.on_filter_change)
        layout.addWidget(self.filter_list)

        sort_title = QLabel("Sort")
        sort_title.setProperty("class", "sidebar-title")
        layout.addWidget(sort_title)

        self.sort_combo = QComboBox()
        for label, key in SORT_OPTIONS:
            self.sort_combo.addItem(label, key.value)
        self.sort_combo.currentIndexChanged.connect(self.on_sort_change)
        layout.addWidget(self.sort_combo)

        layout.addStretch()
        return frame

    def _build_center(self) -> QWidget:
        frame = QFrame()
        frame.setObjectName("CenterPanel")
        layout = QVBoxLayout(frame)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)

        add_row = QHBoxLayout()
        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("What needs doing?")
        self.title_input.returnPressed.connect(self.add_task)
        self.new_due_toggle = QCheckBox("Due")
        self.new_due_input = QDateEdit()
        self.new_due_input.setCalendarPopup(True)
        self.new_due_input.setDate(QDate.currentDate())
        self.new_due_input.setEnabled(False)
        self.new_due_toggle.toggled.connect(self.new_due_input.setEnabled)
        self.today_check = QCheckBox("Today")
        add_button = QPushButton("Add")
        add_button.clicked.connect(self.add_task)
        add_row.addWidget(self.title_input, 1)
        add_row.addWidget(self.new_due_toggle)
        add_row.addWidget(self.new_due_input)
        add_row.addWidget(self.today_check)
        add_row.addWidget(add_button)

        self.memo_input = QTextEdit()
        self.memo_input.setPlaceholderText("Memo (optional)")
        self.memo_input.setMaximumHeight(60)

        self.incomplete_label = QLabel("")
        self.incomplete_label.setProperty("class", "section-title")
        self.incomplete_list = QListWidget()
        self.incomplete_list.setObjectName("TaskList")
        self.incomplete_list.currentItemChanged.connect(self.on_task_selected)

        self.completed_label = QLabel("")
        self.completed_label.setProperty("class", "section-title")
        self.completed_list = QListWidget()
        self.completed_list.setObjectName("TaskList")
        self.completed_list.currentItemChanged.connect(self.on_task_selected)

        layout.addLayout(add_row)
        layout.addWidget(self.memo_input)
        layout.addWidget(self.incomplete_label)
        layout.addWidget(self.incomplete_list, 2)
        layout.addWidget(self.completed_label)
        layout.addWidget(self.completed_list, 1)
        return frame

    def _build_detail_panel(self) -> QWidget:
        frame = QFrame()
        frame.setObjectName("DetailPanel")
        layout = QVBoxLayout(frame)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        self.detail_title = QLabel("Details")
        self.detail_title.setProperty("class", "panel-title")
        self.detail_title.setWordWrap(True)

        self.created_label = QLabel("")
        self.created_label.setProperty("class", "task-meta")

        self.memo_view = QTextEdit()
        self.memo_view.setReadOnly(True)
        self.memo_view.setMaximumHeight(100)

        self.due_toggle = QCheckBox("Due date")
        self.due_toggle.toggled.connect(self.on_due_toggled)
        self.due_input = QDateEdit()
        self.due_input.setCalendarPopup(True)
        self.due_input.setDate(QDate.currentDate())
        self.due_input.setEnabled(False)

        self.recurrence_combo = QComboBox()
        for label, value in RECURRENCE_OPTIONS:
            self.recurrence_combo.addItem(label, value.value if value else None)
        self.recurrence_combo.currentIndexChanged.connect(self._sync_recurrence_inputs)

        weekday_row = QHBoxLayout()
        self.weekday_checks: list[QCheckBox] = []
        for label in WEEKDAY_LABELS:
            check = QCheckBox(label)
            self.weekday_checks.append(check)
            weekday_row.addWidget(check)

        self.month_day_input = QSpinBox()
        self.month_day_input.setRange(1, 31)
        self.month_day_input.setPrefix("Day ")

        save_button = QPushButton("Save schedule")
        save_button.clicked.connect(self.save_schedule)

        self.done_button = QPushButton("Mark done")
        self.done_button.clicked.connect(self.toggle_done)
        self.today_button = QPushButton("Pin to today")
        self.today_button.setProperty("variant", "secondary")
        self.today_button.clicked.connect(self.toggle_today)
        self.delete_button = QPushButton("Delete")
        self.delete_button.setProperty("variant", "danger")
        self.delete_button.clicked.connect(self.delete_task)

        actions = QHBoxLayout()
        actions.addWidget(self.done_button, 1)
        actions.addWidget(self.today_button, 1)

        layout.addWidget(self.detail_title)
        layout.addWidget(self.created_label)
        layout.addWidget(self.memo_view)
        layout.addWidget(self.due_toggle)
        layout.addWidget(self.due_input)
        layout.addWidget(QLabel("Repeat"))
        layout.addWidget(self.recurrence_combo)
        layout.addLayout(weekday_row)
        layout.addWidget(self.month_day_input)
        layout.addWidget(save_button)
        layout.addLayout(actions)
        layout.addWidget(self.delete_button)
        layout.addStretch()

        self.detail_panel = frame
        self._sync_recurrence_inputs()
        return frame

    def refresh_tasks(self) -> None:
        today = date.today()
        incomplete, completed = project_task_list(self.service.list_tasks(), self.filters)
        self.incomplete_label.setText(format_count_label("Open", len(incomplete)))
        self.completed_label.setText(format_count_label("Done", len(completed)))
        self._fill_list(self.incomplete_list, incomplete, today)
        self._fill_list(self.completed_list, completed, today)

        task = self.service.get_task(self.current_task_id) if self.current_task_id else None
        if task:
            self.populate_form(task)
        else:
            self.current_task_id = None
            self.clear_form()

    def _fill_list(self, list_widget: QListWidget, tasks: list[Task], today: date) -> None:
        list_widget.blockSignals(True)
        list_widget.clear()
        for task in tasks:
            item = QListWidgetItem()
            item.setData(Qt.UserRole, task.id)
            widget = TaskItemWidget(task, today)
            list_widget.addItem(item)
            list_widget.setItemWidget(item, widget)
            item.setSizeHint(widget.sizeHint())
            if task.id == self.current_task_id:
                list_widget.setCurrentItem(item)
                widget.set_selected(True)
        list_widget.blockSignals(False)

    def select_task(self, task_id: str | None) -> None:
        if task_id and self.service.get_task(task_id):
            self.current_task_id = task_id
        self.refresh_tasks()

    def on_filter_change(self, current: QListWidgetItem) -> None:
        if not current:
            return
        self.filters = TaskFilters(
            filter_mode=FilterMode(current.data(Qt.UserRole)),
            sort_mode=self.filters.sort_mode,
            selected_id=self.current_task_id,
        )
        self.refresh_tasks()

    def on_sort_change(self) -> None:
        self.filters = TaskFilters(
            filter_mode=self.filters.filter_mode,
            sort_mode=SortMode(self.sort_combo.currentData()),
            selected_id=self.current_task_id,
        )
        self.refresh_tasks()

    def on_task_selected(self, current: QListWidgetItem, previous: QListWidgetItem | None = None) -> None:
        if not current:
            return
        self.current_task_id = current.data(Qt.UserRole)
        task = self.service.get_task(self.current_task_id)
        if task:
            self.populate_form(task)

    def populate_form(self, task: Task) -> None:
        self.detail_panel.setEnabled(True)
        self.detail_title.setText(task.title)
        self.created_label.setText(f"Created: {task.created_at.astimezone():%Y-%m-%d %H:%M}")
        self.memo_view.setPlainText(task.memo or "")

        self.due_toggle.setChecked(task.due_date is not None)
        if task.due_date:
            self.due_input.setDate(QDate(task.due_date.year, task.due_date.month, task.due_date.day))

        rule = task.recurrence
        index = self.recurrence_combo.findData(rule.type.value if rule else None)
        self.recurrence_combo.setCurrentIndex(max(index, 0))
        weekdays = rule.weekdays if isinstance(rule, WeeklyRecurrence) else ()
        for day, check in enumerate(self.weekday_checks):
            check.setChecked(day in weekdays)
        if isinstance(rule, MonthlyRecurrence):
            self.month_day_input.setValue(rule.day_of_month)

        self.done_button.setText("Reopen" if task.completed else "Mark done")
        self.today_button.setText("Unpin from today" if task.is_today else "Pin to today")

    def clear_form(self) -> None:
        self.detail_title.setText("Details")
        self.created_label.clear()
        self.memo_view.clear()
        self.due_toggle.setChecked(False)
        self.recurrence_combo.setCurrentIndex(0)
        for check in self.weekday_checks:
            check.setChecked(False)
        self.detail_panel.setEnabled(False)

    def on_due_toggled(self, checked: bool) -> None:
        self.due_input.setEnabled(checked)

    def _sync_recurrence_inputs(self) -> None:
        kind = self.recurrence_combo.currentData()
        for check in self.weekday_checks:
            check.setVisible(kind == RecurrenceType.WEEKLY.value)
        self.month_day_input.setVisible(kind == RecurrenceType.MONTHLY.value)

    def _selected_rule(self) -> RecurrenceRule | None:
        kind = self.recurrence_combo.currentData()
        if kind == RecurrenceType.WEEKLY.value:
            days = tuple(day for day, check in enumerate(self.weekday_checks) if check.isChecked())
            return WeeklyRecurrence(weekdays=days) if days else None
        if kind == RecurrenceType.MONTHLY.value:
            return MonthlyRecurrence(day_of_month=self.month_day_input.value())
        return None

    def add_task(self) -> None:
        title = self.title_input.text().strip()
        if not title:
            return
        is_today = self.today_check.isChecked() or self.filters.filter_mode == FilterMode.TODAY
        due_date = self.new_due_input.date().toPython() if self.new_due_toggle.isChecked() else None
        memo = self.memo_input.toPlainText().strip()[:MEMO_MAX_LENGTH]
        task = self.service.create_task(title, due_date=due_date, is_today=is_today, memo=memo or None)
        self.title_input.clear()
        self.memo_input.clear()
        self.new_due_toggle.setChecked(False)
        self.today_check.setChecked(False)
        if task:
            self.select_task(task.id)

    def save_schedule(self) -> None:
        if self.current_task_id is None:
            return
        task_id = self.current_task_id
        # read the whole form first; each mutation refreshes it from the store
        due_date = self.due_input.date().toPython() if self.due_toggle.isChecked() else None
        rule = self._selected_rule()
        self.service.set_due_date(task_id, due_date)
        self.service.set_recurrence(task_id, rule)

    def toggle_done(self) -> None:
        if self.current_task_id is None:
            return
        self.service.toggle_completion(self.current_task_id)

    def toggle_today(self) -> None:
        if self.current_task_id is None:
            return
        self.service.toggle_today(self.current_task_id)

    def delete_task(self) -> None:
        if self.current_task_id is None:
            return
        confirm = QMessageBox.question(self, "Confirm", "Delete this task?")
        if confirm != QMessageBox.Yes:
            return
        self.service.delete_task(self.current_task_id)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        if not self._hide_on_close:
            self._unsubscribe()
            super().closeEvent(event)
            return
        event.ignore()
        self.hide()
