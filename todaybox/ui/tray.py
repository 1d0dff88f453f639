from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Protocol

from PySide6.QtWidgets import QMenu

from todaybox.config import SETTINGS, Settings
from todaybox.services.task_service import TaskService
from todaybox.services.tray_menu import build_tray_menu_model

from .menu_template import MenuHandlers, create_menu

logger = logging.getLogger(__name__)


class TraySurface(Protocol):
    def setContextMenu(self, menu: QMenu) -> None: ...

    def setToolTip(self, tip: str) -> None: ...


class TrayController:
    """Keeps the tray menu in sync with the today payload."""

    def __init__(
        self,
        service: TaskService,
        tray: TraySurface,
        handlers: MenuHandlers,
        settings: Settings = SETTINGS,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._service = service
        self._tray = tray
        self._handlers = handlers
        self._settings = settings
        self._today = today
        self._menu: QMenu | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def menu(self) -> QMenu | None:
        return self._menu

    def start(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._service.subscribe(self.rebuild)
        self.rebuild()

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def rebuild(self) -> None:
        title = self._settings.tray_title
        try:
            payload = self._service.today_payload()
        except Exception:  # noqa: BLE001
            logger.exception("Failed to build today payload")
            model = build_tray_menu_model(None, error=True)
        else:
            model = build_tray_menu_model(
                payload,
                today=self._today(),
                max_items=self._settings.tray_max_items,
            )
            title = f"{title} {payload.count}"

        menu = create_menu(model, self._handlers)
        self._tray.setContextMenu(menu)
        self._tray.setToolTip(title)
        if self._menu is not None:
            self._menu.deleteLater()
        self._menu = menu
