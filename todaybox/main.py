from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication, QMessageBox, QStyle, QStyleFactory, QSystemTrayIcon

from todaybox.config import PROJECT_ROOT, SETTINGS
from todaybox.infra.logging import setup_logging
from todaybox.infra.seed import seed_demo_tasks
from todaybox.services.task_service import TaskService
from todaybox.ui.main_window import MainWindow
from todaybox.ui.menu_template import MenuHandlers
from todaybox.ui.tray import TrayController

logger = logging.getLogger(__name__)


def _find_qss_path() -> Path | None:
    candidates = [
        Path(__file__).resolve().parent / "ui" / "styles.qss",
        PROJECT_ROOT / "todaybox" / "ui" / "styles.qss",
    ]
    meipass = getattr(sys, "_MEIPASS", None)
    if meipass:
        candidates.append(Path(meipass) / "todaybox" / "ui" / "styles.qss")

    for path in candidates:
        if path.exists():
            return path
    return None


def load_styles(app: QApplication) -> bool:
    qss_path = _find_qss_path()
    if not qss_path:
        logger.warning("styles.qss not found; using the default style")
        return False
    app.setStyleSheet(qss_path.read_text(encoding="utf-8"))
    return True


def _tray_icon(app: QApplication) -> QIcon:
    if not app.windowIcon().isNull():
        return app.windowIcon()
    return app.style().standardIcon(QStyle.SP_FileDialogDetailedView)


def main() -> None:
    setup_logging()
    app = QApplication(sys.argv)
    app.setStyle(QStyleFactory.create("Fusion"))
    load_styles(app)

    try:
        service = TaskService()
        if SETTINGS.seed_demo:
            seed_demo_tasks(service)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Startup failed")
        QMessageBox.critical(None, "todaybox", str(exc))
        return

    has_tray = QSystemTrayIcon.isSystemTrayAvailable()
    window = MainWindow(service, hide_on_close=has_tray)

    def open_window(task_id: str | None = None) -> None:
        window.select_task(task_id)
        window.show()
        window.raise_()
        window.activateWindow()

    tray_controller = None
    if has_tray:
        app.setQuitOnLastWindowClosed(False)
        tray_icon = QSystemTrayIcon(_tray_icon(app), app)
        tray_controller = TrayController(
            service,
            tray_icon,
            MenuHandlers(on_open=open_window, on_refresh=lambda: tray_controller.rebuild(), on_quit=app.quit),
        )
        tray_controller.start()
        tray_icon.show()
    else:
        logger.info("System tray unavailable; running window only")

    window.show()
    exit_code = app.exec()
    if tray_controller is not None:
        tray_controller.stop()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
