from __future__ import annotations

import logging
import sys

from PySide6.QtGui import QColor, QFont, QPalette
from PySide6.QtWidgets import QApplication, QMessageBox, QStyleFactory

from tasklist.config import SETTINGS
from tasklist.infra.db import create_session_factory, create_storage_engine, init_db
from tasklist.infra.logging import setup_logging
from tasklist.infra.storage import SqlKeyValueStorage
from tasklist.services.task_controller import TaskController
from tasklist.services.task_store import TaskStore
from tasklist.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def _apply_dark_palette(app: QApplication) -> None:
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor("#0F172A"))
    palette.setColor(QPalette.WindowText, QColor("#E6EDF3"))
    palette.setColor(QPalette.Base, QColor("#111827"))
    palette.setColor(QPalette.AlternateBase, QColor("#1B2230"))
    palette.setColor(QPalette.Text, QColor("#E6EDF3"))
    palette.setColor(QPalette.Button, QColor("#202A3B"))
    palette.setColor(QPalette.ButtonText, QColor("#E6EDF3"))
    palette.setColor(QPalette.Highlight, QColor("#2563EB"))
    palette.setColor(QPalette.HighlightedText, QColor("#FFFFFF"))
    app.setPalette(palette)


def build_controller() -> TaskController:
    engine = create_storage_engine(SETTINGS.storage_url)
    init_db(engine)
    storage = SqlKeyValueStorage(create_session_factory(engine), scope=SETTINGS.storage_scope)
    return TaskController(TaskStore(storage))


def main() -> None:
    setup_logging()
    app = QApplication(sys.argv)
    try:
        controller = build_controller()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Storage initialization failed url=%s", SETTINGS.storage_url)
        QMessageBox.critical(None, "Erreur de stockage", str(exc))
        return

    app.setStyle(QStyleFactory.create("Fusion"))
    _apply_dark_palette(app)
    app.setFont(QFont("Segoe UI", 10))

    window = MainWindow(controller)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
