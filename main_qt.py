# main_qt.py
import os
import sys

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QApplication

from infra.db.base import make_engine, make_session_factory
from infra.logging_config import setup_logging
from infra.services import build_services

from ui.main_window import MainWindow


def main():
    setup_logging()

    app = QApplication(sys.argv)
    app.setFont(QFont("Segoe UI", 9))

    session = make_session_factory(make_engine())()
    services = build_services(session)
    project_id = os.getenv("PM_GANTT_PROJECT", "default").strip() or "default"

    window = MainWindow(services, project_id)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
