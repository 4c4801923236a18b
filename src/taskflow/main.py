# Rev 1.0.0

# src/taskflow/main.py
import sys

from PySide6.QtGui import QGuiApplication, QFont
from PySide6.QtCore import Qt, QCoreApplication
from PySide6.QtWidgets import QApplication

from taskflow.app_context import AppContext
from taskflow.ui.main_window import MainWindow
from taskflow.ui.window_mode import restore_main_window
from taskflow.utils.config import load_settings
from taskflow.utils.logging_setup import setup_logging
from taskflow.utils.paths import ensure_dirs


def main():
    QGuiApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )
    app = QApplication(sys.argv)
    QCoreApplication.setOrganizationName("taskflow")
    QCoreApplication.setApplicationName("TaskFlow")

    ensure_dirs()
    logfile = setup_logging("taskflow")
    print(f"[logging] Writing to: {logfile}")

    # --- DI wiring ---
    ctx = AppContext.create(settings=load_settings())
    ctx.data.reload()

    # --- UI ---
    win = MainWindow(ctx, logfile=str(logfile))
    restore_main_window(win, ctx.settings)

    # Keep a strong ref just in case someone stores nothing at module level
    app.setProperty("mainWindow", win)
    app.setFont(QFont("Sans Serif", 10))

    try:
        return app.exec()
    finally:
        ctx.close()


if __name__ == "__main__":
    sys.exit(main())
