"""
Launcher for StudentDB Manager. Keeps a small entrypoint that initializes the DB
and starts the GUI. The main GUI lives in `studentdb_gui.py` and core logic in `studentdb_core.py`.
"""
import sys
from studentdb_config import settings
from studentdb_core import init_db
from studentdb_gui import MainWindow
from studentdb_logging import logger
from PySide6.QtWidgets import QApplication

def main():
    logger.info("Starting %s", settings.PROJECT_NAME)
    init_db()
    app = QApplication(sys.argv)
    win = MainWindow()
    win.show()
    win.view_students()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
