import os

# no display needed for the window tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtCore import QThreadPool

from studentdb_core import StudentRepository, init_db


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "students.db"
    init_db(path)
    return path


@pytest.fixture
def repo(db_path):
    return StudentRepository(db_path)


@pytest.fixture
def window(qtbot, repo):
    from studentdb_gui import MainWindow

    win = MainWindow(repository=repo, add_delay_ms=0, load_delay_ms=0)
    qtbot.addWidget(win)
    yield win
    QThreadPool.globalInstance().waitForDone()
