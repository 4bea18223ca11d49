"""
GUI module for StudentDB Manager.
Contains the MainWindow class and GUI wiring. Keeps UI code separate from core logic in studentdb_core.py.
"""
import time

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot
from PySide6.QtWidgets import (
    QWidget, QMainWindow, QVBoxLayout, QHBoxLayout, QLabel, QGroupBox,
    QPushButton, QLineEdit, QFormLayout, QTableWidget, QTableWidgetItem,
    QAbstractItemView, QHeaderView
)

from studentdb_config import settings
from studentdb_core import StoreResult, StudentRepository, parse_student_form, parse_student_id
from studentdb_errors import StorageError, ValidationError
from studentdb_logging import logger

COLUMNS = ["ID", "First Name", "Last Name", "Age", "Email"]


class WorkerSignals(QObject):
    # action name and StoreResult, delivered on the UI thread
    finished = Signal(str, object)


class Worker(QRunnable):
    """Runs one repository call on the thread pool, after an optional simulated delay."""

    def __init__(self, action, fn, *args, delay_ms=0):
        super().__init__()
        self.action = action
        self.fn = fn
        self.args = args
        self.delay_ms = delay_ms
        self.signals = WorkerSignals()

    @Slot()
    def run(self):
        if self.delay_ms:
            time.sleep(self.delay_ms / 1000)
        try:
            result = self.fn(*self.args)
        except Exception as e:
            logger.exception("Background task %s crashed", getattr(self.fn, "__name__", self.fn))
            result = StoreResult(None, StorageError(str(e)))
        self.signals.finished.emit(self.action, result)


class MainWindow(QMainWindow):
    # Student form, results table and status line
    def __init__(self, repository=None, add_delay_ms=None, load_delay_ms=None, thread_pool=None):
        super().__init__()
        self.repository = repository or StudentRepository()
        self.add_delay_ms = settings.ADD_DELAY_MS if add_delay_ms is None else add_delay_ms
        self.load_delay_ms = settings.LOAD_DELAY_MS if load_delay_ms is None else load_delay_ms
        self.thread_pool = thread_pool or QThreadPool.globalInstance()
        # action name -> running Worker, at most one per action
        self._in_flight = {}
        self._refresh_pending = False

        self.setWindowTitle(settings.PROJECT_NAME)
        self.resize(800, 600)

        w = QWidget()
        layout = QVBoxLayout()
        w.setLayout(layout)
        self.setCentralWidget(w)

        self.input_panel(layout)
        self.table_panel(layout)
        self.button_panel(layout)

    def input_panel(self, layout):
        box = QGroupBox("Student Information")
        form = QFormLayout()
        box.setLayout(form)

        self.first_name_edit = QLineEdit()
        self.last_name_edit = QLineEdit()
        self.age_edit = QLineEdit()
        self.email_edit = QLineEdit()
        self.search_edit = QLineEdit()
        form.addRow("First Name:", self.first_name_edit)
        form.addRow("Last Name:", self.last_name_edit)
        form.addRow("Age:", self.age_edit)
        form.addRow("Email:", self.email_edit)
        form.addRow("Search by ID:", self.search_edit)

        layout.addWidget(box)

    def table_panel(self, layout):
        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        layout.addWidget(self.table)

        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

    def button_panel(self, layout):
        h = QHBoxLayout()
        self.add_btn = QPushButton("Add Student")
        self.view_btn = QPushButton("View All Students")
        self.search_btn = QPushButton("Search Student")
        # accept and ignore the checked flag clicked() sends
        self.add_btn.clicked.connect(lambda *_: self.add_student())
        self.view_btn.clicked.connect(lambda *_: self.view_students())
        self.search_btn.clicked.connect(lambda *_: self.search_student())
        for btn in (self.add_btn, self.view_btn, self.search_btn):
            h.addWidget(btn)
        layout.addLayout(h)

        # action name -> (trigger button, completion handler)
        self._actions = {
            "add": (self.add_btn, self.on_student_added),
            "view": (self.view_btn, self.on_students_loaded),
        }

    # --- background dispatch ---
    def is_busy(self, action):
        return action in self._in_flight

    def _dispatch(self, action, fn, args, delay_ms):
        worker = Worker(action, fn, *args, delay_ms=delay_ms)
        # a bound slot, so Qt drops the connection if the window is destroyed first
        worker.signals.finished.connect(self._on_worker_finished)
        self._in_flight[action] = worker
        self._actions[action][0].setEnabled(False)
        self.thread_pool.start(worker)

    @Slot(str, object)
    def _on_worker_finished(self, action, result):
        self._in_flight.pop(action, None)
        button, on_done = self._actions[action]
        button.setEnabled(True)
        on_done(result)

    def closeEvent(self, event):
        # results still in flight have nowhere to land once the window is gone
        for worker in self._in_flight.values():
            worker.signals.finished.disconnect(self._on_worker_finished)
        self._in_flight.clear()
        self._refresh_pending = False
        super().closeEvent(event)

    # --- add ---
    def add_student(self):
        if self.is_busy("add"):
            return
        try:
            student = parse_student_form(
                self.first_name_edit.text(),
                self.last_name_edit.text(),
                self.age_edit.text(),
                self.email_edit.text(),
            )
        except ValidationError as e:
            self.update_status(e.message)
            return
        self.update_status("Adding student...")
        self._dispatch("add", self.repository.create, (student,), self.add_delay_ms)

    def on_student_added(self, result):
        if result.ok and result.value:
            self.update_status("Student added successfully!")
            self.clear_fields()
            self.view_students()
        elif result.error is not None:
            self.update_status(f"Failed to add student! {result.error.message}")
        else:
            self.update_status("Failed to add student!")

    # --- view all ---
    def view_students(self):
        if self.is_busy("view"):
            # rerun once the current load lands so the table is not stale
            self._refresh_pending = True
            return
        self.update_status("Loading students...")
        self._dispatch("view", self.repository.list_all, (), self.load_delay_ms)

    def on_students_loaded(self, result):
        if result.ok:
            self.update_table(result.value)
            self.update_status(f"Loaded {len(result.value)} student(s)")
        else:
            self.update_status(f"Error loading students: {result.error.message}")
        if self._refresh_pending:
            self._refresh_pending = False
            self.view_students()

    # --- search ---
    def search_student(self):
        try:
            student_id = parse_student_id(self.search_edit.text())
        except ValidationError as e:
            self.update_status(e.message)
            return
        self.update_status(f"Searching for ID: {student_id}...")
        result = self.repository.find_by_id(student_id)
        if not result.ok:
            self.update_status(f"Error searching student: {result.error.message}")
        elif result.value is None:
            self.update_status(f"No student with ID: {student_id}")
        else:
            self.update_table([result.value])
            self.update_status("Student found!")

    # Helper methods
    def update_table(self, students):
        self.table.setRowCount(len(students))
        for i, s in enumerate(students):
            for col, value in enumerate(s.as_row()):
                self.table.setItem(i, col, QTableWidgetItem(str(value)))

    def table_rows(self):
        rows = []
        for i in range(self.table.rowCount()):
            rows.append(tuple(self.table.item(i, col).text() for col in range(self.table.columnCount())))
        return rows

    def update_status(self, message):
        logger.info(message)
        self.status_label.setText(message)

    def clear_fields(self):
        for edit in (self.first_name_edit, self.last_name_edit, self.age_edit,
                     self.email_edit, self.search_edit):
            edit.clear()
