"""
Core non-GUI logic for StudentDB Manager.
This module contains the student record, database helpers, the repository and
form parsing so the GUI can remain focused on interface code.
"""
import re
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from studentdb_config import settings
from studentdb_errors import DatabaseConnectionError, StorageError, ValidationError
from studentdb_logging import logger

# optional sign followed by ASCII digits only
INT_PATTERN = re.compile(r"[+-]?[0-9]+")
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1


@dataclass(frozen=True)
class Student:
    first_name: str
    last_name: str
    age: int
    email: str
    # None until the store has assigned one
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row['id'],
            first_name=row['first_name'],
            last_name=row['last_name'],
            age=row['age'],
            email=row['email'],
        )

    def as_row(self):
        return (self.id, self.first_name, self.last_name, self.age, self.email)


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a repository call: the value, or a safe default plus the error."""
    value: Any
    error: Optional[StorageError] = None

    @property
    def ok(self):
        return self.error is None


def get_conn(db_path=None):
    path = Path(db_path or settings.DB_PATH)
    try:
        conn = sqlite3.connect(str(path))
    except sqlite3.Error as e:
        raise DatabaseConnectionError(
            f"Cannot open database {path}: {e}", details={'db_path': str(path)}
        ) from e
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def open_conn(db_path=None):
    conn = get_conn(db_path)
    try:
        yield conn
    finally:
        conn.close()


def init_db(db_path=None):
    path = Path(db_path or settings.DB_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open_conn(path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS students (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                first_name TEXT NOT NULL,
                last_name TEXT NOT NULL,
                age INTEGER NOT NULL,
                email TEXT NOT NULL
            )
            """
        )
        conn.commit()
    logger.info("Database ready at %s", path)


class StudentRepository:
    """
    Create, list and look up rows of the students table.

    Every call opens and closes its own connection. Store faults are logged
    and handed back in the StoreResult together with a safe default value;
    nothing is raised to the caller.
    """

    def __init__(self, db_path=None):
        self.db_path = db_path

    def create(self, student):
        try:
            with open_conn(self.db_path) as conn:
                # commits on success, rolls back on error
                with conn:
                    cur = conn.execute(
                        "INSERT INTO students (first_name, last_name, age, email) VALUES (?,?,?,?)",
                        (student.first_name, student.last_name, student.age, student.email)
                    )
            return StoreResult(cur.rowcount == 1)
        except (StorageError, sqlite3.Error) as e:
            return StoreResult(False, self._storage_error("adding student", e))

    def list_all(self):
        try:
            with open_conn(self.db_path) as conn:
                rows = conn.execute("SELECT * FROM students ORDER BY id").fetchall()
            return StoreResult([Student.from_row(r) for r in rows])
        except (StorageError, sqlite3.Error) as e:
            return StoreResult([], self._storage_error("fetching students", e))

    def find_by_id(self, student_id):
        try:
            with open_conn(self.db_path) as conn:
                row = conn.execute(
                    "SELECT * FROM students WHERE id=?", (student_id,)
                ).fetchone()
            return StoreResult(Student.from_row(row) if row else None)
        except (StorageError, sqlite3.Error) as e:
            return StoreResult(None, self._storage_error("searching student", e))

    def _storage_error(self, action, exc):
        logger.error("Error %s: %s", action, exc)
        if isinstance(exc, StorageError):
            return exc
        return StorageError(f"Error {action}: {exc}", details={'db_path': str(self.db_path or settings.DB_PATH)})


def _parse_int(text):
    if not INT_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if value < INT_MIN or value > INT_MAX:
        return None
    return value


def parse_student_form(first_name, last_name, age, email):
    first_name = first_name.strip()
    last_name = last_name.strip()
    age = age.strip()
    email = email.strip()
    if not (first_name and last_name and age and email):
        raise ValidationError("Error: All fields required!")
    age_value = _parse_int(age)
    if age_value is None:
        raise ValidationError("Error: Age must be a number!", details={'age': age})
    return Student(first_name, last_name, age_value, email)


def parse_student_id(text):
    text = text.strip()
    if not text:
        raise ValidationError("Please enter ID to search!")
    student_id = _parse_int(text)
    if student_id is None:
        raise ValidationError("Error: ID must be a number!", details={'id': text})
    return student_id

