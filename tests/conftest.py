import sqlite3
from typing import List

import pytest

from studentsystem.core.exceptions import DatabaseConnectionError
from studentsystem.core.interfaces import ConnectionProvider
from studentsystem.persistence import SimplePersistenceExecutor, SQLiteConnectionProvider, StudentRepository


class FlakyProvider(ConnectionProvider):
    """In-memory SQLite provider that fails a configurable number of times first."""

    dialect = "sqlite"
    driver_errors = (sqlite3.Error,)

    def __init__(self, failures: int = 0):
        self.failures = failures
        self.attempts = 0
        self.connections: List[sqlite3.Connection] = []
        self._delegate = SQLiteConnectionProvider(":memory:")

    def open_connection(self):
        self.attempts += 1
        if self.attempts <= self.failures:
            raise DatabaseConnectionError(f"simulated failure {self.attempts}")
        conn = self._delegate.open_connection()
        self.connections.append(conn)
        return conn

    def create_cursor(self, connection):
        return self._delegate.create_cursor(connection)

    def is_connection_error(self, error):
        return self._delegate.is_connection_error(error)


class SleepRecorder:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "students.db")


@pytest.fixture
def executor(db_path, sleep_recorder):
    executor = SimplePersistenceExecutor(SQLiteConnectionProvider(db_path), sleep=sleep_recorder)
    executor.connect()
    yield executor
    executor.close()


@pytest.fixture
def repository(executor) -> StudentRepository:
    return StudentRepository(executor)


@pytest.fixture
def sample_repository(repository) -> StudentRepository:
    """Repository with two telecom and two cybersecurity students."""
    ada = repository.add_telecommunications_student("Ada", "Lovelace", 1815)
    repository.add_grade_to_student(ada, 1)
    repository.add_grade_to_student(ada, 2)

    grace = repository.add_cybersecurity_student("Grace", "Hopper", 1906)
    repository.add_grade_to_student(grace, 4)

    samuel = repository.add_telecommunications_student("Samuel", "Morse", 1791)
    repository.add_grade_to_student(samuel, 5)

    repository.add_cybersecurity_student("Alan", "Turing", 1912)
    return repository
