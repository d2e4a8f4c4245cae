"""
Persistence module for database connections and the student repository.
"""

from .database import (
    SQLiteConnectionProvider, PostgreSQLConnectionProvider, ConnectionProviderFactory
)
from .executor import SimplePersistenceExecutor, PreparedStatement
from .repositories import StudentRepository

__all__ = [
    "SQLiteConnectionProvider",
    "PostgreSQLConnectionProvider",
    "ConnectionProviderFactory",
    "SimplePersistenceExecutor",
    "PreparedStatement",
    "StudentRepository",
]
