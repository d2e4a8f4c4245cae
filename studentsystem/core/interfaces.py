"""
Core interfaces and abstract base classes for the persistence layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Tuple, Type

from .exceptions import PersistenceError


class ConnectionProvider(ABC):
    """Opens physical connections to the backing store."""
    
    dialect: str = ""
    paramstyle: str = "qmark"
    driver_errors: Tuple[Type[BaseException], ...] = ()
    
    @abstractmethod
    def open_connection(self) -> Any:
        """Open a new connection or raise DatabaseConnectionError."""
        pass
    
    @abstractmethod
    def create_cursor(self, connection: Any) -> Any:
        """Create a cursor whose rows allow access by column name."""
        pass
    
    @abstractmethod
    def is_connection_error(self, error: BaseException) -> bool:
        """Check if a driver error means the connection itself is gone."""
        pass


class PersistenceExecutor(ABC):
    """Runs statements against the backing store."""
    
    @property
    def dialect(self) -> str:
        """SQL dialect of the backing store."""
        return "sqlite"
    
    @abstractmethod
    def perform_operation(self, action: Callable[[Any], Any]) -> Any:
        """Run an action with a statement scope (cursor)."""
        pass
    
    @abstractmethod
    def perform_prepared_operation(self, sql: str, action: Callable[[Any], Any]) -> Any:
        """Run an action with a parameterized statement for ``sql``."""
        pass
    
    def perform_simple_operations_chain(self, *statements: str) -> None:
        """Execute statements in order on one cursor, stopping at the first failure."""
        def run_chain(cursor: Any) -> None:
            for sql in statements:
                try:
                    cursor.execute(sql)
                except Exception as e:
                    raise PersistenceError(f"Statement failed: {str(e)}", details={"sql": sql}) from e
        
        self.perform_operation(run_chain)
