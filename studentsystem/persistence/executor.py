"""
Persistence executor owning the single live database connection.
"""

import logging
import re
import time
from typing import Any, Callable, Iterable, Optional, Sequence

from ..core.enums import ConnectionState
from ..core.exceptions import (
    ConnectionLostError, DatabaseConnectionError, PersistenceError, UnrecoverableConnectionError
)
from ..core.interfaces import ConnectionProvider, PersistenceExecutor


logger = logging.getLogger(__name__)

# single-quoted SQL string literals, with '' as the escaped quote
_STRING_LITERAL = re.compile(r"('(?:[^']|'')*')")

MAX_RECONNECT_ATTEMPTS = 5
RECONNECT_DELAY_MS = 1000


def _to_format_style(sql: str) -> str:
    parts = _STRING_LITERAL.split(sql)
    for i, part in enumerate(parts):
        part = part.replace("%", "%%")
        # odd indexes are the captured literals
        parts[i] = part if i % 2 else part.replace("?", "%s")
    return "".join(parts)


class PreparedStatement:
    """Parameterized statement bound to one cursor and one SQL template.

    Templates use ``?`` placeholders; they are rewritten for drivers that
    expect ``%s``. Only ``?`` outside string literals is a placeholder, and
    literal ``%`` is doubled for those drivers.
    """

    def __init__(self, cursor: Any, sql: str, paramstyle: str = "qmark"):
        self._cursor = cursor
        self._sql = sql if paramstyle == "qmark" else _to_format_style(sql)

    @property
    def sql(self) -> str:
        return self._sql

    @property
    def rowcount(self) -> int:
        return self._cursor.rowcount

    def execute(self, *params: Any) -> "PreparedStatement":
        """Execute the statement with positional parameters."""
        self._cursor.execute(self._sql, params)
        return self

    def executemany(self, rows: Iterable[Sequence[Any]]) -> "PreparedStatement":
        """Execute the statement once per parameter row."""
        self._cursor.executemany(self._sql, [tuple(row) for row in rows])
        return self

    def fetchone(self) -> Any:
        return self._cursor.fetchone()

    def fetchall(self) -> list:
        return self._cursor.fetchall()


class SimplePersistenceExecutor(PersistenceExecutor):
    """Single-connection executor with bounded reconnect.

    Driver errors that mean the connection is gone trigger the reconnect
    sequence in place and are then reported as ``ConnectionLostError``; the
    failed operation is never replayed. Any other driver error is reported as
    ``PersistenceError`` and leaves the connection alone.
    """

    def __init__(self, provider: ConnectionProvider,
                 max_attempts: int = MAX_RECONNECT_ATTEMPTS,
                 retry_delay_ms: int = RECONNECT_DELAY_MS,
                 sleep: Callable[[float], None] = time.sleep):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if retry_delay_ms < 0:
            raise ValueError("retry_delay_ms must not be negative")

        self._provider = provider
        self._max_attempts = max_attempts
        self._retry_delay_ms = retry_delay_ms
        self._sleep = sleep
        self._connection: Optional[Any] = None
        self._state = ConnectionState.DISCONNECTED

    @property
    def provider(self) -> ConnectionProvider:
        return self._provider

    @property
    def dialect(self) -> str:
        return self._provider.dialect

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED and self._connection is not None

    def connect(self) -> None:
        """Open the connection, retrying with a fixed delay between failures."""
        self._discard_connection()
        self._state = ConnectionState.CONNECTING
        last_error: Optional[BaseException] = None

        for attempt in range(1, self._max_attempts + 1):
            try:
                self._connection = self._provider.open_connection()
            except DatabaseConnectionError as e:
                last_error = e
                logger.warning("Database connection failed (attempt %d/%d): %s",
                               attempt, self._max_attempts, e)
                if attempt < self._max_attempts:
                    self._sleep(self._retry_delay_ms / 1000.0)
                continue

            self._state = ConnectionState.CONNECTED
            if attempt > 1:
                logger.info("Database connection established after %d attempts", attempt)
            return

        self._state = ConnectionState.FATAL
        logger.error("Could not connect to the database after %d attempts", self._max_attempts)
        raise UnrecoverableConnectionError(
            f"Could not connect to the database after {self._max_attempts} attempts",
            attempts=self._max_attempts,
            last_error=last_error,
        )

    def perform_operation(self, action: Callable[[Any], Any]) -> Any:
        """Run ``action`` with a cursor that is always closed afterwards."""
        connection = self._require_connection()
        cursor = None
        try:
            cursor = self._provider.create_cursor(connection)
            return action(cursor)
        except self._provider.driver_errors as e:
            logger.error("Error executing statement: %s", e)
            self._handle_statement_error(e)
        finally:
            if cursor is not None:
                self._close_quietly(cursor)

    def perform_prepared_operation(self, sql: str, action: Callable[[PreparedStatement], Any]) -> Any:
        """Run ``action`` with a prepared statement for ``sql``."""
        connection = self._require_connection()
        cursor = None
        try:
            cursor = self._provider.create_cursor(connection)
            return action(PreparedStatement(cursor, sql, self._provider.paramstyle))
        except self._provider.driver_errors as e:
            logger.error("Error executing prepared statement: %s", e)
            self._handle_statement_error(e, sql)
        finally:
            if cursor is not None:
                self._close_quietly(cursor)

    def close(self) -> None:
        """Close the connection if it is open."""
        self._discard_connection()
        if self._state is not ConnectionState.FATAL:
            self._state = ConnectionState.DISCONNECTED

    def _handle_statement_error(self, error: BaseException, sql: Optional[str] = None) -> None:
        details = {"sql": sql} if sql else {}
        if not self._provider.is_connection_error(error):
            raise PersistenceError(f"Statement failed: {str(error)}", details=details) from error

        logger.warning("Connection lost, reconnecting")
        self.connect()
        raise ConnectionLostError(
            f"Operation aborted, connection was re-established: {str(error)}", details=details
        ) from error

    def _require_connection(self) -> Any:
        if not self.is_connected:
            raise PersistenceError(f"Executor is not connected (state: {self._state.value})")
        return self._connection

    def _discard_connection(self) -> None:
        if self._connection is None:
            return
        connection, self._connection = self._connection, None
        self._close_quietly(connection)

    @staticmethod
    def _close_quietly(resource: Any) -> None:
        try:
            resource.close()
        except Exception as e:
            logger.warning("Error while closing %s: %s", type(resource).__name__, e)

    def __enter__(self) -> "SimplePersistenceExecutor":
        if not self.is_connected:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
