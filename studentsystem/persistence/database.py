"""
Connection providers for the supported database engines.
"""

import os
import sqlite3
from typing import Any, Dict, Optional
from urllib.parse import unquote, urlparse

try:
    import psycopg2
    from psycopg2.extras import RealDictCursor
    PSYCOPG2_AVAILABLE = True
except ImportError:
    PSYCOPG2_AVAILABLE = False

from ..core.exceptions import ConfigurationError, DatabaseConnectionError
from ..core.interfaces import ConnectionProvider


MEMORY_DATABASE = ":memory:"

# sqlite3 reports lost or unusable connections through these messages.
_SQLITE_CONNECTION_MESSAGES = (
    "closed database",
    "unable to open database",
    "disk i/o error",
    "database is locked",
)


class SQLiteConnectionProvider(ConnectionProvider):
    """SQLite connection provider for a database file."""

    dialect = "sqlite"
    paramstyle = "qmark"
    driver_errors = (sqlite3.Error,)

    def __init__(self, database_path: str = "students.db", timeout: float = 5.0):
        self._database_path = database_path
        self._timeout = timeout

    @property
    def database_path(self) -> str:
        return self._database_path

    def open_connection(self) -> sqlite3.Connection:
        """Open a new autocommit connection."""
        conn = None
        try:
            conn = sqlite3.connect(self._database_path, timeout=self._timeout, isolation_level=None)
            conn.row_factory = sqlite3.Row
            conn.execute("SELECT 1")
            return conn
        except sqlite3.Error as e:
            if conn:
                conn.close()
            raise DatabaseConnectionError(
                f"Database connection error: {str(e)}",
                details={"database_path": self._database_path},
            ) from e

    def create_cursor(self, connection: sqlite3.Connection) -> sqlite3.Cursor:
        return connection.cursor()

    def is_connection_error(self, error: BaseException) -> bool:
        if not isinstance(error, (sqlite3.ProgrammingError, sqlite3.OperationalError)):
            return False
        message = str(error).lower()
        return any(fragment in message for fragment in _SQLITE_CONNECTION_MESSAGES)

    def __repr__(self) -> str:
        return f"SQLiteConnectionProvider(database_path={self._database_path!r})"


class PostgreSQLConnectionProvider(ConnectionProvider):
    """PostgreSQL connection provider."""

    dialect = "postgresql"
    paramstyle = "format"

    def __init__(self, host: str = "localhost", port: int = 5432,
                 database: str = "students", user: str = "students", password: str = ""):
        if not PSYCOPG2_AVAILABLE:
            raise ConfigurationError("psycopg2 is required for PostgreSQL support")

        self._host = host
        self._port = port
        self._database = database
        self._user = user
        self._password = password
        self.driver_errors = (psycopg2.Error,)

    def _get_connection_string(self) -> str:
        """Get PostgreSQL connection string."""
        return f"host={self._host} port={self._port} dbname={self._database} user={self._user} password={self._password}"

    def open_connection(self):
        """Open a new autocommit connection."""
        conn = None
        try:
            conn = psycopg2.connect(self._get_connection_string())
            conn.autocommit = True
            return conn
        except psycopg2.Error as e:
            if conn:
                conn.close()
            raise DatabaseConnectionError(
                f"Database connection error: {str(e)}",
                details={"host": self._host, "port": self._port, "database": self._database},
            ) from e

    def create_cursor(self, connection: Any) -> Any:
        return connection.cursor(cursor_factory=RealDictCursor)

    def is_connection_error(self, error: BaseException) -> bool:
        return isinstance(error, (psycopg2.OperationalError, psycopg2.InterfaceError))

    def __repr__(self) -> str:
        return f"PostgreSQLConnectionProvider(host={self._host!r}, port={self._port}, database={self._database!r})"


class ConnectionProviderFactory:
    """Factory for creating connection providers from a connection descriptor."""

    @staticmethod
    def create_provider(database_url: str) -> ConnectionProvider:
        """Create a provider for a URL such as ``sqlite:///students.db``.

        Also accepts the legacy ``jdbc:sqlite:students.db`` form and plain
        file paths, which are treated as SQLite databases.
        """
        if not database_url or not database_url.strip():
            raise ConfigurationError("Database URL must not be empty")

        url = database_url.strip()
        if url.lower().startswith("jdbc:"):
            url = url[len("jdbc:"):]

        scheme, _, rest = url.partition(":")
        scheme = scheme.lower()

        if not rest or os.path.isabs(url) or len(scheme) == 1:
            # bare path, including Windows drive letters
            return SQLiteConnectionProvider(url)

        if scheme == "sqlite":
            return SQLiteConnectionProvider(ConnectionProviderFactory._sqlite_path(rest))
        elif scheme in ("postgresql", "postgres"):
            return PostgreSQLConnectionProvider(**ConnectionProviderFactory._postgres_params(url))
        else:
            raise ConfigurationError(f"Unsupported database type: {scheme}")

    @staticmethod
    def _sqlite_path(rest: str) -> str:
        if rest.startswith("///"):
            path = rest[3:]
        elif rest.startswith("//"):
            path = rest[2:]
        else:
            path = rest

        if not path:
            raise ConfigurationError("SQLite URL has no database path")
        return path if path == MEMORY_DATABASE else unquote(path)

    @staticmethod
    def _postgres_params(url: str) -> Dict[str, Any]:
        parsed = urlparse(url)
        params: Dict[str, Any] = {}
        if parsed.hostname:
            params["host"] = parsed.hostname
        if parsed.port:
            params["port"] = parsed.port

        database: Optional[str] = parsed.path.lstrip("/") or None
        if database:
            params["database"] = unquote(database)
        if parsed.username:
            params["user"] = unquote(parsed.username)
        if parsed.password:
            params["password"] = unquote(parsed.password)
        return params
