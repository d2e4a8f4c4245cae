"""
Custom exceptions for the student administration system.
"""

from typing import Optional, Any, Dict


class StudentSystemException(Exception):
    """Base exception for all student system errors."""
    
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(StudentSystemException):
    """Raised when data validation fails."""
    pass


class ResourceNotFoundError(StudentSystemException):
    """Raised when a requested resource is not found."""
    pass


class ConfigurationError(StudentSystemException):
    """Raised when configuration is invalid."""
    pass


class FileProcessingError(StudentSystemException):
    """Raised when reading or writing an import/export file fails."""
    pass


class PersistenceError(StudentSystemException):
    """Raised when persistence operations fail."""
    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when a physical database connection cannot be opened."""
    pass


class ConnectionLostError(PersistenceError):
    """Raised when an operation failed because the connection dropped.

    The connection has been re-established by the time this is raised, but the
    failed operation itself was not retried.
    """
    pass


class UnrecoverableConnectionError(PersistenceError):
    """Raised when every reconnect attempt has been exhausted."""
    
    def __init__(self, message: str, attempts: int, last_error: Optional[BaseException] = None):
        super().__init__(message, error_code="DB_UNAVAILABLE", details={"attempts": attempts})
        self.attempts = attempts
        self.last_error = last_error
