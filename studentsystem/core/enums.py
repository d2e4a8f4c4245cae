"""
Enumerations and constants for the student administration system.
"""

from enum import Enum

from .exceptions import ValidationError


class StudentType(Enum):
    """Study programmes a student can be enrolled in."""
    TELEKOM = "TELEKOM"
    CYBERSECURITY = "CYBERSECURITY"
    
    @property
    def storage_code(self) -> str:
        """Value written to the ``student_type`` column."""
        return "TELEKOM" if self is StudentType.TELEKOM else "CYBER"
    
    @property
    def display_name(self) -> str:
        return "Telecommunications" if self is StudentType.TELEKOM else "Cybersecurity"
    
    @classmethod
    def default(cls) -> "StudentType":
        """Get the type used for anything that is not recognised."""
        return cls.CYBERSECURITY
    
    @classmethod
    def from_string(cls, raw: str) -> "StudentType":
        """Resolve a type name case-insensitively, falling back to the default type."""
        if raw is None:
            raise ValidationError("Student type cannot be None")
        
        try:
            return cls[str(raw).strip().upper()]
        except KeyError:
            return cls.default()


class ConnectionState(Enum):
    """Lifecycle of the persistence executor's connection."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FATAL = "fatal"
