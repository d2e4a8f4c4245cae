"""
Core module containing the student model, skills and base interfaces.
"""

from .entities import *
from .enums import *
from .exceptions import *
from .factory import *
from .interfaces import *
from .lang import *
from .skills import *

__all__ = [
    # Entities
    "Student",
    "StudentData",
    "StudentFactory",
    
    # Enums
    "StudentType",
    "ConnectionState",
    
    # Interfaces
    "ConnectionProvider",
    "PersistenceExecutor",
    
    # Skills
    "convert_to_morse_code",
    "generate_sha256_hash",
    "execute_skill",
    "skill_title",
    
    # Translations
    "LangEntry",
    "LangSource",
    
    # Exceptions
    "StudentSystemException",
    "ValidationError",
    "ResourceNotFoundError",
    "ConfigurationError",
    "FileProcessingError",
    "PersistenceError",
    "DatabaseConnectionError",
    "ConnectionLostError",
    "UnrecoverableConnectionError",
]
