"""
User interface module with the console front end.
"""

from .console import StudentConsole

__all__ = [
    "StudentConsole",
]
