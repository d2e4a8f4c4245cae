"""
Core entities of the student administration system.
"""

from dataclasses import dataclass
from typing import List

from .enums import StudentType
from .skills import execute_skill


MIN_GRADE = 1
MAX_GRADE = 5


@dataclass(frozen=True)
class StudentData:
    """Raw student fields handed to the factory when rebuilding a record."""
    id: int
    first_name: str
    last_name: str
    birth_year: int


class Student:
    """University student with grades and a study-type specific skill."""
    
    def __init__(self, student_id: int, first_name: str, last_name: str, birth_year: int,
                 student_type: StudentType):
        self._id = student_id
        self._first_name = first_name
        self._last_name = last_name
        self._birth_year = birth_year
        self._student_type = student_type
        self._grades: List[int] = []
    
    @property
    def id(self) -> int:
        """Get the student ID."""
        return self._id
    
    @property
    def first_name(self) -> str:
        return self._first_name
    
    @property
    def last_name(self) -> str:
        return self._last_name
    
    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"
    
    @property
    def birth_year(self) -> int:
        return self._birth_year
    
    @property
    def student_type(self) -> StudentType:
        return self._student_type
    
    @property
    def grades(self) -> List[int]:
        """Get a copy of the grades in the order they were added."""
        return self._grades.copy()
    
    @property
    def average_grade(self) -> float:
        """Arithmetic mean of the grades, or 0.0 without grades."""
        if not self._grades:
            return 0.0
        return sum(self._grades) / len(self._grades)
    
    def add_grade(self, grade: int) -> bool:
        """Append a grade; values outside 1-5 are ignored."""
        if MIN_GRADE <= grade <= MAX_GRADE:
            self._grades.append(grade)
            return True
        return False
    
    def restore_grade(self, grade: int) -> None:
        """Append a stored grade as-is, without range validation."""
        self._grades.append(grade)
    
    def execute_skill(self) -> str:
        """Compute the skill string of this student's study type."""
        return execute_skill(self._student_type, self._first_name, self._last_name)
    
    def to_dict(self) -> dict:
        """Convert student to dictionary."""
        return {
            "id": self._id,
            "first_name": self._first_name,
            "last_name": self._last_name,
            "birth_year": self._birth_year,
            "student_type": self._student_type.value,
            "grades": self.grades,
            "average_grade": self.average_grade,
        }
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self.to_dict() == other.to_dict()
    
    def __hash__(self) -> int:
        return hash(self._id)
    
    def __str__(self) -> str:
        return (f"ID: {self._id}, {self._first_name} {self._last_name}, "
                f"birth year: {self._birth_year}, average grade: {self.average_grade:.2f}")
    
    def __repr__(self) -> str:
        return f"Student(id={self._id}, type={self._student_type.value})"
