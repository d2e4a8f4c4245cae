"""
Factory for building students from stored data.
"""

from .entities import Student, StudentData
from .enums import StudentType


class StudentFactory:
    """Creates students of the matching study type."""
    
    def create_student(self, student_type: StudentType, data: StudentData) -> Student:
        """Create a student; anything but TELEKOM becomes a cybersecurity student."""
        if student_type is not StudentType.TELEKOM:
            student_type = StudentType.CYBERSECURITY
        
        return Student(
            student_id=data.id,
            first_name=data.first_name,
            last_name=data.last_name,
            birth_year=data.birth_year,
            student_type=student_type,
        )
