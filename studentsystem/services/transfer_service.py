"""
Text file import and export of student records.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from ..core.entities import Student
from ..core.enums import StudentType
from ..core.exceptions import FileProcessingError
from ..persistence.repositories import StudentRepository


logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ";"
RECORD_SEPARATOR = "-----------------------------------"


class ImportedStudent(BaseModel):
    """One validated line of an import file."""
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    birth_year: int
    type_name: str = ""
    
    @property
    def student_type(self) -> StudentType:
        type_name = self.type_name.lower()
        if "telekom" in type_name or "telecom" in type_name:
            return StudentType.TELEKOM
        return StudentType.CYBERSECURITY


@dataclass
class ImportResult:
    """Outcome of a text import."""
    imported: int = 0
    skipped: int = 0


def parse_import_line(line: str) -> Optional[ImportedStudent]:
    """Parse ``firstName;lastName;birthYear;type``; None for a malformed line."""
    parts = [part.strip() for part in line.split(FIELD_SEPARATOR)]
    if len(parts) < 4:
        return None
    
    try:
        return ImportedStudent(
            first_name=parts[0],
            last_name=parts[1],
            birth_year=parts[2],
            type_name=parts[3],
        )
    except PydanticValidationError:
        return None


def import_students_from_txt(path: str, repository: StudentRepository) -> ImportResult:
    """Add every well-formed line of a text file as a new student.

    Lines are decoded as UTF-8 one at a time; an undecodable line is skipped
    and counted like any other malformed line.
    """
    result = ImportResult()
    try:
        with open(path, "rb") as f:
            for line_num, raw in enumerate(f, 1):
                try:
                    line = raw.decode("utf-8-sig").strip()
                except UnicodeDecodeError as e:
                    logger.warning("Skipping line %d of %s, not valid UTF-8: %s", line_num, path, e)
                    result.skipped += 1
                    continue
                
                if not line:
                    continue
                
                record = parse_import_line(line)
                if record is None:
                    logger.warning("Skipping invalid line %d: %s", line_num, line)
                    result.skipped += 1
                    continue
                
                repository.add_student(record.student_type, record.first_name,
                                       record.last_name, record.birth_year)
                result.imported += 1
    except OSError as e:
        raise FileProcessingError(f"Error importing from file {path}: {str(e)}")
    
    logger.info("Imported %d students from %s (%d lines skipped)", result.imported, path, result.skipped)
    return result


def format_student_record(student: Student) -> str:
    """Export block for one student, including the trailing separator."""
    lines = [
        f"ID: {student.id}",
        f"Name: {student.first_name} {student.last_name}",
        f"Birth Year: {student.birth_year}",
        f"Study Type: {student.student_type.display_name}",
        f"Grades: {format_grades(student.grades)}",
        f"Average: {student.average_grade:.2f}",
        f"Skill: {student.execute_skill()}",
        RECORD_SEPARATOR,
    ]
    return "\n".join(lines) + "\n"


def format_student_info(student: Student) -> str:
    """Multi-line summary shown when looking a student up."""
    return "\n".join([
        f"ID: {student.id}",
        f"Name: {student.first_name} {student.last_name}",
        f"Birth Year: {student.birth_year}",
        f"Type: {student.student_type.display_name}",
        f"Grades: {format_grades(student.grades)}",
        f"Average: {student.average_grade:.2f}",
    ])


def format_grades(grades: Iterable[int]) -> str:
    return "[" + ", ".join(str(g) for g in grades) + "]"


def export_students_to_txt(path: str, students: Iterable[Student]) -> int:
    """Write the export block of each student to a text file."""
    count = 0
    try:
        with open(path, "w", encoding="utf-8") as f:
            for student in students:
                f.write(format_student_record(student))
                count += 1
    except OSError as e:
        raise FileProcessingError(f"Error exporting to file {path}: {str(e)}")
    
    logger.info("Exported %d students to %s", count, path)
    return count
