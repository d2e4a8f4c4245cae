"""
Student repository: the in-memory record set and its database mirror.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.entities import Student, StudentData
from ..core.enums import StudentType
from ..core.factory import StudentFactory
from ..core.interfaces import PersistenceExecutor
from .executor import PreparedStatement


logger = logging.getLogger(__name__)

SELECT_ALL_STUDENTS = "SELECT id, first_name, last_name, birth_year, student_type FROM students ORDER BY id"
SELECT_GRADES_BY_STUDENT = "SELECT grade FROM grades WHERE student_id = ? ORDER BY id"
INSERT_STUDENT = "INSERT INTO students (id, first_name, last_name, birth_year, student_type) VALUES (?, ?, ?, ?, ?)"
INSERT_GRADE = "INSERT INTO grades (student_id, grade) VALUES (?, ?)"
DELETE_GRADES = "DELETE FROM grades"
DELETE_STUDENTS = "DELETE FROM students"

CREATE_STUDENTS_TABLE = """
    CREATE TABLE IF NOT EXISTS students (
        id INTEGER PRIMARY KEY,
        first_name TEXT,
        last_name TEXT,
        birth_year INTEGER,
        student_type TEXT
    )
"""

SCHEMA: Dict[str, List[str]] = {
    "sqlite": [
        CREATE_STUDENTS_TABLE,
        """
        CREATE TABLE IF NOT EXISTS grades (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            student_id INTEGER,
            grade INTEGER,
            FOREIGN KEY (student_id) REFERENCES students(id)
        )
        """,
    ],
    "postgresql": [
        CREATE_STUDENTS_TABLE,
        """
        CREATE TABLE IF NOT EXISTS grades (
            id SERIAL PRIMARY KEY,
            student_id INTEGER,
            grade INTEGER,
            FOREIGN KEY (student_id) REFERENCES students(id)
        )
        """,
    ],
}


class StudentRepository:
    """Owns every student record and mirrors them to the database on request.

    Ids are handed out by a counter that starts at 1 and is moved past the
    highest id seen when loading. Saving overwrites both tables completely and
    loading replaces the in-memory records completely.
    """

    def __init__(self, executor: PersistenceExecutor, factory: Optional[StudentFactory] = None):
        self._executor = executor
        self._factory = factory or StudentFactory()
        self._students: Dict[int, Student] = {}
        self._next_id = 1
        self._unsaved_changes = False

    @property
    def next_id(self) -> int:
        """Get the id the next added student will receive."""
        return self._next_id

    @property
    def has_unsaved_changes(self) -> bool:
        return self._unsaved_changes

    def __len__(self) -> int:
        return len(self._students)

    # In-memory operations

    def add_student(self, student_type: StudentType, first_name: str, last_name: str, birth_year: int) -> int:
        """Add a new student of the given type and return its id."""
        student_id = self._next_id
        self._next_id += 1
        data = StudentData(student_id, first_name, last_name, birth_year)
        self._students[student_id] = self._factory.create_student(student_type, data)
        self._unsaved_changes = True
        return student_id

    def add_telecommunications_student(self, first_name: str, last_name: str, birth_year: int) -> int:
        return self.add_student(StudentType.TELEKOM, first_name, last_name, birth_year)

    def add_cybersecurity_student(self, first_name: str, last_name: str, birth_year: int) -> int:
        return self.add_student(StudentType.CYBERSECURITY, first_name, last_name, birth_year)

    def find_student_by_id(self, student_id: int) -> Optional[Student]:
        return self._students.get(student_id)

    def add_grade_to_student(self, student_id: int, grade: int) -> bool:
        """Add a grade to a student.

        Returns False when the student does not exist. A grade outside 1-5 is
        not stored, but the call still returns True for an existing student.
        """
        student = self._students.get(student_id)
        if student is None:
            return False

        if student.add_grade(grade):
            self._unsaved_changes = True
        return True

    def remove_student(self, student_id: int) -> bool:
        """Remove a student; returns False if not found."""
        if self._students.pop(student_id, None) is None:
            return False
        self._unsaved_changes = True
        return True

    def get_all_students(self) -> List[Student]:
        return list(self._students.values())

    def get_students_by_type(self, student_type: StudentType) -> List[Student]:
        return [s for s in self._students.values() if s.student_type is student_type]

    def get_sorted_students_by_last_name(self) -> List[Student]:
        return sorted(self._students.values(), key=lambda s: s.last_name)

    def get_average_grade_by_type(self, student_type: StudentType) -> float:
        """Mean of the per-student averages of one type.

        Students without grades are left out; 0.0 when nobody has a grade.
        """
        averages = [s.average_grade for s in self.get_students_by_type(student_type) if s.grades]
        if not averages:
            return 0.0
        return sum(averages) / len(averages)

    def get_student_counts(self) -> Dict[str, int]:
        """Count students per study type plus the total."""
        counts = {t.display_name: len(self.get_students_by_type(t)) for t in StudentType}
        counts["Total"] = len(self._students)
        return counts

    # Database synchronisation

    def save_to_database(self) -> None:
        """Replace the stored tables with the in-memory records."""
        self._create_tables_if_not_exist()
        self._clear_database()

        for student in self._students.values():
            self._save_student(student)

        self._unsaved_changes = False
        logger.info("Saved %d students to the database", len(self._students))

    def load_from_database(self) -> None:
        """Replace the in-memory records with the stored ones.

        Nothing in memory changes unless every query succeeds.
        """
        self._create_tables_if_not_exist()

        students: Dict[int, Student] = self._executor.perform_operation(self._load_students)
        for student in students.values():
            self._executor.perform_prepared_operation(
                SELECT_GRADES_BY_STUDENT,
                lambda statement, student=student: self._populate_grades(student, statement),
            )

        self._students = students
        self._next_id = max(students, default=0) + 1
        self._unsaved_changes = False
        logger.info("Loaded %d students from the database", len(self._students))

    def _create_tables_if_not_exist(self) -> None:
        statements = SCHEMA.get(self._executor.dialect, SCHEMA["sqlite"])
        self._executor.perform_simple_operations_chain(*statements)

    def _clear_database(self) -> None:
        self._executor.perform_simple_operations_chain(DELETE_GRADES, DELETE_STUDENTS)

    def _save_student(self, student: Student) -> None:
        self._executor.perform_prepared_operation(
            INSERT_STUDENT,
            lambda statement: statement.execute(
                student.id,
                student.first_name,
                student.last_name,
                student.birth_year,
                student.student_type.storage_code,
            ),
        )
        self._executor.perform_prepared_operation(
            INSERT_GRADE,
            lambda statement: statement.executemany((student.id, grade) for grade in student.grades),
        )

    def _load_students(self, cursor: Any) -> Dict[int, Student]:
        students: Dict[int, Student] = {}
        cursor.execute(SELECT_ALL_STUDENTS)
        for row in cursor.fetchall():
            data = StudentData(
                id=int(row["id"]),
                first_name=row["first_name"],
                last_name=row["last_name"],
                birth_year=int(row["birth_year"]),
            )
            student_type = StudentType.from_string(row["student_type"] or "")
            students[data.id] = self._factory.create_student(student_type, data)
        return students

    @staticmethod
    def _populate_grades(student: Student, statement: PreparedStatement) -> None:
        statement.execute(student.id)
        for row in statement.fetchall():
            student.restore_grade(int(row["grade"]))
