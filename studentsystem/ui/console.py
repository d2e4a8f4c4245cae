"""
Console front end for the student administration system.
"""

from typing import Callable, Dict, Optional, Tuple

from ..core.enums import StudentType
from ..core.exceptions import StudentSystemException, UnrecoverableConnectionError
from ..core.lang import LangEntry, LangSource
from ..core.skills import skill_title
from ..persistence.repositories import StudentRepository
from ..services.transfer_service import (
    export_students_to_txt, format_student_info, import_students_from_txt
)


TABLE_HEADER = f"{'ID':<4} | {'First Name':<15} | {'Last Name':<15} | {'Birth Year':<10} | {'Type':<18} | {'Average':<7}"


def _clean_path(raw: str) -> str:
    return raw.strip().strip('"').strip("'")


class StudentConsole:
    """Menu-driven console mirroring the actions of the desktop form."""

    def __init__(self, repository: StudentRepository, lang: Optional[LangSource] = None):
        self._repository = repository
        self._lang = lang
        self._actions: Dict[str, Tuple[str, Callable[[], None]]] = {
            "1": ("Add student", self.add_student),
            "2": ("Add grade", self.add_grade),
            "3": ("Delete student", self.delete_student),
            "4": ("Show all students", self.show_students),
            "5": ("Show skill", self.show_skill),
            "6": ("Find student", self.find_student),
            "7": ("Sort by last name", self.sort_by_last_name),
            "8": ("Averages by type", self.show_averages),
            "9": ("Student counts", self.show_counts),
            "10": ("Save to database", self.save_database),
            "11": ("Load from database", self.reload_from_database),
            "12": ("Import from TXT", self.import_from_txt),
            "13": ("Export student to TXT", self.export_to_txt),
        }

    def _text(self, entry: LangEntry) -> str:
        return self._lang.get_translation(entry) if self._lang else entry.default_value

    def print_menu(self) -> None:
        print("\n" + "=" * 36)
        print(f"  {self._text(LangEntry.MENU_HEADER)}")
        print("=" * 36)
        for key, (label, _) in self._actions.items():
            print(f"{key:>2}. {label}")
        print(" 0. Exit")
        print("=" * 36)

    def run(self) -> None:
        """Main menu loop; returns when the user exits."""
        print(self._text(LangEntry.GUI_TITLE))
        print(self._text(LangEntry.APP_STARTED))

        while True:
            self.print_menu()
            choice = input("Choose an option: ").strip()

            if choice == "0":
                if self.confirm_exit():
                    print(self._text(LangEntry.GOODBYE))
                    return
                continue

            action = self._actions.get(choice)
            if action is None:
                print("Invalid choice.")
                continue

            try:
                action[1]()
            except UnrecoverableConnectionError:
                raise
            except StudentSystemException as e:
                print(f"Error: {e.message}")

    def confirm_exit(self) -> bool:
        if not self._repository.has_unsaved_changes:
            return True
        answer = input(self._text(LangEntry.UNSAVED_CHANGES)).strip().lower()
        return answer in ("y", "yes")

    def _read_int(self, prompt: str, error: str) -> Optional[int]:
        raw = input(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            print(error)
            return None

    def add_student(self) -> None:
        first_name = input("First name: ").strip()
        last_name = input("Last name: ").strip()
        birth_year = self._read_int("Birth year: ", "Birth year must be a number!")
        if birth_year is None:
            return
        type_choice = input("Study type (1 = Telecommunications, 2 = Cybersecurity): ").strip()

        if not first_name or not last_name:
            print("First name and last name cannot be empty!")
            return

        student_type = StudentType.TELEKOM if type_choice == "1" else StudentType.CYBERSECURITY
        student_id = self._repository.add_student(student_type, first_name, last_name, birth_year)
        print(f"Student added with ID: {student_id}")

    def add_grade(self) -> None:
        student_id = self._read_int("Student ID: ", "ID must be a number!")
        if student_id is None:
            return
        grade = self._read_int("Enter grade (1-5): ", "Grade must be a number!")
        if grade is None:
            return
        if grade < 1 or grade > 5:
            print("Grade must be between 1-5!")
            return

        if self._repository.add_grade_to_student(student_id, grade):
            print("Grade added")
        else:
            print(f"Student with ID {student_id} not found!")

    def delete_student(self) -> None:
        student_id = self._read_int("Student ID: ", "ID must be a number!")
        if student_id is None:
            return
        student = self._repository.find_student_by_id(student_id)
        if student is None:
            print(f"Student with ID {student_id} not found!")
            return

        answer = input(f"Do you really want to delete student {student.full_name}? (y/n): ")
        if answer.strip().lower() in ("y", "yes") and self._repository.remove_student(student_id):
            print("Student deleted")

    def show_students(self, students=None) -> None:
        students = self._repository.get_all_students() if students is None else students
        if not students:
            print("No students.")
            return

        print(TABLE_HEADER)
        for s in students:
            print(f"{s.id:<4} | {s.first_name:<15} | {s.last_name:<15} | {s.birth_year:<10} | "
                  f"{s.student_type.display_name:<18} | {s.average_grade:<7.2f}")

    def show_skill(self) -> None:
        student_id = self._read_int("Student ID: ", "ID must be a number!")
        if student_id is None:
            return
        student = self._repository.find_student_by_id(student_id)
        if student is None:
            print(f"Student with ID {student_id} not found!")
            return

        print(f"--- {skill_title(student.student_type)} ---")
        print(student.execute_skill())

    def find_student(self) -> None:
        student_id = self._read_int("Enter student ID: ", "ID must be a number!")
        if student_id is None:
            return
        student = self._repository.find_student_by_id(student_id)
        if student is None:
            print(f"Student with ID {student_id} not found!")
            return
        print(format_student_info(student))

    def sort_by_last_name(self) -> None:
        self.show_students(self._repository.get_sorted_students_by_last_name())

    def show_averages(self) -> None:
        print("Average grades by type:")
        for student_type in StudentType:
            average = self._repository.get_average_grade_by_type(student_type)
            print(f"{student_type.display_name}: {average:.2f}")

    def show_counts(self) -> None:
        print("Student counts:")
        for label, count in self._repository.get_student_counts().items():
            print(f"{label}: {count}")

    def save_database(self) -> None:
        self._repository.save_to_database()
        print(self._text(LangEntry.DATA_SAVED))

    def reload_from_database(self) -> None:
        self._repository.load_from_database()
        print(self._text(LangEntry.DATA_LOADED))

    def import_from_txt(self) -> None:
        path = _clean_path(input("Path of the file to import: "))
        result = import_students_from_txt(path, self._repository)
        print(f"Imported {result.imported} students")
        if result.skipped:
            print(f"Skipped {result.skipped} invalid lines")

    def export_to_txt(self) -> None:
        student_id = self._read_int("Student ID: ", "ID must be a number!")
        if student_id is None:
            return
        student = self._repository.find_student_by_id(student_id)
        if student is None:
            print(f"Student with ID {student_id} not found!")
            return

        path = _clean_path(input("Path of the export file: "))
        export_students_to_txt(path, [student])
        print("Student exported to file")
