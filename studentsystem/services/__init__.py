"""
Services module for text import and export.
"""

from .transfer_service import (
    RECORD_SEPARATOR, ImportedStudent, ImportResult, parse_import_line, import_students_from_txt,
    export_students_to_txt, format_student_record, format_student_info
)

__all__ = [
    "RECORD_SEPARATOR",
    "ImportedStudent",
    "ImportResult",
    "parse_import_line",
    "import_students_from_txt",
    "export_students_to_txt",
    "format_student_record",
    "format_student_info",
]
