"""
Student Administration System

A single-user application for managing university student records
(personal data, grades and per-major skills) backed by a local SQL store,
with text-file import and export.
"""

__version__ = "1.0.0"
__author__ = "Student Administration Team"
__description__ = "Student records management with SQL persistence"
