"""
Skill functions computing the per-study-type display string of a student.
"""

import hashlib
from typing import Callable, Dict

from .enums import StudentType


MORSE_CODE: Dict[str, str] = {
    "A": ".-", "B": "-...", "C": "-.-.", "D": "-..", "E": ".",
    "F": "..-.", "G": "--.", "H": "....", "I": "..", "J": ".---",
    "K": "-.-", "L": ".-..", "M": "--", "N": "-.", "O": "---",
    "P": ".--.", "Q": "--.-", "R": ".-.", "S": "...", "T": "-",
    "U": "..-", "V": "...-", "W": ".--", "X": "-..-", "Y": "-.--",
    "Z": "--..",
    "0": "-----", "1": ".----", "2": "..---", "3": "...--", "4": "....-",
    "5": ".....", "6": "-....", "7": "--...", "8": "---..", "9": "----.",
}


def convert_to_morse_code(text: str) -> str:
    """Convert text to International Morse code.

    Letters are separated by one space and words by two. Characters other
    than A-Z, 0-9 and space are dropped.
    """
    words = []
    for word in text.upper().split(" "):
        codes = [MORSE_CODE[char] for char in word if char in MORSE_CODE]
        if codes:
            words.append(" ".join(codes))
    
    return "  ".join(words)


def generate_sha256_hash(text: str) -> str:
    """Lowercase hex SHA-256 digest of the UTF-8 encoded text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


_SKILLS: Dict[StudentType, Callable[[str], str]] = {
    StudentType.TELEKOM: convert_to_morse_code,
    StudentType.CYBERSECURITY: generate_sha256_hash,
}

_SKILL_TITLES: Dict[StudentType, str] = {
    StudentType.TELEKOM: "Morse Code",
    StudentType.CYBERSECURITY: "SHA-256 Hash",
}


def execute_skill(student_type: StudentType, first_name: str, last_name: str) -> str:
    """Run the skill of the given study type on a student's full name."""
    return _SKILLS[student_type](f"{first_name} {last_name}")


def skill_title(student_type: StudentType) -> str:
    return _SKILL_TITLES[student_type]
