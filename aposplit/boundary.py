"""
Student identity detection on a single transcript page.
"""

import re
from typing import Optional

from aposplit.patterns import STUDENT_NUMBER_PATTERN, contains_name_marker
from aposplit.schema import StudentInfo

_LINE_BREAKS = re.compile(r"[\r\n]+")


def split_lines(page_text: Optional[str]) -> list[str]:
    """Split page text into lines, dropping empty ones."""
    if not page_text:
        return []
    return [line for line in _LINE_BREAKS.split(page_text) if line]


def extract_student_info(page_text: Optional[str]) -> StudentInfo:
    """
    Find the student name and number printed on a transcript page.

    The name is the line following the "Page : /" header marker; the number
    comes from the "N° Etudiant" line. Either may be missing.
    """
    lines = split_lines(page_text)
    name = None
    student_number = None

    for i, line in enumerate(lines):
        stripped = line.strip()

        if name is None and contains_name_marker(stripped):
            following = lines[i + 1].strip() if i + 1 < len(lines) else ""
            name = following or None

        if student_number is None:
            match = STUDENT_NUMBER_PATTERN.search(stripped)
            if match:
                student_number = match.group(1)

        if name is not None and student_number is not None:
            break

    return StudentInfo(name=name, student_number=student_number)
