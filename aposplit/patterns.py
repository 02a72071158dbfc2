"""
Fixed text patterns used by the student records export templates.

These must keep matching the existing templates exactly; change them only
together with a new template version.
"""

import re
from typing import Optional, Pattern

from aposplit.normalize import sanitize_for_filename

# Placeholder used in attestation file names when a field is not found.
NOT_FOUND = "nan"

# Transcripts: "N° Etudiant : 12345678", separator optional.
STUDENT_NUMBER_PATTERN = re.compile(r"N°\s*Etudiant\s*[:\-]?\s*(\d+)", re.IGNORECASE)

# Transcripts: the student name sits on the line right after this marker.
NAME_LINE_MARKER = "Page : /"

# Cover page of an attestation batch, matched against normalized text.
ATTESTATION_MARKER_PATTERN = re.compile(
    r"edition\s*d['’]\s*attestations\s*de\s*r[ée]ussite", re.IGNORECASE
)

ATTESTATION_FORMATION_PATTERN = re.compile(r"\bsp[ée]cialit[ée]\s+(.+?)\s*\n", re.IGNORECASE)

ATTESTATION_NAME_PATTERN = re.compile(
    r"cr[ée]dits\s+europ[ée]ens\s*\n"
    r"\s*(?:Monsieur|Madame|Mademoiselle)?\s*"
    r"([A-ZÀ-ÿ\s'-]+)\s*\n"
    r"\s*a\s+[ée]t[ée]\s+d[ée]cern",
    re.IGNORECASE,
)

ATTESTATION_INE_PATTERN = re.compile(r"(\d+)\s*N°\s*[ée]tudiant\s*:", re.IGNORECASE)


def contains_name_marker(line: str) -> bool:
    return NAME_LINE_MARKER.lower() in line.lower()


def search_group(pattern: Pattern[str], text: Optional[str]) -> Optional[str]:
    """
    Return the stripped first capture group of pattern in text, or None.
    """
    if not text:
        return None
    match = pattern.search(text)
    if not match:
        return None
    return match.group(1).strip()


def extract_field(pattern: Pattern[str], text: Optional[str], default: str = NOT_FOUND) -> str:
    """
    Extract a file-name-ready field from a whole page.
    Returns the sanitized capture, or default when the pattern does not match.
    """
    value = search_group(pattern, text)
    if value is None:
        return default
    return sanitize_for_filename(value)
