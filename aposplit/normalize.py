"""
Deterministic normalization helpers for extracted text and output file names.
"""

import re
from typing import Optional

# Returned when the input is blank.
EMPTY_INPUT_TOKEN = "chaine_vide"
# Returned when the input had content but nothing survived cleaning.
EMPTY_RESULT_TOKEN = "chaine_invalide"

ACCENT_TABLE = str.maketrans({
    "à": "a", "á": "a", "â": "a", "ã": "a", "ä": "a", "å": "a",
    "è": "e", "é": "e", "ê": "e", "ë": "e",
    "ì": "i", "í": "i", "î": "i", "ï": "i",
    "ò": "o", "ó": "o", "ô": "o", "õ": "o", "ö": "o",
    "ù": "u", "ú": "u", "û": "u", "ü": "u",
    "ç": "c", "ñ": "n",
})

_UNSAFE_CHARS = re.compile(r"[^a-z0-9]")
_UNDERSCORE_RUN = re.compile(r"_+")


def remove_accents(text: str) -> str:
    """Lower-case and map accented Latin letters to their base letter."""
    return text.lower().translate(ACCENT_TABLE)


def normalize_text(text: Optional[str]) -> str:
    """
    Normalize page text for phrase matching: lower-case, accent-stripped.
    """
    if not text:
        return ""
    return remove_accents(text)


def sanitize_for_filename(value: Optional[str]) -> str:
    """
    Turn an arbitrary extracted string into a safe file-name token.

    - Blank input returns EMPTY_INPUT_TOKEN
    - Lower-case, strip accents, replace anything outside [a-z0-9] with "_"
    - Collapse "_" runs and trim leading/trailing "_"
    - If nothing is left returns EMPTY_RESULT_TOKEN

    The result is never empty and sanitizing it again returns it unchanged.
    """
    if value is None or not str(value).strip():
        return EMPTY_INPUT_TOKEN

    cleaned = _UNSAFE_CHARS.sub("_", remove_accents(str(value)))
    cleaned = _UNDERSCORE_RUN.sub("_", cleaned).strip("_")

    if not cleaned:
        return EMPTY_RESULT_TOKEN
    return cleaned
