"""
Metadata extraction for attestation pages (one certificate per page).
"""

from typing import Optional

from aposplit.patterns import (
    ATTESTATION_FORMATION_PATTERN,
    ATTESTATION_INE_PATTERN,
    ATTESTATION_NAME_PATTERN,
    extract_field,
)
from aposplit.schema import AttestationRecord


def extract_attestation(page_text: Optional[str], page_index: int) -> AttestationRecord:
    """
    Extract formation, student name and INE from an attestation page.

    Each field is searched independently over the whole page. Missing fields
    are reported as "nan" so a file name can always be built.
    """
    return AttestationRecord(
        formation=extract_field(ATTESTATION_FORMATION_PATTERN, page_text),
        name=extract_field(ATTESTATION_NAME_PATTERN, page_text),
        ine=extract_field(ATTESTATION_INE_PATTERN, page_text),
        page_index=page_index,
    )
