"""
Deterministic document classification from the cover page.
"""

import logging
from typing import Optional

from aposplit.normalize import normalize_text
from aposplit.patterns import ATTESTATION_MARKER_PATTERN
from aposplit.schema import DocClass

logger = logging.getLogger(__name__)


def is_attestation_cover(first_page_text: Optional[str]) -> bool:
    """True when page 0 announces an attestation batch ("Edition d'attestations de réussite")."""
    return bool(ATTESTATION_MARKER_PATTERN.search(normalize_text(first_page_text)))


def classify_document(first_page_text: Optional[str]) -> DocClass:
    """
    Choose the split strategy for a document.

    Only the cover page is inspected. Anything that is not an attestation
    batch is treated as a transcript batch.

    Args:
        first_page_text: Text of page 0

    Returns:
        DocClass.ATTESTATION or DocClass.TRANSCRIPT
    """
    doc_class = DocClass.ATTESTATION if is_attestation_cover(first_page_text) else DocClass.TRANSCRIPT
    logger.debug(f"Cover page classified as {doc_class.value}")
    return doc_class
