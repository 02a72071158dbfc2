"""
Split student records exports (transcripts, attestations) into one PDF per student.
"""

from aposplit.classify import classify_document
from aposplit.pdf_io import PdfHandler
from aposplit.schema import BatchReport, DocClass
from aposplit.splitter import PdfSplitter, SplitError, auto_split

__all__ = [
    "BatchReport",
    "DocClass",
    "PdfHandler",
    "PdfSplitter",
    "SplitError",
    "auto_split",
    "classify_document",
]
