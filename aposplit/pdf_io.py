"""
PDF collaborators: page text source and output document authoring.

The splitter only talks to the two protocols below, so tests can pass their
own fakes. PdfHandler implements both with PyMuPDF.
"""

import logging
from typing import Any, Optional, Protocol

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)


class TextSource(Protocol):
    """Read access to the pages of a source PDF."""

    def page_count(self, pdf_path: str) -> int:
        ...

    def page_text(self, pdf_path: str, page_index: int) -> str:
        ...


class DocumentAuthor(Protocol):
    """Builds output PDFs from pages of a source PDF."""

    def new_document(self) -> Any:
        ...

    def append_page(self, document: Any, source_path: str, page_index: int) -> None:
        ...

    def persist(self, document: Any, dest_path: str) -> None:
        ...

    def release(self, document: Any) -> None:
        ...


class PdfParseCache:
    """
    Keeps the last opened source document, keyed by path.

    Asking for another path closes the cached document and opens the new one.
    """

    def __init__(self):
        self._path: Optional[str] = None
        self._doc: Optional[fitz.Document] = None

    @property
    def cached_path(self) -> Optional[str]:
        return self._path

    def get(self, pdf_path: str) -> fitz.Document:
        if self._doc is None or self._path != pdf_path:
            self.invalidate()
            logger.debug(f"Parsing {pdf_path}")
            self._doc = fitz.open(pdf_path)
            self._path = pdf_path
        return self._doc

    def invalidate(self) -> None:
        if self._doc is not None:
            self._doc.close()
        self._doc = None
        self._path = None


class PdfHandler:
    """
    PyMuPDF implementation of TextSource and DocumentAuthor.
    """

    def __init__(self, cache: Optional[PdfParseCache] = None):
        self.cache = cache or PdfParseCache()

    # -- TextSource --

    def page_count(self, pdf_path: str) -> int:
        return self.cache.get(pdf_path).page_count

    def page_text(self, pdf_path: str, page_index: int) -> str:
        doc = self.cache.get(pdf_path)
        if page_index < 0 or page_index >= doc.page_count:
            return ""
        return doc.load_page(page_index).get_text("text") or ""

    # -- DocumentAuthor --

    def new_document(self) -> fitz.Document:
        return fitz.open()

    def append_page(self, document: fitz.Document, source_path: str, page_index: int) -> None:
        """Copy one source page verbatim (no re-rendering) to the end of document."""
        if not isinstance(document, fitz.Document):
            raise TypeError(f"Expected a PyMuPDF document, got {type(document).__name__}")
        source = self.cache.get(source_path)
        document.insert_pdf(source, from_page=page_index, to_page=page_index)

    def persist(self, document: fitz.Document, dest_path: str) -> None:
        document.save(dest_path)

    def release(self, document: fitz.Document) -> None:
        """Close the output document and drop the parsed source."""
        try:
            document.close()
        finally:
            self.cache.invalidate()

    def invalidate(self) -> None:
        """Forget the parsed source so the next read reopens it from disk."""
        self.cache.invalidate()

    def close(self) -> None:
        self.cache.invalidate()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
