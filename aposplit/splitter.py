"""
Split orchestration: classify a source PDF, decide page groups, and write one
output PDF per student (transcripts) or per page (attestations).
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from aposplit.attestation import extract_attestation
from aposplit.classify import classify_document
from aposplit.grouping import group_student_pages
from aposplit.normalize import sanitize_for_filename
from aposplit.pdf_io import DocumentAuthor, PdfHandler, TextSource
from aposplit.schema import BatchReport, DocClass, PageText, SaveOutcome

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "NomNonTrouve"
UNKNOWN_NUMBER = "NumNonTrouve"
TRANSCRIPT_DIR_SUFFIX = "_per_student"
ATTESTATION_DIR_SUFFIX = "_attestations"


class SplitError(Exception):
    """Raised before any output is produced when a split cannot start."""


class SourceNotFoundError(SplitError):
    pass


class OutputRootError(SplitError):
    pass


def validate_paths(source_path: str, output_root: str) -> None:
    if not source_path or not os.path.exists(source_path):
        raise SourceNotFoundError(f"Source PDF does not exist: {source_path}")
    if not output_root:
        raise OutputRootError("Output root directory must not be empty")


@contextmanager
def scoped_document(author: DocumentAuthor) -> Iterator[object]:
    """Yield a new output document and release it on every exit path."""
    document = author.new_document()
    try:
        yield document
    finally:
        author.release(document)


def transcript_filename(base_name: str, name: Optional[str], student_number: Optional[str]) -> str:
    safe_name = sanitize_for_filename(name if name is not None else UNKNOWN_NAME)
    safe_number = sanitize_for_filename(student_number if student_number is not None else UNKNOWN_NUMBER)
    return f"{base_name}_{safe_name}_{safe_number}.pdf"


class PdfSplitter:
    """
    Splits student records exports into one PDF per record.

    Args:
        text_source: Page text provider (defaults to a PyMuPDF handler)
        author: Output document builder (defaults to the same handler)
    """

    def __init__(self, text_source: Optional[TextSource] = None, author: Optional[DocumentAuthor] = None):
        default = PdfHandler() if text_source is None or author is None else None
        self.text_source = text_source if text_source is not None else default
        self.author = author if author is not None else default

    def close(self) -> None:
        """Close collaborators that hold resources (the default handler's parse cache)."""
        for collaborator in {id(self.text_source): self.text_source, id(self.author): self.author}.values():
            close = getattr(collaborator, "close", None)
            if callable(close):
                close()

    def split(self, source_path: str, output_root: str) -> BatchReport:
        """
        Classify the document from its cover page and split it accordingly.

        Raises:
            SplitError: source missing or output root empty
        """
        validate_paths(source_path, output_root)
        self._forget_source()

        first_page_text = self.text_source.page_text(source_path, 0)
        doc_class = classify_document(first_page_text)
        logger.info(f"📄 {Path(source_path).name}: {doc_class.value} batch")

        if doc_class == DocClass.ATTESTATION:
            return self._split_attestations(source_path, output_root)
        return self._split_transcripts(source_path, output_root)

    def split_transcripts(self, source_path: str, output_root: str) -> BatchReport:
        """Write one PDF per student, grouping consecutive pages by student number."""
        validate_paths(source_path, output_root)
        self._forget_source()
        return self._split_transcripts(source_path, output_root)

    def split_attestations(self, source_path: str, output_root: str) -> BatchReport:
        """Write one PDF per attestation page, named from the page's own metadata."""
        validate_paths(source_path, output_root)
        self._forget_source()
        return self._split_attestations(source_path, output_root)

    def _forget_source(self) -> None:
        """Drop any source parsed by an earlier call; the file may have changed since."""
        invalidate = getattr(self.text_source, "invalidate", None)
        if callable(invalidate):
            invalidate()

    def _split_transcripts(self, source_path: str, output_root: str) -> BatchReport:
        base_name = sanitize_for_filename(Path(source_path).stem)
        output_dir = Path(output_root) / f"{base_name}{TRANSCRIPT_DIR_SUFFIX}"
        output_dir.mkdir(parents=True, exist_ok=True)

        report = BatchReport(
            source_path=str(source_path),
            doc_class=DocClass.TRANSCRIPT,
            output_dir=str(output_dir),
        )
        report.groups = group_student_pages(self._content_pages(source_path))

        written = set()
        for group in report.groups:
            filename = transcript_filename(base_name, group.info.name, group.info.student_number)
            self._save(source_path, group.page_indices, output_dir / filename, report, written)

        logger.info(
            f"Done: {report.saved_count} file(s) created in {output_dir}"
            + (f", {report.failure_count} failed" if report.failure_count else "")
        )
        return report

    def _split_attestations(self, source_path: str, output_root: str) -> BatchReport:
        output_dir = Path(output_root) / f"{Path(source_path).stem}{ATTESTATION_DIR_SUFFIX}"
        output_dir.mkdir(parents=True, exist_ok=True)

        report = BatchReport(
            source_path=str(source_path),
            doc_class=DocClass.ATTESTATION,
            output_dir=str(output_dir),
        )

        written = set()
        for page in self._content_pages(source_path):
            record = extract_attestation(page.text, page.index)
            report.attestations.append(record)
            self._save(source_path, [page.index], output_dir / record.filename, report, written)

        if report.attestations:
            logger.info(f"Done: {report.saved_count} attestation(s) saved in {output_dir}")
        else:
            logger.warning(f"No attestation page found in {source_path}")
        return report

    def _content_pages(self, source_path: str) -> List[PageText]:
        """All pages except the cover page, in order."""
        page_count = self.text_source.page_count(source_path)
        return [
            PageText(index=i, text=self.text_source.page_text(source_path, i))
            for i in range(1, page_count)
        ]

    def _save(
        self,
        source_path: str,
        page_indices: Sequence[int],
        destination: Path,
        report: BatchReport,
        written: set,
    ) -> None:
        """
        Assemble and persist one output document, recording the outcome.
        A failure is logged and recorded; it never stops the batch.
        """
        dest = str(destination)
        overwrites = dest in written
        if overwrites:
            logger.warning(f"Overwriting {destination.name}, written earlier in this run")
        written.add(dest)

        try:
            with scoped_document(self.author) as document:
                for index in page_indices:
                    self.author.append_page(document, source_path, index)
                self.author.persist(document, dest)
        except Exception as exc:
            logger.error(f"❌ Failed to save {dest}: {exc}")
            report.outcomes.append(
                SaveOutcome(destination=dest, page_indices=list(page_indices), saved=False, error=str(exc))
            )
            return

        pages = ", ".join(str(i + 1) for i in page_indices)
        logger.info(f"✓ Saved {destination.name} (page(s) {pages})")
        report.outcomes.append(
            SaveOutcome(destination=dest, page_indices=list(page_indices), saved=True, overwrote_previous=overwrites)
        )


def auto_split(source_path: str, output_root: str, handler: Optional[PdfHandler] = None) -> BatchReport:
    """
    Split a source PDF with a PyMuPDF handler, choosing the mode from its cover page.
    """
    own_handler = handler is None
    handler = handler or PdfHandler()
    try:
        return PdfSplitter(text_source=handler, author=handler).split(source_path, output_root)
    finally:
        if own_handler:
            handler.close()
