"""
Batch processing: split every PDF found in an input directory.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from aposplit.schema import BatchReport, FileFailure
from aposplit.splitter import PdfSplitter, SourceNotFoundError, SplitError

logger = logging.getLogger(__name__)

SPLIT_MODES = ("auto", "transcript", "attestation")


def check_mode(mode: str) -> None:
    if mode not in SPLIT_MODES:
        raise ValueError(f"Unknown split mode {mode!r}, expected one of: {', '.join(SPLIT_MODES)}")


def list_pdfs(input_dir: str, pattern: str = "*.pdf") -> List[Path]:
    path = Path(input_dir)
    if not path.is_dir():
        raise SourceNotFoundError(f"Input directory does not exist: {input_dir}")
    return sorted(p for p in path.glob(pattern) if p.is_file())


def split_files(
    pdf_paths: List[Path],
    output_root: str,
    splitter: Optional[PdfSplitter] = None,
    mode: str = "auto",
) -> tuple[List[BatchReport], List[FileFailure]]:
    """
    Split each file in order. A file that cannot be split is logged and
    recorded; the remaining files are still processed.

    Args:
        pdf_paths: Source PDFs
        output_root: Root directory for all outputs
        splitter: Splitter to use (PyMuPDF-backed by default)
        mode: "auto", "transcript" or "attestation"

    Returns:
        (reports for split files, failures for files that could not be split)

    Raises:
        ValueError: unknown mode
    """
    check_mode(mode)

    own_splitter = splitter is None
    splitter = splitter or PdfSplitter()
    split_fn = {
        "auto": splitter.split,
        "transcript": splitter.split_transcripts,
        "attestation": splitter.split_attestations,
    }[mode]

    reports: List[BatchReport] = []
    failures: List[FileFailure] = []
    try:
        for pdf_path in pdf_paths:
            logger.info(f"=== Processing {pdf_path.name} ===")
            try:
                reports.append(split_fn(str(pdf_path), output_root))
            except SplitError as exc:
                logger.error(f"❌ {exc}")
                failures.append(FileFailure(source_path=str(pdf_path), error=str(exc)))
            except Exception as exc:
                logger.exception(f"❌ Could not split {pdf_path.name}")
                failures.append(FileFailure(source_path=str(pdf_path), error=f"{type(exc).__name__}: {exc}"))
    finally:
        if own_splitter:
            splitter.close()
    return reports, failures


def split_directory(
    input_dir: str,
    output_root: str,
    splitter: Optional[PdfSplitter] = None,
    pattern: str = "*.pdf",
    mode: str = "auto",
) -> tuple[List[BatchReport], List[FileFailure]]:
    """Split every PDF of input_dir (sorted by name) into output_root."""
    check_mode(mode)
    pdf_paths = list_pdfs(input_dir, pattern)
    if not pdf_paths:
        logger.warning(f"No PDF files found in {input_dir}")
        return [], []
    logger.info(f"Found {len(pdf_paths)} PDF file(s) in {input_dir}")
    return split_files(pdf_paths, output_root, splitter=splitter, mode=mode)


def write_summary(reports: List[BatchReport], failures: List[FileFailure], summary_path: str) -> dict:
    """Write a JSON summary of a batch run and return it."""
    summary = {
        "files": [r.summary() for r in reports],
        "failed_files": [{"source": f.source_path, "error": f.error} for f in failures],
        "total_saved": sum(r.saved_count for r in reports),
        "total_failed": sum(r.failure_count for r in reports) + len(failures),
    }
    path = Path(summary_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2, ensure_ascii=False)
    return summary
