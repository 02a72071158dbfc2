"""
Command-line entry point.

Usage:
    aposplit releves_L3.pdf attestations_M2.pdf --output-dir out
    aposplit --input-dir input --output-dir output --summary output/summary.json
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from aposplit.batch import SPLIT_MODES, split_directory, split_files, write_summary
from aposplit.config import load_settings
from aposplit.schema import BatchReport, FileFailure
from aposplit.splitter import PdfSplitter, SplitError

logger = logging.getLogger("aposplit")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aposplit",
        description="Split transcript or attestation batch PDFs into one file per student.",
    )
    parser.add_argument("pdfs", nargs="*", help="PDF files to split (default: every PDF of --input-dir).")
    parser.add_argument("--input-dir", default=None, help="Directory scanned when no PDF is given.")
    parser.add_argument("--output-dir", default=None, help="Root directory for split files.")
    parser.add_argument(
        "--mode",
        choices=SPLIT_MODES,
        default="auto",
        help="Force a split mode instead of detecting it from the cover page.",
    )
    parser.add_argument("--summary", default=None, help="Write a JSON summary to this path.")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING...).")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    settings = load_settings()
    args = build_parser().parse_args(argv)

    level_name = (args.log_level or settings.log_level).upper()
    level = logging.getLevelName(level_name)
    logging.basicConfig(
        level=level if isinstance(level, int) else settings.log_level_value,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    output_dir = args.output_dir or settings.output_dir
    input_dir = args.input_dir or settings.input_dir
    splitter = PdfSplitter()

    reports: List[BatchReport] = []
    failures: List[FileFailure] = []
    try:
        if args.pdfs:
            reports, failures = split_files(
                [Path(p) for p in args.pdfs], output_dir, splitter=splitter, mode=args.mode
            )
        else:
            reports, failures = split_directory(input_dir, output_dir, splitter=splitter, mode=args.mode)
    except SplitError as exc:
        logger.error(f"❌ {exc}")
        failures = [FileFailure(source_path=str(input_dir), error=str(exc))]
    finally:
        splitter.close()

    summary_ok = True
    if args.summary:
        try:
            write_summary(reports, failures, args.summary)
            logger.info(f"Summary written to {args.summary}")
        except OSError as exc:
            logger.error(f"❌ Could not write summary {args.summary}: {exc}")
            summary_ok = False

    saved = sum(r.saved_count for r in reports)
    failed = sum(r.failure_count for r in reports) + len(failures)
    logger.info(f"Finished: {saved} file(s) saved, {failed} failure(s)")
    return 0 if summary_ok and not failed else 1


if __name__ == "__main__":
    raise SystemExit(main())
