"""
Tests for directory batch processing and the JSON summary.
"""

import json

import pytest

from aposplit.batch import list_pdfs, split_directory, split_files, write_summary
from aposplit.schema import BatchReport, DocClass, FileFailure, SaveOutcome
from aposplit.splitter import SourceNotFoundError

TRANSCRIPT_PAGES = [
    "Edition des releves de notes",
    "Page : /1\nDUPONT Jean\nN° Etudiant : 111",
    "Page : /1\nMARTIN Claire\nN° Etudiant : 222",
]


def test_split_directory_processes_every_pdf(make_pdf, tmp_path):
    make_pdf(TRANSCRIPT_PAGES, name="input/lot_a.pdf")
    make_pdf(TRANSCRIPT_PAGES, name="input/lot_b.pdf")

    reports, failures = split_directory(str(tmp_path / "input"), str(tmp_path / "out"))

    assert failures == []
    assert [r.doc_class for r in reports] == [DocClass.TRANSCRIPT, DocClass.TRANSCRIPT]
    assert (tmp_path / "out" / "lot_a_per_student" / "lot_a_dupont_jean_111.pdf").exists()
    assert (tmp_path / "out" / "lot_b_per_student" / "lot_b_martin_claire_222.pdf").exists()


def test_broken_file_does_not_stop_the_batch(make_pdf, tmp_path):
    make_pdf(TRANSCRIPT_PAGES, name="input/b_good.pdf")
    (tmp_path / "input" / "a_broken.pdf").write_bytes(b"this is not a pdf")

    reports, failures = split_directory(str(tmp_path / "input"), str(tmp_path / "out"))

    assert len(reports) == 1
    assert reports[0].saved_count == 2
    assert len(failures) == 1
    assert failures[0].source_path.endswith("a_broken.pdf")


def test_missing_input_directory(tmp_path):
    with pytest.raises(SourceNotFoundError):
        split_directory(str(tmp_path / "nope"), str(tmp_path / "out"))


def test_empty_input_directory(tmp_path):
    (tmp_path / "input").mkdir()
    assert split_directory(str(tmp_path / "input"), str(tmp_path / "out")) == ([], [])


def test_list_pdfs_is_sorted(tmp_path):
    for name in ("c.pdf", "a.pdf", "b.txt", "b.pdf"):
        (tmp_path / name).write_bytes(b"")
    assert [p.name for p in list_pdfs(str(tmp_path))] == ["a.pdf", "b.pdf", "c.pdf"]


def test_write_summary(tmp_path):
    report = BatchReport(
        source_path="lot.pdf",
        doc_class=DocClass.ATTESTATION,
        output_dir="out/lot_attestations",
        outcomes=[
            SaveOutcome(destination="out/a.pdf", page_indices=[1], saved=True),
            SaveOutcome(destination="out/b.pdf", page_indices=[2], saved=False, error="disk full"),
        ],
    )
    failure = FileFailure(source_path="broken.pdf", error="cannot open")
    summary_path = tmp_path / "logs" / "summary.json"

    summary = write_summary([report], [failure], str(summary_path))

    on_disk = json.loads(summary_path.read_text(encoding="utf-8"))
    assert on_disk == summary
    assert summary["total_saved"] == 1
    assert summary["total_failed"] == 2
    assert summary["files"][0]["mode"] == "attestation"
    assert summary["files"][0]["failures"] == [{"destination": "out/b.pdf", "error": "disk full"}]
    assert summary["failed_files"] == [{"source": "broken.pdf", "error": "cannot open"}]


def test_unknown_mode_is_rejected(tmp_path):
    (tmp_path / "input").mkdir()
    with pytest.raises(ValueError, match="Unknown split mode 'zip'"):
        split_files([tmp_path / "input" / "lot.pdf"], str(tmp_path / "out"), mode="zip")
    with pytest.raises(ValueError, match="Unknown split mode"):
        split_directory(str(tmp_path / "input"), str(tmp_path / "out"), mode="zip")
