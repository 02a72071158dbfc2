"""Pytest hooks and fixtures for aposplit."""

import logging

import pytest


def pytest_configure(config):
    """Keep split logs quiet unless a test asks for them."""
    logging.getLogger("aposplit").setLevel(logging.WARNING)


@pytest.fixture
def make_pdf(tmp_path):
    """
    Build a PDF with one page per text string and return its path.

    Each string may contain newlines; every line becomes a text line on the page.
    """
    fitz = pytest.importorskip("fitz")

    def _make(pages_content, name="batch.pdf"):
        output_path = tmp_path / name
        output_path.parent.mkdir(parents=True, exist_ok=True)
        pdf = fitz.open()
        for page_text in pages_content:
            page = pdf.new_page(width=595, height=842)
            page.insert_text((50, 72), page_text, fontsize=11)
        pdf.save(str(output_path))
        pdf.close()
        return output_path

    return _make
