from unittest.mock import MagicMock, patch

import pytest

from esg_signals.core.errors import DocumentDecodeError
from esg_signals.utils.pdf_reader import extract_pages, extract_text
from esg_signals.utils.text_reader import read_document_pages


def _fake_pdf(*page_texts):
    pages = []
    for text in page_texts:
        page = MagicMock()
        if isinstance(text, Exception):
            page.extract_text.side_effect = text
        else:
            page.extract_text.return_value = text
        pages.append(page)

    opener = MagicMock()
    opener.return_value.__enter__.return_value.pages = pages
    return opener


def test_extract_pages(tmp_path):
    pdf = tmp_path / "report.pdf"
    pdf.write_bytes(b"%PDF-1.4")

    with patch("esg_signals.utils.pdf_reader.pdfplumber.open", new=_fake_pdf("one", None, "three")):
        assert extract_pages(str(pdf)) == ["one", "", "three"]


def test_failed_page_becomes_empty(tmp_path):
    pdf = tmp_path / "report.pdf"
    pdf.write_bytes(b"%PDF-1.4")

    with patch(
        "esg_signals.utils.pdf_reader.pdfplumber.open",
        new=_fake_pdf("first", ValueError("bad page")),
    ):
        assert extract_text(str(pdf)) == "first\n\n"


def test_missing_pdf_raises(tmp_path):
    with pytest.raises(DocumentDecodeError):
        extract_pages(str(tmp_path / "missing.pdf"))


def test_unreadable_pdf_raises(tmp_path):
    pdf = tmp_path / "broken.pdf"
    pdf.write_bytes(b"not a pdf")

    with patch(
        "esg_signals.utils.pdf_reader.pdfplumber.open",
        side_effect=OSError("cannot open"),
    ):
        with pytest.raises(DocumentDecodeError):
            extract_pages(str(pdf))


def test_plain_text_document(tmp_path):
    doc = tmp_path / "report.txt"
    doc.write_text("The board met 12 times.", encoding="utf-8")
    assert read_document_pages(doc) == ["The board met 12 times."]
