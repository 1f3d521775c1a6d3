from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pdfplumber

from esg_signals.core.errors import DocumentDecodeError

logger = logging.getLogger(__name__)


def extract_pages(pdf_path: str) -> List[str]:
    """
    Extract raw text from each page using pdfplumber.

    A page that fails to decode contributes an empty string; a missing or
    unreadable file raises DocumentDecodeError.
    """
    path = Path(pdf_path)

    if not path.exists():
        raise DocumentDecodeError(f"PDF not found: {pdf_path}")

    pages: List[str] = []
    try:
        with pdfplumber.open(str(path)) as pdf:
            for i, page in enumerate(pdf.pages, start=1):
                try:
                    text = page.extract_text() or ""
                except Exception as exc:
                    logger.warning("Failed to extract page %s: %s", i, exc)
                    text = ""
                pages.append(text)
    except Exception as exc:
        logger.error("Failed to open PDF %s: %s", pdf_path, exc)
        raise DocumentDecodeError(f"Failed to open PDF {pdf_path}: {exc}") from exc

    logger.debug("Extracted %d page(s) from %s", len(pages), pdf_path)
    return pages


def extract_text(pdf_path: str) -> str:
    """Concatenated text of all pages, separated by blank lines."""
    return "\n\n".join(extract_pages(pdf_path))
