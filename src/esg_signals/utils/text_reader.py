from __future__ import annotations

from pathlib import Path
from typing import Any, List

from esg_signals.config import load_json
from esg_signals.core.errors import DocumentDecodeError
from esg_signals.utils.pdf_reader import extract_pages


def read_document_pages(path: Path) -> List[str]:
    """Decode a report file into page texts (PDF) or a single page (text)."""
    if path.suffix.lower() == ".pdf":
        return extract_pages(str(path))
    try:
        return [path.read_text(encoding="utf-8")]
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentDecodeError(f"Failed to read {path}: {exc}") from exc


def read_json_file(path: Path) -> Any:
    try:
        return load_json(path)
    except (OSError, ValueError) as exc:
        raise DocumentDecodeError(f"Failed to read {path}: {exc}") from exc
