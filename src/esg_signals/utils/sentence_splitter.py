# src/esg_signals/utils/sentence_splitter.py
from __future__ import annotations

import re
from typing import List

MIN_SENTENCE_LENGTH = 10

_BOUNDARY = re.compile(r"[.!?]+")


def split_into_sentences(text: str) -> List[str]:
    """
    Very small heuristic sentence splitter:
      - Split on runs of '.', '!', '?'
      - Trim each fragment
      - Drop fragments shorter than MIN_SENTENCE_LENGTH characters (noise)

    Note that decimal points are boundaries too ("15.5" splits).
    """
    if not text:
        return []

    chunks = _BOUNDARY.split(text)
    return [c.strip() for c in chunks if len(c.strip()) >= MIN_SENTENCE_LENGTH]
