# src/esg_signals/scoring/sentiment.py
from __future__ import annotations

import math
from typing import Iterable, Optional, Tuple

from esg_signals.core.lexicon import Lexicon, SentimentLexicon, load_lexicon


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def count_occurrences(haystack: str, needle: str) -> int:
    """Count every occurrence of needle in haystack, overlaps included."""
    if not needle:
        return 0
    count = 0
    start = haystack.find(needle)
    while start != -1:
        count += 1
        start = haystack.find(needle, start + 1)
    return count


def _hits(lower_text: str, phrases: Iterable[str]) -> int:
    return sum(count_occurrences(lower_text, p) for p in phrases)


def _count_hits(text: str, table: SentimentLexicon) -> Tuple[int, int]:
    lower_text = (text or "").lower()
    return _hits(lower_text, table.positive), _hits(lower_text, table.negative)


# =====================================================================
# Sentence mode (report indicators)
# =====================================================================

def score_sentence_sentiment(text: str, lexicon: Optional[Lexicon] = None) -> float:
    """
    Weighted phrase count over one sentence, clamped to [-1, 1].

    No length normalization: each positive occurrence adds the positive
    weight, each negative occurrence subtracts the negative weight.
    """
    table = (lexicon or load_lexicon()).sentence_sentiment
    positive, negative = _count_hits(text, table)

    score = positive * table.positive_weight - negative * table.negative_weight
    return clamp(score, -1.0, 1.0)


# =====================================================================
# Document mode (news)
# =====================================================================

def score_document_sentiment(text: str, lexicon: Optional[Lexicon] = None) -> float:
    """
    Weighted phrase count normalized by sqrt(total hits + 1), clamped to [-1, 1].

    Exactly 0.0 when no listed phrase occurs.
    """
    table = (lexicon or load_lexicon()).document_sentiment
    positive, negative = _count_hits(text, table)

    total = positive + negative
    if total == 0:
        return 0.0

    raw = positive * table.positive_weight - negative * table.negative_weight
    return clamp(raw / math.sqrt(total + 1), -1.0, 1.0)
