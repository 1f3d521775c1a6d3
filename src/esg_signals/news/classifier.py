# src/esg_signals/news/classifier.py
from __future__ import annotations

import logging
from typing import Optional, Tuple

from esg_signals.core.lexicon import Lexicon, load_lexicon
from esg_signals.core.types import NewsSignal
from esg_signals.scoring.esg_score import round_half_up
from esg_signals.scoring.sentiment import score_document_sentiment

logger = logging.getLogger(__name__)

RELEVANCE_SATURATION = 10


def calculate_esg_relevance(
    content: str,
    title: str = "",
    lexicon: Optional[Lexicon] = None,
) -> float:
    """
    Presence-based keyword coverage of title + content, capped at 1.

    Each keyword found contributes its word count once, however often it
    repeats ("human rights" contributes 2). Rounded to two decimals.
    """
    lex = lexicon or load_lexicon()
    combined = f"{title or ''} {content or ''}".lower()

    contribution = sum(
        len(keyword.split(" "))
        for keyword in lex.esg_relevance_keywords
        if keyword in combined
    )
    return round_half_up(min(contribution / RELEVANCE_SATURATION, 1.0), 2)


def extract_topics(content: str, lexicon: Optional[Lexicon] = None) -> Tuple[str, ...]:
    """Topic labels whose keywords occur in the content, in rule-table order."""
    lex = lexicon or load_lexicon()
    lower = (content or "").lower()
    return tuple(
        rule.topic
        for rule in lex.topic_rules
        if any(keyword in lower for keyword in rule.keywords)
    )


def analyze_article(
    content: str,
    title: str = "",
    lexicon: Optional[Lexicon] = None,
) -> NewsSignal:
    lex = lexicon or load_lexicon()
    signal = NewsSignal(
        sentiment=score_document_sentiment(content, lex),
        esg_relevance=calculate_esg_relevance(content, title, lex),
        topics=extract_topics(content, lex),
    )
    logger.debug(
        "news: sentiment=%.3f relevance=%.2f topics=%s",
        signal.sentiment,
        signal.esg_relevance,
        list(signal.topics),
    )
    return signal
