# src/esg_signals/core/lexicon.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from esg_signals.config import load_config, load_yaml

logger = logging.getLogger(__name__)


# =====================================================================
# Immutable table types
# =====================================================================

@dataclass(frozen=True)
class CategoryRule:
    """One (category, subcategory, pattern) row of the indicator rule table."""
    category: str
    subcategory: str
    phrases: Tuple[str, ...]
    pattern: re.Pattern


@dataclass(frozen=True)
class SentimentLexicon:
    positive: Tuple[str, ...]
    negative: Tuple[str, ...]
    positive_weight: float
    negative_weight: float


@dataclass(frozen=True)
class CredibilityRule:
    name: str
    pattern: re.Pattern
    adjustment: float


@dataclass(frozen=True)
class TopicRule:
    topic: str
    keywords: Tuple[str, ...]


@dataclass(frozen=True)
class Lexicon:
    category_rules: Tuple[CategoryRule, ...]
    number_pattern: re.Pattern
    unit_pattern: re.Pattern
    sentence_sentiment: SentimentLexicon
    document_sentiment: SentimentLexicon
    credibility_base: float
    credibility_rules: Tuple[CredibilityRule, ...]
    vague_claim_pattern: re.Pattern
    future_commitment_pattern: re.Pattern
    esg_relevance_keywords: Tuple[str, ...]
    topic_rules: Tuple[TopicRule, ...]


# =====================================================================
# Builders
# =====================================================================

def _phrase_pattern(phrases: Tuple[str, ...]) -> re.Pattern:
    return re.compile("|".join(re.escape(p) for p in phrases), re.IGNORECASE)


def _build_category_rules(raw: Mapping[str, Mapping[str, Any]]) -> Tuple[CategoryRule, ...]:
    rules = []
    for category, subcategories in raw.items():
        for subcategory, phrases in subcategories.items():
            phrases = tuple(str(p).lower() for p in phrases)
            rules.append(CategoryRule(
                category=category,
                subcategory=subcategory,
                phrases=phrases,
                pattern=_phrase_pattern(phrases),
            ))
    return tuple(rules)


def _build_sentiment(raw: Mapping[str, Any]) -> SentimentLexicon:
    return SentimentLexicon(
        positive=tuple(str(w).lower() for w in raw.get("positive") or []),
        negative=tuple(str(w).lower() for w in raw.get("negative") or []),
        positive_weight=float(raw["positive_weight"]),
        negative_weight=float(raw["negative_weight"]),
    )


def build_lexicon(data: Mapping[str, Any]) -> Lexicon:
    """Turn the raw YAML mapping into compiled, immutable tables."""
    credibility = data["credibility"]
    greenwashing = data["greenwashing"]

    return Lexicon(
        category_rules=_build_category_rules(data["category_rules"]),
        number_pattern=re.compile(data["number_pattern"]),
        unit_pattern=re.compile(data["unit_pattern"], re.IGNORECASE),
        sentence_sentiment=_build_sentiment(data["sentence_sentiment"]),
        document_sentiment=_build_sentiment(data["document_sentiment"]),
        credibility_base=float(credibility["base"]),
        credibility_rules=tuple(
            CredibilityRule(
                name=rule["name"],
                pattern=re.compile(rule["pattern"], re.IGNORECASE),
                adjustment=float(rule["adjustment"]),
            )
            for rule in credibility["rules"]
        ),
        vague_claim_pattern=re.compile(greenwashing["vague_claim_pattern"], re.IGNORECASE),
        future_commitment_pattern=re.compile(
            greenwashing["future_commitment_pattern"], re.IGNORECASE
        ),
        esg_relevance_keywords=tuple(str(k).lower() for k in data["esg_relevance_keywords"]),
        topic_rules=tuple(
            TopicRule(topic=r["topic"], keywords=tuple(str(k).lower() for k in r["keywords"]))
            for r in data["topic_rules"]
        ),
    )


@lru_cache(maxsize=8)
def _load_lexicon_from(path: str) -> Lexicon:
    lexicon = build_lexicon(load_yaml(Path(path)))
    logger.debug(
        "Loaded lexicon from %s (%d category rules, %d topic rules)",
        path,
        len(lexicon.category_rules),
        len(lexicon.topic_rules),
    )
    return lexicon


def load_lexicon(path: Optional[Path] = None) -> Lexicon:
    """
    Return the process-wide lexicon.

    Tables are read once per path and shared read-only afterwards.
    """
    if path is None:
        path = load_config().lexicon_path
    return _load_lexicon_from(str(path))
