# src/esg_signals/extractors/indicator_extractor.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from esg_signals.core.lexicon import Lexicon, load_lexicon
from esg_signals.core.types import Indicator
from esg_signals.scoring.credibility import score_credibility
from esg_signals.scoring.sentiment import score_sentence_sentiment
from esg_signals.utils.sentence_splitter import split_into_sentences

logger = logging.getLogger(__name__)


# ======================================================================
# Per-sentence extraction
# ======================================================================

def _indicators_for_sentence(
    sentence: str,
    lexicon: Lexicon,
    source_page: Optional[int] = None,
) -> List[Indicator]:
    """
    Test one sentence against every rule in table order.

    A rule hit only becomes an Indicator when the sentence also carries a
    number. Sentiment and credibility are computed at most once per sentence.
    """
    matched = [rule for rule in lexicon.category_rules if rule.pattern.search(sentence)]
    if not matched:
        return []

    number = lexicon.number_pattern.search(sentence)
    if not number:
        logger.debug("indicator: %d rule hit(s) without a number, skipped", len(matched))
        return []

    unit = lexicon.unit_pattern.search(sentence)
    sentiment = score_sentence_sentiment(sentence, lexicon)
    credibility = score_credibility(sentence, lexicon)

    out: List[Indicator] = []
    for rule in matched:
        logger.debug(
            "indicator hit %s/%s: value='%s', unit='%s'",
            rule.category,
            rule.subcategory,
            number.group(0),
            unit.group(0) if unit else None,
        )
        out.append(
            Indicator(
                category=rule.category,
                subcategory=rule.subcategory,
                indicator_name=rule.subcategory.replace("_", " "),
                indicator_value=number.group(0),
                unit=unit.group(0) if unit else None,
                context=sentence,
                sentiment=sentiment,
                credibility_score=credibility,
                source_page=source_page,
            )
        )
    return out


# ======================================================================
# Public extractors
# ======================================================================

def extract_indicators(text: str, lexicon: Optional[Lexicon] = None) -> List[Indicator]:
    """
    Extract ESG indicators from a document's plain text.

    Output order is document order of sentences, then rule-table order
    (environmental, social, governance) within a sentence.
    """
    lex = lexicon or load_lexicon()
    indicators: List[Indicator] = []

    for sentence in split_into_sentences(text):
        indicators.extend(_indicators_for_sentence(sentence, lex))

    logger.info("indicator extraction: %d indicator(s) found", len(indicators))
    return indicators


def extract_indicators_from_pages(
    pages: Iterable[str],
    lexicon: Optional[Lexicon] = None,
) -> List[Indicator]:
    """
    Same as extract_indicators, but segments page by page so each
    Indicator carries the 1-based page it was found on.
    """
    lex = lexicon or load_lexicon()
    indicators: List[Indicator] = []

    for page_no, page_text in enumerate(pages, start=1):
        for sentence in split_into_sentences(page_text):
            indicators.extend(_indicators_for_sentence(sentence, lex, source_page=page_no))

    logger.info("indicator extraction: %d indicator(s) found across pages", len(indicators))
    return indicators
