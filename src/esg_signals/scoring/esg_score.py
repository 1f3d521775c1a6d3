# src/esg_signals/scoring/esg_score.py
from __future__ import annotations

import math
from typing import Dict, List, Sequence

from esg_signals.core.types import (
    CATEGORIES,
    ENVIRONMENTAL,
    GOVERNANCE,
    RISK_CRITICAL,
    RISK_HIGH,
    RISK_LOW,
    RISK_MEDIUM,
    SOCIAL,
    ESGScore,
    Indicator,
)
from esg_signals.scoring.sentiment import clamp

NEUTRAL_SCORE = 50.0

CATEGORY_WEIGHTS: Dict[str, float] = {
    ENVIRONMENTAL: 0.35,
    SOCIAL: 0.35,
    GOVERNANCE: 0.30,
}

# (upper bound, level), evaluated in order; first match wins
RISK_BANDS = (
    (40.0, RISK_CRITICAL),
    (60.0, RISK_HIGH),
    (75.0, RISK_MEDIUM),
)


def round_half_up(value: float, places: int) -> float:
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def category_score(indicators: Sequence[Indicator]) -> float:
    """
    Score one category's indicators on [0, 100].

    An empty category is exactly neutral (50). Otherwise:
        50 + mean(sentiment)*20 + mean(credibility)*20 + min(n/10, 1)*10
    """
    if not indicators:
        return NEUTRAL_SCORE

    n = len(indicators)
    avg_sentiment = sum(i.sentiment for i in indicators) / n
    avg_credibility = sum(i.credibility_score for i in indicators) / n
    richness = min(n / 10, 1.0)

    return clamp(
        NEUTRAL_SCORE + avg_sentiment * 20 + avg_credibility * 20 + richness * 10,
        0.0,
        100.0,
    )


def overall_score(environmental: float, social: float, governance: float) -> float:
    return (
        environmental * CATEGORY_WEIGHTS[ENVIRONMENTAL]
        + social * CATEGORY_WEIGHTS[SOCIAL]
        + governance * CATEGORY_WEIGHTS[GOVERNANCE]
    )


def risk_level_for(score: float) -> str:
    for upper, level in RISK_BANDS:
        if score < upper:
            return level
    return RISK_LOW


def calculate_esg_score(indicators: Sequence[Indicator]) -> ESGScore:
    """
    Aggregate an indicator set into category, overall and risk outputs.

    Risk level is taken from the unrounded overall score; all four scores
    are then rounded to one decimal and confidence to two.
    """
    by_category: Dict[str, List[Indicator]] = {c: [] for c in CATEGORIES}
    for indicator in indicators:
        by_category.setdefault(indicator.category, []).append(indicator)

    env = category_score(by_category[ENVIRONMENTAL])
    soc = category_score(by_category[SOCIAL])
    gov = category_score(by_category[GOVERNANCE])
    overall = overall_score(env, soc, gov)

    confidence = 0.0
    if indicators:
        confidence = sum(i.credibility_score for i in indicators) / len(indicators)

    return ESGScore(
        overall_score=round_half_up(overall, 1),
        environmental_score=round_half_up(env, 1),
        social_score=round_half_up(soc, 1),
        governance_score=round_half_up(gov, 1),
        risk_level=risk_level_for(overall),
        confidence_score=round_half_up(confidence, 2),
        metrics={
            "total_indicators": len(indicators),
            "environmental_indicators": len(by_category[ENVIRONMENTAL]),
            "social_indicators": len(by_category[SOCIAL]),
            "governance_indicators": len(by_category[GOVERNANCE]),
        },
    )
