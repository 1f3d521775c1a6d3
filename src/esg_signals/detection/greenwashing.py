# src/esg_signals/detection/greenwashing.py
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from esg_signals.core.lexicon import Lexicon, load_lexicon
from esg_signals.core.types import (
    FLAG_INCONSISTENCY,
    FLAG_MISSING_DATA,
    FLAG_VAGUE_CLAIM,
    SEVERITY_HIGH,
    SEVERITY_MEDIUM,
    GreenwashingFlag,
    Indicator,
)

logger = logging.getLogger(__name__)

VAGUE_CLAIM_MIN_COUNT = 5
SPECIFIC_METRIC_RATIO = 0.3
FUTURE_TO_VERIFIED_RATIO = 2
VERIFIED_CREDIBILITY = 0.6
LOW_CREDIBILITY = 0.4
LOW_CREDIBILITY_SHARE = 0.5


# ----------------------------------------------------------
# Individual rules
#
# Each rule returns at most one flag and is independent of
# the others.
# ----------------------------------------------------------

def _vague_claim_flag(
    text: str, indicators: Sequence[Indicator], lexicon: Lexicon
) -> Optional[GreenwashingFlag]:
    vague_count = len(lexicon.vague_claim_pattern.findall(text))
    if vague_count <= VAGUE_CLAIM_MIN_COUNT:
        return None

    specific_count = sum(1 for i in indicators if i.indicator_value and i.unit)
    if specific_count >= vague_count * SPECIFIC_METRIC_RATIO:
        return None

    return GreenwashingFlag(
        flag_type=FLAG_VAGUE_CLAIM,
        severity=SEVERITY_MEDIUM,
        description=(
            f"High frequency of vague environmental claims ({vague_count}) "
            f"with limited specific metrics ({specific_count})"
        ),
        evidence={"vague_claims": vague_count, "specific_metrics": specific_count},
    )


def _inconsistency_flag(
    text: str, indicators: Sequence[Indicator], lexicon: Lexicon
) -> Optional[GreenwashingFlag]:
    future_count = len(lexicon.future_commitment_pattern.findall(text))
    verified_count = sum(1 for i in indicators if i.credibility_score > VERIFIED_CREDIBILITY)

    if future_count <= verified_count * FUTURE_TO_VERIFIED_RATIO:
        return None

    return GreenwashingFlag(
        flag_type=FLAG_INCONSISTENCY,
        severity=SEVERITY_HIGH,
        description=(
            f"Excessive future commitments ({future_count}) compared to "
            f"current verified performance data ({verified_count})"
        ),
        evidence={"future_claims": future_count, "current_metrics": verified_count},
    )


def _missing_data_flag(indicators: Sequence[Indicator]) -> Optional[GreenwashingFlag]:
    total = len(indicators)
    low_count = sum(1 for i in indicators if i.credibility_score < LOW_CREDIBILITY)

    # an empty set never fires: 0 > 0 is false
    if low_count <= total * LOW_CREDIBILITY_SHARE:
        return None

    return GreenwashingFlag(
        flag_type=FLAG_MISSING_DATA,
        severity=SEVERITY_MEDIUM,
        description=(
            f"Majority of claims ({low_count} of {total}) lack third-party "
            f"verification or specific measurements"
        ),
        evidence={"low_credibility_indicators": low_count, "total_indicators": total},
    )


# ----------------------------------------------------------
# Detector
# ----------------------------------------------------------

def detect_greenwashing(
    text: str,
    indicators: Sequence[Indicator],
    lexicon: Optional[Lexicon] = None,
) -> List[GreenwashingFlag]:
    """
    Run the three greenwashing heuristics over a document and its
    already-extracted indicators.

    Flags are returned in fixed order: VAGUE_CLAIM, INCONSISTENCY,
    MISSING_DATA. At most one flag per rule.
    """
    lex = lexicon or load_lexicon()
    text = text or ""

    candidates = [
        _vague_claim_flag(text, indicators, lex),
        _inconsistency_flag(text, indicators, lex),
        _missing_data_flag(indicators),
    ]
    flags = [f for f in candidates if f is not None]

    for flag in flags:
        logger.info("greenwashing: %s (%s) %s", flag.flag_type, flag.severity, flag.evidence)

    return flags
