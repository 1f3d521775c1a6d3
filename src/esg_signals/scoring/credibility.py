# src/esg_signals/scoring/credibility.py
from __future__ import annotations

from typing import Optional

from esg_signals.core.lexicon import Lexicon, load_lexicon
from esg_signals.scoring.sentiment import clamp


def score_credibility(sentence: str, lexicon: Optional[Lexicon] = None) -> float:
    """
    Rule-adjusted trust score for a single sentence.

    Starts at the lexicon base (0.5) and applies every rule whose pattern
    occurs in the sentence:
      - verification vocabulary   +0.3
      - hedging vocabulary        -0.1
      - 4-digit number / specific +0.1
      - forward-looking intent    -0.15
    Final value is clamped to [0, 1].
    """
    lex = lexicon or load_lexicon()
    score = lex.credibility_base

    for rule in lex.credibility_rules:
        if rule.pattern.search(sentence or ""):
            score += rule.adjustment

    return clamp(score, 0.0, 1.0)
