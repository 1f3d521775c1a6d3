import math

import pytest

from esg_signals.scoring.sentiment import (
    count_occurrences,
    score_document_sentiment,
    score_sentence_sentiment,
)


def test_count_occurrences_includes_overlaps():
    assert count_occurrences("aaa", "aa") == 2
    assert count_occurrences("award award award", "award") == 3
    assert count_occurrences("anything", "") == 0


def test_sentence_mode_weights():
    assert score_sentence_sentiment("We achieved real progress") == pytest.approx(0.4)
    assert score_sentence_sentiment("The project failed after a lawsuit") == pytest.approx(-0.4)
    assert score_sentence_sentiment("Nothing notable happened") == 0.0


def test_sentence_mode_counts_repeats():
    assert score_sentence_sentiment("failed failed failed") == pytest.approx(-0.6)


def test_sentence_mode_is_case_insensitive():
    assert score_sentence_sentiment("ACHIEVED") == pytest.approx(0.2)


def test_sentence_mode_clamps():
    assert score_sentence_sentiment("improved " * 10) == 1.0
    assert score_sentence_sentiment("penalty " * 10) == -1.0


def test_document_mode_zero_without_hits():
    assert score_document_sentiment("") == 0.0
    assert score_document_sentiment("a quiet day at the office") == 0.0


def test_document_mode_normalization():
    assert score_document_sentiment("scandal") == pytest.approx(-0.15 / math.sqrt(2))
    assert score_document_sentiment("award award award") == pytest.approx(0.3 / math.sqrt(4))
    assert score_document_sentiment("success then lawsuit") == pytest.approx(
        (0.1 - 0.15) / math.sqrt(3)
    )


def test_document_mode_stays_in_range():
    text = "scandal corruption breach " * 200
    value = score_document_sentiment(text)
    assert -1.0 <= value <= 1.0
