import pytest

from esg_signals.core.lexicon import load_lexicon
from esg_signals.news.classifier import analyze_article, calculate_esg_relevance, extract_topics


def test_relevance_counts_keywords_present_in_title_and_content():
    assert calculate_esg_relevance("carbon", "Climate news") == pytest.approx(0.2)


def test_multi_word_keyword_counts_its_words():
    assert calculate_esg_relevance("human rights") == pytest.approx(0.2)


def test_relevance_is_presence_only():
    assert calculate_esg_relevance("water water water water") == pytest.approx(0.1)


def test_relevance_is_capped():
    content = " ".join(load_lexicon().esg_relevance_keywords)
    assert calculate_esg_relevance(content) == 1.0


def test_relevance_of_empty_article():
    assert calculate_esg_relevance("", "") == 0.0


def test_topics_follow_rule_table_order():
    content = "Board members discussed climate and water."
    assert extract_topics(content) == ("Climate Change", "Corporate Governance", "Water Management")


def test_topics_listed_once():
    assert extract_topics("solar solar wind clean energy") == ("Renewable Energy",)


def test_topics_ignore_title():
    signal = analyze_article(content="A quiet quarter.", title="Drought and biodiversity")
    assert signal.topics == ()


def test_analyze_article_empty():
    signal = analyze_article("")
    assert signal.sentiment == 0.0
    assert signal.esg_relevance == 0.0
    assert signal.topics == ()
    assert signal.to_dict() == {"sentiment": 0.0, "esg_relevance": 0.0, "topics": []}
