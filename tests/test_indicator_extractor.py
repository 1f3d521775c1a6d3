import random

import pytest

from esg_signals.extractors.indicator_extractor import (
    extract_indicators,
    extract_indicators_from_pages,
)


def test_carbon_example_end_to_end():
    text = (
        "We achieved a 15% reduction in carbon emission this year, "
        "verified by a third-party auditor."
    )
    indicators = extract_indicators(text)

    assert len(indicators) == 1
    ind = indicators[0]
    assert ind.category == "environmental"
    assert ind.subcategory == "carbon_emissions"
    assert ind.indicator_name == "carbon emissions"
    assert ind.indicator_value == "15"
    assert ind.unit in ("%", "percent")
    assert ind.sentiment > 0
    assert ind.credibility_score >= 0.8 - 1e-9
    assert ind.context.startswith("We achieved a 15%")
    assert ind.source_page is None


def test_sentence_without_number_is_skipped():
    assert extract_indicators("Our carbon emission strategy is ambitious.") == []


def test_one_sentence_can_match_several_rules_in_table_order():
    text = "Workplace safety incidents fell by 30 percent under board oversight."
    indicators = extract_indicators(text)

    assert [(i.category, i.subcategory) for i in indicators] == [
        ("social", "health_safety"),
        ("governance", "board_structure"),
    ]
    # shared per-sentence scores
    assert indicators[0].sentiment == indicators[1].sentiment
    assert indicators[0].credibility_score == indicators[1].credibility_score
    assert indicators[0].sentiment == pytest.approx(-0.2)
    assert all(i.unit == "percent" for i in indicators)


def test_first_number_in_sentence_is_taken():
    indicators = extract_indicators("In 2022 our greenhouse gas output was 5000 tonnes.")

    assert len(indicators) == 1
    assert indicators[0].indicator_value == "2022"
    assert indicators[0].unit == "tonnes"
    assert indicators[0].credibility_score == pytest.approx(0.6)


def test_unit_is_optional():
    indicators = extract_indicators("The board met 12 times during the year.")
    assert len(indicators) == 1
    assert indicators[0].unit is None


def test_document_order_is_preserved():
    text = (
        "The board held 8 meetings in total. "
        "Solar output reached 40 mwh at the main site. "
        "Recycling rates rose to 70 percent overall."
    )
    subcategories = [i.subcategory for i in extract_indicators(text)]
    assert subcategories == ["board_structure", "renewable_energy", "waste_management"]


def test_pages_set_source_page():
    pages = [
        "Page one has nothing numeric at all.",
        "Solar capacity reached 40 mwh this year.",
    ]
    indicators = extract_indicators_from_pages(pages)

    assert len(indicators) == 1
    assert indicators[0].subcategory == "renewable_energy"
    assert indicators[0].source_page == 2
    assert indicators[0].unit == "mwh"


def test_empty_and_malformed_text():
    assert extract_indicators("") == []
    assert extract_indicators("!!!???...") == []


def test_shuffling_sentences_keeps_each_sentence_score():
    sentences = [
        "We achieved 20 percent less waste reduction cost",
        "A lawsuit over 3 employee grievances was filed",
        "The board approved 5 new directors after an incident",
    ]
    baseline = {i.context: i.sentiment for i in extract_indicators(". ".join(sentences) + ".")}

    shuffled = sentences[:]
    random.Random(7).shuffle(shuffled)
    after = {i.context: i.sentiment for i in extract_indicators(". ".join(shuffled) + ".")}

    assert baseline == after


def test_scores_stay_in_range():
    text = " ".join(
        f"Employee safety improved {n} percent, verified and certified, roughly, we plan to do more."
        for n in range(20)
    )
    for ind in extract_indicators(text):
        assert -1.0 <= ind.sentiment <= 1.0
        assert 0.0 <= ind.credibility_score <= 1.0
        assert ind.context
        assert ind.indicator_value


def test_unit_capture_is_case_insensitive():
    solar = extract_indicators("Solar output reached 40 MWh at the main site.")
    ghg = extract_indicators("In total 5000 Tonnes of greenhouse gas were emitted.")

    assert [i.unit for i in solar] == ["MWh"]
    assert [(i.subcategory, i.indicator_value, i.unit) for i in ghg] == [
        ("carbon_emissions", "5000", "Tonnes")
    ]
