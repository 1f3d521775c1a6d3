from esg_signals.alerts.trigger import build_alerts, should_alert
from esg_signals.core.types import NewsSignal


def _alerts(signal, subscribers=("u1", "u2"), company_name="Acme"):
    return build_alerts(
        signal,
        company_id="c1",
        company_name=company_name,
        article_id="a1",
        article_title="Acme fined over spill",
        source="Reuters",
        subscribers=subscribers,
    )


def test_one_alert_per_subscriber():
    alerts = _alerts(NewsSignal(sentiment=-0.6, esg_relevance=0.75))

    assert len(alerts) == 2
    assert [a.user_id for a in alerts] == ["u1", "u2"]
    for alert in alerts:
        assert alert.alert_type == "NEW_REPORT"
        assert alert.severity == "WARNING"
        assert alert.title == "Negative ESG News: Acme"
        assert alert.message == "New article with negative sentiment detected: Acme fined over spill"
        assert alert.data == {"article_id": "a1", "sentiment": -0.6, "source": "Reuters"}
        assert alert.read is False
        assert alert.expires_at is None


def test_thresholds_are_strict():
    assert not should_alert(NewsSignal(sentiment=-0.5, esg_relevance=0.9))
    assert not should_alert(NewsSignal(sentiment=-0.9, esg_relevance=0.7))
    assert should_alert(NewsSignal(sentiment=-0.51, esg_relevance=0.71))
    assert _alerts(NewsSignal(sentiment=-0.5, esg_relevance=0.9)) == []


def test_unknown_company_name_falls_back():
    alerts = _alerts(NewsSignal(sentiment=-0.8, esg_relevance=1.0), company_name=None)
    assert alerts[0].title == "Negative ESG News: Company"


def test_no_subscribers_no_alerts():
    assert _alerts(NewsSignal(sentiment=-0.8, esg_relevance=1.0), subscribers=[]) == []


def test_replay_is_not_deduplicated():
    signal = NewsSignal(sentiment=-0.8, esg_relevance=1.0)
    first = _alerts(signal)
    second = _alerts(signal)

    assert first == second
    assert {a.dedupe_key for a in first + second} == {"a1:u1", "a1:u2"}
