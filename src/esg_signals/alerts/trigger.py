# src/esg_signals/alerts/trigger.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from esg_signals.core.types import (
    ALERT_NEW_REPORT,
    ALERT_SEVERITY_WARNING,
    Alert,
    NewsSignal,
)

logger = logging.getLogger(__name__)

NEGATIVE_SENTIMENT_THRESHOLD = -0.5
RELEVANCE_THRESHOLD = 0.7


def should_alert(signal: NewsSignal) -> bool:
    return (
        signal.sentiment < NEGATIVE_SENTIMENT_THRESHOLD
        and signal.esg_relevance > RELEVANCE_THRESHOLD
    )


def build_alerts(
    signal: NewsSignal,
    *,
    company_id: str,
    company_name: Optional[str],
    article_id: str,
    article_title: str,
    source: str,
    subscribers: Iterable[str],
) -> List[Alert]:
    """
    One WARNING alert per watching subscriber when the article is both
    strongly negative and highly ESG-relevant; otherwise an empty list.

    No deduplication: calling twice yields the same alerts twice.
    """
    if not should_alert(signal):
        return []

    title = f"Negative ESG News: {company_name or 'Company'}"
    message = f"New article with negative sentiment detected: {article_title}"

    alerts = [
        Alert(
            user_id=user_id,
            company_id=company_id,
            alert_type=ALERT_NEW_REPORT,
            severity=ALERT_SEVERITY_WARNING,
            title=title,
            message=message,
            data={
                "article_id": article_id,
                "sentiment": signal.sentiment,
                "source": source,
            },
        )
        for user_id in subscribers
    ]

    logger.info("alerts: %d alert(s) for company %s", len(alerts), company_id)
    return alerts
