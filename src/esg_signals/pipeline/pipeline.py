# src/esg_signals/pipeline/pipeline.py
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from esg_signals.alerts.trigger import build_alerts, should_alert
from esg_signals.config import load_config
from esg_signals.core.errors import RequestValidationError
from esg_signals.core.lexicon import Lexicon, load_lexicon
from esg_signals.core.types import (
    STATUS_COMPLETED,
    Alert,
    ESGScore,
    GreenwashingFlag,
    Indicator,
    NewsArticle,
    NewsSignal,
)
from esg_signals.detection.greenwashing import detect_greenwashing
from esg_signals.extractors.indicator_extractor import (
    extract_indicators,
    extract_indicators_from_pages,
)
from esg_signals.news.classifier import analyze_article
from esg_signals.pipeline.collaborators import DataStore, SubscriberDirectory
from esg_signals.scoring.esg_score import calculate_esg_score

logger = logging.getLogger(__name__)

REPORT_REQUIRED_FIELDS = ("reportId", "reportText", "companyId")
NEWS_REQUIRED_FIELDS = ("companyId", "title", "content")


# ----------------------------------------------------------
# Results
# ----------------------------------------------------------

@dataclass
class ReportAnalysis:
    indicators: List[Indicator]
    flags: List[GreenwashingFlag]
    score: ESGScore
    score_record: Optional[Dict[str, Any]] = None

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": True,
            "indicators": len(self.indicators),
            "greenwashing_flags": len(self.flags),
            "score": self.score_record if self.score_record is not None else self.score.to_dict(),
        }


@dataclass
class NewsAnalysis:
    article: Dict[str, Any]
    signal: NewsSignal
    alerts: List[Alert] = field(default_factory=list)

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": True,
            "article": self.article,
            "analysis": self.signal.to_dict(),
        }


# ----------------------------------------------------------
# Pure analysis
#
# Everything in this section is side-effect free and safe
# to run for many documents in parallel.
# ----------------------------------------------------------

def analyze_report_text(
    text: str,
    pages: Optional[Sequence[str]] = None,
    lexicon: Optional[Lexicon] = None,
) -> ReportAnalysis:
    """segment -> extract -> detect -> aggregate, with no persistence."""
    lex = lexicon or load_lexicon()

    if pages is not None:
        indicators = extract_indicators_from_pages(pages, lex)
        text = "\n\n".join(pages)
    else:
        indicators = extract_indicators(text, lex)

    flags = detect_greenwashing(text, indicators, lex)
    score = calculate_esg_score(indicators)
    return ReportAnalysis(indicators=indicators, flags=flags, score=score)


def analyze_reports(
    texts: Sequence[str],
    max_workers: Optional[int] = None,
) -> List[ReportAnalysis]:
    """
    Analyze many independent documents in parallel.

    Results come back in input order. The lexicon is loaded once up front
    and shared read-only by every worker.
    """
    lex = load_lexicon()
    workers = max_workers or load_config().max_workers

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda t: analyze_report_text(t, lexicon=lex), texts))


# ----------------------------------------------------------
# Report pipeline
# ----------------------------------------------------------

class ReportPipeline:
    """
    Report pipeline:
        - extract indicators     (persisted)
        - detect greenwashing    (persisted)
        - aggregate ESG score    (persisted)
        - mark report completed

    Analysis runs first as a pure pass (analyze_report_text); results
    are then written in order. Any collaborator error propagates; the
    report then stays in 'processing' and already-written rows are not
    rolled back.
    """

    def __init__(self, store: DataStore, lexicon: Optional[Lexicon] = None):
        self.store = store
        self.lexicon = lexicon or load_lexicon()

    def run(
        self,
        report_id: str,
        report_text: str,
        company_id: str,
        pages: Optional[Sequence[str]] = None,
    ) -> ReportAnalysis:
        logger.info("report %s: starting analysis for company %s", report_id, company_id)

        analysis = analyze_report_text(report_text, pages=pages, lexicon=self.lexicon)
        indicators, flags, score = analysis.indicators, analysis.flags, analysis.score

        self.store.insert_indicators(report_id, company_id, indicators)
        if flags:
            self.store.insert_flags(report_id, company_id, flags)
        analysis.score_record = self.store.insert_score(report_id, company_id, score)

        self.store.update_report_status(report_id, STATUS_COMPLETED)

        logger.info(
            "report %s: %d indicator(s), %d flag(s), overall=%.1f (%s)",
            report_id,
            len(indicators),
            len(flags),
            score.overall_score,
            score.risk_level,
        )
        return analysis


# ----------------------------------------------------------
# News pipeline
# ----------------------------------------------------------

class NewsPipeline:
    """
    News pipeline:
        - sentiment, relevance and topics for the article
        - persist the analyzed article
        - fan out alerts to watching subscribers when triggered
    """

    def __init__(
        self,
        store: DataStore,
        directory: SubscriberDirectory,
        lexicon: Optional[Lexicon] = None,
    ):
        self.store = store
        self.directory = directory
        self.lexicon = lexicon or load_lexicon()

    def run(self, article: NewsArticle) -> NewsAnalysis:
        signal = analyze_article(article.content, article.title, self.lexicon)
        stored = self.store.insert_news_article(article.to_record(signal))

        alerts: List[Alert] = []
        if should_alert(signal):
            alerts = build_alerts(
                signal,
                company_id=article.company_id,
                company_name=self.store.get_company_name(article.company_id),
                article_id=stored.get("id"),
                article_title=article.title,
                source=article.source,
                subscribers=self.directory.watchers_of(article.company_id),
            )
            if alerts:
                self.store.insert_alerts(alerts)

        logger.info(
            "news: article %s sentiment=%.3f relevance=%.2f alerts=%d",
            stored.get("id"),
            signal.sentiment,
            signal.esg_relevance,
            len(alerts),
        )
        return NewsAnalysis(article=stored, signal=signal, alerts=alerts)


# ----------------------------------------------------------
# Request handlers: (status code, JSON body)
# ----------------------------------------------------------

def _require(payload: Any, fields: Sequence[str]) -> None:
    if not isinstance(payload, Mapping):
        raise RequestValidationError("Request body must be a JSON object")
    missing = [f for f in fields if payload.get(f) is None]
    if missing:
        raise RequestValidationError(f"Missing required field(s): {', '.join(missing)}")


def handle_report_request(
    payload: Mapping[str, Any],
    store: DataStore,
    pages: Optional[Sequence[str]] = None,
) -> Tuple[int, Dict[str, Any]]:
    try:
        _require(payload, REPORT_REQUIRED_FIELDS)
    except RequestValidationError as exc:
        return 400, {"error": str(exc)}

    try:
        result = ReportPipeline(store).run(
            report_id=payload["reportId"],
            report_text=payload["reportText"],
            company_id=payload["companyId"],
            pages=pages,
        )
    except Exception as exc:
        logger.exception("Error analyzing report %s", payload.get("reportId"))
        return 500, {"error": str(exc)}

    return 200, result.to_response()


def handle_news_request(
    payload: Mapping[str, Any],
    store: DataStore,
    directory: SubscriberDirectory,
) -> Tuple[int, Dict[str, Any]]:
    try:
        _require(payload, NEWS_REQUIRED_FIELDS)
    except RequestValidationError as exc:
        return 400, {"error": str(exc)}

    try:
        result = NewsPipeline(store, directory).run(NewsArticle.from_request(dict(payload)))
    except Exception as exc:
        logger.exception("Error processing news article")
        return 500, {"error": str(exc)}

    return 200, result.to_response()
