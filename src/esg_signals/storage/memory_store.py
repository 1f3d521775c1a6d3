import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from esg_signals.core.types import (
    STATUS_PROCESSING,
    Alert,
    ESGScore,
    GreenwashingFlag,
    Indicator,
)
from esg_signals.pipeline.collaborators import DataStore, SubscriberDirectory

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InMemoryStore(DataStore, SubscriberDirectory):
    """Process-local store used by the CLI and tests.

    Rows are kept as plain dicts in insertion order. Nothing is
    deduplicated: re-running an analysis appends a second copy.
    """

    def __init__(
        self,
        companies: Optional[Dict[str, str]] = None,
        watchers: Optional[Dict[str, Iterable[str]]] = None,
    ) -> None:
        self.companies: Dict[str, str] = dict(companies or {})
        self.watchers: Dict[str, List[str]] = {
            company_id: list(users) for company_id, users in (watchers or {}).items()
        }
        self.indicators: List[Dict[str, Any]] = []
        self.flags: List[Dict[str, Any]] = []
        self.scores: List[Dict[str, Any]] = []
        self.articles: List[Dict[str, Any]] = []
        self.alerts: List[Dict[str, Any]] = []
        self.reports: Dict[str, Dict[str, Any]] = {}

    def register_report(self, report_id: str, company_id: str) -> None:
        self.reports[report_id] = {
            "id": report_id,
            "company_id": company_id,
            "processing_status": STATUS_PROCESSING,
            "processed_at": None,
        }

    # -- DataStore -----------------------------------------------------

    def insert_indicators(
        self, report_id: str, company_id: str, indicators: Sequence[Indicator]
    ) -> None:
        for indicator in indicators:
            self.indicators.append(
                {"report_id": report_id, "company_id": company_id, **indicator.to_dict()}
            )

    def insert_flags(
        self, report_id: str, company_id: str, flags: Sequence[GreenwashingFlag]
    ) -> None:
        for flag in flags:
            self.flags.append(
                {
                    "id": str(uuid.uuid4()),
                    "report_id": report_id,
                    "company_id": company_id,
                    "dedupe_key": flag.dedupe_key(report_id),
                    **flag.to_dict(),
                }
            )

    def insert_score(
        self, report_id: str, company_id: str, score: ESGScore
    ) -> Dict[str, Any]:
        record = {
            "id": str(uuid.uuid4()),
            "company_id": company_id,
            "report_id": report_id,
            **score.to_dict(),
            "created_at": _now(),
        }
        self.scores.append(record)
        return record

    def update_report_status(self, report_id: str, status: str) -> None:
        report = self.reports.setdefault(report_id, {"id": report_id})
        report["processing_status"] = status
        report["processed_at"] = _now()
        logger.debug("report %s -> %s", report_id, status)

    def insert_news_article(self, record: Dict[str, Any]) -> Dict[str, Any]:
        stored = {"id": str(uuid.uuid4()), **record, "created_at": _now()}
        self.articles.append(stored)
        return stored

    def get_company_name(self, company_id: str) -> Optional[str]:
        return self.companies.get(company_id)

    def insert_alerts(self, alerts: Sequence[Alert]) -> None:
        for alert in alerts:
            self.alerts.append(
                {
                    "id": str(uuid.uuid4()),
                    "dedupe_key": alert.dedupe_key,
                    **alert.to_dict(),
                    "created_at": _now(),
                }
            )

    # -- SubscriberDirectory -------------------------------------------

    def watchers_of(self, company_id: str) -> List[str]:
        return list(self.watchers.get(company_id, []))
