"""Abstract interfaces for the engine's external collaborators."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from esg_signals.core.types import Alert, ESGScore, GreenwashingFlag, Indicator


class DataStore(ABC):
    """Durable storage the pipelines write results to.

    Implementations may perform I/O and are expected to raise
    PersistenceError when a write or lookup fails. The pipelines never
    catch these errors themselves, so a failed write aborts the request.
    """

    @abstractmethod
    def insert_indicators(
        self, report_id: str, company_id: str, indicators: Sequence[Indicator]
    ) -> None:
        """Persist extracted indicators keyed by (report_id, company_id)."""

    @abstractmethod
    def insert_flags(
        self, report_id: str, company_id: str, flags: Sequence[GreenwashingFlag]
    ) -> None:
        """Persist greenwashing flags keyed by (report_id, company_id)."""

    @abstractmethod
    def insert_score(
        self, report_id: str, company_id: str, score: ESGScore
    ) -> Dict[str, Any]:
        """Persist a score and return the stored record."""

    @abstractmethod
    def update_report_status(self, report_id: str, status: str) -> None:
        """Transition a report's processing status."""

    @abstractmethod
    def insert_news_article(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Persist an analyzed article and return the stored record (with ``id``)."""

    @abstractmethod
    def get_company_name(self, company_id: str) -> Optional[str]:
        """Look up a company's display name, or None if unknown."""

    @abstractmethod
    def insert_alerts(self, alerts: Sequence[Alert]) -> None:
        """Persist alert records, one per subscriber."""


class SubscriberDirectory(ABC):
    """Resolves which users watch a company."""

    @abstractmethod
    def watchers_of(self, company_id: str) -> List[str]:
        """Return the user ids watching the company."""
