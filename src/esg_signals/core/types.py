# src/esg_signals/core/types.py

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple

# ---------------------------------------------------------------------
# Closed vocabularies
# ---------------------------------------------------------------------

ENVIRONMENTAL = "environmental"
SOCIAL = "social"
GOVERNANCE = "governance"
CATEGORIES = (ENVIRONMENTAL, SOCIAL, GOVERNANCE)

FLAG_VAGUE_CLAIM = "VAGUE_CLAIM"
FLAG_INCONSISTENCY = "INCONSISTENCY"
FLAG_MISSING_DATA = "MISSING_DATA"

SEVERITY_MEDIUM = "MEDIUM"
SEVERITY_HIGH = "HIGH"

RISK_LOW = "LOW"
RISK_MEDIUM = "MEDIUM"
RISK_HIGH = "HIGH"
RISK_CRITICAL = "CRITICAL"

ALERT_NEW_REPORT = "NEW_REPORT"
ALERT_SEVERITY_WARNING = "WARNING"

STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"


@dataclass(frozen=True)
class Indicator:
    """
    A single ESG data point extracted from one source sentence.
    """
    category: str
    subcategory: str
    indicator_name: str
    indicator_value: str
    context: str
    sentiment: float
    credibility_score: float
    unit: Optional[str] = None
    source_page: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class GreenwashingFlag:
    flag_type: str
    severity: str
    description: str
    evidence: Dict[str, int]
    resolved: bool = False
    resolution_notes: Optional[str] = None

    def dedupe_key(self, report_id: str) -> str:
        return f"{report_id}:{self.flag_type}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ESGScore:
    overall_score: float
    environmental_score: float
    social_score: float
    governance_score: float
    risk_level: str
    confidence_score: float
    metrics: Dict[str, int]
    framework_used: str = "HYBRID"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class NewsSignal:
    sentiment: float
    esg_relevance: float
    topics: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sentiment": self.sentiment,
            "esg_relevance": self.esg_relevance,
            "topics": list(self.topics),
        }


@dataclass
class NewsArticle:
    """Incoming article as submitted to the news pipeline."""
    company_id: str
    title: str
    content: str
    source: str = ""
    source_url: str = ""
    published_at: str = ""

    @classmethod
    def from_request(cls, payload: Dict[str, Any]) -> "NewsArticle":
        return cls(
            company_id=payload["companyId"],
            title=payload.get("title") or "",
            content=payload.get("content") or "",
            source=payload.get("source") or "",
            source_url=payload.get("sourceUrl") or "",
            published_at=payload.get("publishedAt") or "",
        )

    def to_record(self, signal: NewsSignal) -> Dict[str, Any]:
        return {
            "company_id": self.company_id,
            "title": self.title,
            "content": self.content,
            "source": self.source,
            "source_url": self.source_url,
            "published_at": self.published_at,
            **signal.to_dict(),
            "processing_status": STATUS_COMPLETED,
        }


@dataclass
class Alert:
    user_id: str
    company_id: str
    alert_type: str
    severity: str
    title: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    read: bool = False
    expires_at: Optional[str] = None

    @property
    def dedupe_key(self) -> str:
        return f"{self.data.get('article_id')}:{self.user_id}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
