"""Core data models for ARTEMIS."""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class SentimentLabel(str, Enum):
    """Five-point sentiment scale, ordered from most negative to most positive."""

    VERY_NEGATIVE = "Very Negative"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"
    POSITIVE = "Positive"
    VERY_POSITIVE = "Very Positive"


class PrimaryTopic(str, Enum):
    """Topic a post or article is mainly about."""

    TECHNOLOGY = "Technology"
    FINANCE_MARKETS = "Finance/Markets"
    POLITICS_POLICY = "Politics/Policy"
    HEALTH_SCIENCE = "Health/Science"
    ENVIRONMENT = "Environment"
    SPORTS = "Sports"
    CULTURE_LIFESTYLE = "Culture/Lifestyle"
    RELIGION_BELIEFS = "Religion/Beliefs"
    SOCIAL_UNREST = "Social Unrest"
    OTHER = "Other"


class RiskCategory(str, Enum):
    """Public-safety risk detected in content."""

    NONE = "None"
    RELIGIOUS_DESECRATION = "Religious Desecration"
    IDEOLOGICAL_SUBVERSION = "Ideological Subversion"
    HATE_SPEECH = "Hate Speech"
    PUBLIC_INCITEMENT = "Public Incitement"
    MISINFORMATION = "Misinformation"


class ReferenceType(str, Enum):
    """Kind of social entity referenced by content."""

    PROFILE = "Profile"
    PAGE = "Page"
    GROUP = "Group"
    CHANNEL = "Channel"
    EXTERNAL = "External"


class Platform(str, Enum):
    """Platform a monitored data source lives on."""

    RSS = "RSS"
    FACEBOOK = "Facebook"
    X_TWITTER = "X (Twitter)"
    INSTAGRAM = "Instagram"
    TIKTOK = "TikTok"
    NEWS_PAPER = "News Paper"
    MAGAZINE = "Magazine"


class SourceStatus(str, Enum):
    ACTIVE = "active"
    ERROR = "error"
    INACTIVE = "inactive"


class AlertStatus(str, Enum):
    SENT = "Sent"
    FAILED = "Failed"


class Sensitivity(str, Enum):
    """Alerting sensitivity: how negative content must be to raise an alert."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def today() -> str:
    """Today's date as YYYY-MM-DD."""
    return datetime.now().strftime("%Y-%m-%d")


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass
class Reference:
    """A social handle, page, channel or link mentioned in content."""

    type: str
    name: str
    url: str


@dataclass
class AnalysisRequest:
    """Raw content submitted for analysis."""

    text: str
    source: str
    date: str
    url: Optional[str] = None
    ip_address: Optional[str] = None


@dataclass
class ArticleAnalysis:
    """Structured classification of a single post or article."""

    article_id: str
    source: str
    date: str
    summary: str
    primary_topic: str
    sentiment_score: float
    sentiment_label: str
    risk_category: str
    key_entities: list[str] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)
    url: str = ""
    alert_summary: Optional[str] = None
    ip_address: Optional[str] = None
    original_post_content: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_high_risk(self) -> bool:
        """Whether any risk category was detected."""
        return bool(self.risk_category) and self.risk_category != RiskCategory.NONE.value

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> "ArticleAnalysis":
        """
        Build an analysis from a stored or imported row.

        Missing fields fall back to neutral defaults so partially filled
        rows can still be displayed.
        """
        references = [
            r if isinstance(r, Reference) else Reference(
                type=r.get("type", ReferenceType.EXTERNAL.value),
                name=r.get("name", ""),
                url=r.get("url", ""),
            )
            for r in (row.get("references") or [])
        ]

        created_at = row.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        if created_at is None:
            created_at = datetime.now(timezone.utc)

        score = row.get("sentiment_score")

        return cls(
            article_id=row.get("article_id") or "unknown",
            source=row.get("source") or "Unknown Source",
            url=row.get("url") or "",
            date=row.get("date") or today(),
            summary=row.get("summary") or "No summary available",
            primary_topic=_enum_value(row.get("primary_topic")) or PrimaryTopic.OTHER.value,
            sentiment_score=float(score) if score is not None else 0.0,
            sentiment_label=_enum_value(row.get("sentiment_label")) or SentimentLabel.NEUTRAL.value,
            risk_category=_enum_value(row.get("risk_category")) or RiskCategory.NONE.value,
            key_entities=list(row.get("key_entities") or []),
            references=references,
            alert_summary=row.get("alert_summary"),
            ip_address=row.get("ip_address"),
            original_post_content=row.get("original_post_content"),
            created_at=created_at,
        )


@dataclass
class AlertEntry:
    """A logged alert email."""

    id: str
    timestamp: str
    recipient: str
    subject: str
    body: str
    risk_level: str
    source: str
    status: str = AlertStatus.SENT.value


@dataclass
class DataSource:
    """A monitored feed, page or account."""

    id: str
    name: str
    platform: str
    url: str
    status: str = SourceStatus.ACTIVE.value
    last_scraped: str = "Pending..."


@dataclass
class DocumentationFile:
    """A file stored in the document library."""

    id: str
    name: str
    size: str
    upload_date: str
    url: str


@dataclass
class AlertRecipient:
    """An entry in the alert distribution list."""

    id: str
    role: str
    email: str
    is_active: bool


@dataclass
class AppSettings:
    """User-adjustable alerting settings."""

    email: str = "analyst@company.com"
    email_enabled: bool = True
    sensitivity: str = Sensitivity.MEDIUM.value


@dataclass
class EcommerceTrend:
    id: str
    title: str
    description: str
    growth: str
    tag: str


@dataclass
class PlatformMetric:
    platform: str
    order_volume: float
    customer_satisfaction: float


@dataclass
class ProductReview:
    id: str
    product_name: str
    category: str
    price: str
    platform: str
    rating: float
    sentiment_score: float
    review_snippet: str


@dataclass
class EcommerceData:
    """Snapshot of e-commerce market intelligence."""

    trends: list[EcommerceTrend]
    platforms: list[PlatformMetric]
    products: list[ProductReview]


@dataclass
class ScanResult:
    """Outcome of one scrape-and-analyze scan."""

    articles: list[ArticleAnalysis]
    summary: str
    alerts: list[AlertEntry] = field(default_factory=list)
    scan_id: Optional[str] = None

    @property
    def high_risk_count(self) -> int:
        """Number of analyzed items with a detected risk category."""
        return sum(1 for a in self.articles if a.is_high_risk)


TOPIC_COLORS: dict[str, str] = {
    PrimaryTopic.TECHNOLOGY.value: "#3B82F6",
    PrimaryTopic.FINANCE_MARKETS.value: "#10B981",
    PrimaryTopic.POLITICS_POLICY.value: "#6366F1",
    PrimaryTopic.HEALTH_SCIENCE.value: "#EC4899",
    PrimaryTopic.ENVIRONMENT.value: "#84CC16",
    PrimaryTopic.SPORTS.value: "#F59E0B",
    PrimaryTopic.CULTURE_LIFESTYLE.value: "#8B5CF6",
    PrimaryTopic.RELIGION_BELIEFS.value: "#7C3AED",
    PrimaryTopic.SOCIAL_UNREST.value: "#B91C1C",
    PrimaryTopic.OTHER.value: "#9CA3AF",
}

SENTIMENT_COLORS: dict[str, str] = {
    SentimentLabel.VERY_NEGATIVE.value: "#EF4444",
    SentimentLabel.NEGATIVE.value: "#F87171",
    SentimentLabel.NEUTRAL.value: "#9CA3AF",
    SentimentLabel.POSITIVE.value: "#34D399",
    SentimentLabel.VERY_POSITIVE.value: "#10B981",
}


def topic_color(topic: str) -> str:
    """Display colour for a topic, falling back to the Other colour."""
    return TOPIC_COLORS.get(topic, TOPIC_COLORS[PrimaryTopic.OTHER.value])
