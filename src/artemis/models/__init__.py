"""Core data models for ARTEMIS."""

from .data import (
    SENTIMENT_COLORS,
    TOPIC_COLORS,
    AlertEntry,
    AlertRecipient,
    AlertStatus,
    AnalysisRequest,
    AppSettings,
    ArticleAnalysis,
    DataSource,
    DocumentationFile,
    EcommerceData,
    EcommerceTrend,
    Platform,
    PlatformMetric,
    PrimaryTopic,
    ProductReview,
    Reference,
    ReferenceType,
    RiskCategory,
    ScanResult,
    Sensitivity,
    SentimentLabel,
    SourceStatus,
    topic_color,
)

__all__ = [
    "SENTIMENT_COLORS",
    "TOPIC_COLORS",
    "AlertEntry",
    "AlertRecipient",
    "AlertStatus",
    "AnalysisRequest",
    "AppSettings",
    "ArticleAnalysis",
    "DataSource",
    "DocumentationFile",
    "EcommerceData",
    "EcommerceTrend",
    "Platform",
    "PlatformMetric",
    "PrimaryTopic",
    "ProductReview",
    "Reference",
    "ReferenceType",
    "RiskCategory",
    "ScanResult",
    "Sensitivity",
    "SentimentLabel",
    "SourceStatus",
    "topic_color",
]
