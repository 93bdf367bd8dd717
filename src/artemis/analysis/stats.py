"""Aggregate statistics over analyzed content."""

from collections import Counter
from dataclasses import dataclass
from typing import Optional

from ..models.data import ArticleAnalysis, SentimentLabel

SENTIMENT_SCALE = tuple(label.value for label in SentimentLabel)


@dataclass
class DashboardStats:
    total_articles: int
    average_sentiment: float
    topic_counts: dict[str, int]
    sentiment_bins: dict[str, int]
    risk_counts: dict[str, int]
    high_risk_count: int


def risk_breakdown(articles: list[ArticleAnalysis]) -> dict[str, int]:
    """Count articles per risk category, in first-seen order."""
    return dict(Counter(a.risk_category for a in articles))


def compute_dashboard_stats(articles: list[ArticleAnalysis]) -> Optional[DashboardStats]:
    """
    Compute headline dashboard figures.

    Sentiment bins are always present, in label order from most negative to
    most positive; labels outside the scale are not binned.

    Returns:
        Stats, or None when there are no articles
    """
    if not articles:
        return None

    bins = {label: 0 for label in SENTIMENT_SCALE}
    for article in articles:
        if article.sentiment_label in bins:
            bins[article.sentiment_label] += 1

    return DashboardStats(
        total_articles=len(articles),
        average_sentiment=sum(a.sentiment_score for a in articles) / len(articles),
        topic_counts=dict(Counter(a.primary_topic for a in articles)),
        sentiment_bins=bins,
        risk_counts=risk_breakdown(articles),
        high_risk_count=sum(1 for a in articles if a.is_high_risk),
    )
