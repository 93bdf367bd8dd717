import pytest

from artemis.analysis import compute_dashboard_stats
from artemis.analysis.stats import SENTIMENT_SCALE, risk_breakdown


def test_no_articles_gives_no_stats():
    assert compute_dashboard_stats([]) is None


def test_dashboard_figures(make_analysis):
    articles = [
        make_analysis(sentiment_score=0.6, sentiment_label="Positive", primary_topic="Technology"),
        make_analysis(
            sentiment_score=-0.9,
            sentiment_label="Very Negative",
            primary_topic="Religion/Beliefs",
            risk_category="Religious Desecration",
        ),
        make_analysis(sentiment_score=0.0, sentiment_label="Neutral", primary_topic="Technology"),
    ]

    stats = compute_dashboard_stats(articles)

    assert stats.total_articles == 3
    assert stats.average_sentiment == pytest.approx(-0.1)
    assert stats.topic_counts == {"Technology": 2, "Religion/Beliefs": 1}
    assert stats.risk_counts == {"None": 2, "Religious Desecration": 1}
    assert stats.high_risk_count == 1
    assert list(stats.sentiment_bins) == ["Very Negative", "Negative", "Neutral", "Positive", "Very Positive"]
    assert stats.sentiment_bins["Negative"] == 0
    assert stats.sentiment_bins["Very Negative"] == 1


def test_unknown_labels_are_not_binned(make_analysis):
    stats = compute_dashboard_stats([make_analysis(sentiment_label="Mixed")])

    assert sum(stats.sentiment_bins.values()) == 0
    assert stats.total_articles == 1


def test_risk_breakdown_keeps_first_seen_order(make_analysis):
    articles = [
        make_analysis(risk_category="Hate Speech"),
        make_analysis(risk_category="None"),
        make_analysis(risk_category="Hate Speech"),
    ]

    assert list(risk_breakdown(articles).items()) == [("Hate Speech", 2), ("None", 1)]


def test_sentiment_scale_runs_negative_to_positive():
    assert SENTIMENT_SCALE == ("Very Negative", "Negative", "Neutral", "Positive", "Very Positive")
