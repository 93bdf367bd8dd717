from datetime import datetime, timezone

from artemis.models import ArticleAnalysis, Reference, RiskCategory, SentimentLabel, topic_color
from artemis.models.data import TOPIC_COLORS, today


def test_from_dict_fills_defaults():
    analysis = ArticleAnalysis.from_dict({})

    assert analysis.article_id == "unknown"
    assert analysis.source == "Unknown Source"
    assert analysis.date == today()
    assert analysis.summary == "No summary available"
    assert analysis.primary_topic == "Other"
    assert analysis.sentiment_score == 0.0
    assert analysis.sentiment_label == "Neutral"
    assert analysis.risk_category == "None"
    assert analysis.key_entities == []
    assert analysis.alert_summary is None


def test_from_dict_accepts_enums_and_reference_dicts():
    analysis = ArticleAnalysis.from_dict(
        {
            "article_id": "a1",
            "sentiment_label": SentimentLabel.VERY_NEGATIVE,
            "risk_category": RiskCategory.HATE_SPEECH,
            "references": [{"name": "@troll", "url": "https://x.com/troll"}],
            "created_at": "2025-03-14T09:00:00+00:00",
        }
    )

    assert analysis.sentiment_label == "Very Negative"
    assert analysis.risk_category == "Hate Speech"
    assert analysis.references == [Reference(type="External", name="@troll", url="https://x.com/troll")]
    assert analysis.created_at == datetime(2025, 3, 14, 9, 0, tzinfo=timezone.utc)


def test_high_risk_means_any_category(make_analysis):
    assert make_analysis(risk_category="Misinformation").is_high_risk
    assert not make_analysis(risk_category="None").is_high_risk


def test_to_dict_is_json_ready(make_analysis):
    data = make_analysis(created_at=datetime(2025, 3, 14, tzinfo=timezone.utc)).to_dict()

    assert data["created_at"] == "2025-03-14T00:00:00+00:00"
    assert data["references"] == [{"type": "Page", "name": "City Parks", "url": "https://facebook.com/cityparks"}]


def test_topic_color_falls_back_to_other():
    assert topic_color("Technology") == TOPIC_COLORS["Technology"]
    assert topic_color("Astrology") == TOPIC_COLORS["Other"]
