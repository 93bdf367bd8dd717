"""Alert triggering, alert text generation and scan reports."""

import uuid
from datetime import datetime, timezone
from typing import Optional

import structlog

from ..llm.client import LLMClient
from ..llm.prompts import (
    format_alert_email_prompt,
    format_alert_summary_prompt,
    format_scan_report_prompt,
)
from ..llm.schemas import AlertEmailResponse
from ..models.data import AlertEntry, AlertStatus, ArticleAnalysis, Sensitivity, SentimentLabel

logger = structlog.get_logger(__name__)

SCAN_REPORT_FALLBACK = "Scan complete. Review detailed results below."
EMPTY_SCAN_REPORT = "No articles were processed."

# Labels that trigger an alert at each sensitivity level
ALERT_LABELS: dict[str, frozenset[str]] = {
    Sensitivity.LOW.value: frozenset({SentimentLabel.VERY_NEGATIVE.value}),
    Sensitivity.MEDIUM.value: frozenset(
        {SentimentLabel.VERY_NEGATIVE.value, SentimentLabel.NEGATIVE.value}
    ),
    Sensitivity.HIGH.value: frozenset(
        {
            SentimentLabel.VERY_NEGATIVE.value,
            SentimentLabel.NEGATIVE.value,
            SentimentLabel.NEUTRAL.value,
        }
    ),
}


def should_alert(analysis: ArticleAnalysis, sensitivity: str = Sensitivity.MEDIUM.value) -> bool:
    """
    Decide whether an analysis warrants an alert.

    Any detected risk category always alerts. Otherwise the sentiment label is
    compared against the threshold for the sensitivity level; unknown levels
    behave as medium.
    """
    if analysis.is_high_risk:
        return True
    labels = ALERT_LABELS.get(sensitivity, ALERT_LABELS[Sensitivity.MEDIUM.value])
    return analysis.sentiment_label in labels


async def generate_alert_summary(analysis: ArticleAnalysis, llm_client: LLMClient) -> Optional[str]:
    """Generate a one-line urgent alert. Returns None if generation fails."""
    try:
        content = await llm_client.chat_completion(format_alert_summary_prompt(analysis))
    except Exception as e:
        logger.warning("Failed to generate alert summary", article_id=analysis.article_id, error=str(e))
        return None
    return content.strip() or None


async def generate_alert_email(
    analysis: ArticleAnalysis,
    recipient: str,
    llm_client: LLMClient,
) -> tuple[str, str]:
    """
    Generate a formal alert email for a flagged analysis.

    Args:
        analysis: Flagged analysis
        recipient: Address the email is written to
        llm_client: LLM client for API calls

    Returns:
        Tuple of (subject, body); a static template is used if generation fails
    """
    try:
        response = await llm_client.chat_completion_structured(
            format_alert_email_prompt(analysis, recipient),
            response_format=AlertEmailResponse,
        )
        return response.subject, response.body
    except Exception as e:
        logger.error("Failed to generate alert email", article_id=analysis.article_id, error=str(e))
        return (
            f"Automated Alert: {analysis.risk_category}",
            f"High risk detected in {analysis.source}. Please review dashboard.",
        )


def build_alert_entry(
    analysis: ArticleAnalysis,
    recipient: str,
    subject: str,
    body: str,
    status: str = AlertStatus.SENT.value,
) -> AlertEntry:
    """Create an alert log entry for a flagged analysis."""
    return AlertEntry(
        id=str(uuid.uuid4()),
        timestamp=datetime.now(timezone.utc).isoformat(),
        recipient=recipient,
        subject=subject,
        body=body,
        risk_level=analysis.risk_category,
        source=analysis.source,
        status=status,
    )


async def generate_scan_report(articles: list[ArticleAnalysis], llm_client: LLMClient) -> str:
    """
    Summarize a scan in one or two sentences.

    Returns:
        Executive summary, or a static message when there is nothing to
        summarize or the model call fails
    """
    if not articles:
        return EMPTY_SCAN_REPORT

    try:
        content = await llm_client.chat_completion(format_scan_report_prompt(articles))
    except Exception as e:
        logger.warning("Failed to generate scan report", error=str(e))
        return SCAN_REPORT_FALLBACK

    return content.strip() or SCAN_REPORT_FALLBACK
