"""Mail compose links for manual alert forwarding."""

from urllib.parse import quote

from ..models.data import AlertEntry, ArticleAnalysis

GMAIL_COMPOSE_URL = "https://mail.google.com/mail/?view=cm&fs=1"


def build_mailto_link(alert: AlertEntry) -> str:
    """mailto: link that opens a logged alert in the local mail client."""
    return f"mailto:{alert.recipient}?subject={quote(alert.subject)}&body={quote(alert.body)}"


def intelligence_report_text(analysis: ArticleAnalysis) -> str:
    """Plain text incident report for an analysis, led by its alert line."""
    references = "\n".join(f"- {r.name} ({r.url})" for r in analysis.references) or "None"
    return (
        f"{analysis.alert_summary or ''}\n\n"
        f"---\n"
        f"CRITICAL INTELLIGENCE REPORT\n"
        f"Risk Category: {analysis.risk_category}\n"
        f"Source: {analysis.source}\n"
        f"Date: {analysis.date}\n"
        f"IP Address: {analysis.ip_address or 'Unknown'}\n\n"
        f"Analysis Summary:\n{analysis.summary}\n\n"
        f"Sentiment: {analysis.sentiment_label} ({analysis.sentiment_score})\n"
        f"Entities: {', '.join(analysis.key_entities)}\n\n"
        f"References:\n{references}"
    )


def build_gmail_link(analysis: ArticleAnalysis) -> str | None:
    """
    Gmail compose link pre-filled with the incident report.

    Returns:
        The link, or None when the analysis carries no alert summary
    """
    if not analysis.alert_summary:
        return None
    subject = f"\U0001F6A8 ARTEMIS ALERT: {analysis.risk_category} detected on {analysis.source}"
    return f"{GMAIL_COMPOSE_URL}&su={quote(subject)}&body={quote(intelligence_report_text(analysis))}"
