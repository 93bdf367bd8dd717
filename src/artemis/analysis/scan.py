"""Scrape-and-analyze scans with automated alerting."""

from typing import Optional

import structlog

from ..config.models import EmailConfig
from ..llm.client import LLMClient
from ..models.data import AlertEntry, AlertStatus, AppSettings, ArticleAnalysis, ScanResult
from ..output.email import send_alert_email
from ..state.db import StateManager
from .alerts import build_alert_entry, generate_alert_email, generate_scan_report, should_alert
from .analyzer import analyze_article, wait_for_pending_saves
from .scraper import generate_social_scrape_batch

logger = structlog.get_logger(__name__)

DEFAULT_SCAN_PLATFORM = "News Papers, Magazines, and Social Media"


async def dispatch_alert(
    analysis: ArticleAnalysis,
    settings: AppSettings,
    llm_client: LLMClient,
    store: StateManager,
    email_config: Optional[EmailConfig] = None,
) -> AlertEntry:
    """
    Write, deliver and log the alert email for a flagged analysis.

    Without SMTP configuration the alert is only logged. A delivery failure is
    recorded on the alert entry as Failed rather than raised.

    Args:
        analysis: Flagged analysis
        settings: Current settings (primary recipient)
        llm_client: LLM client for API calls
        store: State store the alert is logged to
        email_config: SMTP configuration, if delivery is enabled

    Returns:
        The logged alert entry
    """
    subject, body = await generate_alert_email(analysis, settings.email, llm_client)
    status = AlertStatus.SENT.value
    alert = build_alert_entry(analysis, settings.email, subject, body, status)

    if email_config is not None:
        cc = await store.active_recipient_emails() if email_config.cc_distribution_list else []
        try:
            await send_alert_email(alert, email_config, cc)
        except Exception as e:
            logger.warning("Alert delivery failed", alert_id=alert.id, error=str(e))
            alert.status = AlertStatus.FAILED.value

    await store.add_alert(alert)
    return alert


async def run_scan(
    llm_client: LLMClient,
    store: StateManager,
    settings: AppSettings,
    count: int = 3,
    platform: str = DEFAULT_SCAN_PLATFORM,
    email_config: Optional[EmailConfig] = None,
) -> ScanResult:
    """
    Scrape a batch of posts, analyze each one and raise alerts.

    Args:
        llm_client: LLM client for API calls
        store: State store for analyses, alerts and scan runs
        settings: Alerting settings (recipient, email toggle, sensitivity)
        count: Number of posts to scrape
        platform: Platform mix to scrape
        email_config: SMTP configuration for delivering alerts

    Returns:
        Analyzed articles, the scan summary and the alerts raised
    """
    scan_id = await store.start_scan(platform)
    articles: list[ArticleAnalysis] = []
    alerts: list[AlertEntry] = []
    flagged = 0

    logger.info("Initiating scrape sequence", platform=platform, count=count)

    try:
        posts = await generate_social_scrape_batch(llm_client, count, platform)

        for post in posts:
            analysis = await analyze_article(
                post, llm_client, store=store, sensitivity=settings.sensitivity
            )
            articles.append(analysis)

            if not should_alert(analysis, settings.sensitivity):
                continue

            flagged += 1
            if not settings.email_enabled:
                continue

            try:
                alerts.append(await dispatch_alert(analysis, settings, llm_client, store, email_config))
            except Exception as e:
                logger.error(
                    "Failed to generate automated alert",
                    article_id=analysis.article_id,
                    error=str(e),
                )

        summary = await generate_scan_report(articles, llm_client)
        await store.mark_scraped()

    except Exception as e:
        logger.error("Scraping sequence failed", scan_id=scan_id, error=str(e))
        await store.complete_scan(scan_id, len(articles), flagged, str(e))
        raise

    finally:
        await wait_for_pending_saves()

    await store.complete_scan(scan_id, len(articles), flagged)

    result = ScanResult(articles=articles, summary=summary, alerts=alerts, scan_id=scan_id)
    logger.info(
        "Scan complete",
        processed=len(articles),
        flagged=flagged,
        alerts_sent=len(alerts),
        high_risk=result.high_risk_count,
    )
    return result
