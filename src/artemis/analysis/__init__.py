"""Content analysis, alerting and scanning."""

from .alerts import generate_alert_email, generate_scan_report, should_alert
from .analyzer import analyze_article, wait_for_pending_saves
from .ecommerce import get_ecommerce_insights
from .scan import dispatch_alert, run_scan
from .scraper import generate_mock_article, generate_social_scrape_batch
from .stats import compute_dashboard_stats

__all__ = [
    "analyze_article",
    "compute_dashboard_stats",
    "dispatch_alert",
    "generate_alert_email",
    "generate_mock_article",
    "generate_scan_report",
    "generate_social_scrape_batch",
    "get_ecommerce_insights",
    "run_scan",
    "should_alert",
    "wait_for_pending_saves",
]
