"""HTML intelligence report generation using Jinja2."""

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional
from urllib.parse import urlparse
from zoneinfo import ZoneInfo

import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..models.data import SENTIMENT_COLORS, ArticleAnalysis, topic_color

if TYPE_CHECKING:
    from ..analysis.stats import DashboardStats

logger = structlog.get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


def _to_timezone(dt: datetime, tz: str) -> datetime:
    """Convert datetime to specified timezone."""
    if tz == "local":
        return dt.astimezone()
    else:
        return dt.astimezone(ZoneInfo(tz))


def _safe_url(url: Optional[str]) -> str:
    """Return ``url`` if it is an http(s) link, otherwise an empty string."""
    if not url:
        return ""
    scheme = urlparse(url.strip()).scheme.lower()
    return url.strip() if scheme in ("http", "https") else ""


def _environment(timezone: str) -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html", "xml"]),
    )
    env.filters["to_tz"] = lambda dt: _to_timezone(dt, timezone)
    env.filters["strftime"] = lambda dt, fmt: dt.strftime(fmt)
    env.filters["signed"] = lambda value: f"{value:+.2f}"
    env.filters["safe_url"] = _safe_url
    env.globals["topic_color"] = topic_color
    env.globals["sentiment_colors"] = SENTIMENT_COLORS
    return env


def render_report(
    articles: list[ArticleAnalysis],
    stats: Optional["DashboardStats"],
    title: str,
    generated_at: Optional[datetime] = None,
    timezone: str = "local",
) -> str:
    """
    Render the intelligence report as an HTML string.

    Args:
        articles: Analyses to list, high-risk items are highlighted
        stats: Aggregate figures for the header cards
        title: Report title
        generated_at: Report timestamp (defaults to now)
        timezone: Target timezone for timestamp display ("local" or IANA timezone name)

    Returns:
        Rendered HTML
    """
    template = _environment(timezone).get_template("report.html")
    return template.render(
        title=title,
        articles=articles,
        high_risk=[a for a in articles if a.is_high_risk],
        stats=stats,
        generated_at=generated_at or datetime.now().astimezone(),
    )


def generate_html(
    articles: list[ArticleAnalysis],
    stats: Optional["DashboardStats"],
    output_path: Path,
    title: str = "ARTEMIS Intelligence Report",
    timezone: str = "local",
) -> str:
    """
    Render the report and write it to disk.

    Args:
        articles: Analyses to include
        stats: Aggregate figures
        output_path: Destination; strftime placeholders are expanded with the current date
        title: Report title
        timezone: Target timezone for timestamp display

    Returns:
        Path to generated HTML file as string
    """
    generated_at = datetime.now().astimezone()
    html_content = render_report(articles, stats, title, generated_at, timezone)

    output_path = Path(output_path).expanduser()
    if "%" in str(output_path):
        output_path = Path(generated_at.strftime(str(output_path)))

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(html_content)

    logger.info("Generated HTML report", path=str(output_path), articles=len(articles))
    return str(output_path)
