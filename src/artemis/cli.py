"""CLI interface for ARTEMIS."""

import asyncio
import logging
import shutil
import sys
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

import click
import structlog
from dateutil import parser as date_parser
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .analysis import (
    analyze_article,
    compute_dashboard_stats,
    dispatch_alert,
    generate_mock_article,
    get_ecommerce_insights,
    run_scan,
    should_alert,
    wait_for_pending_saves,
)
from .analysis.stats import risk_breakdown
from .config import Config, load_config
from .llm import LLMClient, TokenTracker
from .models.data import AnalysisRequest, ArticleAnalysis, Platform, Sensitivity, today
from .monitor import ScanMonitor
from .output import (
    build_gmail_link,
    build_mailto_link,
    export_analyses,
    format_file_size,
    generate_html,
    load_import_file,
)
from .state import StateManager

logger = structlog.get_logger()
console = Console()

MANUAL_ENTRY_IP = "Manual Input / Direct Entry"

LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


@dataclass
class AppContext:
    """State shared by all commands of one CLI invocation."""

    config_path: Optional[Path]
    verbose: int
    overrides: dict[str, Any] = field(default_factory=dict)
    config: Optional[Config] = None
    store: Optional[StateManager] = None

    def llm_client(self) -> LLMClient:
        return LLMClient(self.config.llm, TokenTracker())


def _configure_logging(level: int) -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


async def _open(app: AppContext) -> None:
    """Load configuration, apply the log level and open the state store."""
    cfg = load_config(app.config_path, app.overrides)

    if app.verbose == 1:
        log_level = logging.INFO
    elif app.verbose >= 2:
        log_level = logging.DEBUG
    else:
        log_level = LEVEL_MAP.get(cfg.logging.level.upper(), logging.INFO)

    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(log_level))

    app.config = cfg
    app.store = StateManager(cfg.state.db_path)
    await app.store.initialize(cfg.alerts.recipients)


def _run(ctx: click.Context, command: Callable[..., Awaitable[None]], *args: Any) -> None:
    """Run an async command with the CLI's error handling."""
    app: AppContext = ctx.obj

    async def runner() -> None:
        await _open(app)
        await command(app, *args)

    try:
        asyncio.run(runner())
    except click.ClickException:
        raise
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error("Fatal error", error=str(e), exc_info=app.verbose >= 2)
        sys.exit(1)


def _sentiment_style(score: float) -> str:
    return "green" if score >= 0 else "red"


def _print_analysis(analysis: ArticleAnalysis) -> None:
    lines = [
        f"[bold]{analysis.source}[/bold] • {analysis.date}",
        f"Topic: {analysis.primary_topic}",
        f"Sentiment: [{_sentiment_style(analysis.sentiment_score)}]"
        f"{analysis.sentiment_label} ({analysis.sentiment_score:+.2f})[/]",
        f"Risk: [{'bold red' if analysis.is_high_risk else 'green'}]{analysis.risk_category}[/]",
        "",
        analysis.summary,
    ]
    if analysis.key_entities:
        lines.append(f"\nEntities: {', '.join(analysis.key_entities)}")
    if analysis.references:
        lines.append("References:")
        lines.extend(f"  - {r.type}: {r.name} ({r.url})" for r in analysis.references)
    if analysis.ip_address:
        lines.append(f"IP Address: {analysis.ip_address}")
    if analysis.alert_summary:
        lines.append(f"\n[bold red]{analysis.alert_summary}[/]")

    console.print(
        Panel(
            "\n".join(lines),
            title=analysis.article_id,
            border_style="red" if analysis.is_high_risk else "blue",
        )
    )


def _print_analysis_table(articles: list[ArticleAnalysis], title: str) -> None:
    table = Table(title=title)
    table.add_column("Date")
    table.add_column("Source")
    table.add_column("Topic")
    table.add_column("Sentiment", justify="right")
    table.add_column("Risk")
    table.add_column("Summary", overflow="fold")

    for a in articles:
        table.add_row(
            a.date,
            a.source,
            a.primary_topic,
            f"[{_sentiment_style(a.sentiment_score)}]{a.sentiment_score:+.2f}[/]",
            f"[bold red]{a.risk_category}[/]" if a.is_high_risk else a.risk_category,
            a.summary,
        )

    console.print(table)


def _normalize_date(ctx: click.Context, param: click.Parameter, value: str) -> str:
    try:
        return date_parser.parse(value).strftime("%Y-%m-%d")
    except (ValueError, OverflowError):
        raise click.BadParameter(f"Unrecognized date: {value}")


def _require_admin(app: AppContext, password: str) -> None:
    if password != app.config.alerts.admin_password:
        raise click.ClickException("Admin access denied")


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--db", type=click.Path(path_type=Path), help="Override state database path")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v, -vv)")
@click.pass_context
def main(ctx: click.Context, config: Optional[Path], db: Optional[Path], verbose: int) -> None:
    """ARTEMIS - AI Real-Time Event Monitoring & Intelligence System."""
    _configure_logging(logging.WARNING)

    overrides: dict[str, Any] = {}
    if db:
        overrides["state.db_path"] = str(db)

    ctx.obj = AppContext(config_path=config, verbose=verbose, overrides=overrides)


@main.command("init-db")
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create the state database and seed default sources and recipients."""

    async def command(app: AppContext) -> None:
        console.print(f"State database ready at {app.store.db_path}")

    _run(ctx, command)


@main.command()
@click.argument("text", required=False)
@click.option("--file", "text_file", type=click.Path(exists=True, path_type=Path), help="Read content from a file")
@click.option("--source", "-s", required=True, help="Platform or outlet the content came from")
@click.option("--date", "date_", default=today, show_default="today", callback=_normalize_date, help="Publication date")
@click.option("--url", help="Permalink to the post")
@click.option("--ip", "ip_address", default=MANUAL_ENTRY_IP, help="Origin IP address of the poster")
@click.option("--thinking", is_flag=True, help="Use the thinking model for deeper analysis")
@click.option("--no-save", is_flag=True, help="Do not store the result")
@click.option("--notify", is_flag=True, help="Email an alert if the content is flagged")
@click.pass_context
def analyze(
    ctx: click.Context,
    text: Optional[str],
    text_file: Optional[Path],
    source: str,
    date_: str,
    url: Optional[str],
    ip_address: str,
    thinking: bool,
    no_save: bool,
    notify: bool,
) -> None:
    """Analyze a single post or article."""
    if text_file:
        text = text_file.read_text(encoding="utf-8")
    if not text:
        raise click.UsageError("Provide TEXT or --file")

    request = AnalysisRequest(text=text, source=source, date=date_, url=url, ip_address=ip_address)

    async def command(app: AppContext) -> None:
        settings = await app.store.get_settings()
        llm_client = app.llm_client()

        analysis = await analyze_article(
            request,
            llm_client,
            store=None if no_save else app.store,
            thinking=thinking,
            sensitivity=settings.sensitivity,
        )
        await wait_for_pending_saves()
        _print_analysis(analysis)

        gmail_link = build_gmail_link(analysis)
        if gmail_link:
            console.print(f"Forward via Gmail: {gmail_link}", soft_wrap=True)

        if notify and settings.email_enabled and should_alert(analysis, settings.sensitivity):
            alert = await dispatch_alert(analysis, settings, llm_client, app.store, app.config.email)
            console.print(f"Alert {alert.status.lower()} to {alert.recipient}: {alert.subject}")

    _run(ctx, command)


@main.command()
@click.option(
    "--platform",
    "-p",
    default=Platform.X_TWITTER.value,
    show_default=True,
    help="Platform to imitate",
)
@click.pass_context
def simulate(ctx: click.Context, platform: str) -> None:
    """Generate a realistic example post for testing detection."""

    async def command(app: AppContext) -> None:
        post = await generate_mock_article(app.llm_client(), platform)
        console.print(
            Panel(
                f"{post.text}\n\nSource: {post.source}\nDate: {post.date}\n"
                f"URL: {post.url or '-'}\nIP: {post.ip_address or '-'}",
                title="Example post",
            )
        )

    _run(ctx, command)


@main.command()
@click.option("--count", "-n", type=click.IntRange(1, 20), default=3, show_default=True, help="Posts to scrape")
@click.option("--platform", "-p", help="Platform mix to scrape (defaults to monitor.platform)")
@click.pass_context
def scan(ctx: click.Context, count: int, platform: Optional[str]) -> None:
    """Scrape, analyze and alert on a batch of posts."""

    async def command(app: AppContext) -> None:
        settings = await app.store.get_settings()
        result = await run_scan(
            app.llm_client(),
            app.store,
            settings,
            count=count,
            platform=platform or app.config.monitor.platform,
            email_config=app.config.email,
        )

        _print_analysis_table(result.articles, "Scan results")
        console.print(Panel(result.summary, title="Scan report"))

        breakdown = ", ".join(f"{risk}: {n}" for risk, n in risk_breakdown(result.articles).items())
        console.print(f"Items processed: {len(result.articles)}  High risk: {result.high_risk_count}  ({breakdown})")

        if result.alerts:
            console.print(f"[bold red]SCAN COMPLETE: {len(result.alerts)} Alerts Sent[/]")
        else:
            console.print(f"[green]Scan complete. {len(result.articles)} items processed.[/]")

    _run(ctx, command)


@main.command()
@click.option(
    "--interval",
    type=click.IntRange(min=1),
    help="Minutes between scans (overrides monitor.interval_minutes)",
)
@click.option("--max-scans", type=int, help="Stop after this many scans")
@click.pass_context
def watch(ctx: click.Context, interval: Optional[int], max_scans: Optional[int]) -> None:
    """Scan continuously until interrupted."""
    if interval:
        ctx.obj.overrides["monitor.interval_minutes"] = interval

    async def command(app: AppContext) -> None:
        monitor = ScanMonitor(app.config, app.llm_client(), app.store)
        monitor.setup_signal_handlers(asyncio.get_running_loop())
        await monitor.start(max_scans=max_scans)

    _run(ctx, command)


@main.command()
@click.option("--limit", "-n", type=int, default=50, show_default=True, help="Records to show")
@click.pass_context
def history(ctx: click.Context, limit: int) -> None:
    """Show stored analyses, newest first."""

    async def command(app: AppContext) -> None:
        articles = await app.store.list_analyses(limit=limit)
        if not articles:
            console.print("No history yet.")
            return
        _print_analysis_table(articles, f"History ({len(articles)} records)")

    _run(ctx, command)


@main.command()
@click.option("--limit", "-n", type=int, default=20, show_default=True, help="Runs to show")
@click.pass_context
def scans(ctx: click.Context, limit: int) -> None:
    """Show recent scan runs."""

    async def command(app: AppContext) -> None:
        table = Table(title="Scan runs")
        for column in ("Started", "Platform", "Status", "Items", "Alerts", "Error"):
            table.add_column(column)
        for run in await app.store.list_scans(limit=limit):
            table.add_row(
                run["started_at"],
                run["platform"] or "",
                run["status"],
                str(run["items_processed"]),
                str(run["alerts_raised"]),
                run["error_message"] or "",
            )
        console.print(table)

    _run(ctx, command)


@main.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show dashboard statistics over stored analyses."""

    async def command(app: AppContext) -> None:
        figures = compute_dashboard_stats(await app.store.list_analyses())
        if figures is None:
            console.print("No analyzed content yet.")
            return

        console.print(f"Total articles: [bold]{figures.total_articles}[/]")
        console.print(
            f"Avg sentiment: [{_sentiment_style(figures.average_sentiment)}]{figures.average_sentiment:+.2f}[/]"
        )
        console.print(f"High risk: [bold red]{figures.high_risk_count}[/]")

        for title, counts in (
            ("Topic distribution", figures.topic_counts),
            ("Sentiment", figures.sentiment_bins),
            ("Risk categories", figures.risk_counts),
        ):
            table = Table(title=title)
            table.add_column("Label")
            table.add_column("Count", justify="right")
            for label, count in counts.items():
                table.add_row(label, str(count))
            console.print(table)

    _run(ctx, command)


@main.command()
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Override HTML output path")
@click.pass_context
def report(ctx: click.Context, output: Optional[Path]) -> None:
    """Write an HTML intelligence report of stored analyses."""

    async def command(app: AppContext) -> None:
        articles = await app.store.list_analyses()
        path = generate_html(
            articles,
            compute_dashboard_stats(articles),
            output or app.config.output.report_path,
            title=app.config.output.title,
            timezone=app.config.output.timezone,
        )
        console.print(f"Report written to {path}")

    _run(ctx, command)


@main.command()
@click.pass_context
def ecommerce(ctx: click.Context) -> None:
    """Show the e-commerce market intelligence snapshot."""

    async def command(app: AppContext) -> None:
        data = await get_ecommerce_insights(app.llm_client())

        trends = Table(title="Trending buying cultures")
        for column in ("Trend", "Growth", "Tag", "Description"):
            trends.add_column(column)
        for t in data.trends:
            trends.add_row(t.title, t.growth, t.tag, t.description)

        platforms = Table(title="Platform performance")
        platforms.add_column("Platform")
        platforms.add_column("Order volume", justify="right")
        platforms.add_column("Satisfaction", justify="right")
        for p in data.platforms:
            platforms.add_row(p.platform, f"{p.order_volume:,.0f}", f"{p.customer_satisfaction:.0f}")

        products = Table(title="Most loved products")
        for column in ("Product", "Category", "Price", "Platform", "Rating", "Sentiment", "Review"):
            products.add_column(column)
        for p in data.products:
            products.add_row(
                p.product_name,
                p.category,
                p.price,
                p.platform,
                f"{p.rating:.1f}",
                f"{p.sentiment_score:+.2f}",
                p.review_snippet,
            )

        for table in (trends, platforms, products):
            console.print(table)

    _run(ctx, command)


@main.group()
def alerts() -> None:
    """Inspect the alert log."""


@alerts.command("list")
@click.pass_context
def alerts_list(ctx: click.Context) -> None:
    """List logged alerts, newest first."""

    async def command(app: AppContext) -> None:
        entries = await app.store.list_alerts()
        if not entries:
            console.print("No alerts logged.")
            return

        table = Table(title=f"Alert log ({len(entries)})")
        for column in ("ID", "Time", "Recipient", "Risk", "Source", "Subject", "Status"):
            table.add_column(column)
        for a in entries:
            table.add_row(
                a.id,
                a.timestamp,
                a.recipient,
                a.risk_level,
                a.source,
                a.subject,
                f"[green]{a.status}[/]" if a.status == "Sent" else f"[red]{a.status}[/]",
            )
        console.print(table)

    _run(ctx, command)


@alerts.command("link")
@click.argument("alert_id")
@click.pass_context
def alerts_link(ctx: click.Context, alert_id: str) -> None:
    """Print a mailto: link to resend an alert by hand."""

    async def command(app: AppContext) -> None:
        for entry in await app.store.list_alerts():
            if entry.id == alert_id:
                console.print(build_mailto_link(entry), soft_wrap=True)
                return
        raise click.ClickException(f"Unknown alert: {alert_id}")

    _run(ctx, command)


@alerts.command("delete")
@click.argument("alert_id")
@click.pass_context
def alerts_delete(ctx: click.Context, alert_id: str) -> None:
    """Delete one alert log entry."""

    async def command(app: AppContext) -> None:
        if not await app.store.delete_alert(alert_id):
            raise click.ClickException(f"Unknown alert: {alert_id}")
        console.print("Alert log deleted successfully")

    _run(ctx, command)


@alerts.command("clear")
@click.confirmation_option(prompt="Delete the entire alert log?")
@click.pass_context
def alerts_clear(ctx: click.Context) -> None:
    """Delete all alert log entries."""

    async def command(app: AppContext) -> None:
        removed = await app.store.clear_alerts()
        console.print(f"Deleted {removed} alerts")

    _run(ctx, command)


@main.group()
def sources() -> None:
    """Manage monitored data sources."""


@sources.command("list")
@click.pass_context
def sources_list(ctx: click.Context) -> None:
    """List data sources."""

    async def command(app: AppContext) -> None:
        entries = await app.store.list_sources()
        table = Table(title=f"Data sources ({len(entries)} configured)")
        for column in ("ID", "Name", "Platform", "URL", "Status", "Last scraped"):
            table.add_column(column)
        for s in entries:
            table.add_row(s.id, s.name, s.platform, s.url, s.status, s.last_scraped)
        console.print(table)

    _run(ctx, command)


@sources.command("add")
@click.option("--name", required=True)
@click.option("--url", required=True)
@click.option(
    "--platform",
    type=click.Choice([p.value for p in Platform]),
    default=Platform.NEWS_PAPER.value,
    show_default=True,
)
@click.pass_context
def sources_add(ctx: click.Context, name: str, url: str, platform: str) -> None:
    """Add a data source target."""

    async def command(app: AppContext) -> None:
        source = await app.store.add_source(name, url, platform)
        console.print(f"New data source target added ({source.id})")

    _run(ctx, command)


@sources.command("remove")
@click.argument("source_id")
@click.pass_context
def sources_remove(ctx: click.Context, source_id: str) -> None:
    """Remove a data source target."""

    async def command(app: AppContext) -> None:
        if not await app.store.delete_source(source_id):
            raise click.ClickException(f"Unknown data source: {source_id}")
        console.print("Data source target removed")

    _run(ctx, command)


@main.group()
def recipients() -> None:
    """Manage the alert distribution list (admin only for changes)."""


@recipients.command("list")
@click.pass_context
def recipients_list(ctx: click.Context) -> None:
    """Show the alert distribution list."""

    async def command(app: AppContext) -> None:
        table = Table(title="Alert distribution list")
        for column in ("ID", "Role", "Email", "Status"):
            table.add_column(column)
        for r in await app.store.list_recipients():
            table.add_row(r.id, r.role, r.email, "[green]Active[/]" if r.is_active else "Not Active")
        console.print(table)

    _run(ctx, command)


@recipients.command("toggle")
@click.argument("recipient_id")
@click.password_option("--password", confirmation_prompt=False, help="Admin password")
@click.pass_context
def recipients_toggle(ctx: click.Context, recipient_id: str, password: str) -> None:
    """Activate or deactivate a recipient."""

    async def command(app: AppContext) -> None:
        _require_admin(app, password)
        current = {r.id: r for r in await app.store.list_recipients()}
        if recipient_id not in current:
            raise click.ClickException(f"Unknown recipient: {recipient_id}")
        active = not current[recipient_id].is_active
        await app.store.set_recipient_active(recipient_id, active)
        console.print(f"{current[recipient_id].role}: {'Active' if active else 'Not Active'}")

    _run(ctx, command)


@recipients.command("set-email")
@click.argument("recipient_id")
@click.argument("email")
@click.password_option("--password", confirmation_prompt=False, help="Admin password")
@click.pass_context
def recipients_set_email(ctx: click.Context, recipient_id: str, email: str, password: str) -> None:
    """Change a recipient's email address."""

    async def command(app: AppContext) -> None:
        _require_admin(app, password)
        if not await app.store.set_recipient_email(recipient_id, email):
            raise click.ClickException(f"Unknown recipient: {recipient_id}")
        console.print(f"Recipient {recipient_id} now {email}")

    _run(ctx, command)


@main.group()
def docs() -> None:
    """Manage the document library."""


@docs.command("list")
@click.pass_context
def docs_list(ctx: click.Context) -> None:
    """List stored documents."""

    async def command(app: AppContext) -> None:
        table = Table(title="Documents")
        for column in ("ID", "Name", "Size", "Uploaded", "Location"):
            table.add_column(column)
        for d in await app.store.list_documents():
            table.add_row(d.id, d.name, d.size, d.upload_date, d.url)
        console.print(table)

    _run(ctx, command)


@docs.command("add")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def docs_add(ctx: click.Context, path: Path) -> None:
    """Copy a file into the document library."""

    async def command(app: AppContext) -> None:
        doc_id = str(uuid.uuid4())
        # Per-upload directory
        target_dir = app.config.output.documents_dir.expanduser().resolve() / doc_id
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / path.name
        shutil.copy2(path, target)

        doc = await app.store.add_document(
            path.name, format_file_size(path.stat().st_size), target.as_uri(), doc_id=doc_id
        )
        console.print(f"Document uploaded and saved ({doc.id})")

    _run(ctx, command)


def _document_path(url: str) -> Optional[Path]:
    parsed = urlparse(url)
    if parsed.scheme != "file":
        return None
    return Path(url2pathname(parsed.path))


@docs.command("remove")
@click.argument("document_id")
@click.pass_context
def docs_remove(ctx: click.Context, document_id: str) -> None:
    """Delete a document permanently."""

    async def command(app: AppContext) -> None:
        doc = await app.store.delete_document(document_id)
        if doc is None:
            raise click.ClickException(f"Unknown document: {document_id}")

        stored = _document_path(doc.url)
        if stored is not None and stored.exists():
            stored.unlink()
            if stored.parent.name == doc.id and not any(stored.parent.iterdir()):
                stored.parent.rmdir()
        console.print(f'Document "{doc.name}" deleted permanently')

    _run(ctx, command)


@main.group("settings")
def settings_group() -> None:
    """View or change alerting settings."""


@settings_group.command("show")
@click.pass_context
def settings_show(ctx: click.Context) -> None:
    """Show current settings."""

    async def command(app: AppContext) -> None:
        current = await app.store.get_settings()
        console.print(f"Alert email: {current.email}")
        console.print(f"Email alerts: {'enabled' if current.email_enabled else 'disabled'}")
        console.print(f"Sensitivity: {current.sensitivity}")

    _run(ctx, command)


@settings_group.command("set")
@click.option("--email", help="Primary alert recipient")
@click.option("--email-enabled/--email-disabled", default=None, help="Toggle automated alert emails")
@click.option("--sensitivity", type=click.Choice([s.value for s in Sensitivity]))
@click.pass_context
def settings_set(
    ctx: click.Context,
    email: Optional[str],
    email_enabled: Optional[bool],
    sensitivity: Optional[str],
) -> None:
    """Update settings."""

    async def command(app: AppContext) -> None:
        current = await app.store.get_settings()
        if email is not None:
            current.email = email
        if email_enabled is not None:
            current.email_enabled = email_enabled
        if sensitivity is not None:
            current.sensitivity = sensitivity
        await app.store.save_settings(current)
        console.print("Settings saved")

    _run(ctx, command)


@main.command("export")
@click.option("--dir", "directory", type=click.Path(file_okay=False, path_type=Path), help="Target directory")
@click.pass_context
def export_cmd(ctx: click.Context, directory: Optional[Path]) -> None:
    """Download a JSON backup of analysis history."""

    async def command(app: AppContext) -> None:
        articles = await app.store.list_analyses()
        try:
            path = export_analyses(articles, directory or app.config.output.export_dir)
        except ValueError as e:
            raise click.ClickException(str(e))
        console.print(f"Exported {len(articles)} articles to {path}")

    _run(ctx, command)


@main.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--mode", type=click.Choice(["merge", "replace"]), default="merge", show_default=True)
@click.pass_context
def import_cmd(ctx: click.Context, path: Path, mode: str) -> None:
    """Import analysis history from a JSON backup."""

    async def command(app: AppContext) -> None:
        try:
            articles = load_import_file(path)
        except ValueError as e:
            raise click.ClickException(str(e))
        written = await app.store.import_analyses(articles, mode=mode)
        console.print(f"Successfully imported {written} articles.")

    _run(ctx, command)


@main.command()
@click.confirmation_option(
    prompt="WARNING: clear all analysis history and alerts? This action cannot be undone."
)
@click.pass_context
def clear(ctx: click.Context) -> None:
    """Permanently delete analysis history and the alert log."""

    async def command(app: AppContext) -> None:
        await app.store.clear_all()
        console.print("System cache and history cleared")

    _run(ctx, command)


if __name__ == "__main__":
    main()
