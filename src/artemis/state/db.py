"""SQLite state management for analyses, alerts, sources and settings."""

import json
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional

import aiosqlite
import structlog

from ..config.models import RecipientConfig
from ..models.data import (
    AlertEntry,
    AlertRecipient,
    AppSettings,
    ArticleAnalysis,
    DataSource,
    DocumentationFile,
    Platform,
    SourceStatus,
)

logger = structlog.get_logger(__name__)

INITIAL_SOURCES = [
    ("Public News RSS", Platform.RSS, "https://news.google.com/rss"),
    ("The Daily Times", Platform.NEWS_PAPER, "https://dailytimes.example.com"),
    ("Tech Weekly", Platform.MAGAZINE, "https://techweekly.example.com"),
    ("Monitoring Page: Religious Debates", Platform.FACEBOOK, "https://facebook.com/groups/debates"),
    ("Hashtag: #PublicOpinion", Platform.X_TWITTER, "https://x.com/search?q=public"),
]

SETTINGS_KEY = "app_settings"

IMPORT_MODES = ("merge", "replace")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _analysis_row(analysis: ArticleAnalysis) -> tuple:
    return (
        analysis.article_id,
        analysis.created_at.isoformat(),
        analysis.source,
        analysis.url,
        analysis.ip_address,
        analysis.date,
        analysis.summary,
        analysis.primary_topic,
        analysis.sentiment_score,
        analysis.sentiment_label,
        analysis.risk_category,
        json.dumps(analysis.key_entities),
        json.dumps([asdict(r) for r in analysis.references]),
        analysis.original_post_content,
        analysis.alert_summary,
    )


def _row_to_analysis(row: aiosqlite.Row) -> ArticleAnalysis:
    data = dict(row)
    data["key_entities"] = json.loads(data["key_entities"]) if data.get("key_entities") else []
    data["references"] = json.loads(data["references"]) if data.get("references") else []
    return ArticleAnalysis.from_dict(data)


class StateManager:
    """Manages application state using SQLite."""

    def __init__(self, db_path: Path):
        """
        Initialize state manager.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> aiosqlite.Connection:
        return aiosqlite.connect(self.db_path, timeout=30.0)

    async def initialize(self, recipients: Optional[list[RecipientConfig]] = None) -> None:
        """
        Initialize database schema and seed default rows.

        Args:
            recipients: Default alert distribution list, seeded when the table is empty
        """
        async with self._connect() as db:
            await db.execute("PRAGMA journal_mode=WAL")
            await db.execute("PRAGMA busy_timeout=30000")
            await db.execute(
                """
                CREATE TABLE IF NOT EXISTS analyses (
                    article_id TEXT PRIMARY KEY,
                    created_at TIMESTAMP NOT NULL,
                    source TEXT,
                    url TEXT,
                    ip_address TEXT,
                    date TEXT,
                    summary TEXT,
                    primary_topic TEXT,
                    sentiment_score REAL,
                    sentiment_label TEXT,
                    risk_category TEXT,
                    key_entities TEXT,
                    "references" TEXT,
                    original_post_content TEXT,
                    alert_summary TEXT
                )
                """
            )
            await db.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_analyses_created
                ON analyses(created_at)
                """
            )
            await db.execute(
                """
                CREATE TABLE IF NOT EXISTS alerts (
                    id TEXT PRIMARY KEY,
                    timestamp TIMESTAMP NOT NULL,
                    recipient TEXT NOT NULL,
                    subject TEXT NOT NULL,
                    body TEXT NOT NULL,
                    risk_level TEXT,
                    source TEXT,
                    status TEXT NOT NULL
                )
                """
            )
            await db.execute(
                """
                CREATE TABLE IF NOT EXISTS data_sources (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    platform TEXT NOT NULL,
                    url TEXT NOT NULL,
                    status TEXT NOT NULL,
                    last_scraped TEXT,
                    position INTEGER NOT NULL
                )
                """
            )
            await db.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    size TEXT,
                    upload_date TIMESTAMP NOT NULL,
                    url TEXT
                )
                """
            )
            await db.execute(
                """
                CREATE TABLE IF NOT EXISTS alert_recipients (
                    id TEXT PRIMARY KEY,
                    role TEXT NOT NULL,
                    email TEXT NOT NULL,
                    is_active BOOLEAN NOT NULL,
                    position INTEGER NOT NULL
                )
                """
            )
            await db.execute(
                """
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            await db.execute(
                """
                CREATE TABLE IF NOT EXISTS scan_runs (
                    scan_id TEXT PRIMARY KEY,
                    platform TEXT,
                    started_at TIMESTAMP NOT NULL,
                    completed_at TIMESTAMP,
                    status TEXT NOT NULL,
                    items_processed INTEGER DEFAULT 0,
                    alerts_raised INTEGER DEFAULT 0,
                    error_message TEXT
                )
                """
            )

            async with db.execute("SELECT COUNT(*) FROM data_sources") as cursor:
                (source_count,) = await cursor.fetchone()
            if source_count == 0:
                await db.executemany(
                    """
                    INSERT INTO data_sources (id, name, platform, url, status, last_scraped, position)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (str(idx), name, platform.value, url, SourceStatus.ACTIVE.value, "Pending...", idx)
                        for idx, (name, platform, url) in enumerate(INITIAL_SOURCES, 1)
                    ],
                )

            async with db.execute("SELECT COUNT(*) FROM alert_recipients") as cursor:
                (recipient_count,) = await cursor.fetchone()
            if recipient_count == 0 and recipients:
                await db.executemany(
                    """
                    INSERT INTO alert_recipients (id, role, email, is_active, position)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    [(str(idx), r.role, r.email, r.active, idx) for idx, r in enumerate(recipients, 1)],
                )

            await db.commit()
            logger.info("State database initialized", path=str(self.db_path))

    # Analyses

    async def save_analysis(self, analysis: ArticleAnalysis) -> None:
        """Insert or replace an analysis record."""
        async with self._connect() as db:
            await db.execute(
                """
                INSERT OR REPLACE INTO analyses
                (article_id, created_at, source, url, ip_address, date, summary, primary_topic,
                 sentiment_score, sentiment_label, risk_category, key_entities, "references",
                 original_post_content, alert_summary)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                _analysis_row(analysis),
            )
            await db.commit()

        logger.info("Analysis saved", article_id=analysis.article_id)

    async def list_analyses(self, limit: Optional[int] = None) -> list[ArticleAnalysis]:
        """
        List stored analyses, newest first.

        Args:
            limit: Maximum number of records to return

        Returns:
            Analyses with missing fields filled by defaults
        """
        query = "SELECT * FROM analyses ORDER BY created_at DESC"
        params: tuple = ()
        if limit:
            query += " LIMIT ?"
            params = (limit,)

        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(query, params) as cursor:
                rows = await cursor.fetchall()

        return [_row_to_analysis(row) for row in rows]

    async def import_analyses(self, analyses: Iterable[ArticleAnalysis], mode: str = "merge") -> int:
        """
        Import analyses from a backup.

        Args:
            analyses: Records to import
            mode: "merge" keeps existing records and skips duplicate ids,
                "replace" clears history first

        Returns:
            Number of records written
        """
        if mode not in IMPORT_MODES:
            raise ValueError(f"Unknown import mode: {mode}")

        rows = [_analysis_row(a) for a in analyses]
        verb = "INSERT OR IGNORE" if mode == "merge" else "INSERT OR REPLACE"

        async with self._connect() as db:
            if mode == "replace":
                await db.execute("DELETE FROM analyses")
            before = db.total_changes
            await db.executemany(
                f"""
                {verb} INTO analyses
                (article_id, created_at, source, url, ip_address, date, summary, primary_topic,
                 sentiment_score, sentiment_label, risk_category, key_entities, "references",
                 original_post_content, alert_summary)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
            written = db.total_changes - before
            await db.commit()

        logger.info("Imported analyses", mode=mode, received=len(rows), written=written)
        return written

    async def clear_analyses(self) -> int:
        """Delete all analyses. Returns the number removed."""
        async with self._connect() as db:
            cursor = await db.execute("DELETE FROM analyses")
            await db.commit()
            return cursor.rowcount

    # Alerts

    async def add_alert(self, alert: AlertEntry) -> None:
        async with self._connect() as db:
            await db.execute(
                """
                INSERT INTO alerts (id, timestamp, recipient, subject, body, risk_level, source, status)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    alert.id,
                    alert.timestamp,
                    alert.recipient,
                    alert.subject,
                    alert.body,
                    alert.risk_level,
                    alert.source,
                    alert.status,
                ),
            )
            await db.commit()

        logger.info("Alert logged", alert_id=alert.id, status=alert.status)

    async def list_alerts(self) -> list[AlertEntry]:
        """List logged alerts, newest first."""
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            async with db.execute("SELECT * FROM alerts ORDER BY timestamp DESC") as cursor:
                rows = await cursor.fetchall()
        return [AlertEntry(**dict(row)) for row in rows]

    async def delete_alert(self, alert_id: str) -> bool:
        """Delete one alert log entry. Returns False if it did not exist."""
        async with self._connect() as db:
            cursor = await db.execute("DELETE FROM alerts WHERE id = ?", (alert_id,))
            await db.commit()
            return cursor.rowcount > 0

    async def clear_alerts(self) -> int:
        async with self._connect() as db:
            cursor = await db.execute("DELETE FROM alerts")
            await db.commit()
            return cursor.rowcount

    # Data sources

    async def add_source(self, name: str, url: str, platform: str) -> DataSource:
        """
        Add a monitored data source.

        Raises:
            ValueError: If name or url is empty
        """
        if not name or not url:
            raise ValueError("Data source requires both a name and a URL")

        source = DataSource(id=str(uuid.uuid4()), name=name, platform=platform, url=url)

        async with self._connect() as db:
            async with db.execute("SELECT COALESCE(MAX(position), 0) FROM data_sources") as cursor:
                (position,) = await cursor.fetchone()
            await db.execute(
                """
                INSERT INTO data_sources (id, name, platform, url, status, last_scraped, position)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (source.id, source.name, source.platform, source.url, source.status, source.last_scraped, position + 1),
            )
            await db.commit()

        logger.info("Data source added", source_id=source.id, name=name)
        return source

    async def list_sources(self) -> list[DataSource]:
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT id, name, platform, url, status, last_scraped FROM data_sources ORDER BY position"
            ) as cursor:
                rows = await cursor.fetchall()
        return [DataSource(**dict(row)) for row in rows]

    async def delete_source(self, source_id: str) -> bool:
        async with self._connect() as db:
            cursor = await db.execute("DELETE FROM data_sources WHERE id = ?", (source_id,))
            await db.commit()
            return cursor.rowcount > 0

    async def mark_scraped(self, when: Optional[str] = None) -> None:
        """Stamp every active data source with the time of the latest scan."""
        async with self._connect() as db:
            await db.execute(
                "UPDATE data_sources SET last_scraped = ? WHERE status = ?",
                (when or _now(), SourceStatus.ACTIVE.value),
            )
            await db.commit()

    # Documents

    async def add_document(
        self, name: str, size: str, url: str, doc_id: Optional[str] = None
    ) -> DocumentationFile:
        doc = DocumentationFile(id=doc_id or str(uuid.uuid4()), name=name, size=size, upload_date=_now(), url=url)
        async with self._connect() as db:
            await db.execute(
                "INSERT INTO documents (id, name, size, upload_date, url) VALUES (?, ?, ?, ?, ?)",
                (doc.id, doc.name, doc.size, doc.upload_date, doc.url),
            )
            await db.commit()

        logger.info("Document stored", document_id=doc.id, name=name)
        return doc

    async def list_documents(self) -> list[DocumentationFile]:
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            async with db.execute("SELECT * FROM documents ORDER BY upload_date DESC") as cursor:
                rows = await cursor.fetchall()
        return [DocumentationFile(**dict(row)) for row in rows]

    async def delete_document(self, document_id: str) -> Optional[DocumentationFile]:
        """Delete a document record. Returns the removed record, or None if unknown."""
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            async with db.execute("SELECT * FROM documents WHERE id = ?", (document_id,)) as cursor:
                row = await cursor.fetchone()
            if row is None:
                return None
            await db.execute("DELETE FROM documents WHERE id = ?", (document_id,))
            await db.commit()
        return DocumentationFile(**dict(row))

    # Alert distribution list

    async def list_recipients(self) -> list[AlertRecipient]:
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT id, role, email, is_active FROM alert_recipients ORDER BY position"
            ) as cursor:
                rows = await cursor.fetchall()
        return [
            AlertRecipient(id=row["id"], role=row["role"], email=row["email"], is_active=bool(row["is_active"]))
            for row in rows
        ]

    async def set_recipient_active(self, recipient_id: str, active: bool) -> bool:
        async with self._connect() as db:
            cursor = await db.execute(
                "UPDATE alert_recipients SET is_active = ? WHERE id = ?", (active, recipient_id)
            )
            await db.commit()
            return cursor.rowcount > 0

    async def set_recipient_email(self, recipient_id: str, email: str) -> bool:
        async with self._connect() as db:
            cursor = await db.execute(
                "UPDATE alert_recipients SET email = ? WHERE id = ?", (email, recipient_id)
            )
            await db.commit()
            return cursor.rowcount > 0

    async def active_recipient_emails(self) -> list[str]:
        return [r.email for r in await self.list_recipients() if r.is_active and r.email]

    # Settings

    async def get_settings(self) -> AppSettings:
        """Load settings, falling back to defaults when none are stored."""
        async with self._connect() as db:
            async with db.execute("SELECT value FROM settings WHERE key = ?", (SETTINGS_KEY,)) as cursor:
                row = await cursor.fetchone()
        if row is None:
            return AppSettings()
        stored: dict[str, Any] = json.loads(row[0])
        defaults = asdict(AppSettings())
        return AppSettings(**{k: stored.get(k, v) for k, v in defaults.items()})

    async def save_settings(self, settings: AppSettings) -> None:
        async with self._connect() as db:
            await db.execute(
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                (SETTINGS_KEY, json.dumps(asdict(settings))),
            )
            await db.commit()
        logger.info("Settings saved", sensitivity=settings.sensitivity, email_enabled=settings.email_enabled)

    # Scan runs

    async def start_scan(self, platform: str) -> str:
        """Record the start of a scan and return its id."""
        scan_id = str(uuid.uuid4())
        async with self._connect() as db:
            await db.execute(
                "INSERT INTO scan_runs (scan_id, platform, started_at, status) VALUES (?, ?, ?, ?)",
                (scan_id, platform, _now(), "running"),
            )
            await db.commit()

        logger.info("Started scan", scan_id=scan_id, platform=platform)
        return scan_id

    async def complete_scan(
        self,
        scan_id: str,
        items_processed: int,
        alerts_raised: int,
        error_message: Optional[str] = None,
    ) -> None:
        """Mark a scan as completed, or failed when an error message is given."""
        status = "failed" if error_message else "completed"

        async with self._connect() as db:
            await db.execute(
                """
                UPDATE scan_runs
                SET completed_at = ?, status = ?, items_processed = ?, alerts_raised = ?, error_message = ?
                WHERE scan_id = ?
                """,
                (_now(), status, items_processed, alerts_raised, error_message, scan_id),
            )
            await db.commit()

        logger.info("Scan completed", scan_id=scan_id, status=status)

    async def list_scans(self, limit: int = 20) -> list[dict[str, Any]]:
        async with self._connect() as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM scan_runs ORDER BY started_at DESC LIMIT ?", (limit,)
            ) as cursor:
                rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def clear_all(self) -> None:
        """Clear analysis history and the alert log."""
        removed = await self.clear_analyses()
        alerts = await self.clear_alerts()
        logger.info("System cache and history cleared", analyses=removed, alerts=alerts)
