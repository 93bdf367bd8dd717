"""JSON backup export and import of analysis history."""

import json
from datetime import datetime
from pathlib import Path

import structlog

from ..models.data import ArticleAnalysis

logger = structlog.get_logger(__name__)


def export_filename(when: datetime | None = None) -> str:
    """Dated backup file name, e.g. artemis_export_2025-01-31.json."""
    return f"artemis_export_{(when or datetime.now()).strftime('%Y-%m-%d')}.json"


def export_analyses(articles: list[ArticleAnalysis], directory: Path) -> Path:
    """
    Write analysis history to a dated JSON backup.

    Args:
        articles: Analyses to export
        directory: Directory the backup is written to

    Returns:
        Path to the written file

    Raises:
        ValueError: If there is nothing to export
    """
    if not articles:
        raise ValueError("No data available to export.")

    directory = Path(directory).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename()

    with open(path, "w", encoding="utf-8") as f:
        json.dump([a.to_dict() for a in articles], f, indent=2, ensure_ascii=False)

    logger.info("Exported analyses", path=str(path), count=len(articles))
    return path


def load_import_file(path: Path) -> list[ArticleAnalysis]:
    """
    Read and validate a JSON backup.

    Raises:
        ValueError: If the file is not JSON, not an array, or its records lack article ids
    """
    try:
        with open(Path(path).expanduser(), "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse JSON file: {e}")

    if not isinstance(data, list):
        raise ValueError("Invalid file format. Expected an array of articles.")

    if data and (not isinstance(data[0], dict) or not data[0].get("article_id")):
        raise ValueError("File content does not match expected format.")

    return [ArticleAnalysis.from_dict(item) for item in data if isinstance(item, dict)]


def format_file_size(num_bytes: int) -> str:
    """Human-readable file size: B, KB or MB."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"
