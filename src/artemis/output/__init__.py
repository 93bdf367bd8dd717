"""Output generation and delivery."""

from .email import send_alert_email
from .export import export_analyses, format_file_size, load_import_file
from .html import generate_html, render_report
from .links import build_gmail_link, build_mailto_link

__all__ = [
    "build_gmail_link",
    "build_mailto_link",
    "export_analyses",
    "format_file_size",
    "generate_html",
    "load_import_file",
    "render_report",
    "send_alert_email",
]
