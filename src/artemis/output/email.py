"""SMTP delivery for alert emails."""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Iterable

import aiosmtplib
import structlog

from ..config.models import EmailConfig
from ..models.data import AlertEntry

logger = structlog.get_logger(__name__)


def build_alert_message(alert: AlertEntry, config: EmailConfig, cc: Iterable[str] = ()) -> MIMEMultipart:
    """
    Build the MIME message for an alert.

    Args:
        alert: Alert to deliver
        config: Email configuration
        cc: Additional addresses to copy; the primary recipient is never duplicated

    Returns:
        Multipart message with a plain text body
    """
    cc_list = [addr for addr in dict.fromkeys(cc) if addr and addr != alert.recipient]

    message = MIMEMultipart("alternative")
    message["Subject"] = alert.subject
    message["From"] = f"{config.from_name} <{config.from_address}>"
    message["To"] = alert.recipient
    if cc_list:
        message["Cc"] = ", ".join(cc_list)

    text = (
        f"{alert.body}\n\n"
        f"---\n"
        f"Risk Level: {alert.risk_level}\n"
        f"Source: {alert.source}\n"
        f"Detected: {alert.timestamp}\n"
    )
    message.attach(MIMEText(text, "plain", "utf-8"))
    return message


async def send_alert_email(alert: AlertEntry, config: EmailConfig, cc: Iterable[str] = ()) -> None:
    """
    Send an alert email over SMTP.

    Args:
        alert: Alert to deliver
        config: Email configuration
        cc: Additional addresses to copy
    """
    message = build_alert_message(alert, config, cc)

    try:
        if config.use_tls:
            await aiosmtplib.send(
                message,
                hostname=config.smtp_host,
                port=config.smtp_port,
                username=config.smtp_user,
                password=config.smtp_password,
                start_tls=True,
            )
        else:
            await aiosmtplib.send(
                message,
                hostname=config.smtp_host,
                port=config.smtp_port,
                username=config.smtp_user,
                password=config.smtp_password,
            )

        logger.info("Sent alert email", recipient=alert.recipient, cc=message.get("Cc"))
    except Exception as e:
        logger.error("Failed to send alert email", error=str(e), error_type=type(e).__name__)
        raise
