"""Configuration data models using Pydantic."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMConfig(BaseModel):
    """Hosted model provider configuration."""

    # Gemini exposes an OpenAI-compatible endpoint; any compatible provider works
    base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    api_key: str = ""
    model: str = "gemini-3-flash-preview"
    thinking_model: str = "gemini-3-pro-preview"
    reasoning_effort: str = "high"
    temperature: float = 0.3
    max_tokens: int = 8192
    timeout: int = 120
    structured_output: bool = True  # Enable Structured Output mode for supported models


class EmailConfig(BaseModel):
    """SMTP delivery configuration for alert emails."""

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str
    smtp_password: str
    use_tls: bool = True
    from_address: str
    from_name: str = "ARTEMIS Alerts"
    cc_distribution_list: bool = True  # Copy active distribution-list members


class RecipientConfig(BaseModel):
    """Seed entry for the alert distribution list."""

    role: str
    email: str
    active: bool = True


class AlertsConfig(BaseModel):
    """Alert distribution configuration."""

    admin_password: str = "admin123"
    recipients: list[RecipientConfig] = Field(
        default=[
            RecipientConfig(role="Chief Security Officer", email="cso@artemis.corp"),
            RecipientConfig(role="Legal Compliance", email="legal.audit@artemis.corp"),
            RecipientConfig(role="Public Relations Lead", email="press.office@artemis.corp", active=False),
            RecipientConfig(role="Regional Crisis Team", email="apac.crisis@artemis.corp", active=False),
            RecipientConfig(role="System Administrator", email="sysadmin@artemis.corp"),
        ]
    )


class OutputConfig(BaseModel):
    """Report and export output configuration."""

    report_path: Path = Path("~/artemis/reports/%Y-%m-%d.html")
    export_dir: Path = Path(".")
    documents_dir: Path = Path("~/.config/artemis/documents")
    title: str = "ARTEMIS Intelligence Report"
    timezone: str = "local"  # "local" for system timezone, or IANA timezone like "Europe/London"


class MonitorConfig(BaseModel):
    """Continuous monitoring (watch mode) configuration."""

    interval_minutes: int = Field(default=30, ge=1)
    batch_size: int = 3
    platform: str = "News Papers, Magazines, and Social Media"


class StateConfig(BaseModel):
    """State management configuration."""

    db_path: Path = Path("~/.config/artemis/state.db")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"


class Config(BaseSettings):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    email: Optional[EmailConfig] = None
    alerts: AlertsConfig = Field(default_factory=AlertsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    monitor: MonitorConfig = Field(default_factory=MonitorConfig)
    state: StateConfig = Field(default_factory=StateConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="ARTEMIS_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )
