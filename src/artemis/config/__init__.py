"""Configuration management for ARTEMIS."""

from .loader import load_config
from .models import (
    AlertsConfig,
    Config,
    EmailConfig,
    LLMConfig,
    LoggingConfig,
    MonitorConfig,
    OutputConfig,
    RecipientConfig,
    StateConfig,
)

__all__ = [
    "AlertsConfig",
    "Config",
    "EmailConfig",
    "LLMConfig",
    "LoggingConfig",
    "MonitorConfig",
    "OutputConfig",
    "RecipientConfig",
    "StateConfig",
    "load_config",
]
