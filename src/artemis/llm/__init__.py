"""Hosted model client and utilities."""

from .client import LLMClient
from .tracker import TokenTracker

__all__ = ["LLMClient", "TokenTracker"]
