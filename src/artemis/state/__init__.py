"""State persistence."""

from .db import StateManager

__all__ = ["StateManager"]
