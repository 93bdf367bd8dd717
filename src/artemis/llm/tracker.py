"""Token accounting for hosted model calls."""

from collections import Counter
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class TokenTracker:
    """Running totals of prompt/completion tokens, with a per-model call count.

    One tracker is shared by every call an ``LLMClient`` makes, so a scan
    can report how much it spent once it finishes.
    """

    def __init__(self) -> None:
        self.prompt_tokens = 0
        self.completion_tokens = 0
        self.calls = 0
        self._by_model: Counter[str] = Counter()

    def record(self, response: Any, model: str = "") -> None:
        """Add the ``usage`` block of a completion response to the totals.

        Responses without usage still count towards the model's call total.
        """
        if model:
            self._by_model[model] += 1

        usage = getattr(response, "usage", None)
        if not usage:
            return

        prompt = usage.prompt_tokens or 0
        completion = usage.completion_tokens or 0
        self.prompt_tokens += prompt
        self.completion_tokens += completion
        self.calls += 1
        logger.debug("Model usage", model=model or None, prompt=prompt, completion=completion)

    @property
    def calls_by_model(self) -> dict[str, int]:
        return dict(self._by_model)

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    def to_dict(self) -> dict[str, Any]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
            "api_calls": self.calls,
            "calls_by_model": self.calls_by_model,
        }
