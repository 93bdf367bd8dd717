"""OpenAI-compatible client for the hosted model."""

import json
import re
from typing import Any, Optional, Type, TypeVar

import structlog
from openai import AsyncOpenAI
from pydantic import BaseModel

from ..config.models import LLMConfig
from .tracker import TokenTracker

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

_THINK_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL)
_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def clean_json_content(content: str) -> str:
    """Drop ``<think>`` reasoning blocks and a surrounding markdown fence."""
    content = _THINK_BLOCK.sub("", content).strip()
    fenced = _CODE_FENCE.match(content)
    return fenced.group(1).strip() if fenced else content


class LLMClient:
    """Async chat client with plain, JSON and schema-validated completions.

    ``thinking=True`` on any call routes it to ``thinking_model`` with the
    configured ``reasoning_effort``.
    """

    def __init__(self, config: LLMConfig, token_tracker: Optional[TokenTracker] = None):
        if not config.api_key:
            raise ValueError("LLM API key is not configured (set llm.api_key or ARTEMIS_LLM__API_KEY)")

        self.config = config
        self.token_tracker = token_tracker or TokenTracker()
        self.client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
        )

    def _request_kwargs(
        self,
        messages: list[dict[str, str]],
        temperature: Optional[float],
        max_tokens: Optional[int],
        thinking: bool,
    ) -> dict[str, Any]:
        """Build the common completion arguments, selecting the model for the mode."""
        kwargs: dict[str, Any] = {
            "model": self.config.thinking_model if thinking else self.config.model,
            "messages": messages,
            "temperature": temperature if temperature is not None else self.config.temperature,
            "max_tokens": max_tokens or self.config.max_tokens,
        }
        if thinking:
            kwargs["reasoning_effort"] = self.config.reasoning_effort
        return kwargs

    async def chat_completion(
        self,
        messages: list[dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
        thinking: bool = False,
    ) -> str:
        """Send one completion request and return the message text.

        Raises:
            ValueError: If the model returns no content
        """
        kwargs = self._request_kwargs(messages, temperature, max_tokens, thinking)

        # Anthropic's compatibility layer rejects response_format, ask for JSON in the prompt instead
        if json_mode and "claude" not in kwargs["model"].lower():
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(**kwargs)
            self.token_tracker.record(response, kwargs["model"])

            content = response.choices[0].message.content
            if not content:
                raise ValueError("Empty response from LLM")

            return content

        except Exception as e:
            logger.error("LLM API error", error=str(e), error_type=type(e).__name__, model=kwargs["model"])
            raise

    async def chat_completion_json(
        self,
        messages: list[dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        thinking: bool = False,
    ) -> Any:
        """Request JSON mode and decode the answer.

        Raises:
            ValueError: If the answer is not valid JSON
        """
        content = await self.chat_completion(
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            json_mode=True,
            thinking=thinking,
        )
        content = clean_json_content(content)

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse JSON response", content_preview=content[:200], error=str(e))
            raise ValueError(f"Invalid JSON response from LLM: {e}")

    def _parse_and_validate_json(self, content: str, response_format: Type[T]) -> T:
        """Decode ``content`` and validate it into ``response_format``; raises ValueError."""
        content = clean_json_content(content)

        try:
            json_response = json.loads(content)
            return response_format.model_validate(json_response)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse JSON response", content_preview=content[:200], error=str(e))
            raise ValueError(f"Invalid JSON response from LLM: {e}")
        except Exception as e:
            logger.error(
                "Failed to validate response against schema",
                schema=response_format.__name__,
                error=str(e),
                response_preview=content[:200],
            )
            raise ValueError(f"Response does not match expected schema: {e}")

    async def chat_completion_structured(
        self,
        messages: list[dict[str, str]],
        response_format: Type[T],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        thinking: bool = False,
    ) -> T:
        """Return the answer as an instance of ``response_format``.

        With ``structured_output`` enabled the native parse endpoint is used,
        and its raw content is validated by hand when the provider leaves
        ``parsed`` empty. Otherwise the request goes through JSON mode.
        """
        if not self.config.structured_output:
            content = await self.chat_completion(
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                json_mode=True,
                thinking=thinking,
            )
            return self._parse_and_validate_json(content, response_format)

        kwargs = self._request_kwargs(messages, temperature, max_tokens, thinking)

        try:
            response = await self.client.chat.completions.parse(
                **kwargs,
                response_format=response_format,
            )
            self.token_tracker.record(response, kwargs["model"])
        except Exception as e:
            logger.error(
                "Structured output API error",
                error=str(e),
                error_type=type(e).__name__,
                model=kwargs["model"],
            )
            raise

        message = response.choices[0].message
        if message.parsed is not None:
            return message.parsed

        # Some providers return reasoning tags alongside structured output
        if not message.content:
            raise ValueError("Empty parsed response from LLM")

        logger.warning("Structured output parse returned None, falling back to manual parsing")
        return self._parse_and_validate_json(message.content, response_format)
