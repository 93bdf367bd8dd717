import asyncio
from types import SimpleNamespace
from typing import Any, Optional

import pytest

from artemis.config.models import LLMConfig
from artemis.llm import LLMClient, TokenTracker
from artemis.llm.client import clean_json_content
from artemis.llm.schemas import AlertEmailResponse


def make_response(content: Optional[str], parsed: Any = None) -> SimpleNamespace:
    message = SimpleNamespace(content=content, parsed=parsed)
    return SimpleNamespace(
        choices=[SimpleNamespace(message=message)],
        usage=SimpleNamespace(prompt_tokens=120, completion_tokens=40),
    )


class FakeCompletions:
    def __init__(self, content: Optional[str] = None, parsed: Any = None) -> None:
        self.content = content
        self.parsed = parsed
        self.requests: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> SimpleNamespace:
        self.requests.append(kwargs)
        return make_response(self.content)

    async def parse(self, **kwargs: Any) -> SimpleNamespace:
        self.requests.append(kwargs)
        return make_response(self.content, self.parsed)


def make_client(completions: FakeCompletions, **config: Any) -> LLMClient:
    client = LLMClient(LLMConfig(api_key="test-key", **config))
    client.client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return client


MESSAGES = [{"role": "user", "content": "hello"}]


def test_requires_api_key():
    with pytest.raises(ValueError, match="API key"):
        LLMClient(LLMConfig(api_key=""))


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('```json\n{"a": 1}\n```', '{"a": 1}'),
        ('```\n{"a": 1}```', '{"a": 1}'),
        ('<think>plan the answer</think>\n{"a": 1}', '{"a": 1}'),
        ('  {"a": 1}  ', '{"a": 1}'),
    ],
)
def test_clean_json_content(raw, expected):
    assert clean_json_content(raw) == expected


def test_json_mode_requests_json_object():
    completions = FakeCompletions('{"ok": true}')
    client = make_client(completions)

    assert asyncio.run(client.chat_completion_json(MESSAGES)) == {"ok": True}
    assert completions.requests[0]["response_format"] == {"type": "json_object"}
    assert completions.requests[0]["model"] == "gemini-3-flash-preview"


def test_json_mode_skipped_for_claude_models():
    completions = FakeCompletions('{"ok": true}')
    client = make_client(completions, model="claude-sonnet")

    asyncio.run(client.chat_completion(MESSAGES, json_mode=True))

    assert "response_format" not in completions.requests[0]


def test_thinking_uses_thinking_model():
    completions = FakeCompletions("deep answer")
    client = make_client(completions)

    asyncio.run(client.chat_completion(MESSAGES, thinking=True))

    request = completions.requests[0]
    assert request["model"] == "gemini-3-pro-preview"
    assert request["reasoning_effort"] == "high"
    assert client.token_tracker.calls_by_model == {"gemini-3-pro-preview": 1}


def test_empty_response_raises():
    client = make_client(FakeCompletions(""))

    with pytest.raises(ValueError, match="Empty response"):
        asyncio.run(client.chat_completion(MESSAGES))


def test_invalid_json_raises():
    client = make_client(FakeCompletions("not json at all"))

    with pytest.raises(ValueError, match="Invalid JSON"):
        asyncio.run(client.chat_completion_json(MESSAGES))


def test_structured_returns_parsed_model():
    parsed = AlertEmailResponse(subject="S", body="B")
    completions = FakeCompletions(None, parsed=parsed)
    client = make_client(completions)

    result = asyncio.run(client.chat_completion_structured(MESSAGES, AlertEmailResponse))

    assert result is parsed
    assert completions.requests[0]["response_format"] is AlertEmailResponse


def test_structured_falls_back_to_manual_parse():
    client = make_client(FakeCompletions('```json\n{"subject": "S", "body": "B"}\n```', parsed=None))

    result = asyncio.run(client.chat_completion_structured(MESSAGES, AlertEmailResponse))

    assert result == AlertEmailResponse(subject="S", body="B")


def test_json_mode_path_validates_schema():
    client = make_client(FakeCompletions('{"subject": "only a subject"}'), structured_output=False)

    with pytest.raises(ValueError, match="expected schema"):
        asyncio.run(client.chat_completion_structured(MESSAGES, AlertEmailResponse))


def test_token_usage_is_tracked():
    tracker = TokenTracker()
    client = LLMClient(LLMConfig(api_key="test-key"), tracker)
    client.client = SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions("hi")))

    asyncio.run(client.chat_completion(MESSAGES))
    asyncio.run(client.chat_completion(MESSAGES))

    assert tracker.to_dict() == {
        "prompt_tokens": 240,
        "completion_tokens": 80,
        "total_tokens": 320,
        "api_calls": 2,
        "calls_by_model": {"gemini-3-flash-preview": 2},
    }
