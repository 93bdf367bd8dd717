import asyncio
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import pytest
import structlog

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from artemis.config.models import AlertsConfig  # noqa: E402
from artemis.llm.schemas import AnalysisResponse, ReferenceSchema  # noqa: E402
from artemis.models.data import ArticleAnalysis, Reference  # noqa: E402
from artemis.state import StateManager  # noqa: E402

ARTICLE_ID = "3f2b8c1e-9a4d-4e6f-8b1a-2c3d4e5f6a7b"


class FakeLLMClient:
    """Stands in for LLMClient, answering structured calls per response schema."""

    def __init__(
        self,
        structured: Optional[dict[type, Any]] = None,
        text: Any = "URGENT HATE SPEECH: Coordinated harassment detected, review now",
    ) -> None:
        self.structured = structured or {}
        self.text = text
        self.calls: list[dict[str, Any]] = []

    async def chat_completion(
        self,
        messages: list[dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
        thinking: bool = False,
    ) -> str:
        self.calls.append({"kind": "text", "messages": messages, "thinking": thinking})
        if isinstance(self.text, Exception):
            raise self.text
        return self.text

    async def chat_completion_structured(
        self,
        messages: list[dict[str, str]],
        response_format: type,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        thinking: bool = False,
    ) -> Any:
        self.calls.append({"kind": response_format.__name__, "messages": messages, "thinking": thinking})
        result = self.structured.get(response_format)
        if result is None:
            raise ValueError(f"No fake response for {response_format.__name__}")
        if isinstance(result, list):
            result = result.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def calls_of(self, kind: str) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["kind"] == kind]


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()


@pytest.fixture
def fake_llm_factory() -> Callable[..., FakeLLMClient]:
    return FakeLLMClient


@pytest.fixture
def analysis_response_factory() -> Callable[..., AnalysisResponse]:
    def factory(**overrides: Any) -> AnalysisResponse:
        data: dict[str, Any] = {
            "article_id": ARTICLE_ID,
            "source": "X (Twitter)",
            "date": "2025-03-14",
            "summary": "User calls for street protests against new policy.",
            "primary_topic": "Social Unrest",
            "sentiment_score": -0.8,
            "sentiment_label": "Very Negative",
            "risk_category": "Public Incitement",
            "key_entities": ["@radical_voice", "City Council"],
            "references": [
                ReferenceSchema(type="Profile", name="@radical_voice", url="https://x.com/radical_voice")
            ],
        }
        data.update(overrides)
        return AnalysisResponse(**data)

    return factory


@pytest.fixture
def make_analysis() -> Callable[..., ArticleAnalysis]:
    def factory(**overrides: Any) -> ArticleAnalysis:
        data: dict[str, Any] = {
            "article_id": ARTICLE_ID,
            "source": "Facebook",
            "date": "2025-03-14",
            "summary": "Residents share photos of the new park opening.",
            "primary_topic": "Culture/Lifestyle",
            "sentiment_score": 0.6,
            "sentiment_label": "Positive",
            "risk_category": "None",
            "key_entities": ["City Parks Department"],
            "references": [Reference(type="Page", name="City Parks", url="https://facebook.com/cityparks")],
            "url": "https://facebook.com/cityparks/posts/1",
            "ip_address": "10.0.5.12",
        }
        data.update(overrides)
        return ArticleAnalysis(**data)

    return factory


@pytest.fixture
def store(tmp_path: Path) -> StateManager:
    manager = StateManager(tmp_path / "state.db")
    asyncio.run(manager.initialize(AlertsConfig().recipients))
    return manager
