"""Content analysis against the hosted model."""

import asyncio
import uuid
from typing import Optional

import structlog

from ..llm.client import LLMClient
from ..llm.prompts import format_analysis_prompt
from ..llm.schemas import AnalysisResponse
from ..models.data import AnalysisRequest, ArticleAnalysis, Reference, Sensitivity
from ..state.db import StateManager
from .alerts import generate_alert_summary, should_alert

logger = structlog.get_logger(__name__)

UNKNOWN_IP = "Unknown"

# Strong references to in-flight background saves
_pending_saves: set[asyncio.Task] = set()


def _valid_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        return False
    return True


def _to_analysis(response: AnalysisResponse, request: AnalysisRequest) -> ArticleAnalysis:
    """Combine the model's classification with request metadata it does not generate."""
    article_id = response.article_id
    if not _valid_uuid(article_id):
        article_id = str(uuid.uuid4())

    return ArticleAnalysis(
        article_id=article_id,
        source=response.source or request.source,
        date=response.date or request.date,
        summary=response.summary,
        primary_topic=response.primary_topic.value,
        sentiment_score=max(-1.0, min(1.0, response.sentiment_score)),
        sentiment_label=response.sentiment_label.value,
        risk_category=response.risk_category.value,
        key_entities=list(response.key_entities),
        references=[Reference(type=r.type.value, name=r.name, url=r.url) for r in response.references],
        url=request.url or "",
        ip_address=request.ip_address or UNKNOWN_IP,
        original_post_content=request.text,
    )


async def _save_quietly(store: StateManager, analysis: ArticleAnalysis) -> None:
    try:
        await store.save_analysis(analysis)
    except Exception as e:
        logger.warning("Background save failed", article_id=analysis.article_id, error=str(e))


def _persist_in_background(store: StateManager, analysis: ArticleAnalysis) -> None:
    task = asyncio.create_task(_save_quietly(store, analysis))
    _pending_saves.add(task)
    task.add_done_callback(_pending_saves.discard)


async def wait_for_pending_saves() -> None:
    """Wait until all background saves have finished."""
    if _pending_saves:
        await asyncio.gather(*list(_pending_saves))


async def analyze_article(
    request: AnalysisRequest,
    llm_client: LLMClient,
    store: Optional[StateManager] = None,
    thinking: bool = False,
    sensitivity: str = Sensitivity.MEDIUM.value,
) -> ArticleAnalysis:
    """
    Classify raw content for sentiment, topic and public-safety risk.

    Args:
        request: Raw content and its origin
        llm_client: LLM client for API calls
        store: If given, the result is saved in the background
        thinking: Use the thinking model for deeper analysis
        sensitivity: Alerting sensitivity deciding whether an alert line is generated

    Returns:
        The analysis, with an alert summary attached when it is alert-worthy

    Raises:
        Exception: Any API, JSON or schema error from the model call
    """
    logger.info("Analyzing content", source=request.source, thinking=thinking)

    try:
        response = await llm_client.chat_completion_structured(
            format_analysis_prompt(request),
            response_format=AnalysisResponse,
            thinking=thinking,
        )
    except Exception as e:
        logger.error("Analysis failed", source=request.source, error=str(e))
        raise

    analysis = _to_analysis(response, request)

    if should_alert(analysis, sensitivity):
        analysis.alert_summary = await generate_alert_summary(analysis, llm_client)

    if store is not None:
        _persist_in_background(store, analysis)

    logger.info(
        "Analysis complete",
        article_id=analysis.article_id,
        sentiment=analysis.sentiment_label,
        risk=analysis.risk_category,
    )
    return analysis
