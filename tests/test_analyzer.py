import asyncio
import uuid

import pytest

from artemis.analysis import analyze_article, wait_for_pending_saves
from artemis.llm.schemas import AnalysisResponse
from artemis.models.data import AnalysisRequest

from conftest import ARTICLE_ID


@pytest.fixture
def request_() -> AnalysisRequest:
    return AnalysisRequest(
        text="We must rise up and show them who really owns the streets! #uprising",
        source="X (Twitter)",
        date="2025-03-14",
        url="https://x.com/radical_voice/status/1",
        ip_address="45.12.33.192",
    )


def test_attaches_request_metadata(request_, fake_llm_factory, analysis_response_factory):
    llm = fake_llm_factory({AnalysisResponse: analysis_response_factory()})

    analysis = asyncio.run(analyze_article(request_, llm))

    assert analysis.article_id == ARTICLE_ID
    assert analysis.ip_address == "45.12.33.192"
    assert analysis.url == "https://x.com/radical_voice/status/1"
    assert analysis.original_post_content == request_.text
    assert analysis.primary_topic == "Social Unrest"
    assert analysis.references[0].name == "@radical_voice"


def test_missing_metadata_uses_defaults(fake_llm_factory, analysis_response_factory):
    llm = fake_llm_factory({AnalysisResponse: analysis_response_factory()})
    request = AnalysisRequest(text="Quiet day at the market.", source="Bloomberg", date="2025-03-14")

    analysis = asyncio.run(analyze_article(request, llm))

    assert analysis.ip_address == "Unknown"
    assert analysis.url == ""


def test_high_risk_gets_alert_summary(request_, fake_llm_factory, analysis_response_factory):
    llm = fake_llm_factory(
        {AnalysisResponse: analysis_response_factory()},
        text="  URGENT PUBLIC INCITEMENT: Call to street action detected  ",
    )

    analysis = asyncio.run(analyze_article(request_, llm))

    assert analysis.alert_summary == "URGENT PUBLIC INCITEMENT: Call to street action detected"


def test_safe_content_has_no_alert_summary(request_, fake_llm_factory, analysis_response_factory):
    response = analysis_response_factory(
        sentiment_score=0.4, sentiment_label="Positive", risk_category="None", primary_topic="Technology"
    )
    llm = fake_llm_factory({AnalysisResponse: response})

    analysis = asyncio.run(analyze_article(request_, llm))

    assert analysis.alert_summary is None
    assert llm.calls_of("text") == []


def test_alert_summary_failure_is_not_fatal(request_, fake_llm_factory, analysis_response_factory):
    llm = fake_llm_factory({AnalysisResponse: analysis_response_factory()}, text=RuntimeError("quota"))

    analysis = asyncio.run(analyze_article(request_, llm))

    assert analysis.alert_summary is None
    assert analysis.risk_category == "Public Incitement"


def test_sensitivity_controls_summary_for_negative_content(
    request_, fake_llm_factory, analysis_response_factory
):
    response = analysis_response_factory(sentiment_label="Negative", risk_category="None")

    low = asyncio.run(analyze_article(request_, fake_llm_factory({AnalysisResponse: response}), sensitivity="low"))
    medium = asyncio.run(
        analyze_article(request_, fake_llm_factory({AnalysisResponse: response}), sensitivity="medium")
    )

    assert low.alert_summary is None
    assert medium.alert_summary is not None


def test_analysis_failure_is_raised(request_, fake_llm_factory):
    llm = fake_llm_factory({AnalysisResponse: ValueError("Response does not match expected schema")})

    with pytest.raises(ValueError):
        asyncio.run(analyze_article(request_, llm))


def test_invalid_article_id_is_replaced(request_, fake_llm_factory, analysis_response_factory):
    llm = fake_llm_factory({AnalysisResponse: analysis_response_factory(article_id="post-1")})

    analysis = asyncio.run(analyze_article(request_, llm))

    assert analysis.article_id != "post-1"
    uuid.UUID(analysis.article_id)


def test_score_is_clamped(request_, fake_llm_factory, analysis_response_factory):
    llm = fake_llm_factory({AnalysisResponse: analysis_response_factory(sentiment_score=-3.5)})

    analysis = asyncio.run(analyze_article(request_, llm))

    assert analysis.sentiment_score == -1.0


def test_thinking_mode_is_forwarded(request_, fake_llm_factory, analysis_response_factory):
    llm = fake_llm_factory({AnalysisResponse: analysis_response_factory()})

    asyncio.run(analyze_article(request_, llm, thinking=True))

    assert llm.calls_of("AnalysisResponse")[0]["thinking"] is True


def test_result_is_saved_in_background(request_, store, fake_llm_factory, analysis_response_factory):
    llm = fake_llm_factory({AnalysisResponse: analysis_response_factory()})

    async def analyze_and_reload():
        analysis = await analyze_article(request_, llm, store=store)
        await wait_for_pending_saves()
        return analysis, await store.list_analyses()

    analysis, stored = asyncio.run(analyze_and_reload())

    assert [a.article_id for a in stored] == [analysis.article_id]
    assert stored[0].alert_summary == analysis.alert_summary
    assert stored[0].original_post_content == request_.text


def test_save_failure_does_not_propagate(request_, fake_llm_factory, analysis_response_factory):
    class BrokenStore:
        async def save_analysis(self, analysis):
            raise OSError("disk full")

    llm = fake_llm_factory({AnalysisResponse: analysis_response_factory()})

    async def analyze_and_wait():
        analysis = await analyze_article(request_, llm, store=BrokenStore())
        await wait_for_pending_saves()
        return analysis

    assert asyncio.run(analyze_and_wait()).article_id == ARTICLE_ID
