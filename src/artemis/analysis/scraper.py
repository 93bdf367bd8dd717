"""Simulated social-media scraping used to exercise detection."""

import time

import structlog

from ..llm.client import LLMClient
from ..llm.prompts import format_scrape_simulation_prompt
from ..llm.schemas import ScrapeBatchResponse
from ..models.data import AnalysisRequest, today

logger = structlog.get_logger(__name__)

MIXED_SOURCES = "Mixed Sources"


def fallback_posts(count: int, platform: str = MIXED_SOURCES) -> list[AnalysisRequest]:
    """
    Static posts used when the model cannot generate a batch.

    One incitement post, one desecration report and one neutral market story,
    attributed to the requested platform unless it is a mix.
    """
    stamp = int(time.time() * 1000)
    date = today()
    mixed = platform == MIXED_SOURCES

    posts = [
        AnalysisRequest(
            text=(
                "RT @radical_voice: The recent policies are a direct attack on our traditional values. "
                "We must rise up and show them who really owns the streets! #resistance #uprising"
            ),
            source="X (Twitter)" if mixed else platform,
            url=f"https://twitter.com/radical_voice/status/{stamp}",
            date=date,
            ip_address="45.12.33.192",
        ),
        AnalysisRequest(
            text=(
                "Unbelievable scenes at the city square today. A group was seen publicly desecrating "
                "the holy book. This is unacceptable! Video evidence attached."
            ),
            source="Facebook" if mixed else platform,
            url=f"https://facebook.com/groups/community/posts/{stamp}",
            date=date,
            ip_address="192.168.0.45",
        ),
        AnalysisRequest(
            text=(
                "New tech regulations expected to pass this week. Market analysts predict a slight dip "
                "in semiconductor stocks but long term growth remains strong."
            ),
            source="Bloomberg",
            url=f"https://bloomberg.com/news/articles/{stamp}",
            date=date,
            ip_address="10.0.5.12",
        ),
    ]
    return posts[:count]


async def generate_social_scrape_batch(
    llm_client: LLMClient,
    count: int = 3,
    platform: str = MIXED_SOURCES,
) -> list[AnalysisRequest]:
    """
    Simulate scraping a batch of posts, at least one of them sensitive.

    Args:
        llm_client: LLM client for API calls
        count: Number of posts to generate
        platform: Platform or mix of platforms to imitate

    Returns:
        Generated posts, or static fallback posts if the model call fails
    """
    try:
        response = await llm_client.chat_completion_structured(
            format_scrape_simulation_prompt(count, platform),
            response_format=ScrapeBatchResponse,
        )
    except Exception as e:
        logger.warning("Batch scrape generation failed, using fallback data", error=str(e))
        return fallback_posts(count, platform)

    posts = [
        AnalysisRequest(
            text=p.text,
            source=p.source,
            url=p.url,
            date=p.date,
            ip_address=p.ip_address,
        )
        for p in response.posts
    ]

    if not posts:
        logger.warning("Model returned an empty batch, using fallback data")
        return fallback_posts(count, platform)

    logger.info("Generated scrape batch", count=len(posts), platform=platform)
    return posts


async def generate_mock_article(llm_client: LLMClient, platform: str) -> AnalysisRequest:
    """Generate a single example post for the given platform."""
    posts = await generate_social_scrape_batch(llm_client, 1, platform)
    return posts[0]
