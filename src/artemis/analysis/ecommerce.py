"""E-commerce market intelligence snapshot."""

import structlog

from ..llm.client import LLMClient
from ..llm.prompts import format_ecommerce_prompt
from ..llm.schemas import EcommerceResponse
from ..models.data import EcommerceData, EcommerceTrend, PlatformMetric, ProductReview

logger = structlog.get_logger(__name__)


def fallback_insights() -> EcommerceData:
    """Static snapshot shown when the model call fails."""
    return EcommerceData(
        trends=[
            EcommerceTrend("1", "Live Stream Shopping", "Interactive real-time selling is dominating Gen Z markets.", "+45%", "Viral"),
            EcommerceTrend("2", "Eco-Conscious Unboxing", "Consumers demand minimal, plastic-free packaging.", "+22%", "Sustainability"),
            EcommerceTrend("3", "AI-Personalized Bundles", "Algorithmic product pairing increases cart value.", "+15%", "Tech"),
        ],
        platforms=[
            PlatformMetric("Amazon", 85000, 88),
            PlatformMetric("TikTok Shop", 42000, 76),
            PlatformMetric("Shopify", 31000, 92),
            PlatformMetric("Instagram Checkout", 25000, 81),
        ],
        products=[
            ProductReview(
                "1",
                "Smart Water Bottle",
                "Fitness",
                "$45.00",
                "TikTok Shop",
                4.8,
                0.9,
                "Life changing hydration tracking!",
            ),
        ],
    )


async def get_ecommerce_insights(llm_client: LLMClient) -> EcommerceData:
    """
    Generate a snapshot of trending buying cultures, platform metrics and loved products.

    Uses the thinking model. Falls back to a static snapshot on any failure.
    """
    try:
        response = await llm_client.chat_completion_structured(
            format_ecommerce_prompt(),
            response_format=EcommerceResponse,
            thinking=True,
        )
    except Exception as e:
        logger.error("Ecommerce insights failed", error=str(e))
        return fallback_insights()

    return EcommerceData(
        trends=[EcommerceTrend(**t.model_dump()) for t in response.trends],
        platforms=[PlatformMetric(**p.model_dump()) for p in response.platforms],
        products=[ProductReview(**p.model_dump()) for p in response.products],
    )
