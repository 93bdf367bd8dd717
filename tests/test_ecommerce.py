import asyncio

from artemis.analysis import get_ecommerce_insights
from artemis.llm.schemas import EcommerceResponse, PlatformMetricSchema, ProductSchema, TrendSchema


def test_insights_from_thinking_model(fake_llm_factory):
    response = EcommerceResponse(
        trends=[TrendSchema(id="t1", title="De-influencing", description="Buy less.", growth="+12%", tag="Culture")],
        platforms=[PlatformMetricSchema(platform="Amazon", order_volume=91000, customer_satisfaction=87)],
        products=[
            ProductSchema(
                id="p1",
                product_name="Cold Brew Maker",
                category="Kitchen",
                price="$29.99",
                platform="Amazon",
                rating=4.7,
                sentiment_score=0.85,
                review_snippet="Smooth coffee in minutes.",
            )
        ],
    )
    llm = fake_llm_factory({EcommerceResponse: response})

    data = asyncio.run(get_ecommerce_insights(llm))

    assert data.trends[0].title == "De-influencing"
    assert data.platforms[0].order_volume == 91000
    assert data.products[0].product_name == "Cold Brew Maker"
    assert llm.calls[0]["thinking"] is True


def test_insights_fall_back_to_static_snapshot(fake_llm_factory):
    llm = fake_llm_factory({EcommerceResponse: ConnectionError("offline")})

    data = asyncio.run(get_ecommerce_insights(llm))

    assert len(data.trends) == 3
    assert [p.platform for p in data.platforms] == ["Amazon", "TikTok Shop", "Shopify", "Instagram Checkout"]
    assert data.products[0].product_name == "Smart Water Bottle"
