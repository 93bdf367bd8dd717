import asyncio

import pytest

from artemis.analysis import generate_mock_article, generate_social_scrape_batch
from artemis.analysis.scraper import MIXED_SOURCES, fallback_posts
from artemis.llm.schemas import ScrapeBatchResponse, SimulatedPost
from artemis.models.data import today


def test_fallback_posts_for_mixed_sources():
    posts = fallback_posts(3)

    assert [p.source for p in posts] == ["X (Twitter)", "Facebook", "Bloomberg"]
    assert all(p.date == today() for p in posts)
    assert posts[0].url.startswith("https://twitter.com/radical_voice/status/")


def test_fallback_posts_use_requested_platform():
    posts = fallback_posts(3, "TikTok")

    assert [p.source for p in posts] == ["TikTok", "TikTok", "Bloomberg"]


@pytest.mark.parametrize("count", [1, 2])
def test_fallback_posts_are_sliced(count):
    assert len(fallback_posts(count)) == count


def test_batch_from_model(fake_llm_factory):
    batch = ScrapeBatchResponse(
        posts=[
            SimulatedPost(
                text="Sacred text torn up on stream @troll",
                source="TikTok",
                url="https://tiktok.com/@troll/video/1",
                date="2025-03-14",
                ip_address="203.0.113.7",
            )
        ]
    )
    llm = fake_llm_factory({ScrapeBatchResponse: batch})

    posts = asyncio.run(generate_social_scrape_batch(llm, 1, "TikTok"))

    assert len(posts) == 1
    assert posts[0].ip_address == "203.0.113.7"
    assert posts[0].url == "https://tiktok.com/@troll/video/1"
    assert "on TikTok" in llm.calls[0]["messages"][0]["content"]


@pytest.mark.parametrize("response", [RuntimeError("down"), ScrapeBatchResponse(posts=[])])
def test_batch_falls_back(fake_llm_factory, response):
    llm = fake_llm_factory({ScrapeBatchResponse: response})

    posts = asyncio.run(generate_social_scrape_batch(llm, 2))

    assert [p.ip_address for p in posts] == ["45.12.33.192", "192.168.0.45"]


def test_mock_article_is_single_post(fake_llm_factory):
    llm = fake_llm_factory({ScrapeBatchResponse: RuntimeError("down")})

    post = asyncio.run(generate_mock_article(llm, MIXED_SOURCES))

    assert post.source == "X (Twitter)"
    assert "#uprising" in post.text
