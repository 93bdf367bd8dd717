import asyncio

import pytest

from artemis.config.models import Config, MonitorConfig
from artemis.llm.schemas import AnalysisResponse, ScrapeBatchResponse
from artemis.models.data import AppSettings
from artemis.monitor import ScanMonitor


@pytest.fixture
def config() -> Config:
    return Config(monitor=MonitorConfig(interval_minutes=1, batch_size=1))


def safe_responses(factory, count):
    return [
        factory(
            article_id=f"00000000-0000-4000-8000-00000000000{i}",
            sentiment_label="Positive",
            sentiment_score=0.5,
            risk_category="None",
        )
        for i in range(count)
    ]


def test_runs_requested_number_of_scans(config, store, fake_llm_factory, analysis_response_factory):
    llm = fake_llm_factory(
        {
            ScrapeBatchResponse: RuntimeError("offline"),
            AnalysisResponse: safe_responses(analysis_response_factory, 2),
        },
        text="Routine coverage only.",
    )
    monitor = ScanMonitor(config, llm, store)
    monitor.interval_seconds = 0

    asyncio.run(monitor.start(max_scans=2))

    assert monitor.scans_completed == 2
    assert monitor.scans_failed == 0
    assert [r["status"] for r in asyncio.run(store.list_scans())] == ["completed", "completed"]


def test_failed_scan_is_counted_not_raised(config, store, fake_llm_factory):
    llm = fake_llm_factory({ScrapeBatchResponse: RuntimeError("offline"), AnalysisResponse: ValueError("bad")})
    monitor = ScanMonitor(config, llm, store)

    assert asyncio.run(monitor.run_once()) is None
    assert monitor.scans_failed == 1


def test_stop_before_start_skips_scanning(config, store, fake_llm_factory):
    monitor = ScanMonitor(config, fake_llm_factory(), store)
    monitor.stop()

    asyncio.run(monitor.start())

    assert monitor.scans_completed == 0
    assert asyncio.run(store.list_scans()) == []


def test_settings_are_read_each_cycle(config, store, fake_llm_factory, analysis_response_factory):
    llm = fake_llm_factory(
        {ScrapeBatchResponse: RuntimeError("offline"), AnalysisResponse: [analysis_response_factory()]},
        text="Incitement detected.",
    )
    asyncio.run(store.save_settings(AppSettings(email_enabled=False)))
    monitor = ScanMonitor(config, llm, store)

    result = asyncio.run(monitor.run_once())

    assert result.high_risk_count == 1
    assert result.alerts == []


def test_interval_comes_from_config(config, store, fake_llm_factory):
    monitor = ScanMonitor(config, fake_llm_factory(), store)

    assert monitor.interval_seconds == 60
