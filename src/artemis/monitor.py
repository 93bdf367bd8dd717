"""Continuous monitoring: repeat scans at a fixed interval."""

import asyncio
import signal
from typing import Optional

import structlog

from .analysis.scan import run_scan
from .config.models import Config
from .llm.client import LLMClient
from .models.data import ScanResult
from .state import StateManager

logger = structlog.get_logger()


class ScanMonitor:
    """Runs a scan every interval until stopped."""

    def __init__(self, config: Config, llm_client: LLMClient, store: StateManager):
        """
        Initialize the monitor.

        Args:
            config: Application configuration
            llm_client: LLM client shared across scans
            store: Initialized state store
        """
        self.config = config
        self.llm_client = llm_client
        self.store = store
        self.scans_completed = 0
        self.scans_failed = 0
        self.interval_seconds = config.monitor.interval_minutes * 60
        self._stop_event = asyncio.Event()

    async def run_once(self) -> Optional[ScanResult]:
        """Run a single scan. Failures are logged and counted, not raised."""
        # Settings are read fresh each cycle
        settings = await self.store.get_settings()
        try:
            result = await run_scan(
                self.llm_client,
                self.store,
                settings,
                count=self.config.monitor.batch_size,
                platform=self.config.monitor.platform,
                email_config=self.config.email,
            )
        except Exception as e:
            self.scans_failed += 1
            logger.error("Monitor scan failed", error=str(e), exc_info=True)
            return None

        self.scans_completed += 1
        return result

    async def start(self, max_scans: Optional[int] = None) -> None:
        """
        Scan repeatedly until stopped.

        Args:
            max_scans: Stop after this many scan attempts (runs forever when None)
        """
        logger.info("Monitor running", interval_seconds=self.interval_seconds)

        attempts = 0
        while not self._stop_event.is_set():
            await self.run_once()
            attempts += 1
            if max_scans is not None and attempts >= max_scans:
                break

            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass

        logger.info(
            "Monitor stopped",
            completed=self.scans_completed,
            failed=self.scans_failed,
        )

    def stop(self) -> None:
        """Signal the monitor to stop."""
        self._stop_event.set()

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """
        Set up signal handlers for graceful shutdown.

        Args:
            loop: The asyncio event loop to attach signal handlers to
        """
        def signal_handler():
            logger.info("Received shutdown signal, stopping monitor")
            self.stop()

        loop.add_signal_handler(signal.SIGINT, signal_handler)
        loop.add_signal_handler(signal.SIGTERM, signal_handler)
