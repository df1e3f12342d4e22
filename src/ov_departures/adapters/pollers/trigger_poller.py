"""Trigger poller running trigger checks on a fixed interval."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ov_departures.domain.contracts.trigger_poller import TriggerPollerProtocol

if TYPE_CHECKING:
    from ov_departures.domain.contracts.trigger_checker import TriggerCheckerProtocol

logger = logging.getLogger(__name__)


class TriggerPoller(TriggerPollerProtocol):
    """Runs one trigger check per interval; ticks never overlap."""

    def __init__(self, checker: TriggerCheckerProtocol, interval_seconds: float = 30) -> None:
        """Initialize the trigger poller.

        Args:
            checker: Evaluates all configured triggers once per call.
            interval_seconds: Delay between the end of one tick and the next.
        """
        self.checker = checker
        self.interval_seconds = interval_seconds
        self.tick_count = 0
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the trigger poller."""
        if self.running:
            logger.warning("Trigger poller already running")
            return

        self._task = asyncio.create_task(self._poll_loop())
        logger.info(f"Started trigger poller (interval: {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the trigger poller."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Trigger poller cancelled")
            logger.info("Stopped trigger poller")
        self._task = None

    async def _poll_loop(self) -> None:
        """Main polling loop."""
        try:
            while True:
                await asyncio.sleep(self.interval_seconds)
                await self.run_tick()
        except asyncio.CancelledError:
            logger.info("Trigger poller cancelled")
            raise

    async def run_tick(self) -> None:
        """Run one trigger check, logging anything that escapes it."""
        self.tick_count += 1
        try:
            await self.checker.check_triggers()
        except Exception as e:
            logger.error(f"Error checking triggers: {e}")
