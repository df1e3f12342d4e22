"""Application lifecycle: stop directory prefetch and trigger polling."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ov_departures.domain.contracts.trigger_poller import TriggerPollerProtocol
    from ov_departures.domain.ports.transport_client import TransportClient

logger = logging.getLogger(__name__)


class DeparturesApp:
    """Owns the background work started at init and cancelled at uninit."""

    def __init__(self, transport_client: TransportClient, poller: TriggerPollerProtocol) -> None:
        self.transport_client = transport_client
        self.poller = poller
        self._background_tasks: set[asyncio.Task] = set()

    async def start(self) -> None:
        """Start the prefetch without awaiting it, then start polling."""
        logger.info("Starting OV departures")
        task = asyncio.create_task(self._prefetch_stop_directory())
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

        await self.poller.start()

    async def stop(self) -> None:
        """Stop polling and cancel any unfinished background work."""
        await self.poller.stop()

        for task in list(self._background_tasks):
            task.cancel()
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)
        self._background_tasks.clear()
        logger.info("Stopped OV departures")

    async def run_forever(self) -> None:
        """Start, then block until cancelled."""
        await self.start()
        try:
            await asyncio.Event().wait()
        finally:
            await self.stop()

    async def _prefetch_stop_directory(self) -> None:
        try:
            stop_areas = await self.transport_client.fetch_stop_directory()
            logger.info(f"Prefetched {len(stop_areas)} stop area(s)")
        except Exception as e:
            logger.error(f"Stop directory prefetch failed: {e}")
