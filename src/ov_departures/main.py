"""Main entry point for the OV departures trigger service."""

import asyncio
import logging
import sys

import aiohttp

from ov_departures.adapters.config import AppConfig, TriggerRuleLoader
from ov_departures.adapters.flow import ConfiguredTriggerCard
from ov_departures.adapters.ovapi import OvApiTransportClient
from ov_departures.adapters.pollers import TriggerPoller
from ov_departures.adapters.runtime import DeparturesApp
from ov_departures.adapters.storage import InMemoryKeyValueStore, JsonFileKeyValueStore
from ov_departures.application import TriggerEngine, TriggeredSet, trigger_matches_state
from ov_departures.domain.ports import KeyValueStore

logger = logging.getLogger(__name__)


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure root logging to stderr."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def create_store(config: AppConfig) -> KeyValueStore:
    """Durable settings store if a file is configured, in-memory otherwise."""
    if config.settings_file:
        return JsonFileKeyValueStore(config.settings_file)
    return InMemoryKeyValueStore()


def build_app(
    config: AppConfig, session: aiohttp.ClientSession, store: KeyValueStore
) -> DeparturesApp:
    """Wire transport client, trigger cards, engine and poller together."""
    transport_client = OvApiTransportClient.from_config(config, session, store)

    trigger_args = TriggerRuleLoader.load(config)
    trigger_cards = {
        kind: ConfiguredTriggerCard(kind, argument_sets, trigger_matches_state)
        for kind, argument_sets in trigger_args.items()
    }
    for kind, argument_sets in trigger_args.items():
        logger.info(f"Loaded {len(argument_sets)} {kind.value} trigger(s)")

    engine = TriggerEngine(
        transport_client,
        trigger_cards,
        triggered=TriggeredSet(retention_ms=config.triggered_retention_minutes * 60 * 1000),
        departures_limit=config.departures_limit,
    )
    poller = TriggerPoller(engine, interval_seconds=config.poll_interval_seconds)
    return DeparturesApp(transport_client, poller)


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()
    configure_logging(config.log_level_number)

    store = create_store(config)

    async with aiohttp.ClientSession() as session:
        try:
            app = build_app(config, session, store)
        except (ValueError, FileNotFoundError) as e:
            logger.error(f"Invalid trigger configuration: {e}")
            sys.exit(1)

        logger.info("Running until interrupted")
        await app.run_forever()


def cli_main() -> None:
    """Synchronous entry point for the service command."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    cli_main()
