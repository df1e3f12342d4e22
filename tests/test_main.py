"""Tests for service wiring."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from ov_departures.adapters.config import AppConfig
from ov_departures.adapters.flow import ConfiguredTriggerCard
from ov_departures.adapters.pollers import TriggerPoller
from ov_departures.adapters.storage import InMemoryKeyValueStore, JsonFileKeyValueStore
from ov_departures.application import TriggerEngine
from ov_departures.domain.models import TriggerKind
from ov_departures.main import build_app, create_store


def test_create_store_uses_settings_file(tmp_path: Path) -> None:
    """Given a settings file, when creating the store, then a JSON file store is used."""
    config = AppConfig(settings_file=str(tmp_path / "settings.json"), config_file=None)

    assert isinstance(create_store(config), JsonFileKeyValueStore)


def test_create_store_falls_back_to_memory() -> None:
    """Given no settings file, when creating the store, then an in-memory store is used."""
    config = AppConfig(settings_file=None, config_file=None)

    assert isinstance(create_store(config), InMemoryKeyValueStore)


def test_build_app_wires_configured_triggers() -> None:
    """Given the example config, when building the app, then engine and cards are wired."""
    example = Path(__file__).parent.parent / "config.example.toml"
    config = AppConfig(config_file=str(example), settings_file=None)

    app = build_app(config, MagicMock(), InMemoryKeyValueStore())

    assert isinstance(app.poller, TriggerPoller)
    assert app.poller.interval_seconds == 30
    engine = app.poller.checker
    assert isinstance(engine, TriggerEngine)
    card = engine._trigger_cards[TriggerKind.SOON]
    assert isinstance(card, ConfiguredTriggerCard)


def test_build_app_rejects_invalid_triggers(tmp_path: Path) -> None:
    """Given an invalid trigger kind, when building the app, then ValueError is raised."""
    config_file = tmp_path / "config.toml"
    config_file.write_text('[[triggers]]\nkind = "late"\nstation_id = "asdcs"\n', encoding="utf-8")
    config = AppConfig(config_file=str(config_file), settings_file=None)

    with pytest.raises(ValueError):
        build_app(config, MagicMock(), InMemoryKeyValueStore())
