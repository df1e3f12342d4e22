"""Flow card adapters standing in for the host automation runtime."""

from ov_departures.adapters.flow.configured_trigger_card import ConfiguredTriggerCard

__all__ = ["ConfiguredTriggerCard"]
