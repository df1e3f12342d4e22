"""Application layer - trigger engine and flow card use cases."""

from ov_departures.application.flow_cards import FlowCardService, trigger_matches_state
from ov_departures.application.trigger_engine import TriggerEngine
from ov_departures.application.triggered_set import TriggeredSet

__all__ = ["FlowCardService", "TriggerEngine", "TriggeredSet", "trigger_matches_state"]
