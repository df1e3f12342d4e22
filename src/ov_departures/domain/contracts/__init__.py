"""Contracts between adapters and the application layer."""

from ov_departures.domain.contracts.departure_cache import DepartureCacheProtocol
from ov_departures.domain.contracts.trigger_checker import TriggerCheckerProtocol
from ov_departures.domain.contracts.trigger_poller import TriggerPollerProtocol

__all__ = ["DepartureCacheProtocol", "TriggerCheckerProtocol", "TriggerPollerProtocol"]
