"""Poller adapters."""

from ov_departures.adapters.pollers.trigger_poller import TriggerPoller

__all__ = ["TriggerPoller"]
