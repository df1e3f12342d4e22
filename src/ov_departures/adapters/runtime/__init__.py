"""Runtime adapters."""

from ov_departures.adapters.runtime.departures_app import DeparturesApp

__all__ = ["DeparturesApp"]
