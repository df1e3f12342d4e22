"""OV API adapters for Dutch public transport (v0.ovapi.nl)."""

from ov_departures.adapters.ovapi.departure_repository import OvApiDepartureRepository
from ov_departures.adapters.ovapi.http_client import OvApiHttpClient
from ov_departures.adapters.ovapi.stop_area_repository import OvApiStopAreaRepository
from ov_departures.adapters.ovapi.transport_client import OvApiTransportClient

__all__ = [
    "OvApiDepartureRepository",
    "OvApiHttpClient",
    "OvApiStopAreaRepository",
    "OvApiTransportClient",
]
