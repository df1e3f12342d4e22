"""Constants for the OV API adapter.

Uses the public v0.ovapi.nl API (KV78Turbo real-time feed).
No authentication required.
"""

# API endpoints
OVAPI_BASE_URL = "https://v0.ovapi.nl"
STOP_AREA_PATH = "/stopareacode/"  # GET /stopareacode/ and /stopareacode/{code}

# Timeouts in seconds
DEFAULT_TIMEOUT_SECONDS = 10
STOP_AREAS_TIMEOUT_SECONDS = 30

# Per-station departures freshness window in milliseconds
DEPARTURES_CACHE_TTL_MS = 30 * 1000

# Search and autocomplete limits
MIN_SEARCH_QUERY_LENGTH = 2
MAX_SEARCH_RESULTS = 15
DESTINATIONS_LOOKAHEAD = 50
DEFAULT_DEPARTURES_LIMIT = 10

DISPLAY_TIMEZONE = "Europe/Amsterdam"

# HTTP headers
DEFAULT_HEADERS = {
    "Accept": "application/json",
}

# TripStopStatus -> normalized status
STATUS_MAP = {
    "PLANNED": "planned",
    "DRIVING": "planned",
    "ARRIVED": "planned",
    "PASSED": "passed",
    "CANCEL": "cancelled",
}

# TransportType (lowercased) -> normalized transport type; anything else is a bus
TRANSPORT_TYPE_MAP = {
    "bus": "bus",
    "tram": "tram",
    "metro": "metro",
    "trein": "train",
    "train": "train",
    "ferry": "ferry",
    "veer": "ferry",
}
DEFAULT_TRANSPORT_TYPE = "bus"
