"""Real-time OV departures with deduplicated departure triggers."""

__version__ = "0.1.0"
