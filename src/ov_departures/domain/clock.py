"""Clock source shared by caches and the trigger engine."""

import time
from collections.abc import Callable

Clock = Callable[[], int]


def now_millis() -> int:
    """Current wall-clock instant in milliseconds since epoch."""
    return int(time.time() * 1000)
