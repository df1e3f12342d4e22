"""Timestamp normalization for the OV API.

The feed reports civil Amsterdam time without a UTC offset, e.g.
``"2025-06-14T13:31:00"``. Daylight saving is decided per calendar day: the
whole transition day counts as DST in March and as standard time in October,
although the real switch happens at 02:00 local time.
"""

import logging
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

CET_OFFSET_MINUTES = 60
CEST_OFFSET_MINUTES = 120


def _last_sunday_of(year: int, month: int) -> int:
    """Day of month of the last Sunday in March or October (both have 31 days)."""
    days_since_sunday = date(year, month, 31).isoweekday() % 7
    return 31 - days_since_sunday


def amsterdam_utc_offset_minutes(local: datetime) -> int:
    """UTC offset of Amsterdam civil time for the calendar day of ``local``."""
    dst_start = _last_sunday_of(local.year, 3)
    dst_end = _last_sunday_of(local.year, 10)

    is_dst = (
        3 < local.month < 10
        or (local.month == 3 and local.day >= dst_start)
        or (local.month == 10 and local.day < dst_end)
    )
    return CEST_OFFSET_MINUTES if is_dst else CET_OFFSET_MINUTES


def parse_ovapi_datetime(value: str | None) -> datetime | None:
    """Parse an OV API timestamp into an aware UTC datetime.

    Strings with an explicit offset are taken as absolute. Strings without one
    are Amsterdam civil time. Returns None for empty or malformed input.
    """
    if not value or not isinstance(value, str):
        return None

    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Unparseable OV API timestamp: {value!r}")
        return None

    try:
        if parsed.tzinfo is not None:
            return parsed.astimezone(UTC)

        offset = amsterdam_utc_offset_minutes(parsed)
        return parsed.replace(tzinfo=UTC) - timedelta(minutes=offset)
    except OverflowError:
        logger.debug(f"OV API timestamp out of range: {value!r}")
        return None


def to_epoch_millis(moment: datetime) -> int:
    """Milliseconds since epoch of an aware datetime."""
    return int(moment.timestamp() * 1000)


def format_clock_time(moment: datetime, timezone: str) -> str:
    """Format an instant as 24-hour ``HH:MM`` in the given IANA timezone."""
    return moment.astimezone(ZoneInfo(timezone)).strftime("%H:%M")
