"""
Time Utilities

Sources report observation times in different units:
- On-chain oracles: seconds since epoch (e.g., 1704110400)
- Exchange REST APIs: milliseconds since epoch (e.g., 1704110400000)
- Quote / FundingRate schemas: always milliseconds

The helpers here convert seconds to milliseconds, measure observation age,
and render timestamps as UTC datetimes for display.
"""

from datetime import datetime, timezone
from typing import Optional, Union


def to_utc_datetime(timestamp: Union[int, float]) -> datetime:
    """
    Convert a timestamp (seconds or milliseconds) to UTC datetime.

    Detection Logic:
        - If timestamp > 1e12 (1 trillion): Assumed to be milliseconds
        - Otherwise: Assumed to be seconds

    Args:
        timestamp: Unix timestamp in seconds or milliseconds

    Returns:
        datetime: Timezone-aware datetime object in UTC

    Raises:
        ValueError: If timestamp is negative or invalid

    Examples:
        >>> to_utc_datetime(1704110400000)
        datetime.datetime(2024, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)

        >>> to_utc_datetime(1704110400)
        datetime.datetime(2024, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)
    """
    if timestamp < 0:
        raise ValueError(f"Timestamp cannot be negative: {timestamp}")

    if timestamp > 1e12:
        timestamp = timestamp / 1000.0

    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OSError, OverflowError, ValueError) as e:
        raise ValueError(f"Invalid timestamp: {timestamp}. Error: {e}")


def current_utc_timestamp(milliseconds: bool = False) -> int:
    """
    Get current UTC timestamp.

    Args:
        milliseconds: If True, return milliseconds; if False, return seconds

    Examples:
        >>> current_utc_timestamp()
        1704110400

        >>> current_utc_timestamp(milliseconds=True)
        1704110400000
    """
    timestamp = datetime.now(timezone.utc).timestamp()
    if milliseconds:
        return int(timestamp * 1000)
    return int(timestamp)


def seconds_to_ms(timestamp: Union[int, float]) -> int:
    """Convert an on-chain seconds timestamp to milliseconds."""
    return int(timestamp) * 1000


def age_ms(timestamp_ms: int, now_ms: Optional[int] = None) -> int:
    """
    Age of an observation in milliseconds.

    Args:
        timestamp_ms: Observation time in milliseconds
        now_ms: Reference time (defaults to now)

    Example:
        >>> age_ms(1704110400000, now_ms=1704110460000)
        60000
    """
    if now_ms is None:
        now_ms = current_utc_timestamp(milliseconds=True)
    return now_ms - timestamp_ms
