"""
Best-effort coercion of loosely typed document fields.

Documents written by older storefront clients store numbers as strings and
timestamps in several shapes. Nothing here raises: unusable input becomes
0 (numbers) or None (timestamps).
"""
import math
from datetime import datetime, timezone
from typing import Any, Mapping, Optional


def parse_number(value: Any) -> Optional[float]:
    """A finite number, or None when value does not read as one."""
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_number(value: Any) -> float:
    number = parse_number(value)
    return 0.0 if number is None else number


def to_int(value: Any) -> int:
    return int(to_number(value))


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Accepts datetimes, ISO-8601 strings, epoch milliseconds and exported
    timestamp mappings ({"seconds": ..., "nanoseconds": ...}).
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        millis = parse_number(value)
        return _from_epoch(millis / 1000.0) if millis is not None else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    if isinstance(value, Mapping):
        seconds = parse_number(value.get("seconds", value.get("_seconds")))
        if seconds is None:
            return None
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0))
        return _from_epoch(seconds + to_number(nanos) / 1e9)
    return None


def _from_epoch(seconds: float) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
