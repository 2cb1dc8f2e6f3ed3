"""
Common coercion helpers for raw source payloads.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from dateutil import parser as dateparser


def pick(payload: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """
    Return the first present, non-None value among several key spellings.

    Args:
        payload: Raw source mapping
        *keys: Candidate keys (e.g. camelCase then snake_case)
        default: Value when none of the keys is set

    Returns:
        The first value found, or ``default``
    """
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return default


def to_float(value: Any) -> float:
    """
    Coerce a raw metric into a float, treating anything unusable as zero.

    Handles numeric strings such as "4.3" produced by upstream formatting.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if number != number or number in (float("inf"), float("-inf")):
        return 0.0
    return number


def to_int(value: Any) -> int:
    """Coerce a raw count into an int, treating anything unusable as zero."""
    return int(to_float(value))


def clean_text(text: Any) -> str:
    """
    Clean and normalize text content.

    Args:
        text: Raw text value or None

    Returns:
        Cleaned text string, empty string if input is None
    """
    if text is None:
        return ""
    return str(text).strip()


def as_mapping(value: Any) -> Mapping[str, Any]:
    """Return ``value`` when it is a mapping, else an empty dict."""
    return value if isinstance(value, Mapping) else {}


def as_records(value: Any) -> Iterable[Mapping[str, Any]]:
    """Yield the mapping entries of a raw list, skipping anything else."""
    if not isinstance(value, (list, tuple)):
        return []
    return [entry for entry in value if isinstance(entry, Mapping)]


def parse_utc_timestamp(value: Any) -> Optional[str]:
    """
    Parse a date string or epoch seconds and render it as ISO-8601 UTC.

    Args:
        value: Date string in various formats, epoch number, or None

    Returns:
        ISO timestamp, or None when the value is missing or unparseable
    """
    if value is None or value == "":
        return None

    try:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            parsed = datetime.fromtimestamp(value, tz=timezone.utc)
        else:
            parsed = dateparser.parse(str(value))
    except (ValueError, OverflowError, OSError):
        return None

    if parsed.tzinfo:
        parsed = parsed.astimezone(timezone.utc)
    else:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.replace(microsecond=0).isoformat()
