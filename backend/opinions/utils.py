"""
Shared utility functions for the opinion synthesis application.
"""
from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from textwrap import shorten

SCORE_MIN = -5.0
SCORE_MAX = 5.0
PLACEHOLDER = "..."


def now_utc() -> datetime:
    """
    Get current UTC datetime with timezone information.

    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)


def normalize_text(text: str | None) -> str:
    """
    Normalize whitespace in text content.

    Args:
        text: Input text string (can be None)

    Returns:
        Normalized text with single spaces and trimmed edges
    """
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def truncate(text: str | None, width: int) -> str:
    """
    Collapse whitespace and shorten text to at most ``width`` characters.

    Args:
        text: Input text (can be None)
        width: Maximum length including the placeholder

    Returns:
        Shortened text ending in "..." when anything was cut
    """
    text = normalize_text(text)
    if not text:
        return ""
    shortened = shorten(text, width=width, placeholder=PLACEHOLDER)
    if shortened == PLACEHOLDER:
        # First word alone exceeds the width (unspaced scripts, bare URLs)
        return text[: width - len(PLACEHOLDER)] + PLACEHOLDER
    return shortened


def clamp_score(value: float) -> float:
    """
    Clamp a float value to the scorecard range [-5.0, 5.0].

    Args:
        value: Input float value

    Returns:
        Value clamped to [-5.0, 5.0] range
    """
    return max(SCORE_MIN, min(SCORE_MAX, value))


def round_score(value: float) -> float:
    """Round half-up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def format_number(num: float) -> str:
    """
    Format large numbers for readability (1.2K, 3.4M).

    Args:
        num: Count or total

    Returns:
        Short human-readable string
    """
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    if float(num).is_integer():
        return str(int(num))
    return str(num)
