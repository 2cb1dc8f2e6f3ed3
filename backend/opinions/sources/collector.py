"""
Source collection coordinator that maps raw per-source results onto
canonical sources.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from opinions.models import SourceId, SourceResult
from opinions.sources.records import parse_source_result

logger = logging.getLogger(__name__)


# Generic category names accepted alongside the wire ids
SOURCE_ALIASES: Dict[str, SourceId] = {
    "community-discussion": SourceId.COMMUNITY_DISCUSSION,
    "video-review": SourceId.VIDEO_REVIEW,
    "retail-review": SourceId.RETAIL_REVIEW,
    "social-post": SourceId.SOCIAL_POST,
    "posts": SourceId.SOCIAL_POST,
    "web-article": SourceId.WEB_ARTICLE,
}


def resolve_source_id(key: Any) -> Optional[SourceId]:
    """
    Resolve a raw mapping key to a canonical source.

    Args:
        key: SourceId, wire id ("reddit") or category alias ("video-review")

    Returns:
        Matching SourceId, or None for unknown keys
    """
    if isinstance(key, SourceId):
        return key

    name = str(key).strip().lower()
    try:
        return SourceId(name)
    except ValueError:
        return SOURCE_ALIASES.get(name)


def normalize_sources(raw_sources: Optional[Mapping[Any, Any]]) -> Dict[SourceId, Optional[SourceResult]]:
    """
    Normalize a mapping of raw per-source results.

    Args:
        raw_sources: Mapping keyed by wire id or alias; values are the
            fetchers' JSON objects

    Returns:
        Mapping with one key per canonical source; absent sources map to None
    """
    normalized: Dict[SourceId, Optional[SourceResult]] = {source_id: None for source_id in SourceId}

    for key, payload in (raw_sources or {}).items():
        source_id = resolve_source_id(key)
        if source_id is None:
            logger.debug("Ignoring unknown source key %r", key)
            continue
        result = parse_source_result(source_id, payload)
        if result is None and normalized[source_id] is not None:
            # Wire id and alias both given; an empty one never overrides
            continue
        normalized[source_id] = result

    return normalized
