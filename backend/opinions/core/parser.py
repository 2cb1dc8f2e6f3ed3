"""
Parse the model's semi-structured synthesis reply into typed sections.

The reply is expected to follow the footer written by ``core.prompt`` but
nothing enforces that. Parsing is total: missing sections come back empty
and, when the final synthesis cannot be located, the whole reply stands in
for it so callers always have guidance to show.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

from opinions.core.sections import Section, takeaway_key
from opinions.models import CANONICAL_ORDER, ParsedReply, SourceId

logger = logging.getLogger(__name__)

BULLET = re.compile(r"^\s*-\s+(.*?)\s*$")

# Any "**Label:**" line (e.g. "**Overall Sentiment:**") closes the current source
OTHER_LABEL = re.compile(r"^\s*\*\*[^*]+:\s*\*\*")


def _subheader_pattern(source_id: SourceId) -> re.Pattern:
    # Optionally nested under a list marker; "rest" holds any inline bullet
    name = re.escape(source_id.display_name)
    return re.compile(
        rf"^\s*(?:-\s*)?(?:#{{1,6}}\s*)?"
        rf"(?:\*\*\s*{name}\s*:\s*\*\*|\*\*\s*{name}\s*\*\*\s*:|{name}\s*:(?=\s*$))"
        r"(?P<rest>.*)$",
        re.IGNORECASE,
    )


SUBHEADERS = [(source_id, _subheader_pattern(source_id)) for source_id in CANONICAL_ORDER]


def split_sections(text: str) -> Dict[Section, str]:
    """
    Locate each known header and slice out its body.

    A body runs from the end of its header to the start of the next header
    found in the text, or to the end of the text.

    Returns:
        Mapping of found sections to their raw bodies
    """
    found = []
    for section in Section:
        match = section.pattern.search(text)
        if match:
            found.append((match.start(), match.end(), section))
    found.sort(key=lambda item: item[0])

    bodies: Dict[Section, str] = {}
    for index, (_, end, section) in enumerate(found):
        stop = found[index + 1][0] if index + 1 < len(found) else len(text)
        bodies[section] = text[end:stop]
    return bodies


def extract_bullets(body: str) -> List[str]:
    """Return the trimmed text of every "- " line, in order."""
    bullets = []
    for line in body.splitlines():
        match = BULLET.match(line)
        if match and match.group(1):
            bullets.append(match.group(1))
    return bullets


def _match_subheader(line: str) -> Tuple[Optional[SourceId], str]:
    """Return the source a sub-header line names, plus the text after it."""
    for source_id, pattern in SUBHEADERS:
        match = pattern.match(line)
        if match:
            return source_id, match.group("rest")
    return None, ""


def extract_takeaways(body: str) -> Dict[str, List[str]]:
    """
    Group bullets under the source sub-header that precedes them.

    Sources whose sub-header is missing, or that have no bullets, are left
    out of the mapping.
    """
    grouped: Dict[SourceId, List[str]] = {}
    current: Optional[SourceId] = None

    for line in body.splitlines():
        source_id, rest = _match_subheader(line)
        if source_id is not None:
            current = source_id
            inline = BULLET.match(rest)
            if inline and inline.group(1):
                grouped.setdefault(current, []).append(inline.group(1))
            continue
        if OTHER_LABEL.match(line):
            current = None
            continue
        if current is None:
            continue
        match = BULLET.match(line)
        if match and match.group(1):
            grouped.setdefault(current, []).append(match.group(1))

    return {
        takeaway_key(source_id): grouped[source_id]
        for source_id in CANONICAL_ORDER
        if grouped.get(source_id)
    }


def parse_structured_response(text: Optional[str]) -> ParsedReply:
    """
    Convert a synthesis reply into takeaways, consensus, divergence and
    final synthesis.

    Args:
        text: Raw completion text (None is treated as empty)

    Returns:
        ParsedReply; never raises
    """
    text = text or ""

    try:
        bodies = split_sections(text)
        takeaways = extract_takeaways(bodies.get(Section.KEY_TAKEAWAYS, ""))
        consensus = extract_bullets(bodies.get(Section.CONSENSUS, ""))
        divergence = extract_bullets(bodies.get(Section.DIVERGENCE, ""))
        synthesis = bodies.get(Section.FINAL_SYNTHESIS, "").strip()
    except Exception:
        logger.warning("Could not parse structured synthesis reply", exc_info=True)
        return ParsedReply(synthesis=text)

    return ParsedReply(
        key_takeaways=takeaways,
        consensus=consensus,
        divergence=divergence,
        synthesis=synthesis or text,
    )
