"""
Section contract shared by the prompt footer and the reply parser.

The composer writes these literals into its instructions and the parser
anchors on the same literals, so both sides import them from here.
"""
from __future__ import annotations

import re
from enum import Enum

from opinions.models import SourceId


class Section(str, Enum):
    KEY_TAKEAWAYS = "KEY TAKEAWAYS BY SOURCE"
    CONSENSUS = "CONSENSUS"
    DIVERGENCE = "DIVERGENCE"
    FINAL_SYNTHESIS = "FINAL SYNTHESIS"

    @property
    def header(self) -> str:
        return f"## {self.value}"

    @property
    def pattern(self) -> re.Pattern:
        # Tolerates a different heading depth and extra spacing
        words = r"\s+".join(re.escape(word) for word in self.value.split())
        return re.compile(rf"#{{1,6}}[ \t]*{words}\b", re.IGNORECASE)


def subheader(source_id: SourceId) -> str:
    """Bold ``**Name:**`` label introducing a source's takeaways."""
    return f"**{source_id.display_name}:**"


def takeaway_key(source_id: SourceId) -> str:
    """Lowercase letters-only key for a source ("X/Twitter" -> "xtwitter")."""
    return re.sub(r"[^a-z]", "", source_id.display_name.lower())
