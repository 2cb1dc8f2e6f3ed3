"""
Multi-source opinion synthesis.

One request: scorecard and prompt from the normalized sources, a single
model call, then the reply parsed into typed sections.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from opinions.config import settings
from opinions.core.parser import parse_structured_response
from opinions.core.prompt import SYSTEM_PROMPT, build_prompt
from opinions.core.scorecard import build_scorecard, sources_used
from opinions.models import SourceMap, SynthesisResult
from opinions.services.llm import complete, get_openai_client

logger = logging.getLogger(__name__)


class OpinionSynthesizer:
    """Synthesizes a recommendation from several opinion sources."""

    def __init__(
        self,
        client: Optional[Any] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ):
        self._client = client
        self.model = model or settings.OPENAI_MODEL
        self.max_tokens = max_tokens or settings.SYNTHESIS_MAX_TOKENS

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_openai_client()
        return self._client

    async def synthesize(self, product: str, sources: SourceMap, expectations: str = "") -> SynthesisResult:
        """
        Synthesize opinions about a product from all available sources.

        Args:
            product: Product name
            sources: Normalized source records keyed by SourceId
            expectations: Optional user expectations to address

        Returns:
            SynthesisResult with scorecard, parsed sections and finish reason

        Raises:
            SynthesisError: When the model call fails; no partial result
        """
        scorecard = build_scorecard(sources)
        prompt = build_prompt(product, sources, expectations)
        used = sources_used(sources)

        logger.info("Synthesizing %r from %d source(s): %s", product, len(used), ", ".join(used) or "none")
        text, finish_reason = await complete(
            self.client,
            SYSTEM_PROMPT,
            prompt,
            model=self.model,
            max_tokens=self.max_tokens,
        )
        if finish_reason == "length":
            logger.warning("Synthesis for %r was truncated at %d tokens", product, self.max_tokens)

        parsed = parse_structured_response(text)
        return SynthesisResult(
            scorecard=scorecard,
            key_takeaways=parsed.key_takeaways,
            consensus=parsed.consensus,
            divergence=parsed.divergence,
            synthesis=parsed.synthesis,
            sources_used=used,
            finish_reason=finish_reason,
        )


async def synthesize(product: str, sources: SourceMap, expectations: str = "") -> SynthesisResult:
    """Synthesize with a default-configured client."""
    return await OpinionSynthesizer().synthesize(product, sources, expectations)
