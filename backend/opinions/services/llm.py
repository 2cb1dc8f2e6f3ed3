"""
Chat-completion access shared by the synthesis and recommendation services.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

from openai import AsyncOpenAI, RateLimitError

from opinions.config import settings
from opinions.errors import SynthesisError

logger = logging.getLogger(__name__)


def get_openai_client() -> AsyncOpenAI:
    """
    Get an OpenAI client when an API key is configured.

    Raises:
        SynthesisError: With a 503 hint when no key is set
    """
    if not settings.OPENAI_API_KEY:
        logger.error("OPENAI_API_KEY is not configured")
        raise SynthesisError(status_code=503)
    return AsyncOpenAI(api_key=settings.OPENAI_API_KEY)


async def complete(
    client: Any,
    system_prompt: str,
    user_prompt: str,
    model: str,
    max_tokens: int,
) -> Tuple[str, Optional[str]]:
    """
    Send one chat completion request; no retries.

    Args:
        client: AsyncOpenAI (or compatible) client
        system_prompt: Instruction for the system role
        user_prompt: User message content
        model: Model name
        max_tokens: Completion token budget

    Returns:
        Tuple of (completion text, finish reason)

    Raises:
        SynthesisError: When the request fails for any reason
    """
    try:
        response = await client.chat.completions.create(
            model=model,
            max_tokens=max_tokens,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        choice = response.choices[0]
        content = choice.message.content
        finish_reason = choice.finish_reason
    except RateLimitError as e:
        logger.warning("Model rate limit reached: %s", e)
        raise SynthesisError(status_code=429) from e
    except Exception as e:
        logger.error("Model request failed: %s: %s", type(e).__name__, e)
        raise SynthesisError(status_code=502) from e

    return content or "", finish_reason
