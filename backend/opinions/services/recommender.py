"""
Single-prompt buy recommendation against a best-in-class alternative.
"""
from __future__ import annotations

from typing import Any, Optional

from opinions.config import settings
from opinions.models import Recommendation
from opinions.services.llm import complete, get_openai_client


RECOMMEND_SYSTEM_PROMPT = (
    "You are a product recommendation expert. When the user tells you a product, identify the "
    "best-in-class alternative. Provide a clear and structured comparison with the following format:\n\n"
    "**[Product Name] vs. [Best-in-Class Alternative]**\n\n"
    "**Advantages [Product Name]:**\n1. [First advantage]\n2. [Second advantage]\n3. [Third advantage]\n\n"
    "**Advantages [Best-in-Class Alternative]:**\n1. [First advantage]\n2. [Second advantage]\n"
    "3. [Third advantage]\n\n"
    "**Price Comparison:**\n\n"
    "[Product Name] is around [price] and [Best-in-Class Alternative] is around [price].\n\n"
    "**Recommendation:**\n\nMake a recommendation to buy or not.\n\n"
    "**Best product reviews on Youtube:**\n\nList the 3 most popular Youtube videos, which review the "
    "product. Use markdown formatting with **bold** text for headers and ensure proper line breaks and "
    "1 empty line between sections. Limit the answer to 400 tokens, but make sure to give a complete answer."
)


async def recommend(product: str, client: Optional[Any] = None) -> Recommendation:
    """
    Ask the model whether to buy a product.

    Args:
        product: Product name
        client: Optional AsyncOpenAI-compatible client

    Returns:
        Recommendation text and finish reason

    Raises:
        SynthesisError: When the model call fails
    """
    text, reason = await complete(
        client or get_openai_client(),
        RECOMMEND_SYSTEM_PROMPT,
        f"Hello. Shall I buy {product.strip()}?",
        model=settings.OPENAI_MODEL,
        max_tokens=settings.RECOMMEND_MAX_TOKENS,
    )
    return Recommendation(response_message=text, reason=reason)
