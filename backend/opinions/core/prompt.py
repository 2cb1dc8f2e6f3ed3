"""
Prompt composition for multi-source synthesis.

``build_prompt`` is a pure function of its inputs: the same product,
sources and expectations always render the same text.
"""
from __future__ import annotations

from typing import Callable, Dict, List

from opinions.config import (
    PROMPT_COMMENT_CHARS,
    PROMPT_MAX_COMMENTS,
    PROMPT_MAX_ITEMS,
    PROMPT_POST_CHARS,
    PROMPT_SNIPPET_CHARS,
    PROMPT_TITLE_CHARS,
)
from opinions.core.sections import Section, subheader
from opinions.models import (
    CANONICAL_ORDER,
    ArticleResult,
    DiscussionResult,
    RetailResult,
    SocialResult,
    SourceId,
    SourceMap,
    VideoResult,
    has_content,
)
from opinions.utils import format_number, truncate


SYSTEM_PROMPT = (
    "You are an expert product analyst who synthesizes opinions from multiple sources "
    "(social media, reviews, videos) to provide balanced, data-driven recommendations. "
    "You specialize in identifying consensus and divergence across different platforms."
)


def _title(text: str) -> str:
    return truncate(text, PROMPT_TITLE_CHARS)


def discussion_block(result: DiscussionResult) -> List[str]:
    lines = [
        f"**REDDIT DISCUSSIONS ({len(result.discussions)} posts, {result.total_comments} comments):**",
        f"- Overall sentiment: {result.sentiment.value}",
        f"- Average score: {format_number(result.avg_score)} upvotes",
    ]
    if result.subreddits:
        lines.append(f"- Active subreddits: {', '.join(result.subreddits)}")
    lines.append("- Top discussions:")
    for discussion in result.discussions[:PROMPT_MAX_ITEMS]:
        lines.append(
            f'  • "{_title(discussion.title)}" '
            f"({discussion.score} upvotes, {discussion.num_comments} comments)"
        )
    return lines


def video_block(result: VideoResult) -> List[str]:
    lines = [
        f"**YOUTUBE REVIEWS ({len(result.videos)} videos):**",
        f"- Total views: {format_number(result.metrics.total_views)}",
        f"- Total likes: {format_number(result.metrics.total_likes)}",
        "- Top reviews:",
    ]
    for video in result.videos[:PROMPT_MAX_ITEMS]:
        lines.append(
            f'  • "{_title(video.title)}" by {video.channel_title or "unknown channel"} '
            f"({format_number(video.view_count)} views, {format_number(video.like_count)} likes)"
        )
    if result.top_comments:
        lines.append("- Sample viewer comments:")
        for comment in result.top_comments[:PROMPT_MAX_COMMENTS]:
            lines.append(f'  • "{truncate(comment.text, PROMPT_COMMENT_CHARS)}" ({comment.like_count} likes)')
    return lines


def retail_block(result: RetailResult) -> List[str]:
    metrics = result.metrics
    lines = [
        "**BEST BUY CUSTOMER REVIEWS:**",
        f"- Products found: {metrics.products_found or len(result.products)}",
        f"- Average rating: {metrics.avg_rating:.1f}/5.0 stars",
        f"- Total reviews: {metrics.total_reviews}",
        f"- Overall sentiment: {result.sentiment.value}",
    ]
    if result.reviews:
        lines.append("- Sample customer reviews:")
        for review in result.reviews[:PROMPT_MAX_COMMENTS]:
            lines.append(
                f'  • {format_number(review.rating)}/5 - "{_title(review.title)}" - '
                f"{truncate(review.comment, PROMPT_COMMENT_CHARS)}"
            )
    return lines


def social_block(result: SocialResult) -> List[str]:
    metrics = result.metrics
    lines = [
        f"**X (TWITTER) SOCIAL OPINIONS ({len(result.tweets)} tweets):**",
        f"- Total engagement: {format_number(metrics.total_likes + metrics.total_retweets)}",
        f"- Verified accounts: {metrics.verified_count}",
        f"- Overall sentiment: {result.sentiment.value}",
        "- Top tweets:",
    ]
    for post in result.tweets[:PROMPT_MAX_ITEMS]:
        badge = " ✓" if post.verified else ""
        lines.append(
            f'  • @{post.username}{badge}: "{truncate(post.text, PROMPT_POST_CHARS)}" '
            f"({post.engagement} engagement)"
        )
    return lines


def article_block(result: ArticleResult) -> List[str]:
    lines = ["**EXPERT REVIEWS & ARTICLES:**"]
    for article in result.articles[:PROMPT_MAX_ITEMS]:
        lines.append(f'  • "{_title(article.title)}" - {truncate(article.snippet, PROMPT_SNIPPET_CHARS)}')
    return lines


SOURCE_BLOCKS: Dict[SourceId, Callable[..., List[str]]] = {
    SourceId.COMMUNITY_DISCUSSION: discussion_block,
    SourceId.VIDEO_REVIEW: video_block,
    SourceId.RETAIL_REVIEW: retail_block,
    SourceId.SOCIAL_POST: social_block,
    SourceId.WEB_ARTICLE: article_block,
}


def output_format(sources: SourceMap) -> List[str]:
    """
    Fixed instructions naming the four reply sections.

    Only sources whose fetch succeeded get a takeaway sub-header.
    """
    lines = [
        "Based on this multi-source data, provide a comprehensive analysis in the following EXACT format:",
        "",
        Section.KEY_TAKEAWAYS.header,
        "",
        "For each available source, provide 2-3 key takeaways:",
        "",
    ]
    for source_id in CANONICAL_ORDER:
        result = sources.get(source_id)
        if result is not None and result.available:
            lines += [subheader(source_id), "- [Key point 1]", "- [Key point 2]", ""]

    lines += [
        Section.CONSENSUS.header,
        "",
        "List 2-3 points where ALL or MOST sources agree:",
        "- [Agreement point 1]",
        "- [Agreement point 2]",
        "",
        Section.DIVERGENCE.header,
        "",
        "Highlight 2-3 contradictions or disagreements between sources:",
        '- [Divergence point 1: "Source A says X, but Source B says Y"]',
        "- [Divergence point 2]",
        "",
        Section.FINAL_SYNTHESIS.header,
        "",
        "**Overall Sentiment:** [Positive/Mixed/Negative]",
        "",
        "**Key Strengths:**",
        "1. [Strength 1 with source citations]",
        "2. [Strength 2 with source citations]",
        "",
        "**Key Concerns:**",
        "1. [Concern 1 with source citations]",
        "2. [Concern 2 with source citations]",
        "",
        "**Recommendation:** [Clear verdict with reasoning. Address user expectations if provided.]",
        "",
        "**Confidence Level:** [High/Medium/Low based on data quality and source consensus]",
        "",
        "Only cover sources listed under KEY TAKEAWAYS BY SOURCE; do not invent data for missing sources.",
        "IMPORTANT: Use the exact section headers shown above ("
        + ", ".join(section.header for section in Section)
        + ") so the response can be properly parsed.",
    ]
    return lines


def build_prompt(product: str, sources: SourceMap, expectations: str = "") -> str:
    """
    Render all usable source data into the synthesis request.

    Args:
        product: Product name as entered by the user
        sources: Normalized source records keyed by SourceId
        expectations: Optional free text describing what the user cares about

    Returns:
        Prompt text for the user message
    """
    lines = [f'I need a comprehensive analysis of "{product.strip()}" based on multiple data sources:', ""]

    for source_id in CANONICAL_ORDER:
        result = sources.get(source_id)
        if has_content(result):
            lines += SOURCE_BLOCKS[source_id](result)
            lines.append("")

    expectations = (expectations or "").strip()
    if expectations:
        lines += ["**USER EXPECTATIONS:**", expectations, ""]

    lines += output_format(sources)
    return "\n".join(lines)
