"""
Per-source sentiment scorecard.

Each canonical source has one scoring rule that maps its proxy signals
(star ratings, upvotes, likes, like-to-view ratios) onto a shared -5..+5
scale. Rules are looked up by SourceId; sources without a rule are listed
with a null score.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Optional

from opinions.models import (
    CANONICAL_ORDER,
    DiscussionResult,
    RetailResult,
    ScorecardEntry,
    Sentiment,
    SocialResult,
    SourceId,
    SourceMap,
    SourceResult,
    VideoResult,
    has_content,
)
from opinions.utils import clamp_score, round_score

# Engagement above/below which community and social scores are nudged
HIGH_ENGAGEMENT = 100
LOW_ENGAGEMENT = 10

# "very positive" is not emitted by the current fetchers; kept so richer
# classifiers can feed it without a rule change.
COMMUNITY_LABEL_SCORES: Dict[Sentiment, float] = {
    Sentiment.POSITIVE: 3.5,
    Sentiment.VERY_POSITIVE: 4.5,
    Sentiment.NEGATIVE: -3.0,
    Sentiment.MIXED: 1.5,
}

SOCIAL_LABEL_SCORES: Dict[Sentiment, float] = {
    **COMMUNITY_LABEL_SCORES,
    Sentiment.MIXED: 1.0,
}

# (minimum like/view ratio, score), checked top-down
LIKE_RATIO_BANDS = (
    (0.04, 4.0),
    (0.03, 3.0),
    (0.02, 2.0),
    (0.01, 1.0),
)
LOW_LIKE_RATIO_SCORE = -1.0


def score_retail(result: RetailResult) -> float:
    """
    Map a 1-5 average star rating linearly onto -5..+5, centered at 3 stars.

    Args:
        result: Retail source record

    Returns:
        Raw score before clamping
    """
    return ((result.metrics.avg_rating - 3) / 2) * 5


def score_discussions(result: DiscussionResult) -> float:
    """
    Score community threads from their sentiment label and upvote level.

    Args:
        result: Community discussion record

    Returns:
        Raw score before clamping
    """
    score = COMMUNITY_LABEL_SCORES.get(result.sentiment, 0.0)
    if result.avg_score > HIGH_ENGAGEMENT:
        score += 0.5
    elif result.avg_score < LOW_ENGAGEMENT:
        score -= 0.5
    return score


def score_posts(result: SocialResult) -> float:
    """
    Score social posts from their label; high engagement strengthens it.

    Args:
        result: Social post record

    Returns:
        Raw score before clamping
    """
    score = SOCIAL_LABEL_SCORES.get(result.sentiment, 0.0)
    if result.metrics.avg_likes > HIGH_ENGAGEMENT:
        score = score * 1.1 if score != 0 else score + 0.5
    return score


def like_ratio(result: VideoResult) -> float:
    """Aggregate likes per view; zero when no views were reported."""
    views = result.metrics.total_views
    if views <= 0:
        return 0.0
    return result.metrics.total_likes / views


def score_videos(result: VideoResult) -> float:
    """
    Score video reviews purely from the aggregate like-to-view ratio.

    Typical well-received review videos sit around 3-5% likes per view.
    """
    ratio = like_ratio(result)
    for threshold, score in LIKE_RATIO_BANDS:
        if ratio >= threshold:
            return score
    return LOW_LIKE_RATIO_SCORE


# Web articles carry no inherent rating and have no rule.
SCORING_RULES: Dict[SourceId, Callable[..., float]] = {
    SourceId.COMMUNITY_DISCUSSION: score_discussions,
    SourceId.VIDEO_REVIEW: score_videos,
    SourceId.RETAIL_REVIEW: score_retail,
    SourceId.SOCIAL_POST: score_posts,
}


def sample_size(source_id: SourceId, result: SourceResult) -> int:
    """Reviews for retail, otherwise the number of collected items."""
    if source_id is SourceId.RETAIL_REVIEW:
        return max(0, result.metrics.total_reviews)
    return len(result.items)


def score_source(source_id: SourceId, result: SourceResult) -> Optional[float]:
    """
    Apply the source's scoring rule, then clamp and round.

    Returns:
        Score in [-5.0, 5.0] with one decimal, or None for unscored sources
    """
    rule = SCORING_RULES.get(source_id)
    if rule is None:
        return None
    return round_score(clamp_score(rule(result)))


def build_entry(source_id: SourceId, result: Optional[SourceResult]) -> ScorecardEntry:
    if not has_content(result):
        return ScorecardEntry(
            source=source_id,
            name=source_id.display_name,
            score=None,
            sample_size=0,
            unit=source_id.unit,
            available=False,
        )

    return ScorecardEntry(
        source=source_id,
        name=source_id.display_name,
        score=score_source(source_id, result),
        sample_size=sample_size(source_id, result),
        unit=source_id.unit,
        available=True,
    )


def build_scorecard(sources: SourceMap) -> List[ScorecardEntry]:
    """
    Build the scorecard: one entry per canonical source, in fixed order.

    Args:
        sources: Normalized source records keyed by SourceId (missing keys
            and None values count as unavailable)

    Returns:
        Fresh list of five ScorecardEntry objects
    """
    return [build_entry(source_id, sources.get(source_id)) for source_id in CANONICAL_ORDER]


def sources_used(sources: SourceMap) -> List[str]:
    """
    Display names of the sources whose fetch succeeded, in canonical order.
    """
    used: List[str] = []
    for source_id in CANONICAL_ORDER:
        result = sources.get(source_id)
        if result is not None and result.available:
            used.append(source_id.display_name)
    return used
