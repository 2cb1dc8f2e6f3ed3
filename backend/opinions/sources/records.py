"""
File: opinions/sources/records.py
Converts raw per-source search results into typed source records.

Fetchers emit camelCase JSON (``numComments``, ``channelTitle``, ...); the
parsers accept that and the snake_case spelling. Missing or malformed
numbers become zero, and an unavailable payload never carries content.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from opinions.models import (
    Article,
    ArticleResult,
    Discussion,
    DiscussionResult,
    Post,
    RetailMetrics,
    RetailProduct,
    RetailResult,
    RetailReview,
    Sentiment,
    SocialMetrics,
    SocialResult,
    SourceId,
    SourceResult,
    Video,
    VideoComment,
    VideoMetrics,
    VideoResult,
)
from opinions.sources.common import (
    as_mapping,
    as_records,
    clean_text,
    parse_utc_timestamp,
    pick,
    to_float,
    to_int,
)

logger = logging.getLogger(__name__)


def parse_sentiment(value: Any) -> Sentiment:
    """
    Map a raw sentiment label onto the known label set.

    Args:
        value: Label such as "positive" or "Very Positive"

    Returns:
        Matching Sentiment, NEUTRAL for empty values, UNKNOWN otherwise
    """
    label = clean_text(value).lower()
    if not label:
        return Sentiment.NEUTRAL
    try:
        return Sentiment(label)
    except ValueError:
        logger.debug("Unrecognized sentiment label %r", value)
        return Sentiment.UNKNOWN


def _is_available(payload: Mapping[str, Any]) -> bool:
    return payload.get("available") is True


def parse_discussions(payload: Mapping[str, Any]) -> DiscussionResult:
    if not _is_available(payload):
        return DiscussionResult(available=False)

    discussions: List[Discussion] = []
    for raw in as_records(payload.get("discussions")):
        discussions.append(
            Discussion(
                title=clean_text(raw.get("title")),
                subreddit=clean_text(raw.get("subreddit")),
                score=to_int(raw.get("score")),
                num_comments=to_int(pick(raw, "numComments", "num_comments")),
                url=clean_text(raw.get("url")),
                self_text=clean_text(pick(raw, "selfText", "self_text", "selftext")),
                created=parse_utc_timestamp(pick(raw, "created", "created_utc")),
            )
        )

    subreddits = pick(payload, "subreddits")
    if isinstance(subreddits, (list, tuple)):
        subreddits = [clean_text(name) for name in subreddits if clean_text(name)]
    else:
        # dict preserves first-seen order
        subreddits = list(dict.fromkeys(d.subreddit for d in discussions if d.subreddit))

    return DiscussionResult(
        available=True,
        discussions=discussions,
        sentiment=parse_sentiment(payload.get("sentiment")),
        avg_score=to_float(pick(payload, "avgScore", "avg_score")),
        total_comments=to_int(pick(payload, "totalComments", "total_comments")),
        subreddits=subreddits,
    )


def parse_videos(payload: Mapping[str, Any]) -> VideoResult:
    if not _is_available(payload):
        return VideoResult(available=False)

    videos = [
        Video(
            title=clean_text(raw.get("title")),
            channel_title=clean_text(pick(raw, "channelTitle", "channel_title")),
            view_count=to_int(pick(raw, "viewCount", "view_count")),
            like_count=to_int(pick(raw, "likeCount", "like_count")),
            comment_count=to_int(pick(raw, "commentCount", "comment_count")),
            url=clean_text(raw.get("url")),
            published_at=parse_utc_timestamp(pick(raw, "publishedAt", "published_at")),
        )
        for raw in as_records(payload.get("videos"))
    ]
    comments = [
        VideoComment(
            text=clean_text(raw.get("text")),
            author=clean_text(raw.get("author")),
            like_count=to_int(pick(raw, "likeCount", "like_count")),
        )
        for raw in as_records(pick(payload, "topComments", "top_comments"))
    ]
    metrics = as_mapping(payload.get("metrics"))

    return VideoResult(
        available=True,
        videos=videos,
        top_comments=comments,
        metrics=VideoMetrics(
            total_videos=to_int(pick(metrics, "totalVideos", "total_videos")),
            total_views=to_int(pick(metrics, "totalViews", "total_views")),
            total_likes=to_int(pick(metrics, "totalLikes", "total_likes")),
            avg_views=to_int(pick(metrics, "avgViews", "avg_views")),
        ),
    )


def parse_retail(payload: Mapping[str, Any]) -> RetailResult:
    if not _is_available(payload):
        return RetailResult(available=False)

    products = [
        RetailProduct(
            name=clean_text(raw.get("name")),
            sku=clean_text(raw.get("sku")),
            avg_rating=to_float(pick(raw, "avgRating", "avg_rating")),
            review_count=to_int(pick(raw, "reviewCount", "review_count")),
            price=to_float(raw.get("price")),
            url=clean_text(raw.get("url")),
        )
        for raw in as_records(payload.get("products"))
    ]
    reviews = [
        RetailReview(
            title=clean_text(raw.get("title")),
            comment=clean_text(raw.get("comment")),
            rating=to_float(raw.get("rating")),
            reviewer=clean_text(raw.get("reviewer")) or "Anonymous",
        )
        for raw in as_records(payload.get("reviews"))
    ]
    metrics = as_mapping(payload.get("metrics"))

    return RetailResult(
        available=True,
        products=products,
        reviews=reviews,
        metrics=RetailMetrics(
            avg_rating=to_float(pick(metrics, "avgRating", "avg_rating")),
            total_reviews=to_int(pick(metrics, "totalReviews", "total_reviews")),
            products_found=to_int(pick(metrics, "productsFound", "products_found")),
        ),
        sentiment=parse_sentiment(payload.get("sentiment")),
    )


def parse_posts(payload: Mapping[str, Any]) -> SocialResult:
    if not _is_available(payload):
        return SocialResult(available=False)

    tweets: List[Post] = []
    for raw in as_records(pick(payload, "tweets", "posts")):
        counts = as_mapping(raw.get("metrics"))
        tweets.append(
            Post(
                text=clean_text(raw.get("text")),
                author=clean_text(raw.get("author")) or "Unknown",
                username=clean_text(raw.get("username")) or "unknown",
                verified=raw.get("verified") is True,
                likes=to_int(pick(counts, "likes", "like_count")),
                retweets=to_int(pick(counts, "retweets", "retweet_count")),
                replies=to_int(pick(counts, "replies", "reply_count")),
                impressions=to_int(pick(counts, "impressions", "impression_count")),
                url=clean_text(raw.get("url")),
            )
        )
    metrics = as_mapping(payload.get("metrics"))

    return SocialResult(
        available=True,
        tweets=tweets,
        metrics=SocialMetrics(
            total_tweets=to_int(pick(metrics, "totalTweets", "total_tweets")),
            total_likes=to_int(pick(metrics, "totalLikes", "total_likes")),
            total_retweets=to_int(pick(metrics, "totalRetweets", "total_retweets")),
            avg_likes=to_float(pick(metrics, "avgLikes", "avg_likes")),
            verified_count=to_int(pick(metrics, "verifiedCount", "verified_count")),
        ),
        sentiment=parse_sentiment(payload.get("sentiment")),
    )


def parse_articles(payload: Mapping[str, Any]) -> ArticleResult:
    if not _is_available(payload):
        return ArticleResult(available=False)

    articles = [
        Article(
            title=clean_text(raw.get("title")),
            snippet=clean_text(raw.get("snippet")),
            url=clean_text(pick(raw, "url", "link")),
            source=clean_text(raw.get("source")),
        )
        for raw in as_records(payload.get("articles"))
    ]
    return ArticleResult(available=True, articles=articles)


RECORD_PARSERS: Dict[SourceId, Callable[[Mapping[str, Any]], SourceResult]] = {
    SourceId.COMMUNITY_DISCUSSION: parse_discussions,
    SourceId.VIDEO_REVIEW: parse_videos,
    SourceId.RETAIL_REVIEW: parse_retail,
    SourceId.SOCIAL_POST: parse_posts,
    SourceId.WEB_ARTICLE: parse_articles,
}


def parse_source_result(source_id: SourceId, payload: Any) -> Optional[SourceResult]:
    """
    Convert one source's raw search result into its typed record.

    Args:
        source_id: Which canonical source the payload came from
        payload: Raw JSON object from the fetcher (or None)

    Returns:
        Typed source record, or None when the payload is absent
    """
    if payload is None:
        return None
    if not isinstance(payload, Mapping):
        logger.debug("Ignoring non-object payload for %s", source_id.value)
        return None
    return RECORD_PARSERS[source_id](payload)
