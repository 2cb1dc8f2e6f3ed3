"""
File: opinions/models.py
Internal data structures used during scoring, prompting and parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Union


class SourceId(str, Enum):
    """Canonical source categories, declared in their fixed display order."""

    COMMUNITY_DISCUSSION = "reddit"
    VIDEO_REVIEW = "youtube"
    RETAIL_REVIEW = "bestbuy"
    SOCIAL_POST = "twitter"
    WEB_ARTICLE = "google"

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES[self]

    @property
    def unit(self) -> str:
        return SAMPLE_UNITS[self]


CANONICAL_ORDER: tuple[SourceId, ...] = tuple(SourceId)

# Display names double as the sub-header anchors of the model reply.
DISPLAY_NAMES: Dict[SourceId, str] = {
    SourceId.COMMUNITY_DISCUSSION: "Reddit",
    SourceId.VIDEO_REVIEW: "YouTube",
    SourceId.RETAIL_REVIEW: "Best Buy",
    SourceId.SOCIAL_POST: "X/Twitter",
    SourceId.WEB_ARTICLE: "Google Search",
}

SAMPLE_UNITS: Dict[SourceId, str] = {
    SourceId.COMMUNITY_DISCUSSION: "threads",
    SourceId.VIDEO_REVIEW: "videos",
    SourceId.RETAIL_REVIEW: "reviews",
    SourceId.SOCIAL_POST: "tweets",
    SourceId.WEB_ARTICLE: "articles",
}


class Sentiment(str, Enum):
    """Coarse sentiment labels attached by the upstream fetchers."""

    POSITIVE = "positive"
    VERY_POSITIVE = "very positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    MIXED = "mixed"
    UNKNOWN = "unknown"


# -- community discussion ---------------------------------------------------

@dataclass
class Discussion:
    title: str
    subreddit: str = ""
    score: int = 0  # upvotes
    num_comments: int = 0
    url: str = ""
    self_text: str = ""
    created: Optional[str] = None


@dataclass
class DiscussionResult:
    available: bool
    discussions: List[Discussion] = field(default_factory=list)
    sentiment: Sentiment = Sentiment.NEUTRAL
    avg_score: float = 0.0
    total_comments: int = 0
    subreddits: List[str] = field(default_factory=list)

    @property
    def items(self) -> list:
        return self.discussions


# -- video review -------------------------------------------------------------

@dataclass
class Video:
    title: str
    channel_title: str = ""
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    url: str = ""
    published_at: Optional[str] = None


@dataclass
class VideoComment:
    text: str
    author: str = ""
    like_count: int = 0


@dataclass
class VideoMetrics:
    total_videos: int = 0
    total_views: int = 0
    total_likes: int = 0
    avg_views: int = 0


@dataclass
class VideoResult:
    available: bool
    videos: List[Video] = field(default_factory=list)
    top_comments: List[VideoComment] = field(default_factory=list)
    metrics: VideoMetrics = field(default_factory=VideoMetrics)

    @property
    def items(self) -> list:
        return self.videos


# -- retail review ------------------------------------------------------------

@dataclass
class RetailProduct:
    name: str
    sku: str = ""
    avg_rating: float = 0.0
    review_count: int = 0
    price: float = 0.0
    url: str = ""


@dataclass
class RetailReview:
    title: str
    comment: str = ""
    rating: float = 0.0
    reviewer: str = "Anonymous"


@dataclass
class RetailMetrics:
    avg_rating: float = 0.0  # 1-5 stars
    total_reviews: int = 0
    products_found: int = 0


@dataclass
class RetailResult:
    available: bool
    products: List[RetailProduct] = field(default_factory=list)
    reviews: List[RetailReview] = field(default_factory=list)
    metrics: RetailMetrics = field(default_factory=RetailMetrics)
    sentiment: Sentiment = Sentiment.NEUTRAL

    @property
    def items(self) -> list:
        return self.products


# -- social post --------------------------------------------------------------

@dataclass
class Post:
    text: str
    author: str = "Unknown"
    username: str = "unknown"
    verified: bool = False
    likes: int = 0
    retweets: int = 0
    replies: int = 0
    impressions: int = 0
    url: str = ""

    @property
    def engagement(self) -> int:
        return self.likes + self.retweets


@dataclass
class SocialMetrics:
    total_tweets: int = 0
    total_likes: int = 0
    total_retweets: int = 0
    avg_likes: float = 0.0
    verified_count: int = 0


@dataclass
class SocialResult:
    available: bool
    tweets: List[Post] = field(default_factory=list)
    metrics: SocialMetrics = field(default_factory=SocialMetrics)
    sentiment: Sentiment = Sentiment.NEUTRAL

    @property
    def items(self) -> list:
        return self.tweets


# -- web article --------------------------------------------------------------

@dataclass
class Article:
    title: str
    snippet: str = ""
    url: str = ""
    source: str = ""


@dataclass
class ArticleResult:
    available: bool
    articles: List[Article] = field(default_factory=list)

    @property
    def items(self) -> list:
        return self.articles


SourceResult = Union[DiscussionResult, VideoResult, RetailResult, SocialResult, ArticleResult]
SourceMap = Mapping[SourceId, Optional[SourceResult]]


def has_content(result: Optional[SourceResult]) -> bool:
    """True when a source fetched successfully and returned items."""
    return bool(result is not None and result.available and result.items)


# -- scorecard and synthesis output -------------------------------------------

@dataclass(frozen=True)
class ScorecardEntry:
    source: SourceId
    name: str
    score: Optional[float]  # [-5, 5], None when unavailable or unscored
    sample_size: int
    unit: str
    available: bool


@dataclass(frozen=True)
class ParsedReply:
    """Sections recovered from the model's free-text reply."""

    key_takeaways: Dict[str, List[str]] = field(default_factory=dict)
    consensus: List[str] = field(default_factory=list)
    divergence: List[str] = field(default_factory=list)
    synthesis: str = ""


@dataclass(frozen=True)
class SynthesisResult:
    scorecard: List[ScorecardEntry]
    key_takeaways: Dict[str, List[str]]
    consensus: List[str]
    divergence: List[str]
    synthesis: str
    sources_used: List[str]
    finish_reason: Optional[str] = None


@dataclass(frozen=True)
class Recommendation:
    response_message: str
    reason: Optional[str] = None


__all__ = [
    "SourceId",
    "CANONICAL_ORDER",
    "DISPLAY_NAMES",
    "SAMPLE_UNITS",
    "Sentiment",
    "Discussion",
    "DiscussionResult",
    "Video",
    "VideoComment",
    "VideoMetrics",
    "VideoResult",
    "RetailProduct",
    "RetailReview",
    "RetailMetrics",
    "RetailResult",
    "Post",
    "SocialMetrics",
    "SocialResult",
    "Article",
    "ArticleResult",
    "SourceResult",
    "SourceMap",
    "has_content",
    "ScorecardEntry",
    "ParsedReply",
    "SynthesisResult",
    "Recommendation",
]
