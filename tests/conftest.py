import copy
from types import SimpleNamespace

import pytest

from opinions.sources.collector import normalize_sources


RAW_SOURCES = {
    "reddit": {
        "source": "reddit",
        "available": True,
        "discussions": [
            {
                "title": "Is the Sony WH-1000XM5 worth it over the XM4?",
                "subreddit": "headphones",
                "score": 250,
                "numComments": 80,
                "url": "https://reddit.com/r/headphones/comments/abc",
                "selfText": "Thinking about upgrading.",
                "created": "2024-05-01T10:00:00Z",
            },
            {
                "title": "XM5 comfort after a month",
                "subreddit": "sony",
                "score": 120,
                "numComments": 40,
                "url": "https://reddit.com/r/sony/comments/def",
                "created": 1714557600,
            },
        ],
        "sentiment": "positive",
        "avgScore": 185,
        "totalComments": 120,
        "subreddits": ["headphones", "sony"],
    },
    "youtube": {
        "source": "youtube",
        "available": True,
        "videos": [
            {
                "title": "Sony XM5 Review: Still the King?",
                "channelTitle": "MKBHD",
                "viewCount": 80000,
                "likeCount": 3600,
                "commentCount": 900,
                "url": "https://www.youtube.com/watch?v=abc",
                "publishedAt": "2024-04-20T12:00:00Z",
            },
            {
                "title": "XM5 vs AirPods Max",
                "channelTitle": "Mrwhosetheboss",
                "viewCount": 20000,
                "likeCount": 900,
            },
        ],
        "topComments": [
            {"author": "viewer1", "text": "Bought these after this review, no regrets.", "likeCount": 42},
        ],
        "metrics": {"totalVideos": 2, "totalViews": 100000, "totalLikes": 4500, "avgViews": 50000},
    },
    "bestbuy": {
        "source": "bestbuy",
        "available": True,
        "products": [
            {"name": "Sony WH-1000XM5", "sku": 6505727, "avgRating": 4.7, "reviewCount": 1200, "price": 399.99},
            {"name": "Sony WH-1000XM5 (Silver)", "sku": 6505728, "avgRating": 4.5, "reviewCount": 300},
        ],
        "reviews": [
            {"title": "Best ANC ever", "comment": "Silence on the subway.", "rating": 5, "reviewer": "Sam"},
        ],
        "metrics": {"avgRating": "4.6", "totalReviews": 1500, "productsFound": 2},
        "sentiment": "positive",
    },
    "twitter": {
        "source": "twitter",
        "available": True,
        "tweets": [
            {
                "text": "The XM5 noise cancelling is unreal on flights",
                "author": "Jane",
                "username": "jane",
                "verified": True,
                "metrics": {"likes": 200, "retweets": 30, "replies": 5},
            },
            {
                "text": "Hinge feels cheap on my XM5",
                "username": "bob",
                "metrics": {"likes": 100, "retweets": 10},
            },
        ],
        "metrics": {"totalTweets": 2, "totalLikes": 300, "totalRetweets": 40, "avgLikes": 150, "verifiedCount": 1},
        "sentiment": "positive",
    },
    "google": {
        "source": "google",
        "available": True,
        "articles": [
            {"title": "Sony WH-1000XM5 review", "snippet": "The best noise cancelling headphones you can buy."},
            {"title": "XM5 long-term test", "snippet": "Six months in, the battery still lasts."},
        ],
    },
}


@pytest.fixture
def raw_sources():
    return copy.deepcopy(RAW_SOURCES)


@pytest.fixture
def sources(raw_sources):
    return normalize_sources(raw_sources)


def make_completion(content, finish_reason="stop"):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message, finish_reason=finish_reason)])


class StubCompletions:
    def __init__(self, content="", finish_reason="stop", error=None):
        self.content = content
        self.finish_reason = finish_reason
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return make_completion(self.content, self.finish_reason)


class StubClient:
    """Stands in for AsyncOpenAI: only chat.completions.create is used."""

    def __init__(self, content="", finish_reason="stop", error=None):
        self.completions = StubCompletions(content, finish_reason, error)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def stub_client_factory():
    return StubClient


WELL_FORMED_REPLY = """## KEY TAKEAWAYS BY SOURCE

**Reddit:**
- Noise cancelling is widely praised
- Some users report comfort issues on long flights

**YouTube:**
- Reviewers call it best in class for ANC

**X/Twitter:**
- Mixed reactions to the $399 price

## CONSENSUS

- Class-leading noise cancelling
- Premium price

## DIVERGENCE

- Reddit says comfort is poor, but YouTube says it is fine

## FINAL SYNTHESIS

**Overall Sentiment:** Positive

**Recommendation:** Buy it if noise cancelling matters most.
"""


@pytest.fixture
def well_formed_reply():
    return WELL_FORMED_REPLY
