from opinions.models import (
    ArticleResult,
    DiscussionResult,
    RetailResult,
    Sentiment,
    SocialResult,
    SourceId,
    VideoResult,
)
from opinions.sources.collector import normalize_sources, resolve_source_id
from opinions.sources.common import parse_utc_timestamp, to_float, to_int
from opinions.sources.records import parse_sentiment, parse_source_result


def test_normalize_sources_types_every_canonical_source(sources):
    assert list(sources) == list(SourceId)
    assert isinstance(sources[SourceId.COMMUNITY_DISCUSSION], DiscussionResult)
    assert isinstance(sources[SourceId.VIDEO_REVIEW], VideoResult)
    assert isinstance(sources[SourceId.RETAIL_REVIEW], RetailResult)
    assert isinstance(sources[SourceId.SOCIAL_POST], SocialResult)
    assert isinstance(sources[SourceId.WEB_ARTICLE], ArticleResult)


def test_camel_case_fields_are_mapped(sources):
    reddit = sources[SourceId.COMMUNITY_DISCUSSION]
    assert reddit.discussions[0].num_comments == 80
    assert reddit.discussions[0].self_text == "Thinking about upgrading."
    assert reddit.discussions[0].created == "2024-05-01T10:00:00+00:00"
    assert reddit.discussions[1].created == "2024-05-01T10:00:00+00:00"
    assert reddit.sentiment is Sentiment.POSITIVE
    assert reddit.avg_score == 185

    youtube = sources[SourceId.VIDEO_REVIEW]
    assert youtube.videos[0].channel_title == "MKBHD"
    assert youtube.metrics.total_likes == 4500
    assert youtube.top_comments[0].like_count == 42

    bestbuy = sources[SourceId.RETAIL_REVIEW]
    assert bestbuy.metrics.avg_rating == 4.6  # string "4.6" on the wire
    assert bestbuy.products[0].sku == "6505727"

    twitter = sources[SourceId.SOCIAL_POST]
    assert twitter.tweets[0].verified is True
    assert twitter.tweets[0].engagement == 230
    assert twitter.tweets[1].author == "Unknown"
    assert twitter.metrics.avg_likes == 150


def test_missing_sources_map_to_none():
    sources = normalize_sources({"reddit": {"available": False}})
    assert sources[SourceId.VIDEO_REVIEW] is None
    assert sources[SourceId.COMMUNITY_DISCUSSION].available is False


def test_unavailable_payload_drops_content():
    result = parse_source_result(
        SourceId.COMMUNITY_DISCUSSION,
        {"available": False, "discussions": [{"title": "stale"}], "error": "Failed to fetch Reddit data"},
    )
    assert result.available is False
    assert result.discussions == []


def test_available_must_be_true_not_truthy():
    result = parse_source_result(SourceId.WEB_ARTICLE, {"available": "yes", "articles": [{"title": "x"}]})
    assert result.available is False


def test_malformed_metrics_default_to_zero():
    result = parse_source_result(
        SourceId.VIDEO_REVIEW,
        {
            "available": True,
            "videos": [{"title": "v", "viewCount": "lots"}, "not-an-object"],
            "metrics": {"totalViews": None, "totalLikes": "n/a"},
        },
    )
    assert len(result.videos) == 1
    assert result.videos[0].view_count == 0
    assert result.metrics.total_views == 0
    assert result.metrics.total_likes == 0


def test_missing_metrics_block_is_tolerated():
    result = parse_source_result(SourceId.RETAIL_REVIEW, {"available": True, "products": [{"name": "p"}]})
    assert result.metrics.avg_rating == 0.0
    assert result.metrics.total_reviews == 0
    assert result.sentiment is Sentiment.NEUTRAL


def test_subreddits_derived_when_absent():
    result = parse_source_result(
        SourceId.COMMUNITY_DISCUSSION,
        {
            "available": True,
            "discussions": [
                {"title": "a", "subreddit": "sony"},
                {"title": "b", "subreddit": "headphones"},
                {"title": "c", "subreddit": "sony"},
            ],
        },
    )
    assert result.subreddits == ["sony", "headphones"]


def test_non_mapping_payload_is_absent():
    assert parse_source_result(SourceId.SOCIAL_POST, ["not", "a", "dict"]) is None
    assert parse_source_result(SourceId.SOCIAL_POST, None) is None


def test_posts_alias_for_tweets():
    result = parse_source_result(SourceId.SOCIAL_POST, {"available": True, "posts": [{"text": "hi"}]})
    assert [post.text for post in result.tweets] == ["hi"]


def test_resolve_source_id_accepts_ids_and_aliases():
    assert resolve_source_id("reddit") is SourceId.COMMUNITY_DISCUSSION
    assert resolve_source_id(" YouTube ") is SourceId.VIDEO_REVIEW
    assert resolve_source_id("retail-review") is SourceId.RETAIL_REVIEW
    assert resolve_source_id(SourceId.WEB_ARTICLE) is SourceId.WEB_ARTICLE
    assert resolve_source_id("tiktok") is None


def test_unknown_source_keys_are_ignored():
    sources = normalize_sources({"tiktok": {"available": True}, "web-article": {"available": True, "articles": []}})
    assert set(sources) == set(SourceId)
    assert sources[SourceId.WEB_ARTICLE].available is True


def test_parse_sentiment_labels():
    assert parse_sentiment("Very Positive") is Sentiment.VERY_POSITIVE
    assert parse_sentiment(None) is Sentiment.NEUTRAL
    assert parse_sentiment("ecstatic") is Sentiment.UNKNOWN


def test_numeric_coercion():
    assert to_float("4.3") == 4.3
    assert to_float(True) == 0.0
    assert to_float(float("nan")) == 0.0
    assert to_int("12") == 12
    assert to_int({}) == 0
    assert to_float(10**400) == 0.0
    assert to_int(-(10**400)) == 0


def test_oversized_metric_defaults_to_zero():
    raw = {"reddit": {"available": True, "avgScore": 10**400, "discussions": [{"title": "t"}]}}
    assert normalize_sources(raw)[SourceId.COMMUNITY_DISCUSSION].avg_score == 0.0


def test_empty_alias_does_not_override_wire_id(raw_sources):
    normalized = normalize_sources({"reddit": raw_sources["reddit"], "community-discussion": None})
    assert isinstance(normalized[SourceId.COMMUNITY_DISCUSSION], DiscussionResult)


def test_parse_utc_timestamp():
    assert parse_utc_timestamp("2024-05-01T12:00:00+02:00") == "2024-05-01T10:00:00+00:00"
    assert parse_utc_timestamp("not a date") is None
    assert parse_utc_timestamp("") is None
