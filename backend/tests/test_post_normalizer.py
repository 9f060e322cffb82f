import pytest

from models.brand import Platform
from models.content import MediaType
from services.post_normalizer import normalize_post


def normalize(raw, platform=Platform.INSTAGRAM):
    return normalize_post(raw, 42, "Alpha Dental", "https://cdn.example.com/alpha.png", platform)


def test_instagram_reel():
    post = normalize(
        {
            "reelId": "17890",
            "likes": 120,
            "comments": 14,
            "shares": 6,
            "reach": 4000,
            "views": 9000,
            "content": "Smile makeover",
            "imageUrl": "https://cdn.example.com/reel.jpg",
            "url": "https://www.instagram.com/reel/Cx1/",
            "type": "REELS",
            "publishedAt": {"dateTime": "2026-10-10T18:00:00", "timezone": "America/Phoenix"},
        }
    )

    assert post.id == "17890"
    assert post.brand_id == 42
    assert post.brand_name == "Alpha Dental"
    assert (post.likes, post.comments, post.shares, post.reach) == (120, 14, 6, 4000)
    assert post.engagement_rate == pytest.approx(3.5)
    assert post.caption == "Smile makeover"
    assert post.thumbnail == "https://cdn.example.com/reel.jpg"
    assert post.permalink == "https://www.instagram.com/reel/Cx1/"
    assert post.embed_url == "https://www.instagram.com/reel/Cx1/embed/"
    assert post.media_type == MediaType.VIDEO
    assert post.published_at == "2026-10-10T18:00:00"
    assert post.score == 0


def test_tiktok_field_names_and_provider_embed():
    post = normalize(
        {
            "videoId": "7301",
            "likeCount": "88",
            "commentCount": 4,
            "shareCount": 8,
            "viewCount": 1000,
            "videoDescription": "Behind the scenes",
            "coverImageUrl": "https://cdn.example.com/cover.jpg",
            "shareUrl": "https://www.tiktok.com/@alpha/video/7301",
            "embedLink": "https://www.tiktok.com/embed/7301?provided=1",
        },
        Platform.TIKTOK,
    )

    assert post.likes == 88
    assert post.reach == 1000
    assert post.engagement_rate == pytest.approx(10.0)
    assert post.embed_url == "https://www.tiktok.com/embed/7301?provided=1"
    assert post.media_type == MediaType.VIDEO
    assert post.type == "post"


def test_facebook_reactions_and_impressions():
    post = normalize(
        {
            "postId": "555_777",
            "reactions": 30,
            "comments": 5,
            "shares": 5,
            "impressions": 800,
            "text": "Open house Saturday",
            "picture": "https://cdn.example.com/fb.jpg",
            "link": "https://www.facebook.com/alpha/posts/777",
        },
        Platform.FACEBOOK,
    )

    assert post.likes == 30
    assert post.reach == 800
    assert post.caption == "Open house Saturday"
    assert post.embed_url.startswith("https://www.facebook.com/plugins/post.php?href=")


def test_missing_fields_fall_back_to_defaults():
    post = normalize({"postId": "1"}, Platform.LINKEDIN)

    assert (post.likes, post.comments, post.shares, post.reach) == (0, 0, 0, 0)
    assert post.engagement_rate == 0
    assert post.caption == ""
    assert post.type == "post"
    assert post.thumbnail is None
    assert post.media_url is None
    assert post.permalink is None
    assert post.embed_url is None
    assert post.published_at == ""
    assert post.media_type == MediaType.UNKNOWN


def test_zero_reach_means_zero_engagement_rate():
    post = normalize({"postId": "1", "likes": 50, "comments": 10, "shares": 3})
    assert post.reach == 0
    assert post.engagement_rate == 0


def test_negative_counts_are_clamped():
    post = normalize({"postId": "1", "likes": -4, "reach": 10})
    assert post.likes == 0


def test_numeric_provider_ids_are_kept():
    assert normalize({"postId": 9876543210}).id == "9876543210"


def test_media_url_candidates():
    post = normalize({"postId": "1", "video_url": "https://cdn.example.com/v.mp4"})
    assert post.media_url == "https://cdn.example.com/v.mp4"


def test_fallback_id_uses_publish_date():
    post = normalize({"likes": 3, "date": "2026-10-01T08:00:00"}, Platform.THREADS)
    assert post.id == "42-threads-2026-10-01T08:00:00"


def test_normalizing_twice_is_identical_even_without_provider_id():
    raw = {"likes": 3, "text": "No id or date"}
    first = normalize(raw, Platform.BLUESKY)
    second = normalize(raw, Platform.BLUESKY)

    assert first == second
    assert first.id.startswith("42-bluesky-")


def test_fallback_id_differs_between_posts():
    first = normalize({"likes": 3, "text": "one"}, Platform.BLUESKY)
    second = normalize({"likes": 3, "text": "two"}, Platform.BLUESKY)
    assert first.id != second.id
