"""Normalize raw provider post records into ContentPost.

v2 field names seen per platform:
  Instagram posts: likes, comments, shares, reach, impressions, url, imageUrl, content, postId
  Instagram reels: likes, comments, shares, reach, views, url, imageUrl, content, reelId
  TikTok: likeCount, commentCount, shareCount, viewCount, shareUrl, coverImageUrl,
          videoDescription, videoId, embedLink
  Facebook: reactions, comments, shares, impressions, link, picture, text, postId
  LinkedIn: likes, comments, shares, impressions, url, picture, description, postId
  Twitter: like, comments, retweets, impressions, url, text, postId

Each candidate list below is tried in order; the first usable value wins.
"""

import hashlib
import json
from typing import Any, Mapping, Optional

from models.brand import Platform
from models.content import ContentPost
from services.embeds import build_embed_url, detect_media_type
from services.fields import extract_date, extract_number, extract_string

LIKE_KEYS = ("likes", "likeCount", "reactions", "favoriteCount", "like")
COMMENT_KEYS = ("comments", "commentCount", "replies", "replyCount")
SHARE_KEYS = ("shares", "shareCount", "retweets", "retweetCount", "reposts")
REACH_KEYS = (
    "reach", "impressions", "impressionsTotal", "views", "viewCount", "plays", "playCount",
)
CAPTION_KEYS = (
    "content", "text", "videoDescription", "description", "title", "caption", "message",
)
THUMBNAIL_KEYS = (
    "imageUrl", "coverImageUrl", "picture", "thumbnail", "thumbnailUrl",
    "image", "pictureUrl", "coverImage",
)
MEDIA_URL_KEYS = ("mediaUrl", "videoUrl", "video_url", "media_url", "sourceUrl")
PERMALINK_KEYS = ("url", "shareUrl", "link", "permalink", "postUrl", "shortLink")
TYPE_KEYS = ("type", "mediaType", "postType", "contentType")
ID_KEYS = ("postId", "reelId", "videoId", "id", "mediaId", "shortcode")
EMBED_LINK_KEYS = ("embedLink",)  # Provider-built embed, only TikTok so far

DEFAULT_TYPE = "post"


def _count(record: Mapping[str, Any], keys: tuple[str, ...]) -> int:
    return max(int(extract_number(record, *keys)), 0)


def _provider_id(record: Mapping[str, Any]) -> str:
    """First provider id under ID_KEYS; numeric ids are kept as text."""
    for key in ID_KEYS:
        value = record.get(key)
        if isinstance(value, str) and value:
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
    return ""


def engagement_rate(likes: int, comments: int, shares: int, reach: int) -> float:
    """Interactions per 100 reached accounts, 0 when reach is unknown."""
    if reach <= 0:
        return 0.0
    return (likes + comments + shares) / reach * 100


def fallback_post_id(
    raw: Mapping[str, Any], brand_id: int, platform: Platform, published_at: str
) -> str:
    """Stable id for posts the provider sent without one.

    Uses the publish date when known, otherwise a digest of the record, so
    re-fetching the same post yields the same id.
    """
    if published_at:
        suffix = published_at
    else:
        canonical = json.dumps(raw, sort_keys=True, default=str)
        suffix = hashlib.sha1(canonical.encode("utf-8")).hexdigest()[:12]
    return f"{brand_id}-{platform.value}-{suffix}"


def normalize_post(
    raw: Mapping[str, Any],
    brand_id: int,
    brand_name: str,
    brand_picture: str,
    platform: Platform,
) -> ContentPost:
    """Convert one raw post into a ContentPost.

    Missing fields never raise; they fall back to 0, "" or None.
    """
    likes = _count(raw, LIKE_KEYS)
    comments = _count(raw, COMMENT_KEYS)
    shares = _count(raw, SHARE_KEYS)
    reach = _count(raw, REACH_KEYS)

    published_at = extract_date(raw)
    type_tag = extract_string(raw, *TYPE_KEYS) or DEFAULT_TYPE
    permalink: Optional[str] = extract_string(raw, *PERMALINK_KEYS) or None
    post_id = _provider_id(raw) or fallback_post_id(
        raw, brand_id, platform, published_at
    )

    embed_url = extract_string(raw, *EMBED_LINK_KEYS) or build_embed_url(
        permalink, platform, post_id
    )

    return ContentPost(
        id=post_id,
        brand_id=brand_id,
        brand_name=brand_name,
        brand_picture=brand_picture,
        platform=platform,
        type=type_tag,
        caption=extract_string(raw, *CAPTION_KEYS),
        thumbnail=extract_string(raw, *THUMBNAIL_KEYS) or None,
        media_url=extract_string(raw, *MEDIA_URL_KEYS) or None,
        permalink=permalink,
        embed_url=embed_url,
        media_type=detect_media_type(type_tag, platform),
        likes=likes,
        comments=comments,
        shares=shares,
        reach=reach,
        engagement_rate=engagement_rate(likes, comments, shares, reach),
        score=0,
        published_at=published_at,
    )
