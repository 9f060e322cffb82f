"""Embed URL construction and media classification for content screens."""

from typing import Optional
from urllib.parse import quote

from models.brand import Platform
from models.content import MediaType

VIDEO_PLATFORMS = (Platform.TIKTOK, Platform.YOUTUBE)
VIDEO_MARKERS = ("video", "reel")  # "reel" also covers "reels"
IMAGE_MARKERS = ("image", "photo", "carousel")


def detect_media_type(type_tag: str, platform: Platform) -> MediaType:
    """Classify a post from its provider type tag and platform.

    First matching rule wins: video markers or a video-only platform, then
    image markers, else unknown.
    """
    tag = (type_tag or "").lower()
    if any(marker in tag for marker in VIDEO_MARKERS) or platform in VIDEO_PLATFORMS:
        return MediaType.VIDEO
    if any(marker in tag for marker in IMAGE_MARKERS):
        return MediaType.IMAGE
    return MediaType.UNKNOWN


def build_embed_url(
    permalink: Optional[str], platform: Platform, post_id: Optional[str]
) -> Optional[str]:
    """Build an iframe embed URL, or None where the platform has no embed."""
    if platform == Platform.INSTAGRAM:
        if not permalink:
            return None
        return f"{permalink.rstrip('/')}/embed/"

    if platform == Platform.TIKTOK:
        if not post_id:
            return None
        return f"https://www.tiktok.com/embed/v2/{post_id}"

    if platform == Platform.YOUTUBE:
        if not post_id:
            return None
        return (
            f"https://www.youtube.com/embed/{post_id}"
            f"?autoplay=1&mute=1&loop=1&controls=0&playlist={post_id}"
        )

    if platform == Platform.FACEBOOK:
        if not permalink:
            return None
        return (
            "https://www.facebook.com/plugins/post.php"
            f"?href={quote(permalink, safe='')}&show_text=true&width=500"
        )

    return None
