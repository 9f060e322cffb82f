"""Canonical content records produced by the content performance pipeline."""

import enum
from datetime import datetime
from typing import Optional

from models.base import CamelModel
from models.brand import Platform


class MediaType(str, enum.Enum):
    """Coarse media classification used to pick a player."""
    VIDEO = "video"
    IMAGE = "image"
    UNKNOWN = "unknown"


class ContentPost(CamelModel):
    """One post, reel or video normalized across platforms."""

    id: str
    brand_id: int
    brand_name: str
    brand_picture: str
    platform: Platform
    type: str = "post"
    caption: str = ""
    thumbnail: Optional[str] = None
    media_url: Optional[str] = None
    permalink: Optional[str] = None
    embed_url: Optional[str] = None
    media_type: MediaType = MediaType.UNKNOWN
    likes: int = 0
    comments: int = 0
    shares: int = 0
    reach: int = 0
    engagement_rate: float = 0.0
    score: float = 0.0
    published_at: str = ""

    @property
    def interactions(self) -> int:
        return self.likes + self.comments + self.shares


class ContentPerformance(CamelModel):
    """Best and worst posts of the trailing window."""

    best: list[ContentPost] = []
    worst: list[ContentPost] = []
    fetched_at: datetime
    post_count: int = 0
