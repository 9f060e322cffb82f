"""Brand headline stats shown on client cards."""

from models.base import CamelModel


class BrandStats(CamelModel):
    followers: int
    reach: int
    engagement: float
    content_published: int
    growth_percent: int
    is_estimated: bool
