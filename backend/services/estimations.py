"""Estimated brand figures for cards the provider has no stats for.

Deterministic in the brand's id, platform count and tenure, so a card shows
the same numbers on every refresh.
"""

import math
from typing import Any, Optional

from models.brand import BrandStatus, ProcessedBrand
from models.stats import BrandStats


def brand_status(platform_count: int) -> BrandStatus:
    if platform_count >= 3:
        return BrandStatus.ACTIVE
    if platform_count >= 1:
        return BrandStatus.GROWING
    return BrandStatus.SETUP


def estimated_followers(brand: ProcessedBrand) -> int:
    return math.floor(
        len(brand.platforms) * 1200 + brand.id % 5000 + brand.days_since_join * 3.5
    )


def estimated_reach(brand: ProcessedBrand) -> int:
    return math.floor(estimated_followers(brand) * 1.8 + len(brand.platforms) * 800)


def estimated_engagement(brand: ProcessedBrand) -> float:
    base = 2.5 + len(brand.platforms) * 0.6
    variance = (brand.id % 30 - 15) * 0.1
    return max(0.8, min(8.5, base + variance))


def estimated_content_pieces(brand: ProcessedBrand) -> int:
    return math.floor(
        brand.days_since_join * 0.35 * max(1, len(brand.platforms) * 0.6)
    )


def growth_percent(brand: ProcessedBrand) -> int:
    count = len(brand.platforms)
    if count >= 4:
        return 12 + brand.id % 18
    if count >= 3:
        return 6 + brand.id % 12
    if count >= 1:
        return 1 + brand.id % 5
    return -(brand.id % 4)


def estimated_stats(brand: ProcessedBrand) -> BrandStats:
    return BrandStats(
        followers=estimated_followers(brand),
        reach=estimated_reach(brand),
        engagement=estimated_engagement(brand),
        content_published=estimated_content_pieces(brand),
        growth_percent=growth_percent(brand),
        is_estimated=True,
    )


def _number(raw: dict, key: str) -> Optional[float]:
    value: Any = raw.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return None


def merge_stats(
    raw: Optional[dict], post_count: int, estimated: BrandStats
) -> BrandStats:
    """Overlay real provider figures on the estimate.

    Growth is always estimated; the provider has no equivalent figure.
    """
    if not raw:
        return estimated

    followers = _number(raw, "followers")
    reach = _number(raw, "reach")
    engagement = _number(raw, "engagementRate")

    return BrandStats(
        followers=int(followers) if followers is not None else estimated.followers,
        reach=int(reach) if reach is not None else estimated.reach,
        engagement=engagement if engagement is not None else estimated.engagement,
        content_published=post_count if post_count > 0 else estimated.content_published,
        growth_percent=estimated.growth_percent,
        is_estimated=False,
    )
