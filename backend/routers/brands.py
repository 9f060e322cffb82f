"""Brands router - client list and per-brand headline stats."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dependencies import get_cache, get_metricool
from models.base import CamelModel
from models.brand import BrandStatus, Platform, ProcessedBrand
from models.stats import BrandStats
from services.brand_filter import filter_brands
from services.brand_processor import load_brands
from services.cache import BrandStatsPayload, ResultCache
from services.estimations import estimated_stats, merge_stats
from services.metricool_client import MetricoolClient

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/brands", tags=["brands"])


class BrandStatsResponse(CamelModel):
    raw: Optional[dict[str, Any]]
    posts: int
    fetched_at: datetime
    stats: Optional[BrandStats] = None


@router.get("", response_model=list[ProcessedBrand])
async def list_brands(
    cache: Annotated[ResultCache, Depends(get_cache)],
    metricool: Annotated[MetricoolClient, Depends(get_metricool)],
    q: str = "",
    platform: Annotated[list[Platform] | None, Query()] = None,
    brand_status: Annotated[list[BrandStatus] | None, Query(alias="status")] = None,
):
    """Active client brands sorted by name, optionally filtered."""
    try:
        brands = await load_brands(metricool, cache)
    except Exception as e:
        logger.exception(f"Failed to fetch brands: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch brands",
        )

    return filter_brands(brands, q, platform or (), brand_status or ())


async def _fetch_stats_payload(metricool: MetricoolClient, brand_id: int) -> BrandStatsPayload:
    stats_result, posts_result = await asyncio.gather(
        metricool.fetch_brand_stats(brand_id),
        metricool.fetch_instagram_posts(brand_id),
        return_exceptions=True,
    )

    raw = None
    if isinstance(stats_result, BaseException):
        logger.warning(f"[brand-stats] Brand {brand_id} stats error: {stats_result}")
    elif stats_result:
        raw = stats_result
        logger.info(f"[brand-stats] Brand {brand_id} keys: {sorted(raw.keys())}")

    posts = 0
    if isinstance(posts_result, BaseException):
        logger.warning(f"[brand-stats] Brand {brand_id} posts error: {posts_result}")
    elif isinstance(posts_result, list):
        posts = len(posts_result)

    return BrandStatsPayload(raw=raw, posts=posts, fetched_at=datetime.now(timezone.utc))


async def _find_brand(
    metricool: MetricoolClient, cache: ResultCache, brand_id: int
) -> Optional[ProcessedBrand]:
    try:
        brands = await load_brands(metricool, cache)
    except Exception as e:
        logger.warning(f"[brand-stats] Brand list unavailable for estimates: {e}")
        return None
    return next((b for b in brands if b.id == brand_id), None)


@router.get("/{brand_id}/stats", response_model=BrandStatsResponse)
async def get_brand_stats(
    brand_id: int,
    cache: Annotated[ResultCache, Depends(get_cache)],
    metricool: Annotated[MetricoolClient, Depends(get_metricool)],
):
    """Best-effort provider stats for one brand.

    Always 200: on upstream failure ``raw`` is null and ``posts`` 0 so the
    card can fall back to estimated figures, which ``stats`` already merges.
    """
    payload = cache.get_brand_stats(brand_id)
    if payload is None:
        payload = await _fetch_stats_payload(metricool, brand_id)
        cache.set_brand_stats(brand_id, payload)

    brand = await _find_brand(metricool, cache, brand_id)
    stats = (
        merge_stats(payload.raw, payload.posts, estimated_stats(brand))
        if brand is not None
        else None
    )

    return BrandStatsResponse(
        raw=payload.raw,
        posts=payload.posts,
        fetched_at=payload.fetched_at,
        stats=stats,
    )
