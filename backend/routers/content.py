"""Content performance router - best and worst posts for the content screens."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from config import get_settings
from dependencies import get_cache, get_metricool
from models.content import ContentPerformance
from services.cache import ResultCache
from services.content_performance import load_content_performance
from services.metricool_client import MetricoolClient

router = APIRouter(prefix="/api/content", tags=["content"])
settings = get_settings()


@router.get("/performance", response_model=ContentPerformance)
async def get_content_performance(
    cache: Annotated[ResultCache, Depends(get_cache)],
    metricool: Annotated[MetricoolClient, Depends(get_metricool)],
    limit: Annotated[int | None, Query(ge=1, le=50)] = None,
):
    """Top and bottom posts of the last 30 days across every brand.

    ``limit`` is how many posts each screen holds. Always 200; an upstream
    outage yields empty lists.
    """
    return await load_content_performance(
        metricool,
        cache,
        display_size=limit or settings.content_display_size,
        concurrency=settings.fetch_concurrency,
    )
