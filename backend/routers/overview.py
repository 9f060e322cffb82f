"""Overview router - headline totals for the stats bar and overview tab."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from dependencies import get_cache, get_metricool
from services.brand_processor import load_brands
from services.cache import ResultCache
from services.metricool_client import MetricoolClient
from services.overview import Overview, build_overview

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/overview", tags=["overview"])


@router.get("", response_model=Overview)
async def get_overview(
    cache: Annotated[ResultCache, Depends(get_cache)],
    metricool: Annotated[MetricoolClient, Depends(get_metricool)],
):
    """Client totals and the client of the week."""
    try:
        brands = await load_brands(metricool, cache)
    except Exception as e:
        logger.exception(f"Failed to fetch brands for overview: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch brands",
        )
    return build_overview(brands)
