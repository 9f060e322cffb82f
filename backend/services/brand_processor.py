"""Turn provider profile records into ProcessedBrand."""

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from models.brand import Brand, Platform, ProcessedBrand

logger = logging.getLogger(__name__)

DEFAULT_PICTURE = "/default-avatar.svg"
MS_PER_DAY = 1000 * 60 * 60 * 24

# Check order is the display order; a platform counts as connected when any
# of its fields is set.
PLATFORM_FIELDS: tuple[tuple[Platform, tuple[str, ...]], ...] = (
    (Platform.INSTAGRAM, ("instagram",)),
    (Platform.FACEBOOK, ("facebook", "facebook_page_id")),
    (Platform.TWITTER, ("twitter",)),
    (Platform.TIKTOK, ("tiktok",)),
    (Platform.LINKEDIN, ("linkedin_company",)),
    (Platform.YOUTUBE, ("youtube_channel_name",)),
    (Platform.THREADS, ("threads", "threads_account_name")),
    (Platform.BLUESKY, ("bluesky", "bluesky_handle")),
    (Platform.PINTEREST, ("pinterest", "pinterest_business")),
)


def connected_platforms(brand: Brand) -> tuple[Platform, ...]:
    return tuple(
        platform
        for platform, fields in PLATFORM_FIELDS
        if any(getattr(brand, field) for field in fields)
    )


def process_brand(brand: Brand, now: Optional[datetime] = None) -> ProcessedBrand:
    """Reduce a Brand to its display form.

    days_since_join is computed against ``now`` on every call, so it moves
    forward by calendar day between requests.
    """
    now = now or datetime.now(timezone.utc)

    join_date = None
    days_since_join = 0
    if brand.join_date is not None:
        try:
            join_date = datetime.fromtimestamp(brand.join_date / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.warning(f"Ignoring out-of-range joinDate for brand {brand.id}")
        else:
            elapsed_ms = now.timestamp() * 1000 - brand.join_date
            days_since_join = int(elapsed_ms // MS_PER_DAY)

    return ProcessedBrand(
        id=brand.id,
        name=brand.label or "",
        picture=brand.picture or DEFAULT_PICTURE,
        platforms=connected_platforms(brand),
        join_date=join_date,
        days_since_join=days_since_join,
    )


def parse_brands(records: Iterable[Any]) -> list[Brand]:
    """Validate raw profile records, skipping ones without a usable id."""
    brands = []
    for record in records:
        try:
            brands.append(Brand.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Skipping malformed brand record: {e.error_count()} errors")
    return brands


def active_brands(brands: Iterable[Brand]) -> list[Brand]:
    """Drop deleted and demo profiles."""
    return [b for b in brands if not b.deleted and not b.is_demo]


def process_brands_sorted(
    brands: Iterable[Brand], now: Optional[datetime] = None
) -> list[ProcessedBrand]:
    """Process active brands and sort them by name."""
    processed = [process_brand(b, now) for b in active_brands(brands)]
    return sorted(processed, key=lambda b: b.name.casefold())


async def load_brands(source, cache) -> list[ProcessedBrand]:
    """Processed brand list, from cache when fresh.

    ``source`` is the upstream client, ``cache`` the process ResultCache.
    Errors fetching the list propagate.
    """
    brands = cache.get_brands()
    if brands is None:
        records = await source.fetch_brands()
        brands = process_brands_sorted(parse_brands(records))
        cache.set_brands(brands)
        logger.info(f"Loaded {len(brands)} active brands")
    return brands
