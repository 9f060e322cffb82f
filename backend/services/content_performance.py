"""Content performance aggregation - best and worst posts across all brands.

Fetches every (brand, platform) post feed through a fixed-width worker pool,
normalizes, drops posts with no data, scores the survivors as one batch and
ranks them. A failing feed contributes nothing; only a failure to fetch the
brand list itself aborts the pass.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Protocol, Sequence

from models.brand import Platform, ProcessedBrand
from models.content import ContentPerformance, ContentPost
from services.brand_processor import active_brands, parse_brands, process_brand
from services.cache import ResultCache
from services.post_normalizer import normalize_post
from services.scoring import score_posts

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 10


class PostSource(Protocol):
    """What the aggregator needs from the upstream client."""

    async def fetch_brands(self) -> list[dict]: ...

    async def fetch_platform_posts(self, blog_id: int, platform: Platform) -> list[dict]: ...


@dataclass(frozen=True)
class FetchTask:
    brand_id: int
    brand_name: str
    brand_picture: str
    platform: Platform


def build_tasks(brands: Sequence[ProcessedBrand]) -> list[FetchTask]:
    """One task per connected platform of every brand."""
    return [
        FetchTask(
            brand_id=brand.id,
            brand_name=brand.name,
            brand_picture=brand.picture,
            platform=platform,
        )
        for brand in brands
        for platform in brand.platforms
    ]


async def _run_task(
    source: PostSource, task: FetchTask, slots: asyncio.Semaphore
) -> list[ContentPost]:
    async with slots:
        try:
            raw_posts = await source.fetch_platform_posts(task.brand_id, task.platform)
        except Exception as e:
            logger.warning(
                f"[content-perf] {task.platform.value} feed failed for brand "
                f"{task.brand_id}: {e}"
            )
            return []

    return [
        normalize_post(raw, task.brand_id, task.brand_name, task.brand_picture, task.platform)
        for raw in raw_posts
    ]


async def fetch_all_posts(
    source: PostSource,
    tasks: Sequence[FetchTask],
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[ContentPost]:
    """Run every task with at most ``concurrency`` feeds in flight.

    Results keep task order regardless of completion order.
    """
    slots = asyncio.Semaphore(max(concurrency, 1))
    results = await asyncio.gather(*(_run_task(source, task, slots) for task in tasks))
    return [post for posts in results for post in posts]


def has_data(post: ContentPost) -> bool:
    """False when every metric is 0, which means "no data" rather than "flop"."""
    return post.interactions + post.reach > 0


def rank_posts(posts: Sequence[ContentPost]) -> list[ContentPost]:
    """Drop no-data posts, score the rest as one batch, best first."""
    scored = score_posts([p for p in posts if has_data(p)])
    return sorted(scored, key=lambda p: p.score, reverse=True)


def slice_best_worst(
    ranked: Sequence[ContentPost], size: int
) -> tuple[list[ContentPost], list[ContentPost]]:
    """Top ``size`` posts and bottom ``size`` posts (worst first).

    Worst stays empty until there are more posts than one screen holds, so the
    two screens never repeat a post.
    """
    best = list(ranked[:size])
    worst = list(reversed(ranked[-size:])) if len(ranked) > size else []
    return best, worst


def to_performance(
    ranked: Sequence[ContentPost], size: int, fetched_at: datetime
) -> ContentPerformance:
    best, worst = slice_best_worst(ranked, size)
    return ContentPerformance(
        best=best,
        worst=worst,
        fetched_at=fetched_at,
        post_count=len(ranked),
    )


def empty_performance(fetched_at: Optional[datetime] = None) -> ContentPerformance:
    return ContentPerformance(fetched_at=fetched_at or datetime.now(timezone.utc))


async def collect_ranked_posts(
    source: PostSource,
    concurrency: int = DEFAULT_CONCURRENCY,
    now: Optional[datetime] = None,
) -> list[ContentPost]:
    """Fetch, normalize and rank every post of every active brand.

    Raises whatever fetching the brand list raises.
    """
    records = await source.fetch_brands()
    brands = [process_brand(b, now) for b in active_brands(parse_brands(records))]
    tasks = build_tasks(brands)

    logger.info(
        f"[content-perf] Fetching posts for {len(brands)} brands, "
        f"{len(tasks)} platform connections"
    )

    posts = await fetch_all_posts(source, tasks, concurrency)
    ranked = rank_posts(posts)

    logger.info(f"[content-perf] {len(posts)} total, {len(ranked)} with data")
    return ranked


async def build_content_performance(
    source: PostSource,
    display_size: int,
    concurrency: int = DEFAULT_CONCURRENCY,
    now: Optional[datetime] = None,
) -> ContentPerformance:
    """Run one full aggregation pass."""
    ranked = await collect_ranked_posts(source, concurrency, now)
    return to_performance(ranked, display_size, now or datetime.now(timezone.utc))


async def refresh_content_cache(
    source: PostSource, cache: ResultCache, concurrency: int = DEFAULT_CONCURRENCY
) -> bool:
    """Recompute today's ranking into the cache.

    Returns False (keeping any existing entry) when the pass fails.
    """
    try:
        ranked = await collect_ranked_posts(source, concurrency)
    except Exception as e:
        logger.error(f"[content-perf] Error: {e}")
        return False
    cache.set_content_ranking(ranked)
    return True


async def load_content_performance(
    source: PostSource,
    cache: ResultCache,
    display_size: int,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> ContentPerformance:
    """Serve today's cached ranking, computing it on a miss.

    Never raises: a failed pass yields an empty result so the dashboard can
    render its empty state.
    """
    cached = cache.get_content_ranking()
    if cached is None:
        if not await refresh_content_cache(source, cache, concurrency):
            return empty_performance(cache.clock())
        cached = cache.get_content_ranking()
        if cached is None:
            return empty_performance(cache.clock())

    ranked, fetched_at = cached
    return to_performance(ranked, display_size, fetched_at)
