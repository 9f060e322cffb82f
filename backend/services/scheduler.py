"""Background scheduler for periodic tasks.

Uses APScheduler to keep the content performance ranking warm and to drop it
when the local day rolls over, so the wall never shows yesterday's ranking.
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from config import get_settings
from services.cache import ResultCache
from services.content_performance import PostSource, refresh_content_cache

logger = logging.getLogger(__name__)
settings = get_settings()

# Global scheduler instance
scheduler = AsyncIOScheduler()


async def refresh_content_performance(source: PostSource, cache: ResultCache):
    """Background task to recompute the content ranking.

    Runs periodically so requests are served from cache.
    """
    logger.info("Starting scheduled content performance refresh...")
    if await refresh_content_cache(source, cache, settings.fetch_concurrency):
        logger.info("Content performance refreshed")
    else:
        logger.warning("Content performance refresh failed, keeping previous ranking")


async def check_midnight_rollover(source: PostSource, cache: ResultCache):
    """Background task to refetch as soon as the local day changes."""
    if cache.check_day_rollover():
        await refresh_content_performance(source, cache)


def start_scheduler(source: PostSource, cache: ResultCache):
    """Start the background scheduler with all jobs."""
    if scheduler.running:
        print("✓ Scheduler already running")
        return

    # Content ranking refresh
    scheduler.add_job(
        refresh_content_performance,
        trigger=IntervalTrigger(minutes=settings.content_refresh_minutes),
        args=[source, cache],
        id="content_performance_refresh",
        name="Refresh content performance ranking",
        replace_existing=True,
    )

    # Day rollover check - every minute
    scheduler.add_job(
        check_midnight_rollover,
        trigger=IntervalTrigger(minutes=1),
        args=[source, cache],
        id="content_day_rollover",
        name="Drop content ranking after midnight",
        replace_existing=True,
    )

    scheduler.start()
    print(
        f"✓ Background scheduler started (content refresh every "
        f"{settings.content_refresh_minutes} minutes, rollover check every minute)"
    )


def stop_scheduler():
    """Stop the background scheduler."""
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Background scheduler stopped")
