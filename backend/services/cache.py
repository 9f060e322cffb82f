"""In-memory result cache shared by request handlers and the scheduler.

One instance per process, created in the app lifespan. Entries are replaced
whole and never mutated, so readers need no locking.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Generic, Optional, TypeVar
from zoneinfo import ZoneInfo

from models.brand import ProcessedBrand
from models.content import ContentPost

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    stored_at: datetime
    day: str


@dataclass(frozen=True)
class BrandStatsPayload:
    """Upstream stats for one brand as served by the stats endpoint."""
    raw: Optional[dict]
    posts: int
    fetched_at: datetime


class ResultCache:
    """TTL entries for brands and brand stats, day-keyed content results."""

    def __init__(
        self,
        brands_ttl_seconds: int = 900,
        stats_ttl_seconds: int = 900,
        tz: str = "UTC",
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.brands_ttl_seconds = brands_ttl_seconds
        self.stats_ttl_seconds = stats_ttl_seconds
        self.tz = ZoneInfo(tz)
        self.clock = clock

        self._brands: Optional[CacheEntry[list[ProcessedBrand]]] = None
        self._stats: dict[int, CacheEntry[BrandStatsPayload]] = {}
        self._content: Optional[CacheEntry[list[ContentPost]]] = None

    def today(self) -> str:
        """Local day string (YYYY-MM-DD) in the dashboard timezone."""
        return self.clock().astimezone(self.tz).date().isoformat()

    def _entry(self, value: T) -> CacheEntry[T]:
        return CacheEntry(value=value, stored_at=self.clock(), day=self.today())

    def _fresh(self, entry: Optional[CacheEntry], ttl_seconds: int) -> bool:
        if entry is None:
            return False
        return (self.clock() - entry.stored_at).total_seconds() <= ttl_seconds

    # --- Brands ---

    def get_brands(self) -> Optional[list[ProcessedBrand]]:
        entry = self._brands
        if not self._fresh(entry, self.brands_ttl_seconds):
            return None
        return entry.value

    def set_brands(self, brands: list[ProcessedBrand]) -> None:
        self._brands = self._entry(list(brands))

    # --- Brand stats ---

    def get_brand_stats(self, brand_id: int) -> Optional[BrandStatsPayload]:
        entry = self._stats.get(brand_id)
        if not self._fresh(entry, self.stats_ttl_seconds):
            self._stats.pop(brand_id, None)
            return None
        return entry.value

    def set_brand_stats(self, brand_id: int, payload: BrandStatsPayload) -> None:
        self._stats[brand_id] = self._entry(payload)

    # --- Content performance ---

    def get_content_ranking(self) -> Optional[tuple[list[ContentPost], datetime]]:
        """Today's ranked posts and when they were computed, if cached."""
        entry = self._content
        if entry is None or entry.day != self.today():
            return None
        return entry.value, entry.stored_at

    def set_content_ranking(self, ranked: list[ContentPost]) -> None:
        self._content = self._entry(list(ranked))

    def check_day_rollover(self) -> bool:
        """Drop a content entry left over from a previous day.

        Returns True when an entry was dropped.
        """
        entry = self._content
        if entry is None or entry.day == self.today():
            return False
        logger.info(f"Day rolled over ({entry.day} -> {self.today()}), dropping content cache")
        self._content = None
        return True

    def clear(self) -> None:
        self._brands = None
        self._stats = {}
        self._content = None
