import os

os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("METRICOOL_TOKEN", "test-token")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from main import app
from middleware.rate_limit import limiter
from models.brand import Platform
from services.cache import ResultCache


class FakeSource:
    """Stands in for MetricoolClient: canned brands and feeds, optional failures."""

    def __init__(
        self,
        brands=None,
        feeds=None,
        failing=(),
        brands_error=None,
        stats=None,
        instagram_posts=None,
        stats_error=None,
    ):
        self.brands = brands or []
        self.feeds = feeds or {}
        self.failing = set(failing)
        self.brands_error = brands_error
        self.stats = stats
        self.instagram_posts = instagram_posts or []
        self.stats_error = stats_error
        self.brand_calls = 0
        self.feed_calls: list[tuple[int, str]] = []

    async def fetch_brands(self):
        self.brand_calls += 1
        if self.brands_error:
            raise self.brands_error
        return self.brands

    async def fetch_platform_posts(self, blog_id: int, platform: Platform):
        key = (blog_id, platform.value)
        self.feed_calls.append(key)
        if key in self.failing:
            raise RuntimeError(f"feed {key} unavailable")
        return self.feeds.get(key, [])

    async def fetch_brand_stats(self, blog_id: int):
        if self.stats_error:
            raise self.stats_error
        return self.stats

    async def fetch_instagram_posts(self, blog_id: int):
        if self.stats_error:
            raise self.stats_error
        return self.instagram_posts

    async def close(self):
        pass


def brand_record(brand_id: int, label: str, **fields):
    record = {
        "id": brand_id,
        "label": label,
        "picture": None,
        "joinDate": 1_700_000_000_000,
        "isDemo": False,
        "deleted": False,
    }
    record.update(fields)
    return record


@pytest.fixture
def fake_source():
    return FakeSource()


@pytest.fixture(autouse=True)
def disable_rate_limits():
    """Keep login rate-limit state out of unrelated tests."""
    previous = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = previous


@pytest_asyncio.fixture
async def api_client(fake_source):
    app.state.cache = ResultCache()
    app.state.metricool = fake_source
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
