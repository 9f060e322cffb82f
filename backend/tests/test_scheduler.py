from datetime import datetime, timedelta, timezone

from conftest import FakeSource, brand_record
from services.cache import ResultCache
from services.scheduler import check_midnight_rollover, refresh_content_performance


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now


def make_source():
    return FakeSource(
        brands=[brand_record(1, "Alpha", instagram="alpha")],
        feeds={(1, "instagram"): [{"postId": "ig-1", "likes": 4, "reach": 40}]},
    )


async def test_refresh_fills_content_cache():
    cache = ResultCache()
    await refresh_content_performance(make_source(), cache)

    ranked, _ = cache.get_content_ranking()
    assert [p.id for p in ranked] == ["ig-1"]


async def test_refresh_failure_keeps_previous_ranking():
    cache = ResultCache()
    source = make_source()
    await refresh_content_performance(source, cache)

    source.brands_error = RuntimeError("provider down")
    await refresh_content_performance(source, cache)

    ranked, _ = cache.get_content_ranking()
    assert [p.id for p in ranked] == ["ig-1"]


async def test_rollover_refetches_after_midnight():
    clock = FakeClock(datetime(2026, 10, 18, 23, 59, tzinfo=timezone.utc))
    cache = ResultCache(clock=clock)
    source = make_source()
    await refresh_content_performance(source, cache)
    assert source.brand_calls == 1

    await check_midnight_rollover(source, cache)
    assert source.brand_calls == 1

    clock.now += timedelta(minutes=2)
    await check_midnight_rollover(source, cache)

    assert source.brand_calls == 2
    assert cache.get_content_ranking() is not None
