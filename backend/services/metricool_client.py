"""Metricool analytics API client.

Read-only access to the agency account: the profile (brand) list and per-brand
post analytics for the trailing window. Every call authenticates with the
account token in the X-Mc-Auth header.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import httpx

from config import Settings, get_settings
from models.brand import Platform

logger = logging.getLogger(__name__)

# v2 analytics paths per platform; YouTube has none and yields no posts
V2_POST_PATHS: dict[Platform, tuple[str, ...]] = {
    Platform.INSTAGRAM: ("/v2/analytics/posts/instagram", "/v2/analytics/reels/instagram"),
    Platform.FACEBOOK: ("/v2/analytics/posts/facebook", "/v2/analytics/reels/facebook"),
    Platform.TWITTER: ("/v2/analytics/posts/twitter",),
    Platform.TIKTOK: ("/v2/analytics/posts/tiktok",),
    Platform.LINKEDIN: ("/v2/analytics/posts/linkedin",),
    Platform.THREADS: ("/v2/analytics/posts/threads",),
    Platform.PINTEREST: ("/v2/analytics/posts/pinterest",),
    Platform.BLUESKY: ("/v2/analytics/posts/bluesky",),
}


class MetricoolError(Exception):
    """Upstream call failed: network error, non-2xx status or bad body."""


class MetricoolConfigError(MetricoolError):
    """The API token is not configured."""


def format_v1_date(value: datetime) -> str:
    """yyyyMMdd, as the /stats endpoints expect."""
    return value.strftime("%Y%m%d")


def format_v2_date(value: datetime) -> str:
    """yyyy-MM-dd'T'HH:mm:ss without millis or zone, as v2 requires."""
    return value.strftime("%Y-%m-%dT%H:%M:%S")


class MetricoolClient:
    """Async client sharing one connection pool across the fan-out."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _token(self) -> str:
        token = self.settings.metricool_token
        if not token:
            raise MetricoolConfigError("METRICOOL_TOKEN not configured")
        return token

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.metricool_base_url,
                timeout=self.settings.metricool_timeout_seconds,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _window(self, now: Optional[datetime] = None) -> tuple[datetime, datetime]:
        end = now or datetime.now(timezone.utc)
        return end - timedelta(days=self.settings.metricool_window_days), end

    async def _get(self, path: str, params: dict[str, str]) -> Any:
        headers = {"X-Mc-Auth": self._token()}
        query = {"userId": self.settings.metricool_user_id, **params}

        try:
            response = await self._get_client().get(path, params=query, headers=headers)
        except httpx.HTTPError as e:
            logger.warning(f"Metricool request failed: {path} - {e}")
            raise MetricoolError(f"Metricool request failed: {path}") from e

        if not response.is_success:
            logger.warning(
                f"Metricool API error: {response.status_code} {path} - "
                f"{response.text[:200]}"
            )
            raise MetricoolError(f"Metricool API error: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise MetricoolError(f"Metricool returned invalid JSON: {path}") from e

    async def fetch_brands(self) -> list[dict]:
        """Fetch every profile under the master account."""
        data = await self._get(
            "/admin/profiles",
            {"blogId": self.settings.metricool_master_blog_id},
        )
        if not isinstance(data, list):
            raise MetricoolError("Metricool profile list is not an array")
        return data

    async def fetch_platform_posts(
        self, blog_id: int, platform: Platform, now: Optional[datetime] = None
    ) -> list[dict]:
        """Fetch raw posts for one brand on one platform.

        Platforms with several paths (posts and reels) are concatenated. A
        failing path is logged and skipped.
        """
        paths = V2_POST_PATHS.get(platform)
        if not paths:
            return []

        start, end = self._window(now)
        posts: list[dict] = []

        for path in paths:
            try:
                data = await self._get(
                    path,
                    {
                        "blogId": str(blog_id),
                        "from": format_v2_date(start),
                        "to": format_v2_date(end),
                    },
                )
            except MetricoolConfigError:
                raise
            except MetricoolError as e:
                logger.warning(f"Skipping {path} for brand {blog_id}: {e}")
                continue

            items = data.get("data") if isinstance(data, dict) else None
            if not isinstance(items, list):
                continue
            items = [item for item in items if isinstance(item, dict)]
            if items:
                logger.info(f"[content] {path} brand={blog_id}: {len(items)} posts")
            posts.extend(items)

        return posts

    async def fetch_brand_stats(
        self, blog_id: int, now: Optional[datetime] = None
    ) -> Optional[dict]:
        """Fetch aggregated Instagram stats for a brand, None on failure."""
        start, end = self._window(now)
        try:
            data = await self._get(
                "/stats/aggregations/instagram",
                {
                    "blogId": str(blog_id),
                    "initDate": format_v1_date(start),
                    "endDate": format_v1_date(end),
                },
            )
        except MetricoolConfigError:
            raise
        except MetricoolError:
            return None
        return data if isinstance(data, dict) else None

    async def fetch_instagram_posts(
        self, blog_id: int, now: Optional[datetime] = None
    ) -> list:
        """Fetch the brand's Instagram posts over the window, [] on failure."""
        start, end = self._window(now)
        try:
            data = await self._get(
                "/stats/instagram/posts",
                {
                    "blogId": str(blog_id),
                    "initDate": format_v1_date(start),
                    "endDate": format_v1_date(end),
                },
            )
        except MetricoolConfigError:
            raise
        except MetricoolError:
            return []
        return data if isinstance(data, list) else []
