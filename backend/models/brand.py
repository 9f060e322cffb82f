"""Brand (client profile) records - raw provider shape and processed form."""

import enum
import math
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import ConfigDict, field_validator

from models.base import CamelModel


class Platform(str, enum.Enum):
    """Supported social platforms, in the order connections are checked."""
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    TWITTER = "twitter"
    TIKTOK = "tiktok"
    LINKEDIN = "linkedin"
    YOUTUBE = "youtube"
    THREADS = "threads"
    BLUESKY = "bluesky"
    PINTEREST = "pinterest"


class BrandStatus(str, enum.Enum):
    """Coarse account status shown on client cards."""
    ACTIVE = "Active"
    GROWING = "Growing"
    SETUP = "Setup"


class Brand(CamelModel):
    """A client profile as returned by the provider's admin profile list.

    Only ``id`` is required. Per-platform identity fields are only checked for
    presence, so their values are left untyped. Display fields of the wrong
    type are read as missing rather than rejecting the record.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    user_id: Any = None
    label: str = ""
    picture: Optional[str] = None

    instagram: Any = None
    instagram_picture: Optional[str] = None
    facebook: Any = None
    facebook_page_id: Any = None
    facebook_picture: Optional[str] = None
    twitter: Any = None
    twitter_picture: Optional[str] = None
    tiktok: Any = None
    tiktok_picture: Optional[str] = None
    linkedin_company: Any = None
    linked_in_company_picture: Optional[str] = None
    linked_in_company_name: Optional[str] = None
    youtube_channel_name: Any = None
    youtube_channel_picture: Optional[str] = None
    threads: Any = None
    threads_account_name: Any = None
    threads_picture: Optional[str] = None
    bluesky: Any = None
    bluesky_handle: Any = None
    bluesky_picture: Optional[str] = None
    pinterest: Any = None
    pinterest_business: Any = None
    pinterest_picture: Optional[str] = None

    join_date: Optional[float] = None  # epoch milliseconds
    first_connection_date: Optional[float] = None
    timezone: Optional[str] = None
    is_demo: Any = False
    deleted: Any = False

    @field_validator("label", mode="before")
    @classmethod
    def coerce_label(cls, v: Any) -> str:
        if isinstance(v, str):
            return v
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return ""

    @field_validator(
        "picture",
        "instagram_picture",
        "facebook_picture",
        "twitter_picture",
        "tiktok_picture",
        "linked_in_company_picture",
        "linked_in_company_name",
        "youtube_channel_picture",
        "threads_picture",
        "bluesky_picture",
        "pinterest_picture",
        "timezone",
        mode="before",
    )
    @classmethod
    def text_or_none(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None

    @field_validator("join_date", "first_connection_date", mode="before")
    @classmethod
    def epoch_ms_or_none(cls, v: Any) -> Optional[float]:
        """Epoch milliseconds; ISO strings are converted, anything else is None."""
        if isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            try:
                number = float(v)
            except OverflowError:
                return None
            return number if math.isfinite(number) else None
        if isinstance(v, str):
            try:
                parsed = datetime.fromisoformat(v.replace("Z", "+00:00"))
            except ValueError:
                return None
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.timestamp() * 1000
        return None


class ProcessedBrand(CamelModel):
    """Brand reduced to what the dashboard displays."""

    id: int
    name: str
    picture: str
    platforms: tuple[Platform, ...] = ()
    join_date: Optional[datetime] = None
    days_since_join: int = 0
