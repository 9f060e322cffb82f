"""Search and filter for the client grid."""

from typing import Iterable, Sequence

from models.brand import BrandStatus, Platform, ProcessedBrand
from services.estimations import brand_status


def filter_brands(
    brands: Sequence[ProcessedBrand],
    query: str = "",
    platforms: Iterable[Platform] = (),
    statuses: Iterable[BrandStatus] = (),
) -> list[ProcessedBrand]:
    """Filter by name substring, any-of platforms and any-of statuses.

    Criteria combine with AND; values within a criterion with OR.
    """
    needle = query.strip().casefold()
    wanted_platforms = set(platforms)
    wanted_statuses = set(statuses)

    if not needle and not wanted_platforms and not wanted_statuses:
        return list(brands)

    def matches(brand: ProcessedBrand) -> bool:
        if needle and needle not in brand.name.casefold():
            return False
        if wanted_platforms and not wanted_platforms.intersection(brand.platforms):
            return False
        if wanted_statuses and brand_status(len(brand.platforms)) not in wanted_statuses:
            return False
        return True

    return [b for b in brands if matches(b)]
