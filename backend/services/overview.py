"""Overview tab figures: client totals and the client of the week."""

from typing import Optional, Sequence

from models.base import CamelModel
from models.brand import ProcessedBrand

GROWTH_PER_PLATFORM = 5


class ClientOfWeek(CamelModel):
    brand: ProcessedBrand
    growth_rate: int


class Overview(CamelModel):
    total_clients: int
    total_platforms: int
    active_clients: int
    client_of_week: Optional[ClientOfWeek] = None


def client_of_week(brands: Sequence[ProcessedBrand]) -> Optional[ClientOfWeek]:
    """The most-connected brand; the first in list order wins a tie."""
    if not brands:
        return None
    best = brands[0]
    for brand in brands[1:]:
        if len(brand.platforms) > len(best.platforms):
            best = brand
    return ClientOfWeek(brand=best, growth_rate=len(best.platforms) * GROWTH_PER_PLATFORM)


def build_overview(brands: Sequence[ProcessedBrand]) -> Overview:
    """Totals over the processed brand list.

    A client counts as active once it has at least one connected platform.
    """
    return Overview(
        total_clients=len(brands),
        total_platforms=sum(len(b.platforms) for b in brands),
        active_clients=sum(1 for b in brands if b.platforms),
        client_of_week=client_of_week(brands),
    )
