from models.brand import Platform, ProcessedBrand
from services.overview import build_overview, client_of_week


def _brand(brand_id, name, platform_count):
    return ProcessedBrand(
        id=brand_id, name=name, picture="", platforms=tuple(list(Platform)[:platform_count])
    )


def test_totals_count_clients_connections_and_active_clients():
    overview = build_overview([_brand(1, "Alpha", 3), _brand(2, "Bravo", 0), _brand(3, "Charlie", 2)])

    assert overview.total_clients == 3
    assert overview.total_platforms == 5
    assert overview.active_clients == 2


def test_client_of_week_is_most_connected_first_on_ties():
    pick = client_of_week([_brand(1, "Alpha", 2), _brand(2, "Bravo", 4), _brand(3, "Charlie", 4)])

    assert pick.brand.id == 2
    assert pick.growth_rate == 20


def test_empty_brand_list():
    overview = build_overview([])

    assert overview.total_clients == 0
    assert overview.total_platforms == 0
    assert overview.client_of_week is None
