from models.brand import BrandStatus, Platform, ProcessedBrand
from services.brand_filter import filter_brands
from services.estimations import brand_status, estimated_stats, merge_stats


def make_brand(brand_id=101, name="Alpha", platforms=(Platform.INSTAGRAM, Platform.TIKTOK), days=100):
    return ProcessedBrand(
        id=brand_id,
        name=name,
        picture="",
        platforms=platforms,
        days_since_join=days,
    )


def test_status_thresholds():
    assert brand_status(0) == BrandStatus.SETUP
    assert brand_status(2) == BrandStatus.GROWING
    assert brand_status(3) == BrandStatus.ACTIVE


def test_estimates_are_deterministic():
    stats = estimated_stats(make_brand())

    # 2*1200 + 101 + 100*3.5
    assert stats.followers == 2851
    assert stats.reach == int(2851 * 1.8 + 1600)
    assert stats.content_published == 42
    assert stats.growth_percent == 2
    assert 0.8 <= stats.engagement <= 8.5
    assert stats.is_estimated
    assert estimated_stats(make_brand()) == stats


def test_growth_is_negative_without_platforms():
    assert estimated_stats(make_brand(brand_id=7, platforms=())).growth_percent == -3


def test_real_figures_override_estimates():
    estimated = estimated_stats(make_brand())
    merged = merge_stats({"followers": 1500, "engagementRate": 4.2, "reach": "n/a"}, 9, estimated)

    assert merged.followers == 1500
    assert merged.engagement == 4.2
    assert merged.reach == estimated.reach
    assert merged.content_published == 9
    assert merged.growth_percent == estimated.growth_percent
    assert not merged.is_estimated


def test_no_raw_keeps_the_estimate():
    estimated = estimated_stats(make_brand())
    assert merge_stats(None, 5, estimated) == estimated


class TestFilterBrands:
    brands = [
        make_brand(1, "Alpha Dental", (Platform.INSTAGRAM, Platform.FACEBOOK, Platform.TIKTOK)),
        make_brand(2, "Bravo Fitness", (Platform.LINKEDIN,)),
        make_brand(3, "Charlie Dental", ()),
    ]

    def test_no_filters_returns_everything(self):
        assert filter_brands(self.brands) == self.brands

    def test_name_search_is_case_insensitive(self):
        assert [b.id for b in filter_brands(self.brands, query="  dental ")] == [1, 3]

    def test_platforms_match_any(self):
        result = filter_brands(self.brands, platforms=[Platform.TIKTOK, Platform.LINKEDIN])
        assert [b.id for b in result] == [1, 2]

    def test_criteria_combine(self):
        result = filter_brands(self.brands, query="dental", statuses=[BrandStatus.SETUP])
        assert [b.id for b in result] == [3]
