import math

from services.fields import extract_date, extract_number, extract_string


class TestExtractNumber:
    def test_first_present_key_wins(self):
        record = {"likeCount": 7, "reactions": 9}
        assert extract_number(record, "likes", "likeCount", "reactions") == 7

    def test_numeric_strings_are_parsed(self):
        assert extract_number({"views": "1250"}, "views") == 1250
        assert extract_number({"views": "12.5k"}, "views") == 12.5

    def test_nan_falls_through_to_next_key(self):
        record = {"reach": math.nan, "impressions": "not a number", "views": 40}
        assert extract_number(record, "reach", "impressions", "views") == 40

    def test_booleans_and_none_are_not_numbers(self):
        record = {"likes": True, "likeCount": None}
        assert extract_number(record, "likes", "likeCount") == 0

    def test_missing_returns_zero(self):
        assert extract_number({}, "likes") == 0


class TestExtractString:
    def test_skips_empty_and_non_strings(self):
        record = {"content": "", "text": 42, "description": "Launch day"}
        assert extract_string(record, "content", "text", "description") == "Launch day"

    def test_missing_returns_empty(self):
        assert extract_string({"title": None}, "title") == ""


class TestExtractDate:
    def test_structured_date_object(self):
        record = {"publishedAt": {"dateTime": "2026-10-01T09:30:00", "timezone": "UTC"}}
        assert extract_date(record) == "2026-10-01T09:30:00"

    def test_structured_key_as_plain_string(self):
        assert extract_date({"createTime": "2026-10-02T10:00:00"}) == "2026-10-02T10:00:00"

    def test_structured_keys_beat_flat_keys(self):
        record = {"date": "2026-01-01", "created": {"dateTime": "2026-10-03T11:00:00"}}
        assert extract_date(record) == "2026-10-03T11:00:00"

    def test_flat_fallback(self):
        assert extract_date({"postedAt": "2026-10-04"}) == "2026-10-04"

    def test_missing_is_empty(self):
        assert extract_date({"publishedAt": {"timezone": "UTC"}}) == ""
