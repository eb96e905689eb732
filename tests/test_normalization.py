"""Tests for the normalization shared by every scraper.

Date truncation, the cutoff threshold, and jurisdiction id prefixes.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from legistrack.config import MINIMUM_DATE, minimum_date
from legistrack.schemas.models import ID_PREFIXES
from legistrack.scrapers import SCRAPERS
from legistrack.scrapers.base import date_without_time, parse_source_date


class TestDateTruncation:
    def test_naive_datetime(self):
        assert date_without_time(datetime(2026, 1, 5, 23, 59, 59)) == date(2026, 1, 5)

    def test_same_day_different_times_compare_equal(self):
        morning = date_without_time(datetime(2026, 1, 5, 8, 0))
        evening = date_without_time(datetime(2026, 1, 5, 21, 30))
        assert morning == evening

    def test_aware_datetime_uses_local_day(self):
        local = datetime(2026, 1, 5, 12, 0).astimezone()
        as_utc = local.astimezone(timezone.utc)
        assert date_without_time(as_utc) == date(2026, 1, 5)

    def test_parse_iso_timestamp(self):
        assert parse_source_date("2026-01-05T14:03:00") == date(2026, 1, 5)

    def test_parse_us_date(self):
        assert parse_source_date("01/05/2026") == date(2026, 1, 5)

    def test_parse_garbage_raises(self):
        with pytest.raises(ValueError):
            parse_source_date("not a date")


class TestCutoff:
    def test_default_cutoff(self):
        assert minimum_date({}) == date(2025, 12, 20)
        assert minimum_date(None) == MINIMUM_DATE

    def test_configured_cutoff(self):
        assert minimum_date({"minimum_date": "2026-01-01"}) == date(2026, 1, 1)

    @pytest.mark.parametrize("source_name", sorted(SCRAPERS))
    def test_cutoff_is_exclusive(self, source_name):
        scraper = SCRAPERS[source_name]({})
        assert not scraper.is_after_cutoff(MINIMUM_DATE)
        assert not scraper.is_after_cutoff(MINIMUM_DATE - timedelta(days=1))
        assert scraper.is_after_cutoff(MINIMUM_DATE + timedelta(days=1))


class TestIdNamespaces:
    def test_every_scraper_has_a_prefix(self):
        for scraper_cls in SCRAPERS.values():
            assert scraper_cls.jurisdiction in ID_PREFIXES

    def test_prefixes_are_prefix_free(self):
        """No prefix is a prefix of another, so prefixed ids can never collide."""
        prefixes = list(ID_PREFIXES.values())
        for a in prefixes:
            for b in prefixes:
                if a != b:
                    assert not b.startswith(a)

    def test_same_natural_key_gives_distinct_ids(self):
        ids = {scraper_cls({}).make_id("123") for scraper_cls in SCRAPERS.values()}
        assert len(ids) == len(SCRAPERS)
