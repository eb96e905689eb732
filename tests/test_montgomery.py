"""Tests for the Montgomery County (LIMS search grid) scraper.

Uses inline HTML fixtures shaped like the LIMS results grid: each cell holds
a label element followed by the value element.
"""

import asyncio
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from legistrack.scrapers.errors import IntegrityError
from legistrack.scrapers.montgomery import MontgomeryScraper, categorize


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _NullSession:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


def _row(record_id: str, title: str, intro: str, href: str = "RecordDetail?id=1") -> str:
    return (
        "<tr>"
        "<td><span>#</span><span>1</span></td>"
        f'<td><span>Record</span><a href="{href}">{record_id}</a></td>'
        f"<td><span>Title</span><span>{title}</span></td>"
        "<td><span>Status</span><span>Introduced</span></td>"
        "<td><span>Sponsor</span><span>Council</span></td>"
        f"<td><span>Introduced</span><span>{intro}</span></td>"
        "</tr>"
    )


def _grid(*rows: str, tbody: bool = True) -> str:
    header = "<tr><th>#</th><th>Record</th><th>Title</th><th>Status</th><th>Sponsor</th><th>Date</th></tr>"
    pager = '<tr class="gridviewPager"><td colspan="6"><span>1</span><span>2</span></td></tr>'
    body = header + "".join(rows) + pager
    if tbody:
        body = f"<tbody>{body}</tbody>"
    return (
        "<html><body><form>"
        f'<table id="MainContent_grdResultsList">{body}</table>'
        "</form></body></html>"
    )


def _scraper() -> MontgomeryScraper:
    return MontgomeryScraper({"minimum_date": "2025-12-20"})


# ---------------------------------------------------------------------------
# Category inference
# ---------------------------------------------------------------------------


class TestCategorize:
    def test_bill(self):
        assert categorize("Bill 1-26") == "Bill"

    def test_resolution(self):
        assert categorize("Resolution 20-1180") == "Resolution"

    def test_anything_else_is_unknown(self):
        assert categorize("Expedited Bill 3-26") == "Unknown"
        assert categorize("ZTA 26-01") == "Unknown"


# ---------------------------------------------------------------------------
# Grid parsing
# ---------------------------------------------------------------------------


class TestParse:
    def test_reads_columns_by_position(self):
        html = _grid(_row("Bill 1-26", "Taxation - Property Tax Credit", "01/06/2026",
                          href="RecordDetail?RecordId=123"))
        records = _scraper().parse(html)

        assert len(records) == 1
        record = records[0]
        assert record.id == "MC-Bill 1-26"
        assert record.jurisdiction == "Montgomery County"
        assert record.title == "Taxation - Property Tax Credit"
        assert record.link == "https://apps.montgomerycountymd.gov/ccllims/RecordDetail?RecordId=123"
        assert record.category == "Bill"
        assert record.introduction_date == date(2026, 1, 6)

    def test_unknown_category_is_kept(self):
        records = _scraper().parse(_grid(_row("ZTA 26-01", "Zoning text", "01/13/2026")))
        assert [r.category for r in records] == ["Unknown"]

    def test_header_and_pager_rows_skipped(self):
        assert _scraper().parse(_grid()) == []

    def test_empty_date_row_skipped(self):
        html = _grid(_row("Bill 2-26", "Placeholder", "  "),
                     _row("Bill 3-26", "Real", "01/07/2026"))
        assert [r.id for r in _scraper().parse(html)] == ["MC-Bill 3-26"]

    def test_cutoff_filter(self):
        html = _grid(_row("Bill 40-25", "Old", "12/20/2025"),
                     _row("Bill 41-25", "New", "12/21/2025"))
        assert [r.id for r in _scraper().parse(html)] == ["MC-Bill 41-25"]

    def test_grid_without_tbody(self):
        html = _grid(_row("Resolution 20-1", "Budget", "01/06/2026"), tbody=False)
        assert [r.id for r in _scraper().parse(html)] == ["MC-Resolution 20-1"]

    def test_row_order_preserved(self):
        html = _grid(_row("Bill 5-26", "E", "01/06/2026"),
                     _row("Bill 4-26", "D", "01/08/2026"))
        assert [r.id for r in _scraper().parse(html)] == ["MC-Bill 5-26", "MC-Bill 4-26"]

    def test_row_without_link_is_fatal(self):
        html = _grid(_row("Bill 6-26", "No link", "01/06/2026", href=""))
        with pytest.raises(IntegrityError):
            _scraper().parse(html)


class TestScan:
    def test_scan_parses_fetched_page(self):
        scraper = _scraper()
        scraper._create_session = MagicMock(return_value=_NullSession())
        scraper._fetch_text = AsyncMock(return_value=_grid(_row("Bill 1-26", "T", "01/06/2026")))

        records = asyncio.run(scraper.scan())

        assert [r.id for r in records] == ["MC-Bill 1-26"]
        scraper._fetch_text.assert_awaited_once()
        assert "RecordsPerPage=100000" in scraper._fetch_text.await_args.args[1]
