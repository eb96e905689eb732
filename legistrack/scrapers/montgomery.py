"""Montgomery County Council scraper (LIMS record search).

LIMS has no API. The record search page is requested with a page size large
enough to return every record on one page, and the results grid is read by
fixed column position:

    column 1 -> record id and detail link
    column 2 -> title
    column 5 -> introduction date

Each cell wraps its value in a label; the value is the cell's second element.
"""

import logging
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from legistrack.schemas.models import MONTGOMERY, UNKNOWN_CATEGORY, LegislativeRecord
from legistrack.scrapers.base import BaseScraper, parse_source_date
from legistrack.scrapers.errors import IntegrityError

logger = logging.getLogger(__name__)

SEARCH_URL = (
    "https://apps.montgomerycountymd.gov/ccllims/RecordSearchPage"
    "?TopSearch=1&AllActionSearch=0&SearchType=0&RecordsPerPage=100000&PageIndex=0"
)
LINK_BASE = "https://apps.montgomerycountymd.gov/ccllims/"

# The grid may or may not be parsed with an explicit <tbody>
ROW_SELECTOR = (
    "#MainContent_grdResultsList > tbody > tr:not(.gridviewPager), "
    "#MainContent_grdResultsList > tr:not(.gridviewPager)"
)

ID_COLUMN = 1
TITLE_COLUMN = 2
DATE_COLUMN = 5


def _cell_value(cells: list, column: int):
    """Return the value element of a grid cell, or None if absent."""
    if column >= len(cells):
        return None
    children = cells[column].find_all(recursive=False)
    if len(children) < 2:
        return None
    return children[1]


def _cell_text(cells: list, column: int) -> str:
    value = _cell_value(cells, column)
    return value.get_text(strip=True) if value is not None else ""


def categorize(record_id: str) -> str:
    """Infer the category from the record id's leading word."""
    if record_id.startswith("Bill"):
        return "Bill"
    if record_id.startswith("Resolution"):
        return "Resolution"
    return UNKNOWN_CATEGORY


class MontgomeryScraper(BaseScraper):
    """Scrapes Montgomery County Council legislation from the LIMS search grid."""

    jurisdiction = MONTGOMERY

    def __init__(self, config: dict | None = None):
        super().__init__("montgomery", config=config)
        self.search_url = self.source_config.get("search_url", SEARCH_URL)
        self.link_base = self.source_config.get("link_base", LINK_BASE)

    async def scan(self) -> list[LegislativeRecord]:
        async with self._create_session() as session:
            html = await self._fetch_text(session, self.search_url)
        records = self.parse(html)
        logger.info("Montgomery: %d records", len(records))
        return records

    def parse(self, html: str) -> list[LegislativeRecord]:
        """Read the results grid into normalized records.

        Rows with an empty date cell (pager, header and placeholder rows)
        are skipped before the date is parsed.
        """
        soup = BeautifulSoup(html, "lxml")
        records = []
        for row in soup.select(ROW_SELECTOR):
            cells = row.find_all(recursive=False)
            date_text = _cell_text(cells, DATE_COLUMN)
            if not date_text:
                logger.debug("Montgomery: skipping row without a date")
                continue
            introduced = parse_source_date(date_text)
            if not self.is_after_cutoff(introduced):
                continue

            anchor = _cell_value(cells, ID_COLUMN)
            href = anchor.get("href") if anchor is not None else None
            if not href:
                raise IntegrityError(
                    self.source_name, f"row dated {date_text} has no record link",
                )
            record_id = anchor.get_text(strip=True)
            records.append(LegislativeRecord(
                jurisdiction=self.jurisdiction,
                id=self.make_id(record_id),
                title=_cell_text(cells, TITLE_COLUMN),
                link=urljoin(self.link_base, href),
                category=categorize(record_id),
                introduction_date=introduced,
            ))
        return records
