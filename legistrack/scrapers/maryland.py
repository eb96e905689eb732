"""Maryland General Assembly scraper (bill master list CSV).

The master list is a single CSV per session. Only bills (``HB``/``SB``) and
joint resolutions (``HJ``/``SJ``) are tracked; every other bill-number
pattern is skipped row by row.
"""

import csv
import io
import logging
from datetime import date

from legistrack.config import MARYLAND_SESSION
from legistrack.schemas.models import MARYLAND, LegislativeRecord
from legistrack.scrapers.base import BaseScraper

logger = logging.getLogger(__name__)

BASE_URL = "https://mgaleg.maryland.gov"

BILL_NUMBER_COLUMN = "Bill Number"
TITLE_COLUMN = "Title"
FIRST_READING_COLUMN = "First Reading Date - House of Origin"

# Second character of the bill number -> category
CATEGORY_CODES = {
    "B": "Bill",
    "J": "Joint Resolution",
}


def parse_first_reading(raw: str) -> date:
    """Parse a ``M/D/YYYY`` first-reading date.

    Raises:
        ValueError: If ``raw`` does not have three numeric parts.
    """
    month, day, year = (int(part) for part in raw.strip().split("/"))
    return date(year, month, day)


class MarylandScraper(BaseScraper):
    """Scrapes the Maryland General Assembly bill master list."""

    jurisdiction = MARYLAND

    def __init__(self, config: dict | None = None):
        super().__init__("maryland", config=config)
        self.base_url = self.source_config.get("base_url", BASE_URL)
        self.session = self.source_config.get("session", MARYLAND_SESSION)

    @property
    def csv_url(self) -> str:
        return f"{self.base_url}/{self.session}/misc/billsmasterlist/BillMasterList.csv"

    def detail_link(self, bill_number: str) -> str:
        return (
            f"{self.base_url}/mgawebsite/Legislation/Details/{bill_number}"
            f"?ys={self.session.upper()}#"
        )

    async def scan(self) -> list[LegislativeRecord]:
        async with self._create_session() as session:
            text = await self._fetch_text(session, self.csv_url)
        records = self.parse(text)
        logger.info("Maryland: %d records", len(records))
        return records

    def parse(self, text: str) -> list[LegislativeRecord]:
        """Read the master list CSV into normalized records."""
        reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
        records = []
        skipped = 0
        for row in reader:
            bill_number = (row.get(BILL_NUMBER_COLUMN) or "").strip()
            category = CATEGORY_CODES.get(bill_number[1:2])
            if category is None:
                skipped += 1
                continue

            first_reading = (row.get(FIRST_READING_COLUMN) or "").strip()
            if not first_reading:
                logger.debug("Maryland: %s has no first reading date, skipping", bill_number)
                continue
            introduced = parse_first_reading(first_reading)
            if not self.is_after_cutoff(introduced):
                continue

            records.append(LegislativeRecord(
                jurisdiction=self.jurisdiction,
                id=self.make_id(f"{self.session.upper()}-{bill_number}"),
                title=row.get(TITLE_COLUMN) or "",
                link=self.detail_link(bill_number),
                category=category,
                introduction_date=introduced,
            ))
        if skipped:
            logger.debug("Maryland: skipped %d rows with untracked bill numbers", skipped)
        return records
