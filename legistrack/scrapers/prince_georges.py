"""Prince George's County Council scraper (Legistar).

Legistar exposes the council's legislation two ways, and neither is
complete on its own:

- an RSS feed whose items carry the public detail-page link, titled by
  matter file number;
- the Legistar Web API ``matters`` list, which carries type and
  introduction date but no public link.

Both are fetched concurrently and joined on file number. A kept matter
with no feed link means the two responses are out of sync, which aborts
the run rather than emitting a record without a link.
"""

import asyncio
import logging
from urllib.parse import urlencode

from bs4 import BeautifulSoup

from legistrack.config import PAGINATION_CEILING
from legistrack.schemas.models import PRINCE_GEORGES, LegislativeRecord
from legistrack.scrapers.base import BaseScraper, parse_source_date
from legistrack.scrapers.errors import IntegrityError, PaginationLimitError

logger = logging.getLogger(__name__)

FEED_URL = (
    "https://princegeorgescountymd.legistar.com/Feed.ashx?M=L&ID=27795052"
    "&GUID=c1bd1534-3207-4b69-8f82-47b5683f1dd9"
    "&Title=Prince+George%27s+County+Council+-+Legislation"
)
MATTERS_URL = "https://webapi.legistar.com/v1/princegeorgescountymd/matters"

# Requested page size; the ceiling sits just below it so a full page trips it
MATTERS_TOP = 1000

# Planning items and appointments are not tracked
ALLOWED_CATEGORIES = frozenset({"Council Bill", "Resolution"})


def parse_feed_links(feed_xml: str) -> dict[str, str]:
    """Map each RSS item title (the matter file number) to its link."""
    soup = BeautifulSoup(feed_xml, "lxml-xml")
    links: dict[str, str] = {}
    for item in soup.select("item"):
        title = item.select_one(":scope > title")
        link = item.select_one(":scope > link")
        if title is None or link is None:
            continue
        links[title.get_text(strip=True)] = link.get_text(strip=True)
    return links


class PrinceGeorgesScraper(BaseScraper):
    """Scrapes Prince George's County Council legislation from Legistar."""

    jurisdiction = PRINCE_GEORGES

    def __init__(self, config: dict | None = None):
        super().__init__("prince_georges", config=config)
        self.feed_url = self.source_config.get("feed_url", FEED_URL)
        self.matters_url = self.source_config.get("matters_url", MATTERS_URL)
        self.pagination_ceiling = self.source_config.get(
            "pagination_ceiling", PAGINATION_CEILING
        )

    def matters_query_url(self) -> str:
        """Matters endpoint filtered server-side to the cutoff date."""
        d = self.minimum_date
        params = {
            "$top": MATTERS_TOP,
            "$filter": f"MatterIntroDate ge datetime'{d.year}-{d.month}-{d.day}'",
        }
        query = urlencode(params, safe="$'")
        return f"{self.matters_url}?{query}"

    async def scan(self) -> list[LegislativeRecord]:
        """Fetch feed and matters concurrently, then join them."""
        async with self._create_session() as session:
            feed_xml, matters = await asyncio.gather(
                self._fetch_text(session, self.feed_url),
                self._fetch_json(
                    session, self.matters_query_url(),
                    headers={"Accept": "application/json"},
                ),
            )
        records = self.parse(feed_xml, matters)
        logger.info("Prince George's: %d records from %d matters", len(records), len(matters))
        return records

    def parse(self, feed_xml: str, matters: list[dict]) -> list[LegislativeRecord]:
        """Join the RSS feed to the matters list and normalize.

        Raises:
            PaginationLimitError: If ``matters`` is at or above the ceiling.
            IntegrityError: If a kept matter has no link in the feed.
        """
        if len(matters) >= self.pagination_ceiling:
            raise PaginationLimitError(self.source_name, len(matters), self.pagination_ceiling)

        id_to_link = parse_feed_links(feed_xml)
        records = []
        for matter in matters:
            raw_date = matter.get("MatterIntroDate")
            if not raw_date:
                logger.debug("Prince George's: %s has no intro date, skipping",
                             matter.get("MatterFile"))
                continue
            introduced = parse_source_date(raw_date)
            if not self.is_after_cutoff(introduced):
                continue
            category = matter.get("MatterTypeName", "")
            if category not in ALLOWED_CATEGORIES:
                continue

            file_number = matter["MatterFile"]
            link = id_to_link.get(file_number, "")
            if not link:
                raise IntegrityError(
                    self.source_name,
                    f"no feed link for matter {file_number}; feed and matters are out of sync",
                )
            records.append(LegislativeRecord(
                jurisdiction=self.jurisdiction,
                id=self.make_id(file_number),
                title=matter.get("MatterTitle") or "",
                link=link,
                category=category,
                introduction_date=introduced,
            ))
        return records
