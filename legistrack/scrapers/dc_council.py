"""Council of the District of Columbia scraper (LIMS public API).

Uses the LIMS v2 bulk-data export, one POST per legislation category for a
single council period. The API requires a static key sent as the
``Authorization`` header; the key is read from the environment.
"""

import asyncio
import logging
import os

from legistrack.config import DC_KEY_ENV_VAR
from legistrack.schemas.models import DISTRICT_OF_COLUMBIA, LegislativeRecord
from legistrack.scrapers.base import BaseScraper, parse_source_date
from legistrack.scrapers.errors import MissingCredentialError

logger = logging.getLogger(__name__)

BASE_URL = "https://lims.dccouncil.gov/api/v2/PublicData/BulkData"
LEGISLATION_URL = "https://lims.dccouncil.gov/Legislation/"

# Council Period 26 covers 2025-2026 inclusive
COUNCIL_PERIOD_ID = 26
CATEGORY_IDS = {"bill": 1, "resolution": 6}


class DCCouncilScraper(BaseScraper):
    """Scrapes DC Council bills and resolutions from the LIMS bulk export."""

    jurisdiction = DISTRICT_OF_COLUMBIA

    def __init__(self, config: dict | None = None):
        super().__init__("dc_council", config=config)
        self.base_url = self.source_config.get("base_url", BASE_URL)
        self.key_env_var = self.source_config.get("key_env_var", DC_KEY_ENV_VAR)
        self.council_period_id = self.source_config.get("council_period_id", COUNCIL_PERIOD_ID)
        self.category_ids = self.source_config.get("category_ids", CATEGORY_IDS)

    def bulk_data_urls(self) -> list[str]:
        return [
            f"{self.base_url}/{category_id}/{self.council_period_id}"
            for category_id in self.category_ids.values()
        ]

    async def scan(self) -> list[LegislativeRecord]:
        """POST every category export concurrently and normalize the union.

        Raises:
            MissingCredentialError: If the API key variable is unset.
        """
        api_key = os.environ.get(self.key_env_var, "")
        if not api_key:
            raise MissingCredentialError(self.source_name, self.key_env_var)

        headers = {"Authorization": api_key}
        async with self._create_session() as session:
            payloads = await asyncio.gather(*[
                self._fetch_json(session, url, method="POST", json={}, headers=headers)
                for url in self.bulk_data_urls()
            ])
        items = [item for payload in payloads for item in payload]
        records = self.parse(items)
        logger.info("DC Council: %d records from %d items", len(records), len(items))
        return records

    def parse(self, items: list[dict]) -> list[LegislativeRecord]:
        records = []
        for item in items:
            raw_date = item.get("introductionDate")
            if not raw_date:
                logger.debug("DC Council: %s has no introduction date, skipping",
                             item.get("legislationNumber"))
                continue
            introduced = parse_source_date(raw_date)
            if not self.is_after_cutoff(introduced):
                continue
            number = item["legislationNumber"]
            records.append(LegislativeRecord(
                jurisdiction=self.jurisdiction,
                id=self.make_id(number),
                title=item.get("title") or "",
                link=f"{LEGISLATION_URL}{number}",
                category=item.get("legislationCategory") or "",
                introduction_date=introduced,
            ))
        return records
