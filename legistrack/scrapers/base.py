"""Base scraper with shared retrieval and normalization.

All scrapers inherit from this class to get:
- Configurable User-Agent header and request timeout
- Text and JSON retrieval that raises on any HTTP error (no retries: one
  failed request aborts the run)
- The cutoff threshold read from config
- Jurisdiction-prefixed ids

Module-level helpers reduce source timestamps to calendar dates so that
date comparisons ignore time-of-day noise.
"""

import logging
from datetime import date, datetime

import aiohttp
from dateutil import parser as dateparser

from legistrack.config import REQUEST_TIMEOUT, minimum_date, source_config
from legistrack.schemas.models import ID_PREFIXES, LegislativeRecord

logger = logging.getLogger(__name__)

USER_AGENT = "Legistrack/1.0 (legislative tracker; automated-scan)"


def date_without_time(value: datetime) -> date:
    """Reduce a datetime to its local calendar date.

    Aware datetimes are converted to local time first, so the day matches
    what a reader in the local timezone would see.
    """
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.date()


def parse_source_date(raw: str) -> date:
    """Parse a free-form source timestamp into a calendar date.

    Raises:
        ValueError: If ``raw`` is not a recognizable date.
    """
    return date_without_time(dateparser.parse(raw))


class BaseScraper:
    """Shared retrieval and normalization for all jurisdiction scrapers.

    Args:
        source_name: Identifier for this scraper source (e.g., "maryland").
        config: Tracker config dict. Reads ``minimum_date``,
                ``request_timeout`` and ``sources.<source_name>``.
    """

    jurisdiction: str = ""

    def __init__(self, source_name: str, config: dict | None = None):
        self.source_name = source_name
        self.config = config or {}
        self.source_config = source_config(config, source_name)
        self.minimum_date = minimum_date(config)
        self._headers = {"User-Agent": USER_AGENT}
        self.request_timeout = aiohttp.ClientTimeout(
            total=self.config.get("request_timeout", REQUEST_TIMEOUT)
        )

    async def scan(self) -> list[LegislativeRecord]:
        """Fetch the source and return normalized records."""
        raise NotImplementedError

    def _create_session(self) -> aiohttp.ClientSession:
        """Create an aiohttp session with proper User-Agent."""
        return aiohttp.ClientSession(headers=self._headers, timeout=self.request_timeout)

    async def _request(
        self, session: aiohttp.ClientSession, method: str, url: str,
        as_json: bool = False, **kwargs,
    ):
        method_lower = method.lower()
        if not hasattr(session, method_lower):
            raise ValueError(f"Unsupported HTTP method: {method}")
        request_fn = getattr(session, method_lower)

        try:
            async with request_fn(url, **kwargs) as resp:
                resp.raise_for_status()
                if as_json:
                    # Some portals mislabel JSON as text/html
                    return await resp.json(content_type=None)
                return await resp.text()
        except aiohttp.ClientError as e:
            logger.error("%s: %s %s failed: %s", self.source_name, method.upper(), url, e)
            raise

    async def _fetch_text(self, session: aiohttp.ClientSession, url: str, **kwargs) -> str:
        """GET ``url`` and return the body as text."""
        return await self._request(session, "GET", url, **kwargs)

    async def _fetch_json(
        self, session: aiohttp.ClientSession, url: str, method: str = "GET", **kwargs,
    ):
        """Request ``url`` and return the decoded JSON body."""
        return await self._request(session, method, url, as_json=True, **kwargs)

    def make_id(self, natural_key: str) -> str:
        """Prefix a source-native key with this jurisdiction's tag."""
        return f"{ID_PREFIXES[self.jurisdiction]}{natural_key}"

    def is_after_cutoff(self, introduced: date) -> bool:
        """True if a matter introduced on ``introduced`` should be tracked."""
        return introduced > self.minimum_date
