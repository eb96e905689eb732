"""Jurisdiction scrapers.

Each scraper exposes ``async scan() -> list[LegislativeRecord]`` and a pure
``parse(...)`` over the raw payload.
"""

from legistrack.scrapers.dc_council import DCCouncilScraper
from legistrack.scrapers.maryland import MarylandScraper
from legistrack.scrapers.montgomery import MontgomeryScraper
from legistrack.scrapers.prince_georges import PrinceGeorgesScraper

SCRAPERS = {
    "prince_georges": PrinceGeorgesScraper,
    "montgomery": MontgomeryScraper,
    "dc_council": DCCouncilScraper,
    "maryland": MarylandScraper,
}

__all__ = [
    "SCRAPERS",
    "DCCouncilScraper",
    "MarylandScraper",
    "MontgomeryScraper",
    "PrinceGeorgesScraper",
]
