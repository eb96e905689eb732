"""Source health check for the legislative tracker.

Probes each source with a minimal request and reports UP / DOWN status per
source. Used by the --health-check CLI command for operator monitoring.
"""

import logging
import os
import time

import aiohttp

from legistrack.scrapers import (
    DCCouncilScraper,
    MarylandScraper,
    MontgomeryScraper,
    PrinceGeorgesScraper,
)
from legistrack.scrapers.base import USER_AGENT

logger = logging.getLogger(__name__)

# Probe timeout: quick check, not a full scan
_PROBE_TIMEOUT = aiohttp.ClientTimeout(total=10)


class HealthChecker:
    """Probe all four sources and report UP/DOWN status.

    Args:
        config: Tracker configuration dict (source URLs, API key env var).
    """

    def __init__(self, config: dict):
        self._config = config

    def probes(self) -> dict[str, dict]:
        """Build one lightweight request per source from its scraper config."""
        pg = PrinceGeorgesScraper(self._config)
        mc = MontgomeryScraper(self._config)
        dc = DCCouncilScraper(self._config)
        md = MarylandScraper(self._config)
        return {
            "prince_georges": {"method": "GET", "url": pg.feed_url},
            "montgomery": {"method": "GET", "url": mc.search_url},
            "dc_council": {
                "method": "POST",
                "url": dc.bulk_data_urls()[0],
                "json": {},
                "key_env_var": dc.key_env_var,
            },
            "maryland": {"method": "HEAD", "url": md.csv_url},
        }

    async def check_all(self) -> dict[str, dict]:
        """Probe all sources and return status dict.

        Returns:
            Dict mapping source name to {"status", "latency_ms", "detail"}.
        """
        results = {}
        for source_name, probe in self.probes().items():
            results[source_name] = await self._probe_one(source_name, probe)
        return results

    async def _probe_one(self, source_name: str, probe: dict) -> dict:
        headers = {"User-Agent": USER_AGENT}
        key_env = probe.get("key_env_var")
        if key_env:
            api_key = os.environ.get(key_env, "")
            if not api_key:
                return {"status": "DOWN", "latency_ms": 0, "detail": f"{key_env} not set"}
            headers["Authorization"] = api_key

        kwargs: dict = {}
        if "json" in probe:
            kwargs["json"] = probe["json"]

        start = time.monotonic()
        try:
            async with aiohttp.ClientSession(headers=headers, timeout=_PROBE_TIMEOUT) as session:
                async with session.request(probe["method"], probe["url"], **kwargs) as resp:
                    latency_ms = int((time.monotonic() - start) * 1000)
                    if 200 <= resp.status < 300:
                        return {"status": "UP", "latency_ms": latency_ms, "detail": "OK"}
                    return {"status": "DOWN", "latency_ms": latency_ms,
                            "detail": f"HTTP {resp.status}"}
        except (aiohttp.ClientError, TimeoutError, OSError) as e:
            logger.debug("%s: probe failed: %s", source_name, e)
            return {"status": "DOWN", "latency_ms": 0, "detail": str(e) or type(e).__name__}


def format_report(results: dict[str, dict]) -> str:
    """Format health check results as an aligned text table."""
    lines = [
        "Source Health Check",
        "-" * 60,
    ]
    max_name = max(len(name) for name in results) if results else 0
    for source_name, info in results.items():
        status = info["status"]
        if status == "UP":
            detail = f"({info['latency_ms']}ms)"
        else:
            detail = f"({info['detail']})"
        lines.append(f"  {source_name + ':':<{max_name + 2}} {status:<10} {detail}")
    return "\n".join(lines)
