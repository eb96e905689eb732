"""Default configuration values for the legislative tracker.

``config/tracker_config.json`` overrides any of these. Components read their
own section of the config dict with ``.get(key, DEFAULT)`` so a partial config
file stays valid.

Example:
    A matter introduced on 2025-12-20 is dropped; one introduced on
    2025-12-21 is kept.
"""

import json
from datetime import date
from pathlib import Path

from legistrack.paths import TRACKER_CONFIG_PATH

MINIMUM_DATE: date = date(2025, 12, 20)
"""Cutoff threshold: matters introduced on or before this date are not tracked."""

PAGINATION_CEILING: int = 999
"""Prince George's result count at which the scan refuses to continue."""

REQUEST_TIMEOUT: int = 60
"""Total aiohttp timeout per request, in seconds."""

DC_KEY_ENV_VAR: str = "DC_API_KEY"
"""Environment variable holding the DC Council LIMS API key."""

MARYLAND_SESSION: str = "2026rs"
"""Maryland General Assembly session code used in URLs and ids."""


def load_config(path: Path | str | None = None) -> dict:
    """Load tracker configuration from JSON."""
    with open(path or TRACKER_CONFIG_PATH, encoding="utf-8") as f:
        return json.load(f)


def minimum_date(config: dict | None = None) -> date:
    """Return the cutoff date from config, falling back to ``MINIMUM_DATE``."""
    raw = (config or {}).get("minimum_date")
    if not raw:
        return MINIMUM_DATE
    return date.fromisoformat(raw)


def source_config(config: dict | None, source_name: str) -> dict:
    """Return the ``sources.<source_name>`` section, or an empty dict."""
    return (config or {}).get("sources", {}).get(source_name, {})
