"""Centralized path constants for the legislative tracker.

Every file and directory path used by the pipeline is defined here as a
module-level constant. Source files import from this module instead of
constructing ad-hoc ``Path(...)`` literals.

Design rules:
  1. This module imports ONLY ``pathlib.Path`` -- no project imports.
  2. No path existence checks at import time.  Callers create directories
     as needed (``mkdir(parents=True, exist_ok=True)``).
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# -- Project Root --
# ---------------------------------------------------------------------------

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent
"""Absolute path to the project root directory (one level above ``legistrack/``)."""

PACKAGE_DIR: Path = Path(__file__).resolve().parent
"""Absolute path to the ``legistrack`` package directory."""

# ---------------------------------------------------------------------------
# -- Config Paths --
# ---------------------------------------------------------------------------

CONFIG_DIR: Path = PROJECT_ROOT / "config"
"""Directory containing tracker configuration files."""

TRACKER_CONFIG_PATH: Path = CONFIG_DIR / "tracker_config.json"
"""Main tracker configuration (sources, cutoff date, pagination ceiling)."""

# ---------------------------------------------------------------------------
# -- Template Paths --
# ---------------------------------------------------------------------------

TEMPLATES_DIR: Path = PACKAGE_DIR / "reports" / "templates"
"""Jinja2 templates shipped with the package."""

SUMMARY_TEMPLATE_NAME: str = "summary.html"
"""Template used for the grouped HTML summary."""

# ---------------------------------------------------------------------------
# -- Output Paths --
# ---------------------------------------------------------------------------

OUTPUTS_DIR: Path = PROJECT_ROOT / "outputs"
"""Top-level output directory for the persisted dataset and rendered reports."""

RECORDS_PATH: Path = OUTPUTS_DIR / "records.json"
"""Persisted, reconciled dataset (baseline for the next merge)."""

RECORDS_CSV_PATH: Path = OUTPUTS_DIR / "records.csv"
"""CSV export of the persisted dataset."""

SUMMARY_DATA_PATH: Path = OUTPUTS_DIR / "data.json"
"""One-shot sorted results plus date groups."""

SUMMARY_HTML_PATH: Path = OUTPUTS_DIR / "summary.html"
"""Rendered one-shot HTML summary."""
