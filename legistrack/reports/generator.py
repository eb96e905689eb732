"""Report generator.

Produces the CSV export of the reconciled dataset, and the one-shot summary:
a JSON file of sorted results plus date groups, rendered to HTML with Jinja2.
"""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from legistrack.paths import (
    OUTPUTS_DIR,
    SUMMARY_TEMPLATE_NAME,
    TEMPLATES_DIR,
)
from legistrack.schemas.models import DateGroup, LegislativeRecord

logger = logging.getLogger(__name__)

CSV_HEADER = "ID,Jurisdiction,Title,Link,Category,Introduction Date"


def html_entities(value: str) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"`` for HTML text and attributes."""
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def build_csv(records: list[LegislativeRecord]) -> str:
    """Render records as CSV.

    Title and link are always quoted, with embedded quotes doubled; the
    other columns never contain commas or quotes and are written bare.
    """
    lines = [CSV_HEADER]
    for record in records:
        lines.append(",".join([
            record.id,
            record.jurisdiction,
            _quote(record.title),
            _quote(record.link),
            record.category,
            record.introduction_date.isoformat(),
        ]))
    return "\n".join(lines) + "\n"


def build_summary_data(
    results: list[LegislativeRecord], dates: list[DateGroup],
) -> dict:
    """Build the one-shot summary payload (dates as ISO strings)."""
    return {
        "dates": [group.model_dump(mode="json") for group in dates],
        "results": [record.to_json() for record in results],
    }


class ReportGenerator:
    """Writes CSV exports and the grouped HTML summary."""

    def __init__(self, outputs_dir: Path | None = None, templates_dir: Path | None = None):
        self.outputs_dir = outputs_dir or OUTPUTS_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            # Escaping is explicit through html_entities
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals["html_entities"] = html_entities

    def write_csv(self, records: list[LegislativeRecord], path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(build_csv(records), encoding="utf-8")
        logger.info("CSV written: %s (%d records)", path, len(records))
        return path

    def write_summary_data(
        self, results: list[LegislativeRecord], dates: list[DateGroup], path: Path,
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(build_summary_data(results, dates), f, indent="\t", ensure_ascii=False)
            os.replace(tmp_path, path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
        logger.info("Summary data written: %s", path)
        return path

    def render_summary(
        self, results: list[LegislativeRecord], dates: list[DateGroup],
    ) -> str:
        """Render the grouped HTML summary for already sorted ``results``."""
        template = self.env.get_template(SUMMARY_TEMPLATE_NAME)
        return template.render(
            results=results,
            dates=dates,
            generated=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
        )

    def write_summary_html(
        self, results: list[LegislativeRecord], dates: list[DateGroup], path: Path,
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render_summary(results, dates), encoding="utf-8")
        logger.info("HTML summary written: %s", path)
        return path
