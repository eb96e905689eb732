"""Legislative tracker main pipeline orchestrator.

Pipeline: Scan (4 sources, concurrent) -> Reconcile -> Export
          Scan (4 sources, concurrent) -> Sort/Group -> Summary (one-shot)

Usage:
    python -m legistrack.main                  # Scan, merge into records.json, export CSV
    python -m legistrack.main --summary        # Scan, write data.json + summary.html
    python -m legistrack.main --report-only    # Re-export CSV + HTML from records.json
    python -m legistrack.main --source maryland
    python -m legistrack.main --dry-run        # Show what would be scanned
    python -m legistrack.main --health-check   # Probe every source
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from legistrack.analysis.grouping import sort_and_group
from legistrack.analysis.reconciler import Reconciler
from legistrack.config import load_config, minimum_date, source_config
from legistrack.paths import (
    RECORDS_CSV_PATH,
    SUMMARY_DATA_PATH,
    SUMMARY_HTML_PATH,
    TRACKER_CONFIG_PATH,
)
from legistrack.reports.generator import ReportGenerator
from legistrack.schemas.models import LegislativeRecord
from legistrack.scrapers import SCRAPERS

logger = logging.getLogger(__name__)


def dry_run(config: dict, sources: list[str], summary: bool = False) -> None:
    """Show what would be scanned without making requests."""
    print("\n=== DRY RUN ===")
    if summary:
        print("Pipeline: Scan -> Sort/Group -> Summary")
    else:
        print("Pipeline: Scan -> Reconcile -> Export")
    print(f"Cutoff: matters introduced after {minimum_date(config).isoformat()}")
    print("\nSources to scan:")
    for name in sources:
        src = source_config(config, name)
        key_needed = src.get("requires_key", False)
        status = "ready" if not key_needed else f"needs {src.get('key_env_var', 'API key')}"
        print(f"  - {src.get('name', name)} ({status})")
        scraper = SCRAPERS[name](config)
        for attr, value in vars(scraper).items():
            if attr.endswith("_url"):
                print(f"      {attr}: {value}")
    print()


def _dedupe(records: list[LegislativeRecord]) -> list[LegislativeRecord]:
    """Collapse repeated ids: first position wins, last value wins."""
    by_id: dict[str, LegislativeRecord] = {}
    for record in records:
        by_id[record.id] = record
    if len(by_id) != len(records):
        logger.warning("Dropped %d duplicate record ids from scan", len(records) - len(by_id))
    return list(by_id.values())


async def run_scan(config: dict, sources: list[str]) -> list[LegislativeRecord]:
    """Run scrapers concurrently and return all records.

    No fallback: the first scraper failure propagates and aborts the run.
    """
    async def _run_one(source_name: str) -> list[LegislativeRecord]:
        scraper = SCRAPERS[source_name](config)
        logger.info("Scanning %s...", source_name)
        records = await scraper.scan()
        logger.info("  -> %d records from %s", len(records), source_name)
        return records

    results = await asyncio.gather(*[_run_one(s) for s in sources])
    all_records = [record for result in results for record in result]
    logger.info("Total records collected: %d", len(all_records))
    return _dedupe(all_records)


def run_merge(config: dict, sources: list[str]) -> None:
    """Scan, merge into the persisted dataset, export CSV."""
    records = asyncio.run(run_scan(config, sources))
    merged, summary = Reconciler().reconcile(records)
    csv_path = ReportGenerator().write_csv(merged, RECORDS_CSV_PATH)

    print("\nScan complete.")
    print(f"  Records scanned: {len(records)}")
    print(f"  New: {summary['new_count']}  Updated: {summary['updated_count']}  "
          f"Retained (absent from scan): {summary['retained_count']}")
    print(f"  Dataset total: {len(merged)}")
    print(f"  CSV: {csv_path}")


def run_summary(config: dict, sources: list[str]) -> None:
    """Scan, sort and group, write the one-shot data file and HTML summary."""
    records = asyncio.run(run_scan(config, sources))
    _write_summary(records)


def run_report_only() -> None:
    """Regenerate CSV and HTML from the persisted dataset (no network)."""
    records = Reconciler().load()
    if not records:
        logger.error("No persisted records found. Run a scan first.")
        sys.exit(1)
    reporter = ReportGenerator()
    reporter.write_csv(records, RECORDS_CSV_PATH)
    _write_summary(records, reporter)


def _write_summary(records: list[LegislativeRecord], reporter: ReportGenerator | None = None) -> None:
    reporter = reporter or ReportGenerator()
    results, dates = sort_and_group(records)
    reporter.write_summary_data(results, dates, SUMMARY_DATA_PATH)
    reporter.write_summary_html(results, dates, SUMMARY_HTML_PATH)
    print("\nSummary complete.")
    print(f"  Records: {len(results)} across {len(dates)} dates")
    print(f"  Data: {SUMMARY_DATA_PATH}")
    print(f"  HTML: {SUMMARY_HTML_PATH}")


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Legislative tracker: bills and resolutions from Maryland-area legislatures"
    )
    parser.add_argument("--summary", action="store_true",
                        help="One-shot: scan, sort by date and render the HTML summary")
    parser.add_argument("--report-only", action="store_true",
                        help="Regenerate CSV and HTML from the persisted dataset")
    parser.add_argument("--source", type=str, help="Scan a specific source only")
    parser.add_argument("--dry-run", action="store_true", help="Show what would be scanned")
    parser.add_argument("--health-check", action="store_true",
                        help="Check availability of every source")
    parser.add_argument("--config", type=str, default=str(TRACKER_CONFIG_PATH),
                        help="Path to tracker_config.json")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    load_dotenv()
    config = load_config(args.config)

    if args.health_check:
        from legistrack.health import HealthChecker, format_report
        results = asyncio.run(HealthChecker(config).check_all())
        print(format_report(results))
        return

    if args.report_only:
        run_report_only()
        return

    sources = list(SCRAPERS.keys())
    if args.source:
        if args.source not in SCRAPERS:
            print(f"Unknown source: {args.source}")
            print(f"Available: {', '.join(SCRAPERS.keys())}")
            sys.exit(1)
        sources = [args.source]

    if args.dry_run:
        dry_run(config, sources, summary=args.summary)
        return

    if args.summary:
        run_summary(config, sources)
    else:
        run_merge(config, sources)


if __name__ == "__main__":
    main()
