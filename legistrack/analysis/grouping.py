"""Presentation ordering: newest first, then title, split by date."""

import logging

from legistrack.schemas.models import DateGroup, LegislativeRecord

logger = logging.getLogger(__name__)


def sort_key(record: LegislativeRecord) -> tuple:
    # Negated ordinal sorts dates descending while titles stay ascending
    return (-record.introduction_date.toordinal(), record.title.casefold())


def sort_records(records: list[LegislativeRecord]) -> list[LegislativeRecord]:
    """Return records ordered by introduction date (newest first), then title."""
    return sorted(records, key=sort_key)


def group_by_date(records: list[LegislativeRecord]) -> list[DateGroup]:
    """Partition an already-sorted list into contiguous same-date groups."""
    groups: list[DateGroup] = []
    start = 0
    for i in range(1, len(records) + 1):
        if i == len(records) or records[i].introduction_date != records[start].introduction_date:
            groups.append(DateGroup(date=records[start].introduction_date, start=start, end=i))
            start = i
    return groups


def sort_and_group(records: list[LegislativeRecord]) -> tuple[list[LegislativeRecord], list[DateGroup]]:
    """Sort ``records`` for display and compute their date groups."""
    ordered = sort_records(records)
    groups = group_by_date(ordered)
    logger.info("Grouped %d records into %d dates", len(ordered), len(groups))
    return ordered, groups
