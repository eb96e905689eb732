"""Scan-to-dataset reconciliation.

Merges freshly scanned records into the persisted dataset by id:

- ids already persisted keep their position; a fresh copy replaces the old
  record in full;
- ids missing from the latest scan are kept unchanged (a source dropping a
  record for one run is not treated as a deletion);
- ids never seen before are appended in discovery order.

The merge is idempotent: merging the same scan twice gives the same list.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from legistrack.paths import RECORDS_PATH
from legistrack.schemas.models import LegislativeRecord

logger = logging.getLogger(__name__)


class PersistedStateError(Exception):
    """Raised when the persisted dataset exists but cannot be trusted."""


def merge(
    persisted: list[LegislativeRecord], incoming: list[LegislativeRecord],
) -> list[LegislativeRecord]:
    """Merge ``incoming`` into ``persisted``, preserving persisted order."""
    # dicts preserve insertion order; a repeated incoming id keeps its first
    # position and its last value
    incoming_by_id: dict[str, LegislativeRecord] = {}
    for record in incoming:
        incoming_by_id[record.id] = record

    merged = []
    for record in persisted:
        merged.append(incoming_by_id.pop(record.id, record))
    merged.extend(incoming_by_id.values())
    return merged


def summarize_merge(
    persisted: list[LegislativeRecord], incoming: list[LegislativeRecord],
) -> dict:
    """Count how a merge of ``incoming`` into ``persisted`` changes the dataset."""
    prev_by_id = {record.id: record for record in persisted}
    curr_by_id = {record.id: record for record in incoming}

    new_count = updated_count = unchanged_count = 0
    for key, record in curr_by_id.items():
        if key not in prev_by_id:
            new_count += 1
        elif prev_by_id[key] != record:
            updated_count += 1
        else:
            unchanged_count += 1
    retained_count = sum(1 for key in prev_by_id if key not in curr_by_id)

    return {
        "new_count": new_count,
        "updated_count": updated_count,
        "unchanged_count": unchanged_count,
        "retained_count": retained_count,
        "total_previous": len(prev_by_id),
        "total_current": len(prev_by_id) + new_count,
    }


class Reconciler:
    """Loads, merges and saves the persisted record dataset.

    Single-writer assumption: only one pipeline run reads and writes a given
    dataset at a time. Writes go through a tmp file and ``os.replace()``.
    """

    def __init__(self, records_path: Path | None = None):
        self.records_path = records_path or RECORDS_PATH

    def load(self) -> list[LegislativeRecord]:
        """Load the persisted dataset; a missing file is an empty dataset.

        Raises:
            PersistedStateError: If the file is not a JSON list of valid records.
        """
        if not self.records_path.exists():
            logger.info("No persisted records found at %s", self.records_path)
            return []
        try:
            with open(self.records_path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise PersistedStateError(f"{self.records_path} is not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise PersistedStateError(
                f"{self.records_path} must contain a JSON list, got {type(data).__name__}"
            )
        try:
            records = [LegislativeRecord.model_validate(item) for item in data]
        except ValidationError as e:
            raise PersistedStateError(f"{self.records_path} has an invalid record: {e}") from e
        ids = [record.id for record in records]
        if len(set(ids)) != len(ids):
            raise PersistedStateError(f"{self.records_path} contains duplicate record ids")
        logger.info("Loaded %d persisted records from %s", len(records), self.records_path)
        return records

    def save(self, records: list[LegislativeRecord]) -> None:
        """Write the dataset as pretty-printed JSON (atomic)."""
        self.records_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.records_path.with_suffix(".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump([record.to_json() for record in records], f,
                          indent="\t", ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self.records_path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
        logger.info("Saved %d records to %s", len(records), self.records_path)

    def reconcile(self, incoming: list[LegislativeRecord]) -> tuple[list[LegislativeRecord], dict]:
        """Load, merge ``incoming`` and save. Returns (merged, summary)."""
        persisted = self.load()
        summary = summarize_merge(persisted, incoming)
        merged = merge(persisted, incoming)
        logger.info(
            "Merge: %d new, %d updated, %d unchanged, %d retained (absent from scan)",
            summary["new_count"], summary["updated_count"],
            summary["unchanged_count"], summary["retained_count"],
        )
        self.save(merged)
        return merged, summary
