"""Pydantic v2 validation models for the legislative tracker.

Each model maps directly to a JSON structure written by the pipeline:
- records.json -> list of LegislativeRecord
- data.json -> {"dates": list of DateGroup, "results": list of LegislativeRecord}

Strict validation ensures schema violations surface as errors at ingestion
time, not as silent data corruption downstream.
"""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ── Jurisdictions ──

PRINCE_GEORGES = "Prince George's County"
MONTGOMERY = "Montgomery County"
DISTRICT_OF_COLUMBIA = "District of Columbia"
MARYLAND = "Maryland"

JURISDICTIONS = frozenset({
    PRINCE_GEORGES,
    MONTGOMERY,
    DISTRICT_OF_COLUMBIA,
    MARYLAND,
})

# Id prefixes keep the four natural-key spaces disjoint. Maryland's prefix
# also carries the session code (e.g. "MD-2026RS-").
ID_PREFIXES: dict[str, str] = {
    PRINCE_GEORGES: "PG-",
    MONTGOMERY: "MC-",
    DISTRICT_OF_COLUMBIA: "DC-",
    MARYLAND: "MD-",
}

UNKNOWN_CATEGORY = "Unknown"


# ── Legislative Record ──

class LegislativeRecord(BaseModel):
    """One bill or resolution, normalized across all jurisdictions.

    ``id`` is the reconciliation key. It is globally unique because each
    adapter prefixes its natural key with the jurisdiction tag from
    ``ID_PREFIXES``.
    """

    model_config = ConfigDict(populate_by_name=True)

    jurisdiction: str = Field(
        ...,
        description="Human-readable source name",
        examples=[PRINCE_GEORGES, MARYLAND],
    )
    id: str = Field(
        ...,
        min_length=1,
        description="Jurisdiction-prefixed identifier",
        examples=["PG-CB-001-2026", "MD-2026RS-HB0001"],
    )
    title: str = Field(
        ...,
        description="Bill or resolution title",
    )
    link: str = Field(
        ...,
        description="Absolute URL to the source detail page",
        examples=["https://lims.dccouncil.gov/Legislation/B26-0512"],
    )
    category: str = Field(
        ...,
        description="Normalized classification",
        examples=["Council Bill", "Resolution", "Joint Resolution", UNKNOWN_CATEGORY],
    )
    introduction_date: datetime.date = Field(
        ...,
        alias="introductionDate",
        description="Calendar date the matter was introduced",
    )

    @field_validator("jurisdiction")
    @classmethod
    def validate_jurisdiction(cls, v: str) -> str:
        if v not in JURISDICTIONS:
            raise ValueError(
                f"Invalid jurisdiction '{v}'. Must be one of: {sorted(JURISDICTIONS)}"
            )
        return v

    @field_validator("link")
    @classmethod
    def validate_link(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("link must be non-empty")
        return v

    @model_validator(mode="after")
    def validate_id_prefix(self) -> LegislativeRecord:
        prefix = ID_PREFIXES[self.jurisdiction]
        if not self.id.startswith(prefix):
            raise ValueError(
                f"id '{self.id}' must start with '{prefix}' for {self.jurisdiction}"
            )
        return self

    def to_json(self) -> dict:
        """Serialize with the persisted key names (dates as YYYY-MM-DD)."""
        return self.model_dump(mode="json", by_alias=True)


# ── Date Group ──

class DateGroup(BaseModel):
    """A contiguous run of same-date records in the sorted result list.

    ``start`` is inclusive and ``end`` exclusive, both indexes into the
    flattened sorted list.
    """

    date: datetime.date
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_range(self) -> DateGroup:
        if self.end <= self.start:
            raise ValueError(f"empty group range [{self.start}, {self.end})")
        return self
