"""Pydantic v2 schema models for the legislative tracker.

- LegislativeRecord: one normalized bill/resolution from any jurisdiction
- DateGroup: contiguous same-date slice of the sorted result list
"""

from legistrack.schemas.models import (
    DISTRICT_OF_COLUMBIA,
    ID_PREFIXES,
    JURISDICTIONS,
    MARYLAND,
    MONTGOMERY,
    PRINCE_GEORGES,
    UNKNOWN_CATEGORY,
    DateGroup,
    LegislativeRecord,
)

__all__ = [
    "DISTRICT_OF_COLUMBIA",
    "ID_PREFIXES",
    "JURISDICTIONS",
    "MARYLAND",
    "MONTGOMERY",
    "PRINCE_GEORGES",
    "UNKNOWN_CATEGORY",
    "DateGroup",
    "LegislativeRecord",
]
