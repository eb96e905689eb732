"""Tests for the pydantic record and date group models."""

from datetime import date

import pytest
from pydantic import ValidationError

from legistrack.schemas.models import (
    ID_PREFIXES,
    JURISDICTIONS,
    DateGroup,
    LegislativeRecord,
)


def _fields(**overrides) -> dict:
    fields = {
        "jurisdiction": "Prince George's County",
        "id": "PG-CB-001-2026",
        "title": "An Act concerning zoning",
        "link": "https://princegeorgescountymd.legistar.com/LegislationDetail.aspx?ID=1",
        "category": "Council Bill",
        "introduction_date": date(2026, 1, 13),
    }
    fields.update(overrides)
    return fields


class TestLegislativeRecord:
    def test_valid_record(self):
        record = LegislativeRecord(**_fields())
        assert record.id == "PG-CB-001-2026"
        assert record.introduction_date == date(2026, 1, 13)

    def test_accepts_alias(self):
        fields = _fields()
        fields["introductionDate"] = fields.pop("introduction_date").isoformat()
        record = LegislativeRecord.model_validate(fields)
        assert record.introduction_date == date(2026, 1, 13)

    def test_unknown_jurisdiction_rejected(self):
        with pytest.raises(ValidationError, match="Invalid jurisdiction"):
            LegislativeRecord(**_fields(jurisdiction="Howard County"))

    def test_id_prefix_must_match_jurisdiction(self):
        with pytest.raises(ValidationError, match="must start with"):
            LegislativeRecord(**_fields(id="MC-CB-001-2026"))

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            LegislativeRecord(**_fields(id=""))

    @pytest.mark.parametrize("link", ["", "   "])
    def test_empty_link_rejected(self, link):
        with pytest.raises(ValidationError, match="link must be non-empty"):
            LegislativeRecord(**_fields(link=link))

    def test_to_json_uses_persisted_keys(self):
        data = LegislativeRecord(**_fields()).to_json()
        assert list(data) == [
            "jurisdiction", "id", "title", "link", "category", "introductionDate",
        ]
        assert data["introductionDate"] == "2026-01-13"

    def test_to_json_reloads_equal(self):
        record = LegislativeRecord(**_fields())
        assert LegislativeRecord.model_validate(record.to_json()) == record

    def test_every_jurisdiction_has_prefix(self):
        assert set(ID_PREFIXES) == JURISDICTIONS
        assert len(set(ID_PREFIXES.values())) == len(ID_PREFIXES)


class TestDateGroup:
    def test_valid_group(self):
        group = DateGroup(date=date(2026, 1, 13), start=0, end=3)
        assert group.end - group.start == 3

    def test_empty_range_rejected(self):
        with pytest.raises(ValidationError, match="empty group range"):
            DateGroup(date=date(2026, 1, 13), start=2, end=2)

    def test_negative_start_rejected(self):
        with pytest.raises(ValidationError):
            DateGroup(date=date(2026, 1, 13), start=-1, end=1)
