"""
Unit tests for the flattened criterion index.
"""

import pytest

from psras_toolkit.core.models import StandardsDocument
from psras_toolkit.standards import DuplicateCriterionError, TaxonomyIndex, flatten_criteria


class TestFlattenCriteria:
    """Tests for flatten_criteria."""

    def test_document_order(self, standards_document):
        """Criteria come out depth-first."""
        assert [c.id for c in flatten_criteria(standards_document)] == ["C-1", "C-2", "C-3", "C-4"]

    def test_none_is_empty(self):
        """An unavailable taxonomy flattens to nothing."""
        assert flatten_criteria(None) == []

    def test_empty_containers_contribute_nothing(self):
        """Parts/units/outcomes without children are skipped."""
        doc = StandardsDocument.from_dict({
            "parts": [
                {"id": "P1", "units": []},
                {"id": "P2", "units": [{"id": "U1", "outcomes": [{"id": "O1", "criteria": []}]}]},
            ]
        })
        assert flatten_criteria(doc) == []


class TestTaxonomyIndex:
    """Tests for TaxonomyIndex."""

    def test_positions_follow_document_order(self, taxonomy):
        """Positions are 0-based document positions."""
        assert [(e.position, e.id) for e in taxonomy] == [(0, "C-1"), (1, "C-2"), (2, "C-3"), (3, "C-4")]

    def test_entry_records_ancestors(self, taxonomy):
        """Entries know their part, unit and outcome."""
        entry = taxonomy.get("C-3")
        assert (entry.part_id, entry.unit_id, entry.outcome_id) == ("P2", "P2-U1", "P2-U1-O1")

    def test_lookup(self, taxonomy):
        """Membership and get by id."""
        assert "C-2" in taxonomy
        assert "C-9" not in taxonomy
        assert taxonomy.get("C-9") is None
        assert len(taxonomy) == 4

    def test_criteria_matches_flatten(self, taxonomy, standards_document):
        """criteria is the flattened list."""
        assert taxonomy.criteria == flatten_criteria(standards_document)

    def test_empty_index(self):
        """Unavailable taxonomy has no criteria."""
        index = TaxonomyIndex.empty()
        assert not index.available
        assert len(index) == 0
        assert index.criteria == []

    def test_duplicate_id_across_parts_raises(self, standards_data):
        """Ids must be unique across the whole tree."""
        standards_data["parts"][1]["units"][0]["outcomes"][0]["criteria"][1]["id"] = "C-1"
        doc = StandardsDocument.from_dict(standards_data)
        with pytest.raises(DuplicateCriterionError, match="C-1"):
            TaxonomyIndex(doc)
