"""
Unit tests for the tag index and per-criterion coverage.
"""

import pytest

from psras_toolkit.core.models import Criterion
from psras_toolkit.coverage.index import TagCoverageIndex, build_tag_index, coverage_for
from psras_toolkit.coverage.models import CoverageStatus


@pytest.fixture
def detention_criterion() -> Criterion:
    return Criterion(id="C-1", label="Detention time limits", tags=frozenset({"detention", "time-limits"}))


class TestBuildTagIndex:
    """Tests for build_tag_index."""

    def test_maps_tags_to_ids(self, make_question):
        """Each tag lists the questions carrying it."""
        index = build_tag_index([
            make_question("q1", tags=["bail", "detention"]),
            make_question("q2", tags=["bail"]),
        ])
        assert index == {"bail": {"q1", "q2"}, "detention": {"q1"}}

    def test_duplicate_tags_collapse(self, make_question):
        """A repeated tag on one question adds one id."""
        assert build_tag_index([make_question("q1", tags=["bail", "bail"])]) == {"bail": {"q1"}}

    def test_empty(self):
        """No questions, empty index."""
        assert build_tag_index([]) == {}


class TestCoverageFor:
    """Tests for coverage_for."""

    def test_no_overlap_is_missing(self, detention_criterion, make_question):
        """Criteria matching no question are Missing with the full gap."""
        row = coverage_for(detention_criterion, build_tag_index([make_question(tags=["bail"])]), 30)
        assert row.current_count == 0
        assert row.status is CoverageStatus.MISSING
        assert row.gap == 30

    def test_question_with_two_matching_tags_counts_once(self, detention_criterion, make_question):
        """Deduplication across the criterion's tags."""
        index = build_tag_index([make_question("q1", tags=["detention", "time-limits"])])
        assert coverage_for(detention_criterion, index, 30).current_count == 1

    def test_partial_and_ok(self, detention_criterion, make_question):
        """Status follows the target count."""
        questions = [make_question(f"q{i}", tags=["detention"]) for i in range(3)]
        index = build_tag_index(questions)
        assert coverage_for(detention_criterion, index, 4).status is CoverageStatus.PARTIAL
        row = coverage_for(detention_criterion, index, 3)
        assert row.status is CoverageStatus.OK
        assert row.gap == 0

    def test_gap_never_negative(self, detention_criterion, make_question):
        """Over-served criteria have gap 0."""
        index = build_tag_index([make_question(f"q{i}", tags=["detention"]) for i in range(5)])
        assert coverage_for(detention_criterion, index, 2).gap == 0

    def test_row_carries_position_and_sorted_tags(self, detention_criterion):
        """Rows keep the document position and display tags sorted."""
        row = coverage_for(detention_criterion, {}, 30, position=7)
        assert row.position == 7
        assert row.tags == ("detention", "time-limits")


class TestTagCoverageIndex:
    """Tests for the primed index."""

    def test_prime_replaces_entries(self, make_question):
        """Priming again forgets the previous snapshot."""
        index = TagCoverageIndex.from_questions([make_question("q1", tags=["bail"])])
        index.prime([make_question("q2", tags=["arrest"])])
        assert index.questions_for(["bail"]) == set()
        assert index.questions_for(["arrest"]) == {"q2"}

    def test_counts(self, make_question):
        """Distinct questions and tags are counted."""
        index = TagCoverageIndex.from_questions([
            make_question("q1", tags=["bail", "arrest"]),
            make_question("q2", tags=["bail"]),
        ])
        assert index.question_count == 2
        assert index.tag_count == 2

    def test_coverage_for_delegates(self, detention_criterion, make_question):
        """coverage_for on the index matches the function."""
        questions = [make_question("q1", tags=["time-limits"])]
        index = TagCoverageIndex.from_questions(questions)
        assert index.coverage_for(detention_criterion, 5) == coverage_for(
            detention_criterion, build_tag_index(questions), 5
        )
