"""
Module: coverage.report

Purpose:
    Builds the prioritized coverage backlog: one row per criterion, sorted
    so the least-served criteria come first.

Key Functions:
    - build_backlog(): Taxonomy + question snapshot -> CoverageReport

Sort order:
    1. Status rank (Missing, Partial, OK)
    2. current_count ascending
    3. Document position of the criterion (explicit tie-break, not
       dependent on sort stability)
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple, Union

from psras_toolkit.config import DEFAULT_TARGET_COUNT
from psras_toolkit.core.models import Criterion, QuestionRecord, StandardsDocument
from psras_toolkit.standards.index import TaxonomyIndex, flatten_criteria

from .index import TagCoverageIndex
from .models import CoverageReport, CoverageRow, CoverageSummary

logger = logging.getLogger(__name__)

__all__ = ["build_backlog", "positioned_criteria", "sort_backlog"]

Taxonomy = Union[StandardsDocument, TaxonomyIndex, None]


def positioned_criteria(taxonomy: Taxonomy) -> List[Tuple[int, Criterion]]:
    if isinstance(taxonomy, TaxonomyIndex):
        return [(entry.position, entry.criterion) for entry in taxonomy]
    return list(enumerate(flatten_criteria(taxonomy)))


def sort_backlog(rows: Iterable[CoverageRow]) -> List[CoverageRow]:
    """Order rows by (status rank, current_count, document position)."""
    return sorted(rows, key=lambda row: row.sort_key)


def build_backlog(
    taxonomy: Taxonomy,
    questions: Iterable[QuestionRecord],
    target_count: int = DEFAULT_TARGET_COUNT,
    *,
    tag_index: Optional[TagCoverageIndex] = None,
) -> CoverageReport:
    """
    Build the coverage backlog.

    Args:
        taxonomy: StandardsDocument, TaxonomyIndex, or None when unavailable
        questions: Current question snapshot
        target_count: Questions per criterion for OK
        tag_index: Pre-primed index to reuse instead of indexing ``questions``

    Returns:
        CoverageReport (unpacks as ``rows, summary``). An unavailable
        taxonomy yields an empty report.

    Example:
        >>> rows, summary = build_backlog(document, questions)
        >>> rows[0].status
        <CoverageStatus.MISSING: 'Missing'>
    """
    if target_count <= 0:
        raise ValueError(f"target_count must be positive: {target_count}")

    criteria = positioned_criteria(taxonomy)
    index = tag_index if tag_index is not None else TagCoverageIndex.from_questions(questions)

    rows = sort_backlog(
        index.coverage_for(criterion, target_count, position)
        for position, criterion in criteria
    )
    summary = CoverageSummary.tally(rows)
    logger.info(
        f"Coverage backlog: {summary.missing} missing, {summary.partial} partial, "
        f"{summary.ok} ok (target {target_count})"
    )
    return CoverageReport(rows=tuple(rows), summary=summary, target_count=target_count)
