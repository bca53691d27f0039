"""
Module: coverage.index

Purpose:
    In-memory tag index over a question snapshot (tag -> question ids)
    and per-criterion coverage computation.

Key Functions:
    - build_tag_index(): Tag -> set of question ids
    - coverage_for(): CoverageRow for one criterion

Key Classes:
    - TagCoverageIndex: Primed index with coverage queries

Used By:
    - coverage.report: Backlog construction
    - coverage.audit: Matched questions per criterion
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Set

from psras_toolkit.config import DEFAULT_TARGET_COUNT
from psras_toolkit.core.models import Criterion, QuestionRecord

from .models import CoverageRow, CoverageStatus

logger = logging.getLogger(__name__)

__all__ = ["TagIndex", "TagCoverageIndex", "build_tag_index", "coverage_for"]

TagIndex = Dict[str, Set[str]]


def build_tag_index(questions: Iterable[QuestionRecord]) -> TagIndex:
    """
    Map every tag to the ids of the questions carrying it.

    Example:
        >>> index = build_tag_index([QuestionRecord(id="q1", tags=("bail", "bail"))])
        >>> index["bail"]
        {'q1'}
    """
    index: TagIndex = {}
    for question in questions:
        for tag in question.tags:
            index.setdefault(tag, set()).add(question.id)
    return index


def _matched_ids(tags: Iterable[str], tag_index: TagIndex) -> Set[str]:
    matched: Set[str] = set()
    for tag in tags:
        matched.update(tag_index.get(tag, ()))
    return matched


def coverage_for(
    criterion: Criterion,
    tag_index: TagIndex,
    target_count: int = DEFAULT_TARGET_COUNT,
    position: int = 0,
) -> CoverageRow:
    """
    Compute coverage of a criterion.

    A question counts once even if it carries several of the criterion's
    tags.

    Args:
        criterion: Criterion to measure
        tag_index: Output of build_tag_index()
        target_count: Questions needed for OK
        position: Document position, carried onto the row for sorting

    Returns:
        CoverageRow with status and gap
    """
    current = len(_matched_ids(criterion.tags, tag_index))
    return CoverageRow(
        criterion_id=criterion.id,
        label=criterion.label,
        tags=tuple(sorted(criterion.tags)),
        current_count=current,
        target_count=target_count,
        status=CoverageStatus.for_count(current, target_count),
        gap=max(0, target_count - current),
        position=position,
    )


class TagCoverageIndex:
    """
    Tag index built from a question snapshot.

    Rebuild (prime) whenever the question set changes; nothing is persisted.

    Example:
        >>> index = TagCoverageIndex()
        >>> index.prime(questions)
        >>> index.coverage_for(criterion).status
        <CoverageStatus.PARTIAL: 'Partial'>
    """

    def __init__(self) -> None:
        self._tags: TagIndex = {}
        self._question_count = 0

    @classmethod
    def from_questions(cls, questions: Iterable[QuestionRecord]) -> TagCoverageIndex:
        index = cls()
        index.prime(questions)
        return index

    def prime(self, questions: Iterable[QuestionRecord]) -> None:
        """
        Populate index from questions, replacing any existing entries.
        """
        snapshot: List[QuestionRecord] = list(questions)
        self._tags = build_tag_index(snapshot)
        self._question_count = len({q.id for q in snapshot})
        logger.info(
            f"Indexed {self._question_count} questions across {len(self._tags)} tags"
        )

    @property
    def tag_index(self) -> TagIndex:
        return self._tags

    @property
    def tag_count(self) -> int:
        return len(self._tags)

    @property
    def question_count(self) -> int:
        return self._question_count

    def questions_for(self, tags: Iterable[str]) -> Set[str]:
        """Ids of questions carrying any of ``tags``."""
        return _matched_ids(tags, self._tags)

    def coverage_for(
        self,
        criterion: Criterion,
        target_count: int = DEFAULT_TARGET_COUNT,
        position: int = 0,
    ) -> CoverageRow:
        return coverage_for(criterion, self._tags, target_count, position)
