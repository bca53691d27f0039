"""
Module: standards.index

Purpose:
    Flattens the standards tree into a build-once, ordered arena of
    criteria. Each entry remembers its depth-first document position so
    that coverage sorting never re-walks the tree and tie-breaks are
    reproducible.

Key Functions:
    - flatten_criteria(): Ordered list of criteria (document order)

Key Classes:
    - IndexedCriterion: Arena entry (position + ancestry + criterion)
    - TaxonomyIndex: The arena, with id lookup

Used By:
    - coverage.report: Backlog construction
    - authorities.attacher: Expected-authority lookup
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from psras_toolkit.core.models import Criterion, StandardsDocument

__all__ = [
    "DuplicateCriterionError",
    "IndexedCriterion",
    "TaxonomyIndex",
    "flatten_criteria",
]


class DuplicateCriterionError(ValueError):
    """Raised when two criteria share an id anywhere in the tree."""


@dataclass(frozen=True)
class IndexedCriterion:
    position: int
    part_id: str
    unit_id: str
    outcome_id: str
    criterion: Criterion

    @property
    def id(self) -> str:
        return self.criterion.id


def flatten_criteria(document: Optional[StandardsDocument]) -> List[Criterion]:
    """
    List all criteria depth-first (parts -> units -> outcomes -> criteria).

    Args:
        document: Standards document, or None when unavailable

    Returns:
        Criteria in document order; empty list for None.
    """
    if document is None:
        return []
    return [criterion for _, _, _, criterion in document.iter_criteria()]


class TaxonomyIndex:
    """
    Ordered arena of criteria built once from a standards document.

    Example:
        >>> index = TaxonomyIndex(document)
        >>> index.get("PSRAS-1.1.1").position
        0
        >>> [c.id for c in index.criteria][:2]
        ['PSRAS-1.1.1', 'PSRAS-1.1.2']
    """

    def __init__(self, document: Optional[StandardsDocument]) -> None:
        """
        Build the arena.

        Raises:
            DuplicateCriterionError: If a criterion id appears twice
        """
        self._document = document
        self._entries: List[IndexedCriterion] = []
        self._by_id: Dict[str, IndexedCriterion] = {}
        if document is None:
            return
        for position, (part, unit, outcome, criterion) in enumerate(document.iter_criteria()):
            if criterion.id in self._by_id:
                raise DuplicateCriterionError(
                    f"Duplicate criterion id {criterion.id!r} "
                    f"(positions {self._by_id[criterion.id].position} and {position})"
                )
            entry = IndexedCriterion(
                position=position,
                part_id=part.id,
                unit_id=unit.id,
                outcome_id=outcome.id,
                criterion=criterion,
            )
            self._entries.append(entry)
            self._by_id[criterion.id] = entry

    @classmethod
    def empty(cls) -> TaxonomyIndex:
        """Index for an unavailable taxonomy (no criteria)."""
        return cls(None)

    @property
    def document(self) -> Optional[StandardsDocument]:
        return self._document

    @property
    def available(self) -> bool:
        return self._document is not None

    @property
    def entries(self) -> List[IndexedCriterion]:
        return list(self._entries)

    @property
    def criteria(self) -> List[Criterion]:
        return [entry.criterion for entry in self._entries]

    def get(self, criterion_id: str) -> Optional[IndexedCriterion]:
        return self._by_id.get(criterion_id)

    def __contains__(self, criterion_id: object) -> bool:
        return criterion_id in self._by_id

    def __iter__(self) -> Iterator[IndexedCriterion]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        version = self._document.version if self._document else None
        return f"TaxonomyIndex(version={version!r}, criteria={len(self._entries)})"
