"""
Module: coverage.models

Purpose:
    Data models for coverage reporting. Rows are derived, read-only views
    recomputed per report from the current question snapshot.

Key Classes:
    - CoverageStatus: Missing / Partial / OK with priority rank
    - CoverageRow: Per-criterion coverage
    - CoverageSummary: Tallies by status
    - CoverageReport: Sorted rows plus summary
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Tuple, Union


class CoverageStatus(str, Enum):
    MISSING = "Missing"
    PARTIAL = "Partial"
    OK = "OK"

    @property
    def rank(self) -> int:
        """Backlog priority: Missing=0, Partial=1, OK=2."""
        return _STATUS_RANK[self]

    @classmethod
    def for_count(cls, current_count: int, target_count: int) -> CoverageStatus:
        if current_count == 0:
            return cls.MISSING
        if current_count < target_count:
            return cls.PARTIAL
        return cls.OK

    def __str__(self) -> str:
        return self.value


_STATUS_RANK = {
    CoverageStatus.MISSING: 0,
    CoverageStatus.PARTIAL: 1,
    CoverageStatus.OK: 2,
}


@dataclass(frozen=True)
class CoverageRow:
    """
    Coverage of one criterion by the question bank.

    Attributes:
        criterion_id: Criterion id
        label: Criterion label
        tags: Criterion tags (sorted, for display)
        current_count: Distinct questions matching any criterion tag
        target_count: Questions needed for OK
        status: Missing / Partial / OK
        gap: max(0, target_count - current_count)
        position: Document position of the criterion (tie-break key)
    """

    criterion_id: str
    label: str
    tags: Tuple[str, ...]
    current_count: int
    target_count: int
    status: CoverageStatus
    gap: int
    position: int = 0

    @property
    def sort_key(self) -> Tuple[int, int, int]:
        return (self.status.rank, self.current_count, self.position)

    def to_dict(self) -> dict:
        return {
            "criterionId": self.criterion_id,
            "label": self.label,
            "tags": list(self.tags),
            "currentCount": self.current_count,
            "targetCount": self.target_count,
            "status": self.status.value,
            "gap": self.gap,
        }


@dataclass(frozen=True)
class CoverageSummary:
    missing: int = 0
    partial: int = 0
    ok: int = 0

    @property
    def total(self) -> int:
        return self.missing + self.partial + self.ok

    @classmethod
    def tally(cls, rows: List[CoverageRow]) -> CoverageSummary:
        return cls(
            missing=sum(1 for r in rows if r.status is CoverageStatus.MISSING),
            partial=sum(1 for r in rows if r.status is CoverageStatus.PARTIAL),
            ok=sum(1 for r in rows if r.status is CoverageStatus.OK),
        )

    def to_dict(self) -> dict:
        return {"missing": self.missing, "partial": self.partial, "ok": self.ok}


@dataclass(frozen=True)
class CoverageReport:
    """
    Prioritized coverage backlog.

    Unpacks as ``rows, summary = report``.
    """

    rows: Tuple[CoverageRow, ...] = ()
    summary: CoverageSummary = field(default_factory=CoverageSummary)
    target_count: int = 30

    def __iter__(self) -> Iterator[Union[Tuple[CoverageRow, ...], CoverageSummary]]:
        yield self.rows
        yield self.summary

    @property
    def is_empty(self) -> bool:
        return len(self.rows) == 0

    def row_for(self, criterion_id: str) -> CoverageRow:
        for row in self.rows:
            if row.criterion_id == criterion_id:
                return row
        raise KeyError(criterion_id)

    def to_dict(self) -> dict:
        return {
            "targetCount": self.target_count,
            "summary": self.summary.to_dict(),
            "rows": [row.to_dict() for row in self.rows],
        }
