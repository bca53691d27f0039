"""
Module: standards

Purpose:
    Immutable tree model of the accreditation standards document:
    Part -> Unit -> Outcome -> Criterion. Criteria are the leaves that
    questions map onto via tags.

Key Classes:
    - Criterion: Smallest mappable unit, carries tags and expected authorities
    - Outcome / Unit / StandardsPart: Grouping levels
    - StandardsDocument: Root with version and source URLs

Dependencies:
    - dataclasses (std)
    - .authority.Authority

Used By:
    - standards.loader: Builds a StandardsDocument from JSON
    - standards.index: Flattens criteria into an ordered arena
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator

from .authority import Authority


@dataclass(frozen=True)
class Criterion:
    """
    Leaf of the standards tree.

    Attributes:
        id: Globally unique id (unique across the whole document)
        label: Short display label
        summary: Longer description
        tags: Tag set used to match questions (order irrelevant)
        expected_authorities: Citations a matching question should carry
    """

    id: str
    label: str
    summary: str = ""
    tags: frozenset[str] = frozenset()
    expected_authorities: tuple[Authority, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("criterion id must be non-empty")

    def matches_any(self, tags) -> bool:
        """True if any of ``tags`` is one of this criterion's tags."""
        return any(tag in self.tags for tag in tags)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "summary": self.summary,
            "tags": sorted(self.tags),
            "expectedAuthorities": [a.to_dict() for a in self.expected_authorities],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Criterion:
        return cls(
            id=str(data["id"]),
            label=str(data.get("label", "")),
            summary=str(data.get("summary", "")),
            tags=frozenset(str(t) for t in data.get("tags") or []),
            expected_authorities=tuple(
                Authority.from_dict(a) for a in data.get("expectedAuthorities") or []
            ),
        )


@dataclass(frozen=True)
class Outcome:
    id: str
    title: str
    criteria: tuple[Criterion, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> Outcome:
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            criteria=tuple(Criterion.from_dict(c) for c in data.get("criteria") or []),
        )


@dataclass(frozen=True)
class Unit:
    id: str
    title: str
    outcomes: tuple[Outcome, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> Unit:
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            outcomes=tuple(Outcome.from_dict(o) for o in data.get("outcomes") or []),
        )


@dataclass(frozen=True)
class StandardsPart:
    id: str
    title: str
    units: tuple[Unit, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> StandardsPart:
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            units=tuple(Unit.from_dict(u) for u in data.get("units") or []),
        )


@dataclass(frozen=True)
class StandardsDocument:
    """
    Root of the standards tree (immutable, loaded once per process).

    Attributes:
        version: Document version string
        source_urls: Instrument name -> source URL
        parts: Top-level parts in document order
        schema_version: Integer schema version of the JSON document
    """

    version: str
    source_urls: Dict[str, str] = field(default_factory=dict, compare=False)
    parts: tuple[StandardsPart, ...] = ()
    schema_version: int = 1

    def iter_criteria(self) -> Iterator[tuple[StandardsPart, Unit, Outcome, Criterion]]:
        """
        Walk criteria depth-first in document order.

        Yields:
            (part, unit, outcome, criterion) for every criterion
        """
        for part in self.parts:
            for unit in part.units:
                for outcome in unit.outcomes:
                    for criterion in outcome.criteria:
                        yield part, unit, outcome, criterion

    @classmethod
    def from_dict(cls, data: dict) -> StandardsDocument:
        """
        Build the tree from the JSON document shape.

        Raises:
            KeyError: If a node is missing its id
            ValueError: If an expected authority is unrepresentable
        """
        return cls(
            version=str(data.get("version", "")),
            source_urls={str(k): str(v) for k, v in (data.get("sourceUrls") or {}).items()},
            parts=tuple(StandardsPart.from_dict(p) for p in data.get("parts") or []),
            schema_version=int(data.get("schemaVersion") or 1),
        )
