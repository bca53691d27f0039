"""
Module: questions

Purpose:
    Provides the QuestionRecord dataclass - the engine's read-only view of an
    externally owned question. Only the fields the engine needs are typed;
    everything else is carried through untouched in ``extra``.

Key Functions:
    - QuestionRecord.from_dict() / QuestionRecord.to_dict(): Serialization
    - QuestionRecord.with_references(): Copy with replaced references

Dependencies:
    - dataclasses (std)
    - .authority.QuestionReference

Used By:
    - coverage.index: Tag index construction
    - authorities.attacher: Requirement checks, auto-attach, validation
    - loading.loader: Question bank snapshots
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable

from .authority import QuestionReference

# Keys mapped onto typed fields; everything else lands in ``extra``
_KNOWN_KEYS = frozenset({"id", "topicId", "topic_id", "tags", "references"})


def _reference_from(raw: Any) -> QuestionReference:
    if isinstance(raw, dict):
        return QuestionReference.from_dict(raw)
    return QuestionReference(instrument="", cite="" if raw is None else str(raw))


@dataclass(frozen=True)
class QuestionRecord:
    """
    Question snapshot as seen by the engine (immutable).

    Attributes:
        id: Unique question identifier
        topic_id: Dash-delimited topic id like "pace-c-interview-3"
        tags: Tags in stored order (duplicates allowed, order irrelevant)
        references: Raw reference records, possibly empty
        extra: Remaining fields of the stored record (stem, options, ...)

    Example:
        >>> q = QuestionRecord.from_dict({
        ...     "id": "q1",
        ...     "topicId": "pace-detention-time",
        ...     "tags": ["detention"],
        ...     "references": [{"instrument": "PACE", "cite": "s.41"}],
        ... })
        >>> q.references[0].cite
        's.41'
    """

    id: str
    topic_id: str = ""
    tags: tuple[str, ...] = ()
    references: tuple[QuestionReference, ...] = ()
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("question id must be non-empty")

    @property
    def has_references(self) -> bool:
        return len(self.references) > 0

    def with_references(self, references: Iterable[QuestionReference]) -> QuestionRecord:
        """Return a copy with ``references`` replaced."""
        return replace(self, references=tuple(references))

    def to_dict(self) -> dict:
        """
        Serialize back to the stored (camelCase) shape.

        Unknown fields from the source record are preserved.
        """
        d: Dict[str, Any] = dict(self.extra)
        d["id"] = self.id
        d["topicId"] = self.topic_id
        d["tags"] = list(self.tags)
        d["references"] = [ref.to_dict() for ref in self.references]
        return d

    @classmethod
    def from_dict(cls, data: dict) -> QuestionRecord:
        """
        Deserialize from a stored question record.

        Accepts either ``topicId`` or ``topic_id``. Missing tags and
        references default to empty. A reference that is not an object is
        kept as an instrument-less reference carrying its text as the cite,
        so citation validation reports it.

        Raises:
            ValueError: If the id is missing or a field has the wrong shape
        """
        if not isinstance(data, dict):
            raise ValueError(f"question record must be an object: {type(data).__name__}")
        qid = data.get("id")
        if qid is None or str(qid) == "":
            raise ValueError("question record missing 'id'")

        tags = data.get("tags") or []
        if not isinstance(tags, list):
            raise ValueError(f"question {qid}: tags must be a list")
        references = data.get("references") or []
        if not isinstance(references, list):
            raise ValueError(f"question {qid}: references must be a list")

        topic_id = data.get("topicId", data.get("topic_id", ""))
        return cls(
            id=str(qid),
            topic_id="" if topic_id is None else str(topic_id),
            tags=tuple(str(tag) for tag in tags),
            references=tuple(
                _reference_from(ref) for ref in references
            ),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def __repr__(self) -> str:
        return (
            f"QuestionRecord({self.id!r}, topic={self.topic_id!r}, "
            f"tags={len(self.tags)}, references={len(self.references)})"
        )
