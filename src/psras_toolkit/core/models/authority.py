"""
Module: authority

Purpose:
    Value objects for legal citations ("authorities"). An Authority is a
    validated citation against a known instrument; a QuestionReference is
    the raw record as stored on a question, not yet validated.

Key Classes:
    - Instrument: Closed set of citation instruments
    - Authority: Canonical, immutable citation record
    - QuestionReference: Raw reference attached to a question

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - authorities.normalizer: Builds Authority from raw input
    - authorities.validator: Per-instrument format rules
    - core.models.standards: Criterion.expected_authorities
    - core.models.questions: QuestionRecord.references
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Instrument(str, Enum):
    """
    Citation instruments recognised by the engine.

    Anything outside this set cannot be represented as an Authority.
    """

    PACE = "PACE"
    CODE_C = "Code C"
    CODE_D = "Code D"
    CODE_E = "Code E"
    CODE_F = "Code F"
    CODE_G = "Code G"
    CPIA = "CPIA"
    BAIL_ACT = "Bail Act"
    LASPO = "LASPO"
    LAA_ARRANGEMENTS = "LAA Arrangements"
    LAA_GUIDANCE = "LAA Guidance"
    SRA_STANDARD = "SRA Standard"
    CJPOA = "CJPOA"

    @classmethod
    def parse(cls, value: Any) -> Optional[Instrument]:
        """
        Look up an instrument by its exact name.

        Returns:
            Matching Instrument, or None for unknown values (never raises).

        Example:
            >>> Instrument.parse("Code C")
            <Instrument.CODE_C: 'Code C'>
            >>> Instrument.parse("code c") is None
            True
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        return _BY_VALUE.get(value)

    @property
    def is_pace_code(self) -> bool:
        return self.value.startswith("Code ")

    def __str__(self) -> str:
        return self.value


_BY_VALUE: Dict[str, Instrument] = {member.value: member for member in Instrument}


@dataclass(frozen=True)
class Authority:
    """
    Canonical citation against a known instrument (immutable).

    Attributes:
        instrument: One of the fixed Instrument values
        cite: Trimmed, non-empty citation text (e.g. "s.58", "para 11.1")
        url: Resolvable reference URL, if the catalog knows one
        note: Free-text annotation (e.g. auto-attach provenance)

    Invariants:
        - cite is never empty
    """

    instrument: Instrument
    cite: str
    url: Optional[str] = None
    note: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.instrument, Instrument):
            raise ValueError(f"instrument must be an Instrument: {self.instrument!r}")
        if not self.cite or not self.cite.strip():
            raise ValueError("cite must be non-empty")

    @property
    def key(self) -> tuple[str, str]:
        """Identity used for de-duplication: (instrument, cite)."""
        return (self.instrument.value, self.cite)

    def to_dict(self) -> dict:
        d: Dict[str, Any] = {"instrument": self.instrument.value, "cite": self.cite}
        if self.url is not None:
            d["url"] = self.url
        if self.note is not None:
            d["note"] = self.note
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Authority:
        """
        Deserialize from dictionary.

        Raises:
            ValueError: If the instrument is unknown or cite is empty
        """
        instrument = Instrument.parse(data.get("instrument"))
        if instrument is None:
            raise ValueError(f"Unknown instrument: {data.get('instrument')!r}")
        return cls(
            instrument=instrument,
            cite=str(data.get("cite") or ""),
            url=data.get("url"),
            note=data.get("note"),
        )


@dataclass(frozen=True)
class QuestionReference:
    """
    Raw reference record as stored on a question.

    Nothing is validated here: instrument may be any string and cite may be
    empty. Use authorities.normalizer to turn it into an Authority.
    """

    instrument: str
    cite: str
    note: Optional[str] = None

    def to_dict(self) -> dict:
        d: Dict[str, Any] = {"instrument": self.instrument, "cite": self.cite}
        if self.note is not None:
            d["note"] = self.note
        return d

    @classmethod
    def from_dict(cls, data: dict) -> QuestionReference:
        instrument = data.get("instrument")
        cite = data.get("cite")
        return cls(
            instrument="" if instrument is None else str(instrument),
            cite="" if cite is None else str(cite),
            note=data.get("note"),
        )

    @classmethod
    def from_authority(cls, authority: Authority, note: Optional[str] = None) -> QuestionReference:
        """Convert an Authority back into a storable reference."""
        return cls(
            instrument=authority.instrument.value,
            cite=authority.cite,
            note=note if note is not None else authority.note,
        )
