"""
PSRAS Toolkit Core Package

Shared data models and schema checks used by the standards, authorities
and coverage packages.
"""

from .models import (
    Authority,
    Criterion,
    Instrument,
    Outcome,
    QuestionRecord,
    QuestionReference,
    StandardsDocument,
    StandardsPart,
    Unit,
)

__all__ = [
    "Authority",
    "Criterion",
    "Instrument",
    "Outcome",
    "QuestionRecord",
    "QuestionReference",
    "StandardsDocument",
    "StandardsPart",
    "Unit",
]
