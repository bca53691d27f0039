"""
Core Models Package

Immutable, validated data models shared by every engine component.

All models are frozen dataclasses. The standards tree is loaded once and
never mutated; authorities and coverage rows are created per call and
discarded. Changing a question means building a new QuestionRecord.
"""

from .authority import Authority, Instrument, QuestionReference
from .questions import QuestionRecord
from .standards import Criterion, Outcome, StandardsDocument, StandardsPart, Unit

__all__ = [
    "Authority",
    "Instrument",
    "QuestionReference",
    "QuestionRecord",
    "Criterion",
    "Outcome",
    "Unit",
    "StandardsPart",
    "StandardsDocument",
]
