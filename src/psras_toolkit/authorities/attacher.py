"""
Module: authorities.attacher

Purpose:
    Decides whether a question needs citations, fills missing citations
    from the standards criteria its tags match, and validates the
    citations a question carries.

Key Functions:
    - requires_authorities(): Custody/PACE topic or tag detection
    - expected_authorities_for_tags(): Criteria-derived citations, deduplicated
    - expected_authorities_for_criterion(): Citations expected for one criterion
    - attach_if_missing(): Auto-fill references on questions without any
    - validate_question(): Per-question citation validation

Dependencies:
    - authorities.normalizer / authorities.validator
    - standards.index.TaxonomyIndex (accepted wherever criteria are)

Used By:
    - cli: validate subcommand
    - Ingestion / review tooling (external)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from psras_toolkit.core.models import Authority, Criterion, QuestionRecord, QuestionReference
from psras_toolkit.standards.index import TaxonomyIndex

from .normalizer import normalize_authority
from .validator import is_check_sentinel, validate_format

logger = logging.getLogger(__name__)

__all__ = [
    "AUTO_ATTACH_NOTE",
    "CUSTODY_TAGS",
    "CUSTODY_TOPIC_PREFIXES",
    "QuestionValidation",
    "attach_if_missing",
    "expected_authorities_for_criterion",
    "expected_authorities_for_tags",
    "requires_authorities",
    "validate_question",
]

AUTO_ATTACH_NOTE = "Auto-attached from standards spine"
REQUIRES_AUTHORITY_ISSUE = "requires at least one authority"

CUSTODY_TOPIC_PREFIXES = ("pace-", "vuln-", "interview-", "bail-", "disclosure-")

CUSTODY_TAGS = frozenset({
    "custody", "detention", "arrest", "pace",
    "code-c", "code-d", "code-e", "code-f", "code-g",
    "interview", "legal-advice", "appropriate-adult", "vulnerability",
    "bail", "s58", "s76", "s78", "disclosure", "caution",
    "fitness-for-interview", "time-limits", "extensions", "reviews",
})

CriteriaSource = Union[TaxonomyIndex, Iterable[Criterion]]


@dataclass
class QuestionValidation:
    """
    Result of validating a question's citations.

    Attributes:
        valid: No issues were found
        requires_review: Issues were found on a question that needs citations
        issues: Human-readable issue strings, in reference order
        expected_authorities: Citations the question's tags map to (only
            filled when criteria were supplied)
    """

    valid: bool
    requires_review: bool
    issues: List[str] = field(default_factory=list)
    expected_authorities: List[Authority] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "requiresReview": self.requires_review,
            "issues": list(self.issues),
        }


def _criteria_of(source: Optional[CriteriaSource]) -> List[Criterion]:
    if source is None:
        return []
    if isinstance(source, TaxonomyIndex):
        return source.criteria
    return list(source)


def requires_authorities(question: QuestionRecord) -> bool:
    """
    True if the question is on a custody/PACE topic.

    Either the topic id starts with a custody prefix, or one of the tags
    (case-insensitive) is a custody tag.

    Example:
        >>> requires_authorities(QuestionRecord(id="q", topic_id="pace-c-interview-3"))
        True
        >>> requires_authorities(QuestionRecord(id="q", topic_id="ethics-1", tags=("Bail",)))
        True
    """
    topic_id = question.topic_id or ""
    if topic_id.startswith(CUSTODY_TOPIC_PREFIXES):
        return True
    return any(tag.lower() in CUSTODY_TAGS for tag in question.tags)


def expected_authorities_for_tags(
    tags: Iterable[str],
    all_criteria: CriteriaSource,
) -> List[Authority]:
    """
    Collect expected authorities of every criterion sharing a tag.

    Criteria are scanned in document order; authorities are deduplicated by
    (instrument, cite) keeping the first one seen.

    Args:
        tags: Question tags
        all_criteria: Criteria in document order, or a TaxonomyIndex

    Returns:
        Ordered list of authorities (empty if no tags or no match)
    """
    tag_list = list(tags)
    if not tag_list:
        return []

    authorities: List[Authority] = []
    seen = set()
    for criterion in _criteria_of(all_criteria):
        if not criterion.matches_any(tag_list):
            continue
        for authority in criterion.expected_authorities:
            if authority.key in seen:
                continue
            seen.add(authority.key)
            authorities.append(authority)
    return authorities


def expected_authorities_for_criterion(
    criterion_id: str,
    all_criteria: CriteriaSource,
) -> List[Authority]:
    """Expected authorities of one criterion, or [] if the id is unknown."""
    if isinstance(all_criteria, TaxonomyIndex):
        entry = all_criteria.get(criterion_id)
        return list(entry.criterion.expected_authorities) if entry else []
    for criterion in all_criteria:
        if criterion.id == criterion_id:
            return list(criterion.expected_authorities)
    return []


def attach_if_missing(question: QuestionRecord, all_criteria: CriteriaSource) -> QuestionRecord:
    """
    Fill references from the standards when a question has none.

    Existing references are never overwritten: a question with any
    reference is returned as the very same object. Otherwise a copy is
    returned whose references are the expected authorities for its tags,
    annotated with AUTO_ATTACH_NOTE (an authority's own note is kept).
    When nothing matches, the question is returned unchanged.
    """
    if question.has_references:
        return question

    expected = expected_authorities_for_tags(question.tags, all_criteria)
    if not expected:
        return question

    logger.debug(f"Auto-attaching {len(expected)} authorities to {question.id}")
    return question.with_references(
        QuestionReference.from_authority(
            authority,
            note=authority.note if authority.note is not None else AUTO_ATTACH_NOTE,
        )
        for authority in expected
    )


def validate_question(
    question: QuestionRecord,
    all_criteria: Optional[CriteriaSource] = None,
) -> QuestionValidation:
    """
    Validate the citations on a question.

    Process:
    1. A custody/PACE question with no references fails immediately
    2. Each reference is normalized; unrepresentable ones are issues
    3. Format rules apply per instrument; "check:" sentinel citations are
       exempt from format issues for every instrument

    Args:
        question: Question to validate
        all_criteria: Optional criteria; when given, the result also lists
            the authorities the question's tags map to

    Returns:
        QuestionValidation; requires_review is set only for questions that
        need citations and have issues
    """
    needs = requires_authorities(question)
    expected = (
        expected_authorities_for_tags(question.tags, all_criteria)
        if all_criteria is not None
        else []
    )

    if needs and not question.has_references:
        return QuestionValidation(
            valid=False,
            requires_review=True,
            issues=[REQUIRES_AUTHORITY_ISSUE],
            expected_authorities=expected,
        )

    issues: List[str] = []
    for ref in question.references:
        authority = normalize_authority(ref.instrument, ref.cite)
        if authority is None:
            issues.append(f"Invalid authority: {ref.instrument} - {ref.cite}")
            continue
        check = validate_format(authority)
        if not check.valid and not is_check_sentinel(authority.cite):
            issues.append(check.reason or "Invalid authority format")

    return QuestionValidation(
        valid=not issues,
        requires_review=bool(issues) and needs,
        issues=issues,
        expected_authorities=expected,
    )
