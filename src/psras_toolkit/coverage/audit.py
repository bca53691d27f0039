"""
Module: coverage.audit

Purpose:
    Coverage & citation audit over the whole question bank. Checks that
    every criterion has enough questions and every matched question has
    enough well-formed citations.

Key Functions:
    - run_audit(): Full audit -> AuditResult
    - check_citation_compliance(): Citation count / completeness per question
    - check_authority_match(): Expected instruments present on a question

Key Classes:
    - AuditStatus: OK / INSUFFICIENT / MISSING
    - CriterionAudit, QuestionIssue, AuditResult

Used By:
    - cli: audit subcommand
    - coverage.export: Markdown audit report
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Sequence, Union

from psras_toolkit.config import DEFAULT_MIN_CITATIONS, DEFAULT_TARGET_COUNT
from psras_toolkit.core.models import Authority, QuestionRecord, StandardsDocument
from psras_toolkit.standards.index import TaxonomyIndex

from .index import TagCoverageIndex
from .report import positioned_criteria

logger = logging.getLogger(__name__)

__all__ = [
    "AuditResult",
    "AuditStatus",
    "AuthorityMatch",
    "CitationCompliance",
    "CriterionAudit",
    "QuestionIssue",
    "check_authority_match",
    "check_citation_compliance",
    "run_audit",
]


class AuditStatus(str, Enum):
    OK = "OK"
    INSUFFICIENT = "INSUFFICIENT"
    MISSING = "MISSING"


@dataclass(frozen=True)
class CitationCompliance:
    compliant: bool
    citation_count: int
    issues: tuple[str, ...] = ()


@dataclass(frozen=True)
class AuthorityMatch:
    """
    Overlap between a question's instruments and a criterion's expected ones.

    Attributes:
        matches: Distinct question instruments that are expected
        missing: Expected instruments absent from the question (document order)
    """

    matches: int
    missing: tuple[str, ...] = ()


@dataclass(frozen=True)
class CriterionAudit:
    criterion_id: str
    label: str
    question_count: int
    citation_compliant: int
    citation_non_compliant: int
    status: AuditStatus


@dataclass(frozen=True)
class QuestionIssue:
    question_id: str
    issues: tuple[str, ...]


@dataclass
class AuditResult:
    """
    Aggregated audit outcome.

    Attributes:
        total_criteria / total_questions / total_citations: Bank totals
        criteria_with_zero_questions: Criteria with status MISSING
        criteria_with_insufficient_questions: Criteria with status INSUFFICIENT
        questions_with_insufficient_citations: Matched questions failing
            the citation check (each question counted once)
        criteria_details: Per-criterion rows in document order
        question_issues: Citation issues per failing question
    """

    total_criteria: int = 0
    total_questions: int = 0
    total_citations: int = 0
    criteria_with_zero_questions: int = 0
    criteria_with_insufficient_questions: int = 0
    questions_with_insufficient_citations: int = 0
    min_questions: int = DEFAULT_TARGET_COUNT
    min_citations: int = DEFAULT_MIN_CITATIONS
    criteria_details: List[CriterionAudit] = field(default_factory=list)
    question_issues: List[QuestionIssue] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return (
            self.criteria_with_zero_questions > 0
            or self.criteria_with_insufficient_questions > 0
            or self.questions_with_insufficient_citations > 0
        )

    @property
    def compliant_criteria(self) -> int:
        return (
            self.total_criteria
            - self.criteria_with_zero_questions
            - self.criteria_with_insufficient_questions
        )

    @property
    def criteria_compliance_rate(self) -> float:
        """Percentage of criteria with enough questions (0.0 when none)."""
        if self.total_criteria == 0:
            return 0.0
        return self.compliant_criteria / self.total_criteria * 100

    @property
    def citation_compliance_rate(self) -> float:
        if self.total_questions == 0:
            return 0.0
        compliant = self.total_questions - self.questions_with_insufficient_citations
        return compliant / self.total_questions * 100

    def by_status(self, status: AuditStatus) -> List[CriterionAudit]:
        return [c for c in self.criteria_details if c.status is status]

    def worst_offenders(self, limit: int = 10) -> List[CriterionAudit]:
        """Non-OK criteria with the fewest questions first."""
        failing = [c for c in self.criteria_details if c.status is not AuditStatus.OK]
        return sorted(failing, key=lambda c: c.question_count)[:limit]

    def to_dict(self) -> dict:
        return {
            "totalCriteria": self.total_criteria,
            "totalQuestions": self.total_questions,
            "totalCitations": self.total_citations,
            "criteriaWithZeroQuestions": self.criteria_with_zero_questions,
            "criteriaWithInsufficientQuestions": self.criteria_with_insufficient_questions,
            "questionsWithInsufficientCitations": self.questions_with_insufficient_citations,
            "criteriaDetails": [
                {
                    "criterionId": c.criterion_id,
                    "label": c.label,
                    "questionCount": c.question_count,
                    "citationCompliant": c.citation_compliant,
                    "citationNonCompliant": c.citation_non_compliant,
                    "status": c.status.value,
                }
                for c in self.criteria_details
            ],
            "questionIssues": [
                {"questionId": qi.question_id, "issues": list(qi.issues)}
                for qi in self.question_issues
            ],
        }


def check_citation_compliance(
    question: QuestionRecord,
    min_citations: int = DEFAULT_MIN_CITATIONS,
) -> CitationCompliance:
    """
    Check a question carries enough complete citations.

    Example:
        >>> check_citation_compliance(QuestionRecord(id="q1")).issues
        ('Only 0 citation(s), need 2',)
    """
    count = len(question.references)
    issues: List[str] = []
    if count < min_citations:
        issues.append(f"Only {count} citation(s), need {min_citations}")
    for ref in question.references:
        if not ref.instrument or not ref.cite:
            issues.append(
                f"Citation missing instrument or cite: {json.dumps(ref.to_dict(), sort_keys=True)}"
            )
    return CitationCompliance(
        compliant=count >= min_citations and not issues,
        citation_count=count,
        issues=tuple(issues),
    )


def check_authority_match(
    question: QuestionRecord,
    expected: Sequence[Authority],
) -> AuthorityMatch:
    """Compare the question's instruments against the expected authorities."""
    if not expected:
        return AuthorityMatch(matches=0)

    question_instruments = {ref.instrument for ref in question.references}
    expected_instruments: List[str] = []
    for authority in expected:
        if authority.instrument.value not in expected_instruments:
            expected_instruments.append(authority.instrument.value)

    matches = sum(1 for i in question_instruments if i in expected_instruments)
    missing = tuple(i for i in expected_instruments if i not in question_instruments)
    return AuthorityMatch(matches=matches, missing=missing)


def run_audit(
    taxonomy: Union[StandardsDocument, TaxonomyIndex, None],
    questions: Iterable[QuestionRecord],
    min_questions: int = DEFAULT_TARGET_COUNT,
    min_citations: int = DEFAULT_MIN_CITATIONS,
) -> AuditResult:
    """
    Audit question coverage and citations.

    Process:
    1. Index questions by tag once
    2. For each criterion (document order), collect matching questions
    3. Check citations of every matched question; issues are recorded the
       first time a question is seen
    4. Classify the criterion as OK / INSUFFICIENT / MISSING

    Returns:
        AuditResult; ``has_failures`` drives the CLI exit code
    """
    snapshot = list(questions)
    by_id: Dict[str, QuestionRecord] = {}
    for question in snapshot:
        by_id.setdefault(question.id, question)

    index = TagCoverageIndex.from_questions(snapshot)
    result = AuditResult(
        total_questions=len(by_id),
        total_citations=sum(len(q.references) for q in by_id.values()),
        min_questions=min_questions,
        min_citations=min_citations,
    )

    checked: Dict[str, CitationCompliance] = {}
    for _position, criterion in positioned_criteria(taxonomy):
        matched_ids = sorted(index.questions_for(criterion.tags))
        compliant = 0
        non_compliant = 0
        for qid in matched_ids:
            compliance = checked.get(qid)
            if compliance is None:
                compliance = check_citation_compliance(by_id[qid], min_citations)
                checked[qid] = compliance
                if not compliance.compliant:
                    result.questions_with_insufficient_citations += 1
                    result.question_issues.append(
                        QuestionIssue(question_id=qid, issues=compliance.issues)
                    )
            if compliance.compliant:
                compliant += 1
            else:
                non_compliant += 1

        count = len(matched_ids)
        if count == 0:
            status = AuditStatus.MISSING
            result.criteria_with_zero_questions += 1
        elif count < min_questions:
            status = AuditStatus.INSUFFICIENT
            result.criteria_with_insufficient_questions += 1
        else:
            status = AuditStatus.OK

        result.criteria_details.append(
            CriterionAudit(
                criterion_id=criterion.id,
                label=criterion.label,
                question_count=count,
                citation_compliant=compliant,
                citation_non_compliant=non_compliant,
                status=status,
            )
        )

    result.total_criteria = len(result.criteria_details)
    if result.has_failures:
        logger.warning(
            f"Audit failed: {result.criteria_with_zero_questions} missing, "
            f"{result.criteria_with_insufficient_questions} insufficient, "
            f"{result.questions_with_insufficient_citations} questions with citation issues"
        )
    else:
        logger.info(f"Audit passed: {result.total_criteria} criteria compliant")
    return result
