"""
Module: coverage

Purpose:
    Tag-based coverage of standards criteria by the question bank: the
    tag index, the prioritized backlog, the coverage & citation audit,
    report exporters and the remediation interface.

Key Functions:
    - build_backlog(): Prioritized CoverageReport
    - run_audit(): Coverage & citation audit
    - write_backlog_csv() / write_audit_markdown() / render_backlog_pdf()

Dependencies:
    - psras_toolkit.core.models: Criterion, QuestionRecord
    - psras_toolkit.standards: TaxonomyIndex

Used By:
    - cli: backlog / audit subcommands
"""

from .audit import (
    AuditResult,
    AuditStatus,
    AuthorityMatch,
    CitationCompliance,
    CriterionAudit,
    QuestionIssue,
    check_authority_match,
    check_citation_compliance,
    run_audit,
)
from .export import render_audit_markdown, render_backlog_pdf, write_audit_markdown, write_backlog_csv
from .index import TagCoverageIndex, TagIndex, build_tag_index, coverage_for
from .models import CoverageReport, CoverageRow, CoverageStatus, CoverageSummary
from .remediation import CoverageRemediator, RemediationAction, RemediationOutcome, remediate
from .report import build_backlog, positioned_criteria, sort_backlog

__all__ = [
    "AuditResult",
    "AuditStatus",
    "AuthorityMatch",
    "CitationCompliance",
    "CoverageRemediator",
    "CoverageReport",
    "CoverageRow",
    "CoverageStatus",
    "CoverageSummary",
    "CriterionAudit",
    "QuestionIssue",
    "RemediationAction",
    "RemediationOutcome",
    "TagCoverageIndex",
    "TagIndex",
    "build_backlog",
    "build_tag_index",
    "check_authority_match",
    "check_citation_compliance",
    "coverage_for",
    "positioned_criteria",
    "remediate",
    "render_audit_markdown",
    "render_backlog_pdf",
    "run_audit",
    "sort_backlog",
    "write_audit_markdown",
    "write_backlog_csv",
]
