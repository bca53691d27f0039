"""
Module: cli

Purpose:
    Command line entry point ``psras-coverage``. Loads the standards and a
    question-bank snapshot, then prints the coverage backlog, runs the
    coverage & citation audit, or validates question citations.

Exit codes:
    0: Success / all checks pass
    1: Audit failures, or questions requiring review
    2: Standards unavailable or question bank unreadable

Dependencies:
    - argparse (std)
    - psras_toolkit.coverage / authorities / loading / standards
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from psras_toolkit import __version__
from psras_toolkit.authorities import attach_if_missing, validate_question
from psras_toolkit.config import EngineConfig
from psras_toolkit.core.models import QuestionRecord
from psras_toolkit.coverage import (
    CoverageReport,
    build_backlog,
    render_backlog_pdf,
    run_audit,
    write_audit_markdown,
    write_backlog_csv,
)
from psras_toolkit.loading import LoaderError, load_question_bank, write_questions_jsonl
from psras_toolkit.standards import TaxonomyIndex, load_taxonomy_index

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_UNAVAILABLE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="psras-coverage",
        description="Standards coverage & authority validation for the PSRAS question bank",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("questions", type=Path, help="Question file (.json/.jsonl) or directory")
    common.add_argument("--standards", type=Path, help="Path to standards.json (default: bundled)")

    backlog = sub.add_parser("backlog", parents=[common], help="Print the prioritized coverage backlog")
    backlog.add_argument("--target", type=int, help="Questions per criterion for OK (default: 30)")
    backlog.add_argument("--json", action="store_true", help="Print the report as JSON")
    backlog.add_argument("--csv", type=Path, help="Also write the backlog as CSV")
    backlog.add_argument("--pdf", type=Path, help="Also render the backlog as PDF")

    audit = sub.add_parser("audit", parents=[common], help="Audit coverage and citations")
    audit.add_argument("--min-questions", type=int, help="Questions required per criterion")
    audit.add_argument("--min-citations", type=int, help="Citations required per question")
    audit.add_argument("--report", type=Path, help="Write the Markdown audit report")

    validate = sub.add_parser("validate", parents=[common], help="Validate question citations")
    validate.add_argument("--attach", action="store_true",
                          help="Auto-attach expected authorities before validating")
    validate.add_argument("--output", type=Path, help="Write the (attached) questions as JSONL")
    return parser


def _load_inputs(args: argparse.Namespace, config: EngineConfig) -> Optional[tuple[TaxonomyIndex, List[QuestionRecord]]]:
    taxonomy = load_taxonomy_index(args.standards, config=config)
    if not taxonomy.available:
        print("Standards unavailable: coverage cannot be computed", file=sys.stderr)
        return None
    try:
        questions = load_question_bank(args.questions, strict=config.strict_schema)
    except LoaderError as e:
        print(f"Cannot load question bank: {e}", file=sys.stderr)
        return None
    return taxonomy, questions


def _print_backlog(report: CoverageReport) -> None:
    summary = report.summary
    print(f"Coverage backlog (target {report.target_count} questions per criterion)")
    print(f"Missing: {summary.missing}  Partial: {summary.partial}  OK: {summary.ok}")
    print()
    print(f"{'Status':<8} {'Criterion':<14} {'Current':>7} {'Gap':>5}  Label")
    for row in report.rows:
        print(f"{row.status.value:<8} {row.criterion_id:<14} {row.current_count:>7} {row.gap:>5}  {row.label}")


def _cmd_backlog(args: argparse.Namespace, config: EngineConfig) -> int:
    inputs = _load_inputs(args, config)
    if inputs is None:
        return EXIT_UNAVAILABLE
    taxonomy, questions = inputs

    target = args.target if args.target is not None else config.target_count
    if target <= 0:
        print(f"--target must be positive: {target}", file=sys.stderr)
        return EXIT_FAILED
    report = build_backlog(taxonomy, questions, target)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        _print_backlog(report)
    if args.csv:
        write_backlog_csv(report, args.csv)
    if args.pdf:
        render_backlog_pdf(report, args.pdf)
    return EXIT_OK


def _cmd_audit(args: argparse.Namespace, config: EngineConfig) -> int:
    inputs = _load_inputs(args, config)
    if inputs is None:
        return EXIT_UNAVAILABLE
    taxonomy, questions = inputs

    min_questions = args.min_questions if args.min_questions is not None else config.target_count
    min_citations = args.min_citations if args.min_citations is not None else config.min_citations
    result = run_audit(taxonomy, questions, min_questions, min_citations)

    print("Coverage Summary:")
    print(f"  Total Criteria: {result.total_criteria}")
    print(f"  Total Questions: {result.total_questions}")
    print(f"  Total Citations: {result.total_citations}")
    print()
    print("Compliance:")
    print(f"  Criteria with 0 questions: {result.criteria_with_zero_questions}")
    print(f"  Criteria with < {min_questions} questions: {result.criteria_with_insufficient_questions}")
    print(f"  Questions with < {min_citations} citations: {result.questions_with_insufficient_citations}")

    if args.report:
        write_audit_markdown(result, args.report)
        print(f"\nReport written to: {args.report}")

    if result.has_failures:
        print("\nAudit FAILED")
        return EXIT_FAILED
    print("\nAudit PASSED")
    return EXIT_OK


def _cmd_validate(args: argparse.Namespace, config: EngineConfig) -> int:
    inputs = _load_inputs(args, config)
    if inputs is None:
        return EXIT_UNAVAILABLE
    taxonomy, questions = inputs

    if args.attach:
        questions = [attach_if_missing(q, taxonomy) for q in questions]

    needing_review = 0
    for question in questions:
        validation = validate_question(question, taxonomy)
        if validation.valid:
            continue
        marker = "REVIEW" if validation.requires_review else "warn"
        print(f"[{marker}] {question.id}: {'; '.join(validation.issues)}")
        if validation.requires_review:
            needing_review += 1

    if args.output:
        write_questions_jsonl(questions, args.output)

    print(f"\n{len(questions)} questions checked, {needing_review} require review")
    return EXIT_FAILED if needing_review else EXIT_OK


_COMMANDS = {
    "backlog": _cmd_backlog,
    "audit": _cmd_audit,
    "validate": _cmd_validate,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    try:
        config = EngineConfig.from_env()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_UNAVAILABLE

    return _COMMANDS[args.command](args, config)


if __name__ == "__main__":
    raise SystemExit(main())
