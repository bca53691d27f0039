"""
Module: loading.loader

Purpose:
    Load a question-bank snapshot from JSON and JSONL files. The engine
    never owns question storage; this is how the CLI and batch jobs get a
    snapshot to measure.

Key Functions:
    - load_question_bank(): File or directory -> list of QuestionRecord
    - read_question_file(): Raw records from one .json / .jsonl file
    - write_questions_jsonl(): Snapshot -> JSONL

Key Classes:
    - LoaderError: Exception for loading failures

Dependencies:
    - psras_toolkit.core.models: QuestionRecord
    - psras_toolkit.core.schemas: Record validation

Used By:
    - cli: all subcommands
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from psras_toolkit.core.models import QuestionRecord
from psras_toolkit.core.schemas import StandardsValidationError, validate_question_record

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".jsonl")


class LoaderError(Exception):
    """Error loading the question bank."""
    pass


def _records_from_json(path: Path, text: str) -> List[Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LoaderError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, dict) and "questions" in data:
        data = data["questions"]
    if not isinstance(data, list):
        raise LoaderError(f"{path} must hold a list of questions or {{\"questions\": [...]}}")
    return data


def _records_from_jsonl(path: Path, text: str) -> List[Any]:
    records: List[Any] = []
    for line_num, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid JSON at {path.name}:{line_num}: {e}")
            continue
    return records


def read_question_file(path: Path) -> List[Any]:
    """
    Read raw question records from one file.

    Raises:
        LoaderError: If the file cannot be read, has an unsupported suffix,
            or (for .json) is not a valid document
    """
    if path.suffix not in SUPPORTED_SUFFIXES:
        raise LoaderError(f"Unsupported question file type: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LoaderError(f"Cannot read {path}: {e}") from e

    if path.suffix == ".jsonl":
        return _records_from_jsonl(path, text)
    return _records_from_json(path, text)


def _discover_files(path: Path) -> List[Path]:
    return sorted(
        p for p in path.iterdir()
        if p.is_file() and p.suffix in SUPPORTED_SUFFIXES
    )


def load_question_bank(path: Path, *, strict: bool = False) -> List[QuestionRecord]:
    """
    Load every question under ``path``.

    Process:
    1. Collect files (``path`` itself, or its .json / .jsonl files sorted by name)
    2. Read raw records from each file
    3. Validate and parse each record; skip bad ones with a warning

    Args:
        path: Question file or directory of question files
        strict: Also run the jsonschema pass on every record

    Returns:
        Questions in file order then record order

    Raises:
        LoaderError: If the path doesn't exist or a file is unreadable

    Example:
        >>> questions = load_question_bank(Path("bank/"))
        >>> questions[0].id
        'q-001'
    """
    if not path.exists():
        raise LoaderError(f"Question bank path does not exist: {path}")

    files = _discover_files(path) if path.is_dir() else [path]
    if not files:
        logger.warning(f"No question files found in {path}")
        return []

    questions: List[QuestionRecord] = []
    skipped = 0
    for file_path in files:
        for i, record in enumerate(read_question_file(file_path)):
            try:
                validate_question_record(record, strict=strict)
                questions.append(QuestionRecord.from_dict(record))
            except (StandardsValidationError, ValueError) as e:
                skipped += 1
                logger.warning(f"Skipping record {i} in {file_path.name}: {e}")
                continue

    if skipped:
        logger.warning(f"Skipped {skipped} malformed question records")
    logger.info(f"Loaded {len(questions)} questions from {len(files)} file(s)")
    return questions


def write_questions_jsonl(questions: Iterable[QuestionRecord], output_path: Path) -> int:
    """
    Write questions as JSONL, one ``to_dict()`` per line.

    Returns:
        Number of questions written
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with output_path.open("w", encoding="utf-8") as f:
        for question in questions:
            record: Dict[str, Any] = question.to_dict()
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
            count += 1
    logger.info(f"Wrote {count} questions to {output_path}")
    return count
