"""
Schema Validation Utilities

Validates standards documents and question records before they are turned
into model objects.

Two levels:
- Basic checks (always): required fields, types, id uniqueness across the
  whole standards tree, instrument names on expected authorities
- Strict mode: full JSON Schema validation via ``jsonschema`` against the
  ``*.schema.json`` files shipped next to this module
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema

from psras_toolkit.core.models.authority import Instrument

logger = logging.getLogger(__name__)


# =============================================================================
# Schema Versioning
# =============================================================================
# BACKWARD COMPATIBILITY POLICY:
# - Older standards documents load; a soft warning is logged
# - Documents without "schemaVersion" are treated as version 1
# - Newer versions are accepted without warning
#
# Changelog:
#   v1: parts/units/outcomes/criteria with tags and expectedAuthorities
#   v2: Added schemaVersion and sourceUrls
# =============================================================================
STANDARDS_SCHEMA_VERSION = 2


_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class StandardsValidationError(Exception):
    """Raised when a standards document or question record fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _run_jsonschema(data: Any, schema_name: str) -> None:
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise StandardsValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e


def _require_list(data: dict[str, Any], key: str, path: str) -> list:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise StandardsValidationError(f"{key} must be a list", path=f"{path}.{key}")
    return value


def _require_id(data: Any, path: str) -> str:
    if not isinstance(data, dict):
        raise StandardsValidationError("node must be an object", path=path)
    node_id = data.get("id")
    if not isinstance(node_id, str) or not node_id.strip():
        raise StandardsValidationError("node missing non-empty 'id'", path=f"{path}.id")
    return node_id


def validate_standards(data: Any, *, strict: bool = False) -> None:
    """
    Validate a standards document.

    Args:
        data: Parsed standards.json content
        strict: If True, also run the JSON Schema

    Raises:
        StandardsValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise StandardsValidationError("standards document must be a JSON object")

    if "parts" not in data:
        raise StandardsValidationError(
            "Missing required fields: ['parts']",
            errors=["Missing field: parts"],
        )

    raw_version = data.get("schemaVersion", 1)
    if not isinstance(raw_version, int) or isinstance(raw_version, bool) or raw_version < 1:
        raise StandardsValidationError(
            f"Invalid schemaVersion: {raw_version!r} (must be a positive integer)",
            path="schemaVersion",
        )
    if raw_version < STANDARDS_SCHEMA_VERSION:
        logger.warning(
            f"Standards document has schemaVersion {raw_version}, "
            f"expected {STANDARDS_SCHEMA_VERSION}. Consider re-importing the standards.",
            extra={"schema_version": raw_version},
        )

    source_urls = data.get("sourceUrls")
    if source_urls is not None:
        if not isinstance(source_urls, dict):
            raise StandardsValidationError("sourceUrls must be an object", path="sourceUrls")
        for name, url in source_urls.items():
            if not isinstance(url, str):
                raise StandardsValidationError(
                    f"source URL must be a string: {url!r}", path=f"sourceUrls.{name}"
                )

    seen: dict[str, str] = {}
    for pi, part in enumerate(_require_list(data, "parts", "")):
        part_path = f"parts[{pi}]"
        _require_id(part, part_path)
        for ui, unit in enumerate(_require_list(part, "units", part_path)):
            unit_path = f"{part_path}.units[{ui}]"
            _require_id(unit, unit_path)
            for oi, outcome in enumerate(_require_list(unit, "outcomes", unit_path)):
                outcome_path = f"{unit_path}.outcomes[{oi}]"
                _require_id(outcome, outcome_path)
                for ci, criterion in enumerate(_require_list(outcome, "criteria", outcome_path)):
                    criterion_path = f"{outcome_path}.criteria[{ci}]"
                    criterion_id = _require_id(criterion, criterion_path)
                    if criterion_id in seen:
                        raise StandardsValidationError(
                            f"Duplicate criterion id {criterion_id!r} "
                            f"(first seen at {seen[criterion_id]})",
                            path=f"{criterion_path}.id",
                        )
                    seen[criterion_id] = criterion_path
                    _validate_criterion(criterion, criterion_path)

    if strict:
        _run_jsonschema(data, "standards")


def _validate_criterion(data: dict[str, Any], path: str) -> None:
    """Validate tags and expected authorities of a single criterion."""
    tags = _require_list(data, "tags", path)
    for i, tag in enumerate(tags):
        if not isinstance(tag, str):
            raise StandardsValidationError(
                f"tag must be a string: {tag!r}", path=f"{path}.tags[{i}]"
            )

    for i, auth in enumerate(_require_list(data, "expectedAuthorities", path)):
        auth_path = f"{path}.expectedAuthorities[{i}]"
        if not isinstance(auth, dict):
            raise StandardsValidationError("authority must be an object", path=auth_path)
        if Instrument.parse(auth.get("instrument")) is None:
            raise StandardsValidationError(
                f"Unknown instrument: {auth.get('instrument')!r}",
                path=f"{auth_path}.instrument",
            )
        cite = auth.get("cite")
        if not isinstance(cite, str) or not cite.strip():
            raise StandardsValidationError(
                "authority cite must be a non-empty string", path=f"{auth_path}.cite"
            )


def validate_question_record(data: Any, *, strict: bool = False) -> None:
    """
    Validate a stored question record.

    Only the fields the engine reads are checked; reference instruments are
    NOT checked here (unknown instruments are reported by question
    validation, not rejected at load time).

    Raises:
        StandardsValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise StandardsValidationError("question record must be a JSON object")

    qid = data.get("id")
    if not isinstance(qid, (str, int)) or str(qid) == "":
        raise StandardsValidationError("Missing required fields: ['id']", path="id")

    for key in ("tags", "references"):
        if key in data and data[key] is not None and not isinstance(data[key], list):
            raise StandardsValidationError(f"{key} must be a list", path=key)

    for i, ref in enumerate(data.get("references") or []):
        if not isinstance(ref, dict):
            raise StandardsValidationError(
                "reference must be an object", path=f"references[{i}]"
            )

    if strict:
        _run_jsonschema(data, "question")
