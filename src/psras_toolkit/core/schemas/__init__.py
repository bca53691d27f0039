"""
Schemas Package

JSON schema definitions and validation utilities for standards documents
and question records.
"""

from .validator import (
    validate_standards,
    validate_question_record,
    StandardsValidationError,
    STANDARDS_SCHEMA_VERSION,
)

__all__ = [
    "validate_standards",
    "validate_question_record",
    "StandardsValidationError",
    "STANDARDS_SCHEMA_VERSION",
]
