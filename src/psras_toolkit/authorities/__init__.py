"""
Authorities Package

Citation ("authority") handling: URL catalog, normalization, per-instrument
format rules, and attachment/validation of citations on questions.
"""

from .attacher import (
    AUTO_ATTACH_NOTE,
    QuestionValidation,
    attach_if_missing,
    expected_authorities_for_criterion,
    expected_authorities_for_tags,
    requires_authorities,
    validate_question,
)
from .catalog import GUIDANCE_URLS, LEGISLATION_URLS, PACE_CODE_URLS, resolve_url
from .normalizer import enrich_authorities, normalize_authority
from .suggestions import get_reference_suggestions, is_pace_custody_topic
from .validator import FormatCheck, is_check_sentinel, validate_format

__all__ = [
    "AUTO_ATTACH_NOTE",
    "FormatCheck",
    "GUIDANCE_URLS",
    "LEGISLATION_URLS",
    "PACE_CODE_URLS",
    "QuestionValidation",
    "attach_if_missing",
    "enrich_authorities",
    "expected_authorities_for_criterion",
    "expected_authorities_for_tags",
    "get_reference_suggestions",
    "is_check_sentinel",
    "is_pace_custody_topic",
    "normalize_authority",
    "requires_authorities",
    "resolve_url",
    "validate_format",
    "validate_question",
]
