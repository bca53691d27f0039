"""
Module: authorities.validator

Purpose:
    Per-instrument citation format rules. Rules live in a table keyed by
    instrument; instruments without a rule are always valid.

Key Functions:
    - validate_format(): Apply the instrument's rule to an Authority
    - is_check_sentinel(): Detect "check:" placeholder citations

Rules:
    | Instrument     | Requires                                  |
    |----------------|-------------------------------------------|
    | PACE           | section marker                            |
    | Code C/D/E/F/G | "para", "annex" or the check: sentinel    |
    | Bail Act       | section marker or the check: sentinel     |
    | CJPOA          | section marker (check: does not exempt)   |
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from psras_toolkit.core.models import Authority, Instrument

from .catalog import SECTION_PATTERN

__all__ = [
    "FormatCheck",
    "SECTION_REASON",
    "PARAGRAPH_REASON",
    "is_check_sentinel",
    "validate_format",
]

SECTION_REASON = "citation should include section number"
PARAGRAPH_REASON = "citation should include paragraph or Annex reference"

_PARA_RE = re.compile(r"para", re.IGNORECASE)
_ANNEX_RE = re.compile(r"annex", re.IGNORECASE)
_CHECK_RE = re.compile(r"check:", re.IGNORECASE)


@dataclass(frozen=True)
class FormatCheck:
    valid: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid


VALID = FormatCheck(valid=True)


def is_check_sentinel(cite: str) -> bool:
    """
    True if the citation is marked as pending verification.

    A sentinel citation starts with "check:" or contains "(check:",
    case-insensitively.

    Example:
        >>> is_check_sentinel("Check: need reference")
        True
        >>> is_check_sentinel("Code C (Check: paragraph)")
        True
    """
    lower = cite.lower()
    return lower.startswith("check:") or "(check:" in lower


def _has_section(cite: str) -> bool:
    return SECTION_PATTERN.search(cite) is not None


def _has_check_token(cite: str) -> bool:
    return _CHECK_RE.search(cite) is not None


def _statute_rule(cite: str) -> FormatCheck:
    if _has_section(cite):
        return VALID
    return FormatCheck(valid=False, reason=SECTION_REASON)


def _statute_rule_allowing_check(cite: str) -> FormatCheck:
    if _has_section(cite) or _has_check_token(cite):
        return VALID
    return FormatCheck(valid=False, reason=SECTION_REASON)


def _code_rule(cite: str) -> FormatCheck:
    if _PARA_RE.search(cite) or _ANNEX_RE.search(cite) or _has_check_token(cite):
        return VALID
    return FormatCheck(valid=False, reason=PARAGRAPH_REASON)


FormatRule = Callable[[str], FormatCheck]

_RULES: Dict[Instrument, FormatRule] = {
    Instrument.PACE: _statute_rule,
    Instrument.CODE_C: _code_rule,
    Instrument.CODE_D: _code_rule,
    Instrument.CODE_E: _code_rule,
    Instrument.CODE_F: _code_rule,
    Instrument.CODE_G: _code_rule,
    Instrument.BAIL_ACT: _statute_rule_allowing_check,
    Instrument.CJPOA: _statute_rule,
}


def validate_format(authority: Authority) -> FormatCheck:
    """
    Check an authority's citation against its instrument's format rule.

    Example:
        >>> validate_format(Authority(Instrument.PACE, "s.58")).valid
        True
        >>> validate_format(Authority(Instrument.PACE, "general duty to caution")).reason
        'citation should include section number'
    """
    rule = _RULES.get(authority.instrument)
    if rule is None:
        return VALID
    return rule(authority.cite)
