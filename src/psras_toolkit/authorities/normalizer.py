"""
Module: authorities.normalizer

Purpose:
    Turns a raw (instrument, citation) pair into a canonical Authority.
    Unrepresentable input yields None; callers drop or flag it.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from psras_toolkit.core.models import Authority, Instrument, QuestionReference

from .catalog import resolve_url

logger = logging.getLogger(__name__)

__all__ = ["normalize_authority", "enrich_authorities"]


def normalize_authority(instrument_raw: Any, cite_raw: Any) -> Optional[Authority]:
    """
    Build a canonical Authority from raw input.

    Args:
        instrument_raw: Instrument name, must match an Instrument value exactly
        cite_raw: Citation text, trimmed before use

    Returns:
        Authority with resolved URL, or None if the instrument is unknown or
        the trimmed citation is empty. Never raises.

    Example:
        >>> normalize_authority("PACE", "  s.58 ").url
        'https://www.legislation.gov.uk/ukpga/1984/60/section/58'
        >>> normalize_authority("Code Z", "para 1") is None
        True
    """
    instrument = Instrument.parse(instrument_raw)
    if instrument is None:
        return None
    if not isinstance(cite_raw, str):
        return None
    cite = cite_raw.strip()
    if not cite:
        return None
    return Authority(instrument=instrument, cite=cite, url=resolve_url(instrument, cite))


def enrich_authorities(references: Iterable[QuestionReference]) -> List[Authority]:
    """
    Normalize stored references, keeping their notes.

    Unrepresentable references are dropped.
    """
    enriched: List[Authority] = []
    for ref in references:
        authority = normalize_authority(ref.instrument, ref.cite)
        if authority is None:
            logger.debug(f"Dropping unrepresentable reference: {ref.instrument!r} - {ref.cite!r}")
            continue
        if ref.note is not None:
            authority = Authority(
                instrument=authority.instrument,
                cite=authority.cite,
                url=authority.url,
                note=ref.note,
            )
        enriched.append(authority)
    return enriched
