"""
Module: authorities.catalog

Purpose:
    Static lookup tables mapping citation instruments to reference URLs,
    and URL resolution for a citation. Resolution dispatches through a
    capability table (instrument -> resolver), so supporting a new
    instrument is a table entry rather than a new branch.

Key Functions:
    - resolve_url(): Reference URL for (instrument, cite), or None
    - extract_section(): Section number from a statute citation

Used By:
    - authorities.normalizer: Fills Authority.url
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Mapping, Optional

from psras_toolkit.core.models import Instrument

__all__ = [
    "PACE_CODE_URLS",
    "LEGISLATION_URLS",
    "GUIDANCE_URLS",
    "SECTION_PATTERN",
    "extract_section",
    "resolve_url",
    "supported_instruments",
]

# GOV.UK PACE Code publications (one page per Code; citation text ignored)
PACE_CODE_URLS: Mapping[Instrument, str] = {
    Instrument.CODE_C: "https://www.gov.uk/government/publications/pace-code-c-2023/pace-code-c-2023-accessible",
    Instrument.CODE_D: "https://www.gov.uk/government/publications/pace-code-d-2017/pace-code-d-2017-accessible",
    Instrument.CODE_E: "https://www.gov.uk/government/publications/pace-codes-e-and-f-2018/pace-code-e-2018-accessible",
    Instrument.CODE_F: "https://www.gov.uk/government/publications/pace-codes-e-and-f-2018/pace-code-f-2018-accessible",
    Instrument.CODE_G: "https://www.gov.uk/government/publications/pace-code-g-2012/pace-code-g-2012-accessible",
}

# legislation.gov.uk base URL per statute; "/section/N" is appended when known
LEGISLATION_URLS: Mapping[Instrument, str] = {
    Instrument.PACE: "https://www.legislation.gov.uk/ukpga/1984/60",
    Instrument.CPIA: "https://www.legislation.gov.uk/ukpga/1996/25",
    Instrument.BAIL_ACT: "https://www.legislation.gov.uk/ukpga/1976/63",
    Instrument.LASPO: "https://www.legislation.gov.uk/ukpga/2012/10",
    Instrument.CJPOA: "https://www.legislation.gov.uk/ukpga/1994/33",
}

GUIDANCE_URLS: Mapping[Instrument, str] = {
    Instrument.SRA_STANDARD: "https://www.sra.org.uk/solicitors/standards-regulations/",
    Instrument.LAA_ARRANGEMENTS: "https://assets.publishing.service.gov.uk/media/68dcf841ef1c2f72bc1e4c9f/Police_Station_Register_Arrangements_2025.pdf",
    Instrument.LAA_GUIDANCE: "https://www.gov.uk/guidance/legal-aid-for-providers",
}

# "s.58", "s 58", "S58", "section 58"
SECTION_PATTERN = re.compile(r"(?:section|s\.?)\s*(\d+)", re.IGNORECASE)

Resolver = Callable[[Instrument, str], Optional[str]]


def extract_section(cite: str) -> Optional[str]:
    """
    Find the first section number in a citation.

    Example:
        >>> extract_section("PACE 1984 s.58 (right to legal advice)")
        '58'
        >>> extract_section("general duty") is None
        True
    """
    match = SECTION_PATTERN.search(cite)
    return match.group(1) if match else None


def _fixed_url(table: Mapping[Instrument, str]) -> Resolver:
    def resolve(instrument: Instrument, cite: str) -> Optional[str]:
        return table[instrument]
    return resolve


def _legislation_url(instrument: Instrument, cite: str) -> Optional[str]:
    base = LEGISLATION_URLS[instrument]
    section = extract_section(cite)
    if section is None:
        return base
    return f"{base}/section/{section}"


def _build_resolvers() -> Dict[Instrument, Resolver]:
    resolvers: Dict[Instrument, Resolver] = {}
    for instrument in PACE_CODE_URLS:
        resolvers[instrument] = _fixed_url(PACE_CODE_URLS)
    for instrument in LEGISLATION_URLS:
        resolvers[instrument] = _legislation_url
    for instrument in GUIDANCE_URLS:
        resolvers[instrument] = _fixed_url(GUIDANCE_URLS)
    return resolvers


_RESOLVERS: Dict[Instrument, Resolver] = _build_resolvers()


def supported_instruments() -> frozenset[Instrument]:
    """Instruments the catalog can resolve a URL for."""
    return frozenset(_RESOLVERS)


def resolve_url(instrument: Instrument, cite: str) -> Optional[str]:
    """
    Resolve a reference URL for a citation.

    Args:
        instrument: Citation instrument
        cite: Citation text (only consulted for legislation)

    Returns:
        URL string, or None when the instrument has no catalog entry

    Example:
        >>> resolve_url(Instrument.PACE, "s.58")
        'https://www.legislation.gov.uk/ukpga/1984/60/section/58'
        >>> resolve_url(Instrument.CODE_C, "para 11.1") == PACE_CODE_URLS[Instrument.CODE_C]
        True
    """
    resolver = _RESOLVERS.get(instrument)
    if resolver is None:
        return None
    return resolver(instrument, cite)
