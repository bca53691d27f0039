"""
Module: authorities.suggestions

Purpose:
    Curated, conservative reference suggestions per question topic, for
    authoring tools that pre-fill citations.

    Statute sections are given when confident. Code paragraphs are only
    given when confident; otherwise the citation carries a "(Check: ...)"
    marker so it is never presented as definitive.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from psras_toolkit.core.models import QuestionReference

__all__ = ["get_reference_suggestions", "is_pace_custody_topic", "suggested_topics"]


def _ref(instrument: str, cite: str) -> QuestionReference:
    return QuestionReference(instrument=instrument, cite=cite)


_TOPIC_REFERENCES: Dict[str, Tuple[QuestionReference, ...]] = {
    # Arrest / necessity
    "pace-s24-arrest": (
        _ref("PACE", "PACE 1984 s.24 (powers of arrest)"),
        _ref("Code G", "Code G (arrest) necessity criteria (Check: paragraph)"),
    ),
    # Detention time limits / extensions / reviews
    "pace-detention-time": (
        _ref("PACE", "PACE 1984 s.41 (detention without charge, time limits)"),
        _ref("PACE", "PACE 1984 ss.42-44 (extensions / warrants) (Check: applicability)"),
        _ref("Code C", "Code C (detention) time limits and reviews (Check: paragraph)"),
    ),
    "pace-custody-record": (
        _ref("Code C", "Code C custody record / rights and entitlements (Check: paragraph)"),
    ),
    # Interview
    "interview-preparation": (
        _ref("Code C", "Code C right to legal advice and pre-interview consultation (Check: paragraph)"),
    ),
    "interview-attendance": (
        _ref("Code C", "Code C conduct of interviews / breaks / legal advice (Check: paragraph)"),
        _ref("Code D", "Code D identification procedures (only if relevant)"),
    ),
    "interview-intervention": (
        _ref("Code C", "Code C interview standards / fairness (Check: paragraph)"),
        _ref("PACE", "PACE 1984 s.78 (exclusion of evidence, fairness)"),
    ),
    # Vulnerability
    "vuln-appropriate-adult": (
        _ref("Code C", "Code C appropriate adult safeguards (Check: paragraph)"),
    ),
    "vuln-mental-health": (
        _ref("Code C", "Code C fitness for interview / vulnerable suspects (Check: paragraph)"),
    ),
    "vuln-youth": (
        _ref("Code C", "Code C juveniles and appropriate adults (Check: paragraph)"),
        _ref("LASPO", "LASPO 2012 (youth cautions / related provisions) (Check: section)"),
    ),
    # Evidence
    "evidence-admissibility": (
        _ref("PACE", "PACE 1984 s.76 (confessions: oppression/unreliability)"),
        _ref("PACE", "PACE 1984 s.78 (general discretion to exclude unfair evidence)"),
    ),
    # Disclosure
    "disclosure-advance": (
        _ref("CPIA", "CPIA 1996 (disclosure framework, high level) (Check: applicability)"),
    ),
    "disclosure-strategy": (
        _ref("CPIA", "CPIA 1996 (disclosure framework, high level) (Check: applicability)"),
    ),
    # Bail / RUI
    "bail-applications": (
        _ref("Bail Act", "Bail Act 1976 (presumption in favour of bail) (Check: section)"),
    ),
    "bail-rui": (
        _ref("PACE", "PACE 1984 (release without charge / investigation) (Check: provision)"),
    ),
}


def get_reference_suggestions(topic_id: str) -> List[QuestionReference]:
    """Suggested references for a topic, or [] for unknown topics."""
    return list(_TOPIC_REFERENCES.get(topic_id, ()))


def suggested_topics() -> List[str]:
    return sorted(_TOPIC_REFERENCES)


def is_pace_custody_topic(topic_id: str) -> bool:
    return topic_id.startswith("pace-") or topic_id in ("vuln-appropriate-adult", "vuln-mental-health")
