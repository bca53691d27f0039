import json
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import psras_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from psras_toolkit.core.models import QuestionRecord, QuestionReference, StandardsDocument  # noqa: E402
from psras_toolkit.standards import TaxonomyIndex, clear_standards_cache  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_standards_cache(monkeypatch):
    """Every test starts with an empty standards cache and no env overrides."""
    for name in ("PSRAS_STANDARDS_PATH", "PSRAS_TARGET_COUNT", "PSRAS_MIN_CITATIONS", "PSRAS_STRICT_SCHEMA"):
        monkeypatch.delenv(name, raising=False)
    clear_standards_cache()
    yield
    clear_standards_cache()


@pytest.fixture
def standards_data() -> dict:
    """Small standards document: 2 parts, 4 criteria."""
    return {
        "schemaVersion": 2,
        "version": "test-1",
        "sourceUrls": {"PACE": "https://www.legislation.gov.uk/ukpga/1984/60"},
        "parts": [
            {
                "id": "P1",
                "title": "Detention",
                "units": [
                    {
                        "id": "P1-U1",
                        "title": "Custody",
                        "outcomes": [
                            {
                                "id": "P1-U1-O1",
                                "title": "Detention time",
                                "criteria": [
                                    {
                                        "id": "C-1",
                                        "label": "Detention time limits",
                                        "tags": ["detention", "time-limits"],
                                        "expectedAuthorities": [
                                            {"instrument": "PACE", "cite": "s.41"},
                                            {"instrument": "Code C", "cite": "para 15.1"},
                                        ],
                                    },
                                    {
                                        "id": "C-2",
                                        "label": "Reviews of detention",
                                        "tags": ["detention", "reviews"],
                                        "expectedAuthorities": [
                                            {"instrument": "PACE", "cite": "s.40"},
                                            {"instrument": "Code C", "cite": "para 15.1"},
                                        ],
                                    },
                                ],
                            }
                        ],
                    }
                ],
            },
            {
                "id": "P2",
                "title": "Advice",
                "units": [
                    {
                        "id": "P2-U1",
                        "title": "Legal advice",
                        "outcomes": [
                            {
                                "id": "P2-U1-O1",
                                "title": "Right to advice",
                                "criteria": [
                                    {
                                        "id": "C-3",
                                        "label": "Right to legal advice",
                                        "tags": ["legal-advice"],
                                        "expectedAuthorities": [
                                            {"instrument": "PACE", "cite": "s.58"},
                                        ],
                                    },
                                    {
                                        "id": "C-4",
                                        "label": "Professional conduct",
                                        "tags": ["conduct"],
                                    },
                                ],
                            }
                        ],
                    }
                ],
            },
        ],
    }


@pytest.fixture
def standards_document(standards_data) -> StandardsDocument:
    return StandardsDocument.from_dict(standards_data)


@pytest.fixture
def taxonomy(standards_document) -> TaxonomyIndex:
    return TaxonomyIndex(standards_document)


@pytest.fixture
def standards_file(tmp_path: Path, standards_data) -> Path:
    """Write the sample standards document to disk."""
    path = tmp_path / "standards.json"
    path.write_text(json.dumps(standards_data), encoding="utf-8")
    return path


@pytest.fixture
def make_question():
    """Factory for QuestionRecord with (instrument, cite) reference pairs."""

    def _make(qid="q1", topic_id="", tags=(), references=()):
        return QuestionRecord(
            id=qid,
            topic_id=topic_id,
            tags=tuple(tags),
            references=tuple(
                QuestionReference(instrument=instrument, cite=cite)
                for instrument, cite in references
            ),
        )

    return _make
