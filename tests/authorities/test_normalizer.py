"""
Unit tests for authority normalization.
"""

from psras_toolkit.authorities.normalizer import enrich_authorities, normalize_authority
from psras_toolkit.core.models import Authority, Instrument, QuestionReference


class TestNormalizeAuthority:
    """Tests for normalize_authority."""

    def test_trims_cite_and_resolves_url(self):
        """Valid input becomes a canonical Authority."""
        authority = normalize_authority("PACE", "  s.58 ")
        assert authority == Authority(
            Instrument.PACE, "s.58", url="https://www.legislation.gov.uk/ukpga/1984/60/section/58"
        )

    def test_unknown_instrument(self):
        """Unknown instruments are absent, not errors."""
        assert normalize_authority("Code Z", "para 1") is None
        assert normalize_authority("code c", "para 1") is None

    def test_empty_cite(self):
        """Whitespace-only cites are absent."""
        assert normalize_authority("Code C", "   ") is None
        assert normalize_authority("Code C", "") is None

    def test_non_string_input(self):
        """Non-string input never raises."""
        assert normalize_authority(None, None) is None
        assert normalize_authority("PACE", 58) is None

    def test_format_is_not_checked(self):
        """Normalization accepts citations that fail format rules."""
        assert normalize_authority("PACE", "general duty") is not None


class TestEnrichAuthorities:
    """Tests for enrich_authorities."""

    def test_keeps_notes_and_drops_invalid(self):
        """Notes survive; unrepresentable references are dropped."""
        refs = [
            QuestionReference("PACE", "s.41", note="time limits"),
            QuestionReference("Code Z", "para 1"),
            QuestionReference("Code C", "para 15.1"),
        ]
        enriched = enrich_authorities(refs)
        assert [a.key for a in enriched] == [("PACE", "s.41"), ("Code C", "para 15.1")]
        assert enriched[0].note == "time limits"
        assert enriched[0].url.endswith("/section/41")
        assert enriched[1].note is None
