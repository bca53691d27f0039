"""
Unit tests for per-instrument citation format rules.
"""

import pytest

from psras_toolkit.authorities.validator import (
    PARAGRAPH_REASON,
    SECTION_REASON,
    is_check_sentinel,
    validate_format,
)
from psras_toolkit.core.models import Authority, Instrument


def _check(instrument, cite):
    return validate_format(Authority(instrument, cite))


class TestStatuteRules:
    """PACE, CJPOA and Bail Act need a section number."""

    @pytest.mark.parametrize("cite", ["s.58", "S58", "section 24", "PACE 1984 s.78"])
    def test_pace_with_section(self, cite):
        """Section references pass."""
        assert _check(Instrument.PACE, cite).valid

    def test_pace_without_section(self):
        """PACE without a section fails with the section reason."""
        result = _check(Instrument.PACE, "general duty to caution")
        assert not result.valid
        assert result.reason == SECTION_REASON

    def test_cjpoa_check_token_does_not_help(self):
        """CJPOA has no check: allowance in its rule."""
        assert not _check(Instrument.CJPOA, "inferences (check: provision)").valid

    def test_bail_act_check_token_allowed(self):
        """Bail Act accepts a check: marker instead of a section."""
        assert _check(Instrument.BAIL_ACT, "presumption of bail check: provision").valid
        assert _check(Instrument.BAIL_ACT, "s.4").valid
        assert _check(Instrument.BAIL_ACT, "presumption of bail").reason == SECTION_REASON


class TestCodeRules:
    """PACE Codes need a paragraph or Annex reference."""

    @pytest.mark.parametrize("instrument", [
        Instrument.CODE_C, Instrument.CODE_D, Instrument.CODE_E, Instrument.CODE_F, Instrument.CODE_G,
    ])
    def test_paragraph_passes(self, instrument):
        """'para' anywhere, any case, passes."""
        assert _check(instrument, "Para 11.1A").valid

    def test_annex_passes(self):
        """Annex references pass."""
        assert _check(Instrument.CODE_C, "annex B").valid

    def test_check_token_passes(self):
        """A check: marker passes."""
        assert _check(Instrument.CODE_C, "Check: paragraph on reviews").valid

    def test_missing_paragraph(self):
        """Codes without para/Annex fail with the paragraph reason."""
        result = _check(Instrument.CODE_C, "11.1")
        assert not result.valid
        assert result.reason == PARAGRAPH_REASON


class TestOtherInstruments:
    """Instruments without a rule always pass."""

    @pytest.mark.parametrize("instrument", [
        Instrument.CPIA, Instrument.LASPO, Instrument.LAA_ARRANGEMENTS,
        Instrument.LAA_GUIDANCE, Instrument.SRA_STANDARD,
    ])
    def test_any_cite_passes(self, instrument):
        """No format rule applies."""
        result = _check(instrument, "anything at all")
        assert result.valid
        assert result.reason is None


class TestIsCheckSentinel:
    """Tests for the check: sentinel."""

    def test_prefix(self):
        """Leading 'check:' in any case."""
        assert is_check_sentinel("Check: need reference")
        assert is_check_sentinel("CHECK: x")

    def test_parenthesised(self):
        """'(check:' anywhere."""
        assert is_check_sentinel("Code C (Check: paragraph)")

    def test_not_sentinel(self):
        """A bare mention of check: mid-text is not a sentinel."""
        assert not is_check_sentinel("para 1 check: later")
        assert not is_check_sentinel("s.58")
