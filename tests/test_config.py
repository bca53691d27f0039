"""
Unit tests for EngineConfig.
"""

from pathlib import Path

import pytest

from psras_toolkit.config import DEFAULT_MIN_CITATIONS, DEFAULT_TARGET_COUNT, EngineConfig


class TestEngineConfig:
    """Tests for construction and validation."""

    def test_defaults(self):
        """Defaults match the coverage target and citation minimum."""
        config = EngineConfig()
        assert config.target_count == DEFAULT_TARGET_COUNT == 30
        assert config.min_citations == DEFAULT_MIN_CITATIONS == 2
        assert config.standards_path is None
        assert not config.strict_schema

    def test_rejects_non_positive_target(self):
        """target_count must be positive."""
        with pytest.raises(ValueError, match="target_count"):
            EngineConfig(target_count=0)

    def test_rejects_negative_min_citations(self):
        """min_citations must be non-negative."""
        with pytest.raises(ValueError, match="min_citations"):
            EngineConfig(min_citations=-1)

    def test_is_frozen(self):
        """Configuration is immutable."""
        with pytest.raises(AttributeError):
            EngineConfig().target_count = 5


class TestFromEnv:
    """Tests for EngineConfig.from_env."""

    def test_reads_all_variables(self):
        """Every variable is honoured."""
        config = EngineConfig.from_env({
            "PSRAS_STANDARDS_PATH": "/data/standards.json",
            "PSRAS_TARGET_COUNT": "20",
            "PSRAS_MIN_CITATIONS": "3",
            "PSRAS_STRICT_SCHEMA": "yes",
        })
        assert config == EngineConfig(
            target_count=20,
            min_citations=3,
            standards_path=Path("/data/standards.json"),
            strict_schema=True,
        )

    def test_empty_environment(self):
        """Nothing set gives the defaults."""
        assert EngineConfig.from_env({}) == EngineConfig()

    def test_blank_values_use_defaults(self):
        """Blank numeric variables fall back to defaults."""
        assert EngineConfig.from_env({"PSRAS_TARGET_COUNT": " "}).target_count == 30

    def test_invalid_integer(self):
        """Non-integers raise ValueError naming the variable."""
        with pytest.raises(ValueError, match="PSRAS_TARGET_COUNT"):
            EngineConfig.from_env({"PSRAS_TARGET_COUNT": "thirty"})

    def test_process_environment(self, monkeypatch):
        """Defaults to os.environ."""
        monkeypatch.setenv("PSRAS_MIN_CITATIONS", "1")
        assert EngineConfig.from_env().min_citations == 1
