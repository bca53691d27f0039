"""
Module: config

Purpose:
    Configuration dataclass for the coverage & authority engine. Immutable
    configuration with validation on construction.

Key Classes:
    - EngineConfig: Thresholds and standards location

Dependencies:
    - dataclasses (std)
    - os (std): Environment overrides

Used By:
    - standards.loader: Standards path resolution
    - cli: Defaults for target/min-citation thresholds
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_TARGET_COUNT = 30
DEFAULT_MIN_CITATIONS = 2

ENV_STANDARDS_PATH = "PSRAS_STANDARDS_PATH"
ENV_TARGET_COUNT = "PSRAS_TARGET_COUNT"
ENV_MIN_CITATIONS = "PSRAS_MIN_CITATIONS"
ENV_STRICT_SCHEMA = "PSRAS_STRICT_SCHEMA"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EngineConfig:
    """
    Engine configuration (immutable).

    Attributes:
        target_count: Questions per criterion for "OK" coverage
        min_citations: Citations each question should carry (audit)
        standards_path: Override for the standards.json location
        strict_schema: Run full JSON Schema validation on load

    Example:
        >>> config = EngineConfig(target_count=20)
        >>> config.min_citations
        2
    """

    target_count: int = DEFAULT_TARGET_COUNT
    min_citations: int = DEFAULT_MIN_CITATIONS
    standards_path: Optional[Path] = None
    strict_schema: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.target_count <= 0:
            raise ValueError(f"target_count must be positive: {self.target_count}")
        if self.min_citations < 0:
            raise ValueError(f"min_citations must be non-negative: {self.min_citations}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
        """
        Build configuration from environment variables.

        Raises:
            ValueError: If a numeric variable is not an integer
        """
        env = os.environ if environ is None else environ
        path = env.get(ENV_STANDARDS_PATH)
        return cls(
            target_count=_int_from_env(env, ENV_TARGET_COUNT, DEFAULT_TARGET_COUNT),
            min_citations=_int_from_env(env, ENV_MIN_CITATIONS, DEFAULT_MIN_CITATIONS),
            standards_path=Path(path) if path else None,
            strict_schema=env.get(ENV_STRICT_SCHEMA, "").strip().lower() in _TRUTHY,
        )


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer: {raw!r}") from e
