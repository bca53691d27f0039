"""
Module: standards.loader

Purpose:
    Loads the accreditation standards document and caches it for the life
    of the process. Loading never raises: an unavailable or invalid
    document yields None and a logged warning, and every dependent
    computation degrades to empty results.

Key Functions:
    - load_standards(): Cached load (write-once on first success)
    - load_taxonomy_index(): Cached TaxonomyIndex over the loaded document
    - read_standards(): Uncached read that raises on failure
    - resolve_standards_path(): Explicit path > config/env > bundled file
    - clear_standards_cache(): Reset the cache (tests)

Dependencies:
    - json (std)
    - core.schemas: Structural validation before model construction

Used By:
    - cli: All subcommands
    - coverage.report / authorities.attacher callers
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from psras_toolkit.config import EngineConfig
from psras_toolkit.core.models import StandardsDocument
from psras_toolkit.core.schemas import StandardsValidationError, validate_standards

from .index import DuplicateCriterionError, TaxonomyIndex

logger = logging.getLogger(__name__)

__all__ = [
    "BUNDLED_STANDARDS_PATH",
    "StandardsUnavailableError",
    "clear_standards_cache",
    "load_standards",
    "load_taxonomy_index",
    "read_standards",
    "resolve_standards_path",
]

BUNDLED_STANDARDS_PATH = Path(__file__).resolve().parent / "data" / "standards.json"

# Write-once: set on first successful load, never invalidated afterwards.
# A race on first load only means loading twice.
_cached_document: Optional[StandardsDocument] = None
_cached_index: Optional[TaxonomyIndex] = None


class StandardsUnavailableError(RuntimeError):
    """Raised by read_standards() when the document cannot be used."""


def resolve_standards_path(
    path: Optional[Union[str, Path]] = None,
    config: Optional[EngineConfig] = None,
) -> Path:
    """
    Pick the standards file to load.

    Order: explicit ``path``, then ``config.standards_path`` (which
    EngineConfig.from_env() fills from PSRAS_STANDARDS_PATH), then the
    bundled document.
    """
    if path is not None:
        return Path(path)
    cfg = config if config is not None else EngineConfig.from_env()
    if cfg.standards_path is not None:
        return cfg.standards_path
    return BUNDLED_STANDARDS_PATH


def read_standards(path: Union[str, Path], *, strict: bool = False) -> StandardsDocument:
    """
    Read and validate a standards document without touching the cache.

    Args:
        path: Path to standards.json
        strict: Also run the full JSON Schema

    Returns:
        Parsed StandardsDocument

    Raises:
        StandardsUnavailableError: If the file is missing, not JSON, or invalid
    """
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as e:
        raise StandardsUnavailableError(f"Cannot read standards {source}: {e}") from e
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise StandardsUnavailableError(f"Standards {source} is not valid JSON: {e}") from e
    try:
        validate_standards(payload, strict=strict)
        document = StandardsDocument.from_dict(payload)
    except StandardsValidationError as e:
        where = f" at {e.path}" if e.path else ""
        raise StandardsUnavailableError(f"Invalid standards {source}{where}: {e}") from e
    except (KeyError, TypeError, ValueError) as e:
        raise StandardsUnavailableError(f"Invalid standards {source}: {e}") from e
    return document


def load_standards(
    path: Optional[Union[str, Path]] = None,
    *,
    config: Optional[EngineConfig] = None,
) -> Optional[StandardsDocument]:
    """
    Load the standards document, caching the first success.

    Once a document has been cached it is returned on every later call,
    whatever ``path`` is passed. Failures are not cached.

    Returns:
        StandardsDocument, or None if unavailable (never raises)

    Example:
        >>> doc = load_standards()
        >>> doc is load_standards()
        True
    """
    global _cached_document, _cached_index
    if _cached_document is not None:
        return _cached_document

    try:
        cfg = config if config is not None else EngineConfig.from_env()
    except ValueError as e:
        logger.warning(f"Standards unavailable: invalid configuration: {e}")
        return None

    source = resolve_standards_path(path, cfg)
    try:
        document = read_standards(source, strict=cfg.strict_schema)
        index = TaxonomyIndex(document)
    except (StandardsUnavailableError, DuplicateCriterionError) as e:
        logger.warning(f"Standards unavailable: {e}")
        return None

    _cached_document = document
    _cached_index = index
    logger.info(
        f"Loaded standards {document.version!r} from {source} ({len(index)} criteria)"
    )
    return document


def load_taxonomy_index(
    path: Optional[Union[str, Path]] = None,
    *,
    config: Optional[EngineConfig] = None,
) -> TaxonomyIndex:
    """
    Cached TaxonomyIndex over the loaded standards.

    Returns an empty index (no criteria) when the standards are unavailable.
    """
    document = load_standards(path, config=config)
    if document is None or _cached_index is None:
        return TaxonomyIndex.empty()
    return _cached_index


def clear_standards_cache() -> None:
    """Forget the cached document (for tests)."""
    global _cached_document, _cached_index
    _cached_document = None
    _cached_index = None
