"""
Standards Package

Loads the accreditation standards document (parts -> units -> outcomes ->
criteria) and flattens it into an ordered criterion index.
"""

from .index import DuplicateCriterionError, IndexedCriterion, TaxonomyIndex, flatten_criteria
from .loader import (
    BUNDLED_STANDARDS_PATH,
    StandardsUnavailableError,
    clear_standards_cache,
    load_standards,
    load_taxonomy_index,
    read_standards,
    resolve_standards_path,
)

__all__ = [
    "BUNDLED_STANDARDS_PATH",
    "DuplicateCriterionError",
    "IndexedCriterion",
    "StandardsUnavailableError",
    "TaxonomyIndex",
    "clear_standards_cache",
    "flatten_criteria",
    "load_standards",
    "load_taxonomy_index",
    "read_standards",
    "resolve_standards_path",
]
