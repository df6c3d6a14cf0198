"""Merge and provenance utilities for onto-merge."""

from .imports import fold_import_provenance
from .operation import (
    COLLAPSE_IMPORTS_CLOSURE,
    DEFAULT_OPTIONS,
    MergeResult,
    SkippedSource,
    get_default_options,
    merge,
    merge_into,
    merge_ontologies,
    merge_with_options,
)
from .provenance import tag_defined_by, tag_derived_from

__all__ = [
    # Merge
    "COLLAPSE_IMPORTS_CLOSURE",
    "DEFAULT_OPTIONS",
    "MergeResult",
    "SkippedSource",
    "get_default_options",
    "merge",
    "merge_into",
    "merge_ontologies",
    "merge_with_options",
    # Provenance
    "fold_import_provenance",
    "tag_defined_by",
    "tag_derived_from",
]
