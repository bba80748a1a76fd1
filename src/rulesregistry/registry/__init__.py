"""Content registry, search and validation."""

from .holder import RegistryHolder
from .registry import ContentRegistry
from .search import SearchIndex, match_rank
from .validation import (
    DEFAULT_PLACEHOLDER_MARKERS,
    ValidationIssue,
    is_placeholder,
    is_url_safe_slug,
    validate_registry,
)

__all__ = [
    # Registry
    "ContentRegistry",
    "RegistryHolder",
    # Search
    "SearchIndex",
    "match_rank",
    # Validation
    "DEFAULT_PLACEHOLDER_MARKERS",
    "ValidationIssue",
    "is_placeholder",
    "is_url_safe_slug",
    "validate_registry",
]
