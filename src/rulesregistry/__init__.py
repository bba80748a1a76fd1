"""Rules registry: tagged, authored rule documents grouped into sections."""

from rulesregistry.core import (
    Author,
    ContentRecord,
    ContentSection,
    DuplicateSectionError,
    DuplicateSlugError,
    InvalidRecordError,
    RegistryError,
    SourceError,
    UnknownSlugInSectionError,
)
from rulesregistry.registry import ContentRegistry, ValidationIssue, validate_registry

__version__ = "0.1.0"

__all__ = [
    "Author",
    "ContentRecord",
    "ContentSection",
    "ContentRegistry",
    "ValidationIssue",
    "validate_registry",
    "RegistryError",
    "DuplicateSlugError",
    "DuplicateSectionError",
    "InvalidRecordError",
    "UnknownSlugInSectionError",
    "SourceError",
]
