"""Core domain models and errors."""

from .errors import (
    DuplicateSectionError,
    DuplicateSlugError,
    InvalidRecordError,
    RegistryError,
    SourceError,
    UnknownSlugInSectionError,
)
from .raw import RawAuthor, RawRecord, RawSection
from .record import Author, ContentRecord, ContentSection

__all__ = [
    # Records
    "Author",
    "ContentRecord",
    "ContentSection",
    # Raw input
    "RawAuthor",
    "RawRecord",
    "RawSection",
    # Errors
    "RegistryError",
    "DuplicateSlugError",
    "DuplicateSectionError",
    "InvalidRecordError",
    "UnknownSlugInSectionError",
    "SourceError",
]
