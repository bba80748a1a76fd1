"""Errors raised while building a registry or loading its sources."""

from pathlib import Path


class RegistryError(Exception):
    """Base class for all registry construction failures."""


class DuplicateSlugError(RegistryError):
    """Two records share the same slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Duplicate slug: {slug!r}")


class DuplicateSectionError(RegistryError):
    """Two sections share the same tag."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Duplicate section tag: {tag!r}")


class UnknownSlugInSectionError(RegistryError):
    """A section references a slug that no record defines."""

    def __init__(self, section_tag: str, slug: str):
        self.section_tag = section_tag
        self.slug = slug
        super().__init__(f"Section {section_tag!r} references unknown slug {slug!r}")


class InvalidRecordError(RegistryError):
    """A raw record is missing a required field or has a malformed one."""

    def __init__(self, slug: str | None, reason: str):
        self.slug = slug
        self.reason = reason
        label = repr(slug) if slug else "<no slug>"
        super().__init__(f"Invalid record {label}: {reason}")


class SourceError(RegistryError):
    """A source file could not be read or parsed."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")
