"""Non-fatal checks over a built registry.

These flag records that are structurally valid but probably incomplete,
such as rules whose body is still placeholder text. Nothing here raises;
the embedding application decides what to do with the issues.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable

from rulesregistry.core import ContentRecord
from .registry import ContentRegistry

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER_MARKERS = ("Write the rule",)

SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')

# Issue codes
EMPTY_CONTENT = "empty-content"
PLACEHOLDER_CONTENT = "placeholder-content"
UNSAFE_SLUG = "unsafe-slug"
UNSECTIONED = "unsectioned"


@dataclass(frozen=True)
class ValidationIssue:
    """A warning about a single record."""
    slug: str
    code: str
    message: str


def is_url_safe_slug(slug: str) -> bool:
    """Check that a slug is lowercase alphanumeric words joined by hyphens."""
    return bool(SLUG_PATTERN.match(slug))


def is_placeholder(content: str, markers: Iterable[str] = DEFAULT_PLACEHOLDER_MARKERS) -> bool:
    """Check whether content consists only of placeholder marker lines.

    List bullets and surrounding whitespace are ignored, and markers are
    compared case-insensitively. Empty content is not a placeholder; it is
    reported separately.

    Args:
        content: Markdown body of a record
        markers: Placeholder lines, e.g. "Write the rule"

    Returns:
        True if every non-blank line is a marker
    """
    folded_markers = {marker.strip().casefold() for marker in markers}
    lines = [line.strip().lstrip("-*+").strip() for line in content.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return False
    return all(line.casefold() in folded_markers for line in lines)


def check_record(
    record: ContentRecord,
    placeholder_markers: Iterable[str] = DEFAULT_PLACEHOLDER_MARKERS,
) -> list[ValidationIssue]:
    """Run the per-record checks."""
    issues = []
    if not record.content.strip():
        issues.append(ValidationIssue(record.slug, EMPTY_CONTENT, "content is empty"))
    elif is_placeholder(record.content, placeholder_markers):
        issues.append(ValidationIssue(record.slug, PLACEHOLDER_CONTENT, "content is placeholder text"))

    if not is_url_safe_slug(record.slug):
        issues.append(ValidationIssue(
            record.slug, UNSAFE_SLUG, "slug is not lowercase and hyphen-separated"
        ))
    return issues


def validate_registry(
    registry: ContentRegistry,
    placeholder_markers: Iterable[str] = DEFAULT_PLACEHOLDER_MARKERS,
) -> list[ValidationIssue]:
    """Collect warnings for every record in the registry.

    Each issue is also logged at WARNING level.

    Args:
        registry: A built registry
        placeholder_markers: Lines that mark a rule body as unwritten

    Returns:
        Issues in record insertion order
    """
    markers = tuple(placeholder_markers)
    has_sections = bool(registry.list_sections())

    issues = []
    for record in registry.records():
        issues.extend(check_record(record, markers))
        if has_sections and not registry.sections_for(record.slug):
            issues.append(ValidationIssue(record.slug, UNSECTIONED, "record belongs to no section"))

    for issue in issues:
        logger.warning(f"{issue.slug}: {issue.message} ({issue.code})")
    return issues
