"""In-memory content registry with slug, tag and section indices."""

import dataclasses
import logging
from typing import Any, Iterable, Iterator, Mapping

from rulesregistry.core import (
    ContentRecord,
    ContentSection,
    DuplicateSectionError,
    DuplicateSlugError,
    RawRecord,
    RawSection,
    UnknownSlugInSectionError,
)
from .search import SearchIndex

logger = logging.getLogger(__name__)

RecordInput = ContentRecord | RawRecord | Mapping[str, Any]
SectionInput = RawSection | Mapping[str, Any]


def _coerce_record(raw: RecordInput) -> ContentRecord:
    """Validate any record input into a well-formed, immutable ContentRecord.

    Ready-made records go through the same checks as raw mappings. The
    supplied instance is kept only when validation leaves it unchanged,
    so list-valued tags or libs are replaced by tuples.
    """
    if not isinstance(raw, ContentRecord):
        return RawRecord.parse(raw).to_record()
    record = RawRecord.parse(dataclasses.asdict(raw)).to_record()
    return raw if record == raw else record


class ContentRegistry:
    """Read-only registry of rule records grouped into sections.

    All indices are built in the constructor. Construction either succeeds
    completely or raises a RegistryError; there is no way to observe a
    partially built registry and no method mutates one after it exists.
    To pick up changed content, build a new registry and swap references.
    """

    def __init__(
        self,
        records: Iterable[RecordInput],
        sections: Iterable[SectionInput] = (),
    ):
        """Validate input and build all indices.

        Args:
            records: Ordered raw record definitions (mappings, RawRecord or
                ready-made ContentRecord instances)
            sections: Ordered section definitions referencing record slugs

        Raises:
            InvalidRecordError: A record or section is missing required fields
            DuplicateSlugError: Two records share a slug
            DuplicateSectionError: Two sections share a tag
            UnknownSlugInSectionError: A section references an undefined slug
        """
        ordered: list[ContentRecord] = []
        by_slug: dict[str, ContentRecord] = {}
        by_tag: dict[str, list[ContentRecord]] = {}

        for raw in records:
            record = _coerce_record(raw)
            if record.slug in by_slug:
                raise DuplicateSlugError(record.slug)
            by_slug[record.slug] = record
            ordered.append(record)
            for tag in record.tags:
                by_tag.setdefault(tag, []).append(record)

        built_sections: dict[str, ContentSection] = {}
        sections_by_slug: dict[str, list[str]] = {}

        for raw in sections:
            section_def = RawSection.parse(raw)
            if section_def.tag in built_sections:
                raise DuplicateSectionError(section_def.tag)
            for slug in section_def.record_slugs:
                if slug not in by_slug:
                    raise UnknownSlugInSectionError(section_def.tag, slug)
            slugs = tuple(section_def.record_slugs)
            built_sections[section_def.tag] = ContentSection(
                tag=section_def.tag,
                slugs=slugs,
                rules=tuple(by_slug[slug] for slug in slugs),
            )
            for slug in dict.fromkeys(slugs):
                sections_by_slug.setdefault(slug, []).append(section_def.tag)

        # Everything validated; publish the indices
        self._records = tuple(ordered)
        self._by_slug = by_slug
        self._by_tag = {tag: tuple(recs) for tag, recs in by_tag.items()}
        self._sections = tuple(built_sections.values())
        self._sections_by_tag = built_sections
        self._sections_by_slug = {slug: tuple(tags) for slug, tags in sections_by_slug.items()}
        self._search_index = SearchIndex(self._records)

        logger.info(
            f"Built registry with {len(self._records)} records, "
            f"{len(self._by_tag)} tags, {len(self._sections)} sections"
        )

    def get_by_slug(self, slug: str) -> ContentRecord | None:
        """Look up a record by its exact slug.

        Returns:
            The record, or None if no record has that slug
        """
        return self._by_slug.get(slug)

    def list_by_tag(self, tag: str) -> tuple[ContentRecord, ...]:
        """All records carrying the tag, in insertion order.

        Tag matching is exact. An unknown tag yields an empty tuple.
        """
        return self._by_tag.get(tag, ())

    def list_sections(self) -> tuple[ContentSection, ...]:
        """All sections in definition order."""
        return self._sections

    def get_section(self, tag: str) -> ContentSection | None:
        """Look up a section by its tag."""
        return self._sections_by_tag.get(tag)

    def sections_for(self, slug: str) -> tuple[str, ...]:
        """Tags of the sections that include the record with this slug."""
        return self._sections_by_slug.get(slug, ())

    def search(self, query: str) -> tuple[ContentRecord, ...]:
        """Ranked case-insensitive substring search over titles and tags.

        Ranking: exact title, then title prefix, then exact tag, then any
        other substring hit in the title or a tag. Ties keep insertion order.
        """
        return self._search_index.search(query)

    def records(self) -> tuple[ContentRecord, ...]:
        """All records in insertion order."""
        return self._records

    def tags(self) -> tuple[str, ...]:
        """Every distinct tag, in first-seen order."""
        return tuple(self._by_tag)

    def stats(self) -> dict:
        """Return registry counts for reporting."""
        return {
            "record_count": len(self._records),
            "tag_count": len(self._by_tag),
            "section_count": len(self._sections),
        }

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, slug: object) -> bool:
        return slug in self._by_slug

    def __iter__(self) -> Iterator[ContentRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"ContentRegistry(records={len(self._records)}, sections={len(self._sections)})"
