"""Immutable record and section types held by the registry."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Author:
    """Attribution for a rule."""
    name: str
    url: str | None = None
    avatar: str | None = None


@dataclass(frozen=True)
class ContentRecord:
    """A single rule document."""
    slug: str
    title: str
    content: str
    tags: tuple[str, ...] = ()
    libs: tuple[str, ...] = ()
    author: Author | None = None

    def __repr__(self) -> str:
        content_preview = self.content[:100] + "..." if len(self.content) > 100 else self.content
        return f"ContentRecord(slug={self.slug!r}, title={self.title!r}, content={content_preview!r})"


@dataclass(frozen=True)
class ContentSection:
    """A named, ordered grouping of records.

    Sections hold records by slug; ``rules`` are the records resolved through
    the registry's primary index at construction time, so a section never
    carries its own divergent copy of a record.
    """
    tag: str
    slugs: tuple[str, ...]
    rules: tuple[ContentRecord, ...] = field(default=(), compare=False, repr=False)

    def __len__(self) -> int:
        return len(self.slugs)

    def __contains__(self, slug: object) -> bool:
        return slug in self.slugs
