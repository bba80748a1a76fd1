"""Pydantic models for raw record and section definitions.

Raw definitions come from data files, embedded literals or API payloads and
are loosely shaped: optional keys may be absent or null, an author may be a
bare name, and section membership may be spelled ``recordSlugs`` or ``rules``.
These models are the single place where that input is checked and normalized
before the registry builds its immutable records.
"""

from typing import Any, Mapping

from pydantic import (
    AliasChoices,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from .errors import InvalidRecordError
from .record import Author, ContentRecord

_URL_ADAPTER = TypeAdapter(AnyUrl)


def _dedupe(values: list[str]) -> list[str]:
    """Drop repeated values, keeping the first occurrence."""
    seen: set[str] = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def _format_errors(exc: ValidationError) -> str:
    """Flatten a pydantic error into one readable line."""
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error["loc"]) or "record"
        parts.append(f"{loc}: {error['msg']}")
    return "; ".join(parts)


class RawAuthor(BaseModel):
    """Author attribution as found in source data."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., min_length=1)
    url: str | None = None
    avatar: str | None = None

    @field_validator("url", "avatar")
    @classmethod
    def _check_uri(cls, value: str | None) -> str | None:
        # Validate as a URI but keep the caller's spelling
        if value is None or not value.strip():
            return None
        try:
            _URL_ADAPTER.validate_python(value.strip())
        except ValidationError:
            raise ValueError(f"not a valid URI: {value!r}") from None
        return value.strip()

    def to_author(self) -> Author:
        return Author(name=self.name, url=self.url, avatar=self.avatar)


class RawRecord(BaseModel):
    """A rule definition before it enters the registry."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    slug: str
    title: str
    content: str
    tags: list[str] = Field(default_factory=list)
    libs: list[str] = Field(default_factory=list)
    author: RawAuthor | None = None

    @field_validator("slug", "title")
    @classmethod
    def _require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("content", mode="before")
    @classmethod
    def _null_content(cls, value: Any) -> Any:
        # An explicit null body is an empty rule, not a missing one
        return "" if value is None else value

    @field_validator("tags", "libs", mode="before")
    @classmethod
    def _default_sequence(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("tags")
    @classmethod
    def _unique_tags(cls, value: list[str]) -> list[str]:
        return _dedupe([tag.strip() for tag in value if tag.strip()])

    @field_validator("author", mode="before")
    @classmethod
    def _author_from_name(cls, value: Any) -> Any:
        # Standalone rule documents attribute the author by name only
        if isinstance(value, str):
            return {"name": value} if value.strip() else None
        return value

    @classmethod
    def parse(cls, data: "RawRecord | Mapping[str, Any]") -> "RawRecord":
        """Validate a raw mapping, raising InvalidRecordError on failure."""
        if isinstance(data, RawRecord):
            return data
        if not isinstance(data, Mapping):
            raise InvalidRecordError(None, f"expected a mapping, got {type(data).__name__}")
        slug = data.get("slug")
        slug = slug if isinstance(slug, str) and slug.strip() else None
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise InvalidRecordError(slug, _format_errors(e)) from e

    def to_record(self) -> ContentRecord:
        return ContentRecord(
            slug=self.slug,
            title=self.title,
            content=self.content,
            tags=tuple(self.tags),
            libs=tuple(self.libs),
            author=self.author.to_author() if self.author else None,
        )


class RawSection(BaseModel):
    """A section definition: a tag plus the slugs it groups."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    tag: str = Field(..., min_length=1)
    record_slugs: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("record_slugs", "recordSlugs", "rules"),
    )

    @field_validator("record_slugs", mode="before")
    @classmethod
    def _default_slugs(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def parse(cls, data: "RawSection | Mapping[str, Any]") -> "RawSection":
        """Validate a raw section mapping, raising InvalidRecordError on failure."""
        if isinstance(data, RawSection):
            return data
        if not isinstance(data, Mapping):
            raise InvalidRecordError(None, f"expected a section mapping, got {type(data).__name__}")
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise InvalidRecordError(None, f"section {data.get('tag')!r}: {_format_errors(e)}") from e
