"""Pydantic models for the web API."""

from pydantic import BaseModel, Field

from rulesregistry.core import Author, ContentRecord, ContentSection
from rulesregistry.registry import ValidationIssue


class AuthorModel(BaseModel):
    """Rule author attribution."""

    name: str
    url: str | None = None
    avatar: str | None = None

    @classmethod
    def from_author(cls, author: Author | None) -> "AuthorModel | None":
        if author is None:
            return None
        return cls(name=author.name, url=author.url, avatar=author.avatar)


class RuleSummary(BaseModel):
    """A rule without its body, for listings and search results."""

    slug: str
    title: str
    tags: list[str] = Field(default_factory=list)
    libs: list[str] = Field(default_factory=list)
    author: AuthorModel | None = None

    @classmethod
    def from_record(cls, record: ContentRecord) -> "RuleSummary":
        return cls(
            slug=record.slug,
            title=record.title,
            tags=list(record.tags),
            libs=list(record.libs),
            author=AuthorModel.from_author(record.author),
        )


class RuleDetail(RuleSummary):
    """A full rule including its markdown body."""

    content: str
    sections: list[str] = Field(default_factory=list, description="Tags of sections containing the rule")


class SectionModel(BaseModel):
    """A section and the rules it groups, in order."""

    tag: str
    rules: list[RuleSummary]

    @classmethod
    def from_section(cls, section: ContentSection) -> "SectionModel":
        return cls(tag=section.tag, rules=[RuleSummary.from_record(r) for r in section.rules])


class RuleListResponse(BaseModel):
    """Rules filtered by tag."""

    tag: str
    rules: list[RuleSummary]


class SearchResponse(BaseModel):
    """Ranked search results."""

    query: str
    results: list[RuleSummary]


class ValidationIssueModel(BaseModel):
    """A non-fatal warning about a rule."""

    slug: str
    code: str
    message: str

    @classmethod
    def from_issue(cls, issue: ValidationIssue) -> "ValidationIssueModel":
        return cls(slug=issue.slug, code=issue.code, message=issue.message)


class ValidationResponse(BaseModel):
    """All validation warnings for the live registry."""

    issue_count: int
    issues: list[ValidationIssueModel]


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = "ok"
    version: str = "0.1.0"


class StatsResponse(BaseModel):
    """Response for stats endpoint."""

    record_count: int
    tag_count: int
    section_count: int


class ReloadResponse(BaseModel):
    """Result of rebuilding the registry from its sources."""

    status: str = "reloaded"
    stats: StatsResponse
