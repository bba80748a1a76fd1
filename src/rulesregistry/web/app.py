"""FastAPI application exposing the rules registry read-only."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Callable, Iterable

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request

from rulesregistry.config import load_config
from rulesregistry.core import RegistryError
from rulesregistry.loading import build_registry
from rulesregistry.registry import (
    DEFAULT_PLACEHOLDER_MARKERS,
    ContentRegistry,
    RegistryHolder,
    validate_registry,
)
from rulesregistry.web.models import (
    HealthResponse,
    ReloadResponse,
    RuleDetail,
    RuleListResponse,
    RuleSummary,
    SearchResponse,
    SectionModel,
    StatsResponse,
    ValidationIssueModel,
    ValidationResponse,
)

logger = logging.getLogger(__name__)

RegistryFactory = Callable[[], ContentRegistry]

router = APIRouter(prefix="/api")


def load_default_registry() -> ContentRegistry:
    """Build a registry from the configured data directory."""
    config = load_config()
    logging.getLogger("rulesregistry").setLevel(config["log_level"])
    return build_registry(config["data_dir"])


def load_config_markers() -> tuple[str, ...]:
    """Placeholder markers from the configured registry_config.yaml."""
    return load_config()["placeholder_markers"]


def get_registry(request: Request) -> ContentRegistry:
    """Dependency returning the live registry for this request."""
    holder: RegistryHolder | None = getattr(request.app.state, "holder", None)
    if holder is None:
        raise HTTPException(status_code=503, detail="Registry not loaded")
    return holder.current


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse()


@router.get("/stats", response_model=StatsResponse)
async def stats(registry: ContentRegistry = Depends(get_registry)) -> StatsResponse:
    """Get registry counts."""
    return StatsResponse(**registry.stats())


@router.get("/rules/{slug}", response_model=RuleDetail)
async def get_rule(slug: str, registry: ContentRegistry = Depends(get_registry)) -> RuleDetail:
    """Get a single rule by slug."""
    record = registry.get_by_slug(slug)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Rule not found: {slug}")

    summary = RuleSummary.from_record(record)
    return RuleDetail(
        **summary.model_dump(),
        content=record.content,
        sections=list(registry.sections_for(slug)),
    )


@router.get("/tags/{tag}/rules", response_model=RuleListResponse)
async def rules_by_tag(tag: str, registry: ContentRegistry = Depends(get_registry)) -> RuleListResponse:
    """List rules carrying a tag. Unknown tags return an empty list."""
    return RuleListResponse(
        tag=tag,
        rules=[RuleSummary.from_record(r) for r in registry.list_by_tag(tag)],
    )


@router.get("/sections", response_model=list[SectionModel])
async def sections(registry: ContentRegistry = Depends(get_registry)) -> list[SectionModel]:
    """List sections in definition order."""
    return [SectionModel.from_section(s) for s in registry.list_sections()]


@router.get("/search", response_model=SearchResponse)
async def search(
    q: str = Query(..., description="Case-insensitive text matched against titles and tags"),
    limit: int | None = Query(default=None, ge=1, le=100, description="Maximum results"),
    registry: ContentRegistry = Depends(get_registry),
) -> SearchResponse:
    """Search rules by title and tag."""
    results = registry.search(q)
    if limit is not None:
        results = results[:limit]
    return SearchResponse(query=q, results=[RuleSummary.from_record(r) for r in results])


@router.get("/validation", response_model=ValidationResponse)
async def validation(request: Request, registry: ContentRegistry = Depends(get_registry)) -> ValidationResponse:
    """Report placeholder, empty and otherwise incomplete rules."""
    issues = validate_registry(registry, request.app.state.placeholder_markers)
    return ValidationResponse(
        issue_count=len(issues),
        issues=[ValidationIssueModel.from_issue(i) for i in issues],
    )


@router.post("/reload", response_model=ReloadResponse)
async def reload(request: Request) -> ReloadResponse:
    """Rebuild the registry from its sources and swap it in.

    Config-sourced placeholder markers are re-read as well. On failure the
    previous registry and markers stay live.
    """
    holder: RegistryHolder | None = getattr(request.app.state, "holder", None)
    if holder is None:
        raise HTTPException(status_code=503, detail="Registry not loaded")

    state = request.app.state
    loop = asyncio.get_running_loop()
    try:
        registry = await loop.run_in_executor(None, state.registry_factory)
        markers = await loop.run_in_executor(None, state.markers_factory)
    except (RegistryError, OSError, ValueError) as e:
        logger.error(f"Reload failed, keeping current registry: {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e

    holder.swap(registry)
    state.placeholder_markers = tuple(markers)
    return ReloadResponse(stats=StatsResponse(**registry.stats()))


def create_app(
    registry_factory: RegistryFactory | None = None,
    placeholder_markers: Iterable[str] | None = None,
) -> FastAPI:
    """Create the API application.

    Args:
        registry_factory: Builds a registry; called once at startup and again
            on each reload. Defaults to loading the configured data directory.
        placeholder_markers: Lines that mark a rule body as unwritten.
            Defaults to the configured placeholder_markers, read at startup
            and on each reload.

    Returns:
        Configured FastAPI app
    """
    factory = registry_factory or load_default_registry
    fixed_markers = None if placeholder_markers is None else tuple(placeholder_markers)

    def markers_factory() -> tuple[str, ...]:
        return load_config_markers() if fixed_markers is None else fixed_markers

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the registry on startup, drop it on shutdown."""
        app.state.holder = RegistryHolder(factory())
        app.state.placeholder_markers = tuple(markers_factory())
        yield
        app.state.holder = None

    app = FastAPI(
        title="Rules Registry API",
        description="Read-only access to tagged rule documents",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.registry_factory = factory
    app.state.markers_factory = markers_factory
    app.state.placeholder_markers = DEFAULT_PLACEHOLDER_MARKERS
    app.include_router(router)
    return app


app = create_app()
