"""Web API for the rules registry."""

from rulesregistry.web.app import app, create_app
from rulesregistry.web.models import (
    HealthResponse,
    RuleDetail,
    RuleSummary,
    SearchResponse,
    SectionModel,
    StatsResponse,
)

__all__ = [
    "app",
    "create_app",
    "HealthResponse",
    "RuleDetail",
    "RuleSummary",
    "SearchResponse",
    "SectionModel",
    "StatsResponse",
]
