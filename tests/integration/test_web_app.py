"""Tests for the FastAPI application.

Run with: pytest tests/integration/test_web_app.py -v
"""

import pytest
from fastapi.testclient import TestClient

from rulesregistry.config import ENV_CONFIG, ENV_DATA_DIR
from rulesregistry.core import DuplicateSlugError
from rulesregistry.registry import ContentRegistry
from rulesregistry.web import create_app

RECORDS = [
    {
        "slug": "shadcn-ui",
        "title": "Shadcn",
        "tags": ["UI", "Components", "Shadcn"],
        "content": "- Write the rule\n- Write the rule\n",
        "author": {"name": "shadcn", "url": "https://x.com/shadcn"},
    },
    {
        "slug": "nextjs",
        "title": "Next.js",
        "tags": ["Next.js", "React", "Typescript"],
        "content": "Prefer server components.",
    },
]
SECTIONS = [{"tag": "Official", "recordSlugs": ["shadcn-ui", "nextjs"]}]


def make_registry() -> ContentRegistry:
    return ContentRegistry(RECORDS, SECTIONS)


@pytest.fixture
def client():
    app = create_app(make_registry)
    with TestClient(app) as client:
        yield client


class TestReadEndpoints:
    """Tests for the read-only query endpoints."""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_stats(self, client):
        response = client.get("/api/stats")
        assert response.json() == {"record_count": 2, "tag_count": 6, "section_count": 1}

    def test_get_rule(self, client):
        response = client.get("/api/rules/shadcn-ui")
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Shadcn"
        assert data["tags"] == ["UI", "Components", "Shadcn"]
        assert data["author"]["url"] == "https://x.com/shadcn"
        assert data["sections"] == ["Official"]
        assert "Write the rule" in data["content"]

    def test_get_rule_not_found(self, client):
        response = client.get("/api/rules/hono")
        assert response.status_code == 404

    def test_rules_by_tag(self, client):
        response = client.get("/api/tags/Typescript/rules")
        assert [r["slug"] for r in response.json()["rules"]] == ["nextjs"]

    def test_rules_by_unknown_tag(self, client):
        response = client.get("/api/tags/Vue/rules")
        assert response.status_code == 200
        assert response.json()["rules"] == []

    def test_sections(self, client):
        response = client.get("/api/sections")
        sections = response.json()
        assert [s["tag"] for s in sections] == ["Official"]
        assert [r["slug"] for r in sections[0]["rules"]] == ["shadcn-ui", "nextjs"]

    def test_search(self, client):
        response = client.get("/api/search", params={"q": "next"})
        data = response.json()
        assert data["query"] == "next"
        assert [r["slug"] for r in data["results"]] == ["nextjs"]

    def test_search_limit(self, client):
        response = client.get("/api/search", params={"q": "s", "limit": 1})
        assert len(response.json()["results"]) == 1

    def test_search_requires_query(self, client):
        response = client.get("/api/search")
        assert response.status_code == 422

    def test_validation(self, client):
        response = client.get("/api/validation")
        data = response.json()
        assert data["issue_count"] == 1
        assert data["issues"][0] == {
            "slug": "shadcn-ui",
            "code": "placeholder-content",
            "message": "content is placeholder text",
        }


class TestReload:
    """Tests for the reload endpoint."""

    def test_reload_swaps_registry(self):
        calls = []

        def factory():
            calls.append(1)
            records = RECORDS if len(calls) == 1 else RECORDS + [
                {"slug": "hono", "title": "Hono", "tags": ["Hono"], "content": "x"},
            ]
            return ContentRegistry(records, SECTIONS)

        with TestClient(create_app(factory)) as client:
            assert client.get("/api/rules/hono").status_code == 404
            response = client.post("/api/reload")
            assert response.status_code == 200
            assert response.json()["stats"]["record_count"] == 3
            assert client.get("/api/rules/hono").status_code == 200

    def test_failed_reload_keeps_registry(self):
        calls = []

        def factory():
            calls.append(1)
            if len(calls) > 1:
                raise DuplicateSlugError("nextjs")
            return make_registry()

        with TestClient(create_app(factory)) as client:
            response = client.post("/api/reload")
            assert response.status_code == 422
            assert "nextjs" in response.json()["detail"]
            assert client.get("/api/rules/nextjs").status_code == 200

    def test_missing_source_returns_422(self):
        """Filesystem errors during reload should not surface as a server error."""
        calls = []

        def factory():
            calls.append(1)
            if len(calls) > 1:
                raise FileNotFoundError("Config file not found: gone.yaml")
            return make_registry()

        with TestClient(create_app(factory, placeholder_markers=["Write the rule"])) as client:
            response = client.post("/api/reload")
            assert response.status_code == 422
            assert "gone.yaml" in response.json()["detail"]
            assert client.get("/api/stats").json()["record_count"] == 2


@pytest.fixture
def configured_project(tmp_path, monkeypatch):
    """A config file outside any config/ directory, with its rules beside it."""
    rules_dir = tmp_path / "rules"
    rules_dir.mkdir()
    (rules_dir / "rules.yaml").write_text(
        "rules:\n"
        "  - {slug: hono, title: Hono, tags: [Hono], content: TODO}\n"
        "  - {slug: nextjs, title: Next.js, content: Prefer server components.}\n",
        encoding="utf-8",
    )
    config_path = tmp_path / "registry.yaml"
    config_path.write_text("data_dir: rules\nplaceholder_markers: [TODO]\n", encoding="utf-8")
    monkeypatch.setenv(ENV_CONFIG, str(config_path))
    monkeypatch.delenv(ENV_DATA_DIR, raising=False)
    return config_path


class TestConfiguredApp:
    """Tests for the default app, which reads registry_config.yaml."""

    def test_validation_uses_configured_markers(self, configured_project):
        with TestClient(create_app()) as client:
            data = client.get("/api/validation").json()
        assert data["issue_count"] == 1
        assert data["issues"][0]["slug"] == "hono"
        assert data["issues"][0]["code"] == "placeholder-content"

    def test_explicit_markers_win_over_config(self, configured_project):
        with TestClient(create_app(placeholder_markers=["Write the rule"])) as client:
            assert client.get("/api/validation").json()["issue_count"] == 0

    def test_broken_config_on_reload_returns_422(self, configured_project):
        with TestClient(create_app()) as client:
            configured_project.write_text("data_dir: [rules\n", encoding="utf-8")
            response = client.post("/api/reload")
            assert response.status_code == 422
            assert "Invalid YAML" in response.json()["detail"]
            assert client.get("/api/rules/hono").status_code == 200

    def test_missing_config_on_reload_returns_422(self, configured_project):
        with TestClient(create_app()) as client:
            configured_project.unlink()
            response = client.post("/api/reload")
            assert response.status_code == 422
            assert "Config file not found" in response.json()["detail"]
            assert client.get("/api/stats").json()["record_count"] == 2
