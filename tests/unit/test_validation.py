"""Unit tests for the non-fatal validation pass."""

import logging

from rulesregistry.registry import (
    ContentRegistry,
    is_placeholder,
    is_url_safe_slug,
    validate_registry,
)


def make_raw(slug: str, content: str = "Real content") -> dict:
    return {"slug": slug, "title": slug.title(), "content": content}


class TestIsPlaceholder:
    """Tests for is_placeholder()."""

    def test_bulleted_markers(self):
        content = "\n        - Write the rule\n        - Write the rule\n      "
        assert is_placeholder(content)

    def test_case_insensitive(self):
        assert is_placeholder("write the RULE")

    def test_mixed_content_is_not_placeholder(self):
        assert not is_placeholder("- Write the rule\n- Prefer server components")

    def test_empty_is_not_placeholder(self):
        assert not is_placeholder("   \n ")

    def test_custom_markers(self):
        assert is_placeholder("* TODO", markers=["TODO"])
        assert not is_placeholder("- Write the rule", markers=["TODO"])


class TestIsUrlSafeSlug:
    """Tests for is_url_safe_slug()."""

    def test_valid_slugs(self):
        assert is_url_safe_slug("shadcn-ui")
        assert is_url_safe_slug("nextjs")
        assert is_url_safe_slug("trigger-dev-typescript")

    def test_invalid_slugs(self):
        assert not is_url_safe_slug("awss3-payload-nextjs-best practices")
        assert not is_url_safe_slug("NextJS")
        assert not is_url_safe_slug("double--hyphen")
        assert not is_url_safe_slug("-leading")


class TestValidateRegistry:
    """Tests for validate_registry()."""

    def test_clean_registry_has_no_issues(self):
        registry = ContentRegistry([make_raw("nextjs")])
        assert validate_registry(registry) == []

    def test_flags_empty_and_placeholder_content(self):
        registry = ContentRegistry([
            make_raw("empty", content="\n   \n"),
            make_raw("placeholder", content="- Write the rule\n- Write the rule"),
            make_raw("done"),
        ])
        issues = validate_registry(registry)
        assert [(i.slug, i.code) for i in issues] == [
            ("empty", "empty-content"),
            ("placeholder", "placeholder-content"),
        ]

    def test_flags_unsafe_slug(self):
        registry = ContentRegistry([make_raw("Best Practices")])
        issues = validate_registry(registry)
        assert [i.code for i in issues] == ["unsafe-slug"]

    def test_unsectioned_only_reported_when_sections_exist(self):
        records = [make_raw("a"), make_raw("b")]
        assert validate_registry(ContentRegistry(records)) == []

        registry = ContentRegistry(records, [{"tag": "Official", "rules": ["a"]}])
        issues = validate_registry(registry)
        assert [(i.slug, i.code) for i in issues] == [("b", "unsectioned")]

    def test_issues_are_logged_as_warnings(self, caplog):
        registry = ContentRegistry([make_raw("empty", content="")])
        with caplog.at_level(logging.WARNING, logger="rulesregistry"):
            validate_registry(registry)
        assert "empty" in caplog.text
        assert "empty-content" in caplog.text
