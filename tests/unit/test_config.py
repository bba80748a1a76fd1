"""Unit tests for configuration loading."""

import pytest

from rulesregistry.config import (
    DEFAULT_DATA_DIR,
    ENV_CONFIG,
    ENV_DATA_DIR,
    ENV_LOG_LEVEL,
    load_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment variables out of these tests."""
    for name in (ENV_CONFIG, ENV_DATA_DIR, ENV_LOG_LEVEL):
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_project_defaults(self):
        config = load_config()
        assert config["data_dir"] == DEFAULT_DATA_DIR
        assert config["log_level"] == "WARNING"
        assert config["placeholder_markers"] == ("Write the rule",)

    def test_explicit_file(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        path = config_dir / "registry_config.yaml"
        path.write_text(
            "data_dir: content\nlog_level: debug\nplaceholder_markers: [TODO, TBD]\n",
            encoding="utf-8",
        )
        config = load_config(path)
        # Relative data_dir resolves against the directory above config/
        assert config["data_dir"] == tmp_path / "content"
        assert config["log_level"] == "DEBUG"
        assert config["placeholder_markers"] == ("TODO", "TBD")

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv(ENV_DATA_DIR, str(tmp_path))
        monkeypatch.setenv(ENV_LOG_LEVEL, "info")
        config = load_config()
        assert config["data_dir"] == tmp_path
        assert config["log_level"] == "INFO"

    def test_config_path_from_environment(self, monkeypatch, tmp_path):
        path = tmp_path / "alt.yaml"
        path.write_text(f"data_dir: {tmp_path / 'rules'}\n", encoding="utf-8")
        monkeypatch.setenv(ENV_CONFIG, str(path))
        config = load_config()
        assert config["data_dir"] == tmp_path / "rules"

    def test_relative_data_dir_outside_config_directory(self, tmp_path):
        """A standalone config file resolves data_dir against its own directory."""
        project = tmp_path / "site"
        project.mkdir()
        path = project / "registry.yaml"
        path.write_text("data_dir: rules\n", encoding="utf-8")
        config = load_config(path)
        assert config["data_dir"] == project / "rules"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("data_dir: [rules\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)
