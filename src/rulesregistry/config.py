"""Configuration loading: YAML file plus environment overrides."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

from rulesregistry.registry import DEFAULT_PLACEHOLDER_MARKERS

# Default paths relative to project root
PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "registry_config.yaml"
DEFAULT_DATA_DIR = PROJECT_ROOT / "data" / "rules"

# Environment variables
ENV_CONFIG = "RULES_REGISTRY_CONFIG"
ENV_DATA_DIR = "RULES_REGISTRY_DATA_DIR"
ENV_LOG_LEVEL = "RULES_REGISTRY_LOG_LEVEL"

DEFAULTS = {
    "data_dir": str(DEFAULT_DATA_DIR),
    "log_level": "WARNING",
    "placeholder_markers": list(DEFAULT_PLACEHOLDER_MARKERS),
}


def load_config(config_path: Path | None = None) -> dict:
    """Load configuration from YAML file, then apply environment overrides.

    A missing default config file is not an error; the built-in defaults
    are used. An explicitly requested file that doesn't exist is.

    A relative data_dir in a file inside a config/ directory resolves
    against the directory above it (the project root); in any other file it
    resolves against the file's own directory.

    Args:
        config_path: Path to config file. Defaults to $RULES_REGISTRY_CONFIG,
            then config/registry_config.yaml

    Returns:
        Configuration dictionary with data_dir resolved to a Path
    """
    load_dotenv()

    explicit = config_path or os.environ.get(ENV_CONFIG)
    path = Path(explicit) if explicit else DEFAULT_CONFIG_PATH
    if explicit and not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    config = dict(DEFAULTS)
    if path.exists():
        with open(path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in config file {path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        config.update({k: v for k, v in loaded.items() if v is not None})
        base_dir = path.parent.parent if path.parent.name == "config" else path.parent
    else:
        base_dir = PROJECT_ROOT

    if os.environ.get(ENV_DATA_DIR):
        config["data_dir"] = os.environ[ENV_DATA_DIR]
        base_dir = Path.cwd()
    if os.environ.get(ENV_LOG_LEVEL):
        config["log_level"] = os.environ[ENV_LOG_LEVEL]

    # Relative data paths in the config file resolve against base_dir
    data_dir = Path(config["data_dir"])
    config["data_dir"] = data_dir if data_dir.is_absolute() else base_dir / data_dir
    config["log_level"] = str(config["log_level"]).upper()
    config["placeholder_markers"] = tuple(config["placeholder_markers"] or ())
    return config
