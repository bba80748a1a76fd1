"""Loading raw definitions from data files."""

from .loader import (
    build_registry,
    load_markdown_rule,
    load_sources,
    load_yaml_source,
    split_front_matter,
)

__all__ = [
    "build_registry",
    "load_markdown_rule",
    "load_sources",
    "load_yaml_source",
    "split_front_matter",
]
