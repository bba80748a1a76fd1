"""Load raw record and section definitions from a data directory.

Two source formats are supported:

- YAML files (``*.yaml`` / ``*.yml``) holding a mapping with optional
  ``rules`` and ``sections`` lists, or a bare list of rules. Section entries
  list slugs under ``rules`` (or ``recordSlugs``); an entry may also be a full
  inline rule, which is added to the record list and referenced by its slug.
- Markdown files (``*.md``) with YAML front matter carrying ``title``,
  ``tags``, ``libs``, ``author`` and optionally ``slug``; the body below the
  front matter is the rule content.

Files are read in sorted path order so registry construction is deterministic.
"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from rulesregistry.core import InvalidRecordError, RawRecord, RawSection, SourceError
from rulesregistry.registry import ContentRegistry

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}
MARKDOWN_SUFFIXES = {".md"}

FRONT_MATTER_PATTERN = re.compile(r'^---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)(.*)$', re.DOTALL)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(path, f"cannot read file: {e}") from e


def _parse_yaml(text: str, path: Path) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SourceError(path, f"invalid YAML: {e}") from e


def _parse_record(data: Any, path: Path) -> RawRecord:
    try:
        return RawRecord.parse(data)
    except InvalidRecordError as e:
        logger.error(f"{path}: {e}")
        raise


def split_front_matter(text: str) -> tuple[str, str] | None:
    """Split markdown into (front matter, body), or None if there is none."""
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return None
    return match.group(1), match.group(2)


def load_markdown_rule(path: Path) -> RawRecord:
    """Load a single rule from a markdown file with YAML front matter.

    Args:
        path: Markdown file path

    Returns:
        Validated raw record; slug defaults to the file stem

    Raises:
        SourceError: If the file has no front matter or it isn't a mapping
        InvalidRecordError: If required fields are missing
    """
    text = _read_text(path)
    parts = split_front_matter(text)
    if parts is None:
        raise SourceError(path, "missing YAML front matter")

    header, body = parts
    meta = _parse_yaml(header, path)
    if not isinstance(meta, dict):
        raise SourceError(path, "front matter must be a mapping")

    data = dict(meta)
    data.setdefault("slug", path.stem)
    data["content"] = body.strip("\n")
    return _parse_record(data, path)


def load_yaml_source(path: Path) -> tuple[list[RawRecord], list[RawSection]]:
    """Load rules and sections from a YAML data file.

    Args:
        path: YAML file path

    Returns:
        Tuple of (records, sections) in file order
    """
    data = _parse_yaml(_read_text(path), path)
    if data is None:
        return [], []
    if isinstance(data, list):
        data = {"rules": data}
    if not isinstance(data, dict):
        raise SourceError(path, "expected a mapping with 'rules' and/or 'sections'")

    rule_entries = data.get("rules") or []
    section_entries = data.get("sections") or []
    if not isinstance(rule_entries, list) or not isinstance(section_entries, list):
        raise SourceError(path, "'rules' and 'sections' must be lists")

    records = [_parse_record(entry, path) for entry in rule_entries]
    sections = []

    for entry in section_entries:
        if not isinstance(entry, dict):
            raise SourceError(path, f"section entry must be a mapping, got {type(entry).__name__}")

        members = entry.get("rules", entry.get("recordSlugs")) or []
        if not isinstance(members, list):
            raise SourceError(path, f"section {entry.get('tag')!r} members must be a list")

        slugs = []
        for member in members:
            if isinstance(member, dict):
                # Inline rule: owned by this file, referenced by slug
                record = _parse_record(member, path)
                records.append(record)
                slugs.append(record.slug)
            else:
                slugs.append(str(member))

        sections.append(RawSection.parse({"tag": entry.get("tag"), "record_slugs": slugs}))

    return records, sections


def load_sources(data_dir: str | Path) -> tuple[list[RawRecord], list[RawSection]]:
    """Load every supported source file under a directory.

    Args:
        data_dir: Directory searched recursively for YAML and markdown files

    Returns:
        Tuple of (records, sections) concatenated in sorted path order

    Raises:
        SourceError: If the directory is missing or a file is malformed
        InvalidRecordError: If a record is missing required fields
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise SourceError(data_dir, "data directory not found")

    records: list[RawRecord] = []
    sections: list[RawSection] = []

    for path in sorted(data_dir.rglob("*")):
        if not path.is_file():
            continue
        suffix = path.suffix.lower()
        if suffix in YAML_SUFFIXES:
            file_records, file_sections = load_yaml_source(path)
            records.extend(file_records)
            sections.extend(file_sections)
            logger.debug(f"Loaded {len(file_records)} rules, {len(file_sections)} sections from {path}")
        elif suffix in MARKDOWN_SUFFIXES:
            records.append(load_markdown_rule(path))
            logger.debug(f"Loaded rule from {path}")

    return records, sections


def build_registry(data_dir: str | Path) -> ContentRegistry:
    """Load sources from a directory and build a registry from them."""
    records, sections = load_sources(data_dir)
    return ContentRegistry(records, sections)
