#!/usr/bin/env python3
"""CLI for querying and validating the rules registry."""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from rulesregistry.config import load_config
from rulesregistry.core import ContentRecord, RegistryError
from rulesregistry.loading import build_registry
from rulesregistry.registry import validate_registry

load_dotenv()


def record_to_dict(record: ContentRecord, include_content: bool = False) -> dict:
    """Convert a record to a JSON-serializable dict."""
    data = {
        "slug": record.slug,
        "title": record.title,
        "tags": list(record.tags),
        "libs": list(record.libs),
        "author": None,
    }
    if record.author:
        data["author"] = {
            "name": record.author.name,
            "url": record.author.url,
            "avatar": record.author.avatar,
        }
    if include_content:
        data["content"] = record.content
    return data


def print_records(records, as_json: bool) -> None:
    if as_json:
        print(json.dumps([record_to_dict(r) for r in records], indent=2))
        return
    if not records:
        print("No matching rules.")
        return
    for i, record in enumerate(records, 1):
        tags = ", ".join(record.tags) or "-"
        print(f"{i}. {record.title} [{record.slug}]")
        print(f"   Tags: {tags}")


def main(argv: list[str] | None = None) -> int:
    """Load the registry and run the requested query."""
    parser = argparse.ArgumentParser(description="Query and validate the rules registry")
    parser.add_argument("--data-dir", type=Path, help="Directory of rule sources (default: from config)")
    parser.add_argument(
        "--config", type=Path,
        help="Path to a config file; a relative data_dir resolves against the file's directory "
             "(or the project root for files inside config/)",
    )
    parser.add_argument("--slug", "-s", type=str, help="Show a single rule by slug")
    parser.add_argument("--tag", "-t", type=str, help="List rules with a tag")
    parser.add_argument("--search", "-q", type=str, help="Search titles and tags")
    parser.add_argument("--results", "-n", type=int, default=None, help="Limit number of search results")
    parser.add_argument("--sections", action="store_true", help="List sections and their rules")
    parser.add_argument("--validate", action="store_true", help="Report incomplete or placeholder rules")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print debug information")

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config["log_level"],
        format="%(levelname)s %(name)s: %(message)s",
    )

    data_dir = args.data_dir or config["data_dir"]
    try:
        registry = build_registry(data_dir)
    except RegistryError as e:
        print(f"Error building registry: {e}", file=sys.stderr)
        return 1

    if args.slug:
        record = registry.get_by_slug(args.slug)
        if record is None:
            print(f"Rule not found: {args.slug}", file=sys.stderr)
            return 1
        if args.json:
            data = record_to_dict(record, include_content=True)
            data["sections"] = list(registry.sections_for(record.slug))
            print(json.dumps(data, indent=2))
        else:
            print(f"{record.title} [{record.slug}]")
            print(f"Tags: {', '.join(record.tags) or '-'}")
            if record.libs:
                print(f"Libs: {', '.join(record.libs)}")
            if record.author:
                print(f"Author: {record.author.name}")
            print()
            print(record.content.strip() or "(no content)")

    if args.tag:
        print_records(registry.list_by_tag(args.tag), args.json)

    if args.search:
        results = registry.search(args.search)
        if args.results:
            results = results[:args.results]
        if not args.json:
            print(f"Query: {args.search}")
            print(f"Found {len(results)} results:\n")
        print_records(results, args.json)

    if args.sections:
        sections = registry.list_sections()
        if args.json:
            print(json.dumps(
                [{"tag": s.tag, "rules": list(s.slugs)} for s in sections],
                indent=2,
            ))
        else:
            for section in sections:
                print(f"{section.tag} ({len(section)} rules)")
                for record in section.rules:
                    print(f"  - {record.title} [{record.slug}]")

    if args.validate:
        issues = validate_registry(registry, config["placeholder_markers"])
        if args.json:
            print(json.dumps(
                [{"slug": i.slug, "code": i.code, "message": i.message} for i in issues],
                indent=2,
            ))
        else:
            print(f"{len(issues)} issues in {len(registry)} rules")
            for issue in issues:
                print(f"  {issue.slug}: {issue.message} ({issue.code})")

    if not any([args.slug, args.tag, args.search, args.sections, args.validate]):
        stats = registry.stats()
        if args.json:
            print(json.dumps(stats, indent=2))
        else:
            print("Registry stats:")
            for key, value in stats.items():
                print(f"  {key}: {value}")

            print("\nExample queries:")
            print('  python -m cli.registry -q "next"')
            print('  python -m cli.registry --tag Typescript')
            print('  python -m cli.registry --validate')

    return 0


if __name__ == "__main__":
    sys.exit(main())
