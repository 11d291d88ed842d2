#!/usr/bin/env python3
from __future__ import annotations

from typing import Any

from key_tree import TITLE_KEY, VALUE_KEY, to_flattened_namespaced_hash
from translation_errors import MismatchedPathError

PACKAGE_PATH = "app.package"

# Order matters: backslashes first so later escapes are not doubled.
SPECIAL_CHARACTER_ESCAPES = [
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t")
]


def escape_special_characters(value: str) -> str:
    """Escape ``value`` for a double-quoted YAML scalar."""
    for raw, escaped in SPECIAL_CHARACTER_ESCAPES:
        value = value.replace(raw, escaped)
    return value


def describe_paths(paths: set[str]) -> str:
    return ", ".join(sorted(paths))


def pair(
    titles_tree: dict[str, Any],
    values_tree: dict[str, Any],
    escape: bool = True
) -> dict[str, dict[str, str]]:
    """Build ``{path: {"title": ..., "value": ...}}`` for every title path.

    ``app.package`` is metadata and never paired. Paths found in only one of
    the two trees raise ``MismatchedPathError``. ``escape`` quote-escapes
    values for the YAML export and should be off for JSON output.
    """
    titles = to_flattened_namespaced_hash(titles_tree, TITLE_KEY)
    values = to_flattened_namespaced_hash(values_tree, VALUE_KEY)
    titles.pop(PACKAGE_PATH, None)
    values.pop(PACKAGE_PATH, None)

    missing_values = set(titles) - set(values)
    missing_titles = set(values) - set(titles)
    if missing_values or missing_titles:
        details: list[str] = []
        if missing_values:
            details.append(f"no value for {describe_paths(missing_values)}")
        if missing_titles:
            details.append(f"no title for {describe_paths(missing_titles)}")
        raise MismatchedPathError("title and value trees differ: " + "; ".join(details))

    records: dict[str, dict[str, str]] = {}
    for path, title in titles.items():
        value = str(values[path])
        records[path] = {
            "title": title,
            "value": escape_special_characters(value) if escape else value
        }
    return records


def pair_translation_tree(tree: dict[str, Any], escape: bool = True) -> dict[str, dict[str, str]]:
    return pair(tree, tree, escape=escape)
