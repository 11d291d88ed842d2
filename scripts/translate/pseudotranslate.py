#!/usr/bin/env python3
from __future__ import annotations

from typing import Any

import key_namespace
from key_tree import unflatten
from title_value import PACKAGE_PATH, pair, pair_translation_tree

PSEUDO_PREFIX = "[日本"
PSEUDO_SUFFIX = "éñđ]"


def decorate(value: str) -> str:
    return f"{PSEUDO_PREFIX}{value}{PSEUDO_SUFFIX}"


def pseudotranslate(
    tree: dict[str, Any],
    package_name: str,
    values_tree: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Decorate every value of ``tree``. Titles come from ``tree``; values come
    from ``values_tree`` when given, otherwise from ``tree`` itself."""
    if values_tree is None:
        records = pair_translation_tree(tree, escape=False)
    else:
        records = pair(tree, values_tree, escape=False)
    translations: dict[str, Any] = {
        path: {"title": record["title"], "value": decorate(record["value"])}
        for path, record in records.items()
    }
    # the package name is metadata, not display text
    translations[PACKAGE_PATH] = package_name
    return unflatten(
        {key_namespace.strip(path, ""): value for path, value in translations.items()}
    )
