#!/usr/bin/env python3
from __future__ import annotations

from typing import Any

from translation_errors import ConflictingKeyError

PATH_SEPARATOR = "."
TITLE_KEY = "title"
VALUE_KEY = "value"
TRANSLATION_KEYS = {TITLE_KEY, VALUE_KEY}


def join_path(prefix: str | None, key: str) -> str:
    return f"{prefix}{PATH_SEPARATOR}{key}" if prefix else key


def split_path(flat_key: str) -> list[str]:
    parts = flat_key.split(PATH_SEPARATOR)
    if any(not part for part in parts):
        raise ConflictingKeyError(f"malformed key {flat_key!r}: empty path segment")
    return parts


def is_translation_record(value: object) -> bool:
    return isinstance(value, dict) and set(value.keys()) == TRANSLATION_KEYS


def _store(result: dict[str, Any], flat_key: str, value: Any) -> None:
    if flat_key in result:
        raise ConflictingKeyError(f"key {flat_key} is defined more than once")
    result[flat_key] = value


def _walk(
    tree: dict[str, Any],
    prefix: str | None,
    namespace: str | None,
    result: dict[str, Any]
) -> None:
    for key, value in tree.items():
        path = join_path(prefix, key)
        if isinstance(value, dict):
            if namespace and is_translation_record(value):
                _store(result, path, value[namespace])
            else:
                _walk(value, path, namespace, result)
        else:
            _store(result, path, value)


def flatten(tree: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    _walk(tree, None, None, result)
    return result


def to_flattened_namespaced_hash(tree: dict[str, Any], namespace: str) -> dict[str, Any]:
    """Flatten ``tree``, collapsing every ``{title, value}`` record to its
    ``namespace`` half. Plain leaves are kept as they are."""
    result: dict[str, Any] = {}
    _walk(tree, None, namespace, result)
    return result


def unflatten(flat: dict[str, Any]) -> dict[str, Any]:
    root: dict[str, Any] = {}
    # Leaf dicts (title/value records) must never be walked into, so node
    # ownership is tracked by path rather than by value type.
    branches: set[str] = set()
    leaves: set[str] = set()

    for flat_key, value in flat.items():
        parts = split_path(flat_key)
        node = root
        path: str | None = None
        for part in parts[:-1]:
            path = join_path(path, part)
            if path in leaves:
                raise ConflictingKeyError(
                    f"key {flat_key} conflicts with leaf {path}"
                )
            if path not in branches:
                branches.add(path)
                node[part] = {}
            node = node[part]

        if flat_key in branches:
            raise ConflictingKeyError(
                f"key {flat_key} is both a leaf and a parent of other keys"
            )
        if flat_key in leaves:
            raise ConflictingKeyError(f"key {flat_key} is defined more than once")
        leaves.add(flat_key)
        node[parts[-1]] = value

    return root
