#!/usr/bin/env python3
from __future__ import annotations

import re
from typing import Iterable

from key_tree import PATH_SEPARATOR
from translation_errors import MissingPackageError

NAMESPACE_SEGMENTS = ("txt", "apps")
PACKAGE_NAME_PATTERN = re.compile(r"^[a-z_]+$")


def is_valid_package_name(value: object) -> bool:
    return isinstance(value, str) and bool(PACKAGE_NAME_PATTERN.match(value))


def build_prefix(package: str) -> str:
    return PATH_SEPARATOR.join([*NAMESPACE_SEGMENTS, package]) + PATH_SEPARATOR


def strip(flat_key: str, prefix: str) -> str:
    # Anchored: a prefix that only occurs later in the key is left alone.
    if prefix and flat_key.startswith(prefix):
        return flat_key[len(prefix):]
    return flat_key


def apply(flat_key: str, package: str) -> str:
    return build_prefix(package) + flat_key


def extract_package(flat_key: str) -> str:
    parts = flat_key.split(PATH_SEPARATOR)
    if len(parts) < 3 or tuple(parts[:2]) != NAMESPACE_SEGMENTS or not parts[2]:
        raise MissingPackageError(f"no app package found in key {flat_key!r}")
    return parts[2]


def find_package(flat_keys: Iterable[str]) -> str:
    for flat_key in flat_keys:
        try:
            return extract_package(flat_key)
        except MissingPackageError:
            continue
    raise MissingPackageError("no key in the translation set names an app package")
