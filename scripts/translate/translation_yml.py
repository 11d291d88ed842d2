#!/usr/bin/env python3
from __future__ import annotations

from typing import Any

import yaml

import key_namespace
from key_tree import unflatten
from title_value import PACKAGE_PATH, escape_special_characters
from translation_errors import TranslationFormatError

DEFAULT_PACKAGE = "default"


def quoted(value: str) -> str:
    return f'"{value}"'


def render_translation_yml(
    app_name: str,
    package: str,
    translations: dict[str, dict[str, str]]
) -> str:
    """Render the platform upload document for ``translations``.

    Values are expected to be escaped already (see ``title_value.pair``);
    the app name and titles are escaped here.
    """
    lines = [
        f"title: {quoted(escape_special_characters(app_name))}",
        "packages:",
        f"  - {DEFAULT_PACKAGE}",
        f"  - app_{package}",
        "",
        "parts:"
    ]
    for flat_key, record in translations.items():
        lines.extend(
            [
                "  - translation:",
                f"      key: {quoted(key_namespace.apply(flat_key, package))}",
                f"      title: {quoted(escape_special_characters(str(record['title'])))}",
                f"      value: {quoted(record['value'])}"
            ]
        )
    return "\n".join(lines) + "\n"


def parse_translation_yml(text: str) -> list[dict[str, str]]:
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise TranslationFormatError(f"translation yml is not valid YAML: {exc}") from exc

    if not isinstance(document, dict):
        raise TranslationFormatError("translation yml must be a mapping")
    parts = document.get("parts")
    if not isinstance(parts, list) or not parts:
        raise TranslationFormatError("translation yml must contain a non-empty parts list")

    translations: list[dict[str, str]] = []
    for index, part in enumerate(parts):
        translation = part.get("translation") if isinstance(part, dict) else None
        if not isinstance(translation, dict):
            raise TranslationFormatError(f"parts[{index}].translation must be a mapping")
        for field in ["key", "title", "value"]:
            if not isinstance(translation.get(field), str):
                raise TranslationFormatError(
                    f"parts[{index}].translation.{field} must be a string"
                )
        translations.append(
            {
                "key": translation["key"],
                "title": translation["title"],
                "value": translation["value"]
            }
        )
    return translations


def yml_to_tree(translations: list[dict[str, str]]) -> dict[str, Any]:
    package = key_namespace.find_package(translation["key"] for translation in translations)
    prefix = key_namespace.build_prefix(package)

    flat: dict[str, Any] = {}
    for translation in translations:
        if not translation["key"].startswith(prefix):
            continue
        flat[key_namespace.strip(translation["key"], prefix)] = {
            "title": translation["title"],
            "value": translation["value"]
        }
    flat[PACKAGE_PATH] = package
    return unflatten(flat)
