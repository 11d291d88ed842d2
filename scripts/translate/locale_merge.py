#!/usr/bin/env python3
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import key_namespace
from key_tree import unflatten
from translation_errors import TranslationFormatError

PRIVATE_USE_PATTERN = re.compile(r"-x-.*$")


@dataclass(frozen=True)
class LocalePayload:
    locale: str
    translations: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, data: object) -> "LocalePayload":
        if not isinstance(data, dict):
            raise TranslationFormatError("locale response must be an object")
        locale = data.get("locale")
        if not isinstance(locale, str) or not locale.strip():
            raise TranslationFormatError("locale response is missing locale")
        translations = data.get("translations") or {}
        if not isinstance(translations, dict):
            raise TranslationFormatError(f"translations for {locale} must be an object")
        return cls(locale=locale, translations=dict(translations))


def normalize_locale_id(raw: str) -> str:
    value = (raw or "").strip()
    if not value:
        raise ValueError("locale identifier is required")
    return PRIVATE_USE_PATTERN.sub("", value)


def nest_translations(translations: dict[str, Any], key_prefix: str) -> dict[str, Any]:
    return unflatten(
        {key_namespace.strip(key, key_prefix): value for key, value in translations.items()}
    )


def merge(payload: LocalePayload, package_prefix: str) -> dict[str, Any]:
    return nest_translations(payload.translations, package_prefix)
