#!/usr/bin/env python3
from __future__ import annotations

import json
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from locale_merge import LocalePayload
from translation_errors import AuthenticationError, RemoteFetchError, TranslationError

LOCALE_ENDPOINT = "https://support.zendesk.com/api/v2/locales/agent.json"
LOCALE_ENDPOINT_ENV = "APP_TRANSLATE_LOCALE_ENDPOINT"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_MAX_WORKERS = 8


def resolve_endpoint(override: str | None = None) -> str:
    return override or os.getenv(LOCALE_ENDPOINT_ENV) or LOCALE_ENDPOINT


def fetch_json(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
    request = Request(url, headers={"Accept": "application/json"})
    try:
        with urlopen(request, timeout=timeout) as response:
            payload = response.read().decode("utf-8")
    except HTTPError as exc:
        if exc.code == 401:
            raise AuthenticationError("Authentication failed") from exc
        raise RemoteFetchError(f"request to {url} failed with status {exc.code}") from exc
    except URLError as exc:
        raise RemoteFetchError(f"request to {url} failed: {exc.reason}") from exc

    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise RemoteFetchError(f"response from {url} is not valid JSON: {exc}") from exc


def fetch_locale_list(endpoint: str) -> list[dict[str, Any]]:
    data = fetch_json(endpoint)
    locales = data.get("locales") if isinstance(data, dict) else None
    if not isinstance(locales, list):
        raise RemoteFetchError(f"response from {endpoint} must contain a locales array")
    return [entry for entry in locales if isinstance(entry, dict)]


def build_locale_url(url: str, package: str) -> str:
    query = urlencode({"include": "translations", "packages": f"app_{package}"})
    return f"{url}?{query}"


def fetch_locale(entry: dict[str, Any], package: str) -> LocalePayload:
    print(f"Fetching {entry.get('locale')}")
    url = entry.get("url")
    if not isinstance(url, str) or not url:
        raise RemoteFetchError(f"locale {entry.get('locale')} has no url")
    data = fetch_json(build_locale_url(url, package))
    if not isinstance(data, dict):
        raise RemoteFetchError(f"response for locale {entry.get('locale')} must be an object")
    return LocalePayload.from_response(data.get("locale"))


def fetch_all_locales(
    entries: list[dict[str, Any]],
    package: str,
    max_workers: int = DEFAULT_MAX_WORKERS,
    fetch: Callable[[dict[str, Any], str], LocalePayload] = fetch_locale
) -> tuple[list[LocalePayload], list[tuple[str, str]]]:
    """Fetch every locale in parallel.

    A locale that fails, including on a 401, is reported in the second list
    and does not stop the others.
    """
    payloads: list[LocalePayload] = []
    failures: list[tuple[str, str]] = []
    if not entries:
        return payloads, failures

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(entries)))) as executor:
        futures = [(entry, executor.submit(fetch, entry, package)) for entry in entries]
        for entry, future in futures:
            locale = str(entry.get("locale") or "unknown")
            try:
                payloads.append(future.result())
            except TranslationError as exc:
                failures.append((locale, str(exc)))
    return payloads, failures
