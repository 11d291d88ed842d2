#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import key_namespace
import locale_merge
import remote_locales
from pseudotranslate import pseudotranslate
from title_value import pair_translation_tree
from translation_errors import MissingConfigError, TranslationError, TranslationFormatError
from translation_yml import parse_translation_yml, render_translation_yml, yml_to_tree

TRANSLATIONS_DIR = "translations"
SOURCE_JSON = "en.json"
SOURCE_YML = "en.yml"
PSEUDO_JSON = "fr.json"
MANIFEST = "manifest.json"


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert app translation files between JSON and the translation platform format."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    to_yml = subparsers.add_parser("to_yml", help="Create the platform translation file from en.json")
    to_yml.add_argument("--app-name", help="App name (default: name from manifest.json)")

    subparsers.add_parser("to_json", help="Convert the platform translation yml to nested JSON")

    update = subparsers.add_parser("update", help="Update translation files from the platform")
    update.add_argument(
        "--package",
        required=True,
        help="Package name for this app, without the app_ prefix"
    )
    update.add_argument(
        "--endpoint",
        help=f"Locale listing URL (default: ${remote_locales.LOCALE_ENDPOINT_ENV} or "
        f"{remote_locales.LOCALE_ENDPOINT})"
    )
    update.add_argument(
        "--max-workers",
        type=int,
        default=remote_locales.DEFAULT_MAX_WORKERS,
        help=f"Parallel locale fetches (default: {remote_locales.DEFAULT_MAX_WORKERS})"
    )

    subparsers.add_parser(
        "pseudotranslate",
        help="Generate a pseudo-translation for testing. It pretends to be French."
    )

    for subparser in subparsers.choices.values():
        subparser.add_argument("--path", type=Path, default=Path("./"), help="App root (default: ./)")

    return parser.parse_args(argv)


def read_json(path: Path) -> Any:
    if not path.exists():
        raise MissingConfigError(f"{path} not found")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise TranslationFormatError(f"{path} is not valid JSON: {exc}") from exc


def write_json(path: Path, tree: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(tree, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    print(f"Wrote {path}")


def read_source_tree(app_root: Path) -> tuple[dict[str, Any], str]:
    source_path = app_root / TRANSLATIONS_DIR / SOURCE_JSON
    tree = read_json(source_path)
    if not isinstance(tree, dict):
        raise TranslationFormatError(f"{source_path} must be a JSON object")

    app = tree.get("app")
    package = app.get("package") if isinstance(app, dict) else None
    if not package:
        raise MissingConfigError(f"No package defined inside {SOURCE_JSON}! Abort.")
    if not key_namespace.is_valid_package_name(package):
        raise MissingConfigError(f"package {package!r} in {SOURCE_JSON} must match ^[a-z_]+$")
    return tree, package


def resolve_app_name(app_root: Path, override: str | None) -> str:
    if override and override.strip():
        return override.strip()
    manifest_path = app_root / MANIFEST
    manifest = read_json(manifest_path) if manifest_path.exists() else None
    name = manifest.get("name") if isinstance(manifest, dict) else None
    if not isinstance(name, str) or not name.strip():
        raise MissingConfigError(f"no app name in {manifest_path}; pass --app-name")
    return name.strip()


def run_to_yml(app_root: Path, app_name: str | None) -> None:
    name = resolve_app_name(app_root, app_name)
    tree, package = read_source_tree(app_root)
    records = pair_translation_tree(tree, escape=True)
    output_path = app_root / TRANSLATIONS_DIR / SOURCE_YML
    output_path.write_text(render_translation_yml(name, package, records), encoding="utf-8")
    print(f"Wrote {output_path}")


def run_to_json(app_root: Path) -> None:
    source_path = app_root / TRANSLATIONS_DIR / SOURCE_YML
    if not source_path.exists():
        raise MissingConfigError(f"{source_path} not found")
    translations = parse_translation_yml(source_path.read_text(encoding="utf-8"))
    write_json(app_root / TRANSLATIONS_DIR / SOURCE_JSON, yml_to_tree(translations))


def run_update(app_root: Path, package: str, endpoint: str | None, max_workers: int) -> list[str]:
    if not key_namespace.is_valid_package_name(package):
        raise MissingConfigError("Invalid package name; use lowercase letters and underscores")

    key_prefix = key_namespace.build_prefix(package)
    print("Fetching translations...")
    entries = remote_locales.fetch_locale_list(remote_locales.resolve_endpoint(endpoint))
    payloads, failures = remote_locales.fetch_all_locales(entries, package, max_workers=max_workers)

    errors = [f"locale {locale}: {message}" for locale, message in failures]
    outputs: dict[Path, dict[str, Any]] = {}
    sources: dict[Path, str] = {}
    for payload in payloads:
        try:
            locale_id = locale_merge.normalize_locale_id(payload.locale)
            output_path = app_root / TRANSLATIONS_DIR / f"{locale_id}.json"
            if output_path in sources:
                errors.append(
                    f"locale {payload.locale}: {locale_id}.json is already written "
                    f"from locale {sources[output_path]}"
                )
                continue
            outputs[output_path] = locale_merge.merge(payload, key_prefix)
            sources[output_path] = payload.locale
        except (TranslationError, ValueError) as exc:
            errors.append(f"locale {payload.locale}: {exc}")

    for path, tree in outputs.items():
        write_json(path, tree)
    if outputs:
        print("Translations updated")
    return errors


def run_pseudotranslate(app_root: Path) -> None:
    tree, package = read_source_tree(app_root)
    write_json(app_root / TRANSLATIONS_DIR / PSEUDO_JSON, pseudotranslate(tree, package))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    app_root: Path = args.path

    if not app_root.is_dir():
        print(f"ERROR: app root not found: {app_root}", file=sys.stderr)
        return 2

    errors: list[str] = []
    try:
        if args.command == "to_yml":
            run_to_yml(app_root, args.app_name)
        elif args.command == "to_json":
            run_to_json(app_root)
        elif args.command == "update":
            errors = run_update(app_root, args.package, args.endpoint, args.max_workers)
        elif args.command == "pseudotranslate":
            run_pseudotranslate(app_root)
    except TranslationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if errors:
        for message in errors:
            print(f"ERROR: {message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
