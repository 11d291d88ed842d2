import sys
import unittest
from pathlib import Path

TRANSLATE_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(TRANSLATE_DIR))

import key_tree
import locale_merge
import pseudotranslate
import title_value
import translation_yml
from translation_errors import MismatchedPathError, MissingPackageError, TranslationFormatError

EN_TREE = {
    "app": {
        "package": "weather",
        "name": {"title": "App name", "value": "Weather App"},
        "description": {"title": "Short description", "value": 'The "best" forecast'}
    },
    "settings": {
        "units": {"title": "Units setting", "value": "Units: °C"}
    }
}


class TitleValuePairerTest(unittest.TestCase):
    def test_pairs_parallel_trees_without_package(self) -> None:
        titles = {"app": {"package": "weather", "name": "Weather App"}}
        values = {"app": {"package": "weather", "name": "Shows the local forecast"}}
        self.assertEqual(
            title_value.pair(titles, values),
            {"app.name": {"title": "Weather App", "value": "Shows the local forecast"}}
        )

    def test_escapes_backslashes_before_quotes(self) -> None:
        self.assertEqual(
            title_value.escape_special_characters('C:\\temp "x"'),
            'C:\\\\temp \\"x\\"'
        )
        self.assertEqual(title_value.escape_special_characters("a\nb\tc"), "a\\nb\\tc")

    def test_escapes_quotes_in_values_only(self) -> None:
        records = title_value.pair_translation_tree(
            {"greeting": {"title": 'Say "hi"', "value": 'Say "hi"'}}
        )
        self.assertEqual(records["greeting"]["title"], 'Say "hi"')
        self.assertEqual(records["greeting"]["value"], 'Say \\"hi\\"')

    def test_escape_can_be_disabled(self) -> None:
        records = title_value.pair_translation_tree(EN_TREE, escape=False)
        self.assertEqual(records["app.description"]["value"], 'The "best" forecast')

    def test_mismatched_paths_fail_fast(self) -> None:
        with self.assertRaises(MismatchedPathError) as ctx:
            title_value.pair({"a": "x", "b": "y"}, {"a": "x", "c": "z"})
        self.assertIn("no value for b", str(ctx.exception))
        self.assertIn("no title for c", str(ctx.exception))


class PseudoTranslatorTest(unittest.TestCase):
    def test_parallel_plain_leaf_trees(self) -> None:
        titles = {"app": {"package": "weather", "name": "Weather App"}}
        values = {"app": {"package": "weather", "name": "Shows the local forecast"}}
        self.assertEqual(
            pseudotranslate.pseudotranslate(titles, "weather", values),
            {
                "app": {
                    "name": {
                        "title": "Weather App",
                        "value": "[日本Shows the local forecastéñđ]"
                    },
                    "package": "weather"
                }
            }
        )

    def test_end_to_end_scenario(self) -> None:
        tree = {
            "app": {
                "package": "weather",
                "name": {"title": "Weather App", "value": "Shows the local forecast"}
            }
        }
        self.assertEqual(
            pseudotranslate.pseudotranslate(tree, "weather"),
            {
                "app": {
                    "name": {
                        "title": "Weather App",
                        "value": "[日本Shows the local forecastéñđ]"
                    },
                    "package": "weather"
                }
            }
        )

    def test_preserves_structure_and_titles(self) -> None:
        result = pseudotranslate.pseudotranslate(EN_TREE, "weather")
        source = key_tree.flatten(EN_TREE)
        output = key_tree.flatten(result)
        self.assertEqual(set(output), set(source))
        self.assertEqual(output["app.package"], "weather")

        for path, original in source.items():
            if path == "app.package":
                continue
            if path.endswith(".title"):
                self.assertEqual(output[path], original)
            else:
                self.assertNotEqual(output[path], original)
                self.assertIn(original, output[path])

    def test_package_leaf_is_added_when_missing(self) -> None:
        tree = {"about": {"title": "About", "value": "About us"}}
        result = pseudotranslate.pseudotranslate(tree, "weather")
        self.assertEqual(result["app"], {"package": "weather"})


class LocaleMergerTest(unittest.TestCase):
    def test_merge_strips_prefix_and_nests(self) -> None:
        payload = locale_merge.LocalePayload(
            locale="de",
            translations={
                "txt.apps.weather.app.name": "Wetter",
                "txt.apps.weather.settings.units": "Einheiten"
            }
        )
        self.assertEqual(
            locale_merge.merge(payload, "txt.apps.weather."),
            {"app": {"name": "Wetter"}, "settings": {"units": "Einheiten"}}
        )

    def test_payload_from_response(self) -> None:
        payload = locale_merge.LocalePayload.from_response(
            {"locale": "pt-BR", "translations": {"txt.apps.weather.app.name": "Tempo"}}
        )
        self.assertEqual(payload.locale, "pt-BR")
        self.assertEqual(payload.translations, {"txt.apps.weather.app.name": "Tempo"})

    def test_payload_from_response_rejects_bad_shapes(self) -> None:
        for data in [None, [], {"translations": {}}, {"locale": "de", "translations": "oops"}]:
            with self.assertRaises(TranslationFormatError):
                locale_merge.LocalePayload.from_response(data)

    def test_normalize_locale_id(self) -> None:
        self.assertEqual(locale_merge.normalize_locale_id("en-US-x-12"), "en-US")
        self.assertEqual(locale_merge.normalize_locale_id(" fr "), "fr")
        with self.assertRaises(ValueError):
            locale_merge.normalize_locale_id("  ")


class TranslationYmlTest(unittest.TestCase):
    def test_render_uses_platform_namespace(self) -> None:
        records = title_value.pair_translation_tree(EN_TREE)
        text = translation_yml.render_translation_yml("Weather", "weather", records)
        self.assertIn('title: "Weather"', text)
        self.assertIn("  - app_weather", text)
        self.assertIn('key: "txt.apps.weather.app.name"', text)
        self.assertIn('value: "The \\"best\\" forecast"', text)

    def test_parse_reads_back_rendered_document(self) -> None:
        records = title_value.pair_translation_tree(EN_TREE)
        text = translation_yml.render_translation_yml("Weather", "weather", records)
        parts = translation_yml.parse_translation_yml(text)

        self.assertEqual(parts[0]["key"], "txt.apps.weather.app.name")
        self.assertEqual(parts[1]["value"], 'The "best" forecast')
        self.assertEqual(translation_yml.yml_to_tree(parts), EN_TREE)

    def test_backslashes_and_newlines_survive_round_trip(self) -> None:
        tree = {
            "app": {
                "package": "weather",
                "path": {"title": 'Folder "C:\\temp"', "value": "Save to C:\\temp\\x"},
                "escape": {"title": "Literal", "value": "a\\nb"},
                "lines": {"title": "Two\nlines", "value": "first\nsecond\ttabbed"}
            }
        }
        records = title_value.pair_translation_tree(tree)
        text = translation_yml.render_translation_yml('My "C:\\" app', "weather", records)
        parts = translation_yml.parse_translation_yml(text)

        self.assertEqual(translation_yml.yml_to_tree(parts), tree)

    def test_yml_to_tree_finds_package_past_foreign_keys(self) -> None:
        parts = [
            {"key": "txt.shared.ok", "title": "OK", "value": "OK"},
            {"key": "txt.apps.weather.app.name", "title": "Name", "value": "Weather"}
        ]
        self.assertEqual(
            translation_yml.yml_to_tree(parts),
            {"app": {"name": {"title": "Name", "value": "Weather"}, "package": "weather"}}
        )

    def test_yml_to_tree_without_app_keys_fails(self) -> None:
        with self.assertRaises(MissingPackageError):
            translation_yml.yml_to_tree([{"key": "txt.shared.ok", "title": "OK", "value": "OK"}])

    def test_parse_rejects_malformed_documents(self) -> None:
        for text in ["parts: [unclosed", "- a\n- b\n", "parts: 3\n", "parts:\n  - key: x\n"]:
            with self.assertRaises(TranslationFormatError):
                translation_yml.parse_translation_yml(text)


if __name__ == "__main__":
    unittest.main()
