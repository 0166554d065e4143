"""Tests for StringMapAssembler over a checkout on disk.

Python 3.13+.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from simstrings.assembler import StringMapAssembler, get_string_map
from simstrings.constants import UNICODE_LRE, UNICODE_PDF, UNICODE_RLE
from simstrings.diagnostics import (
    ConfigurationError,
    DiagnosticCode,
    FallbackLocaleRequiredError,
    MissingStringError,
    UnsupportedLocaleError,
)
from simstrings.enums import LoadStatus
from simstrings.locale_info import LocaleInfoTable
from simstrings.strings.loading import StringFileLoadResult
from tests.helpers.checkout import Checkout, write_json


def ltr(value: str) -> str:
    return f"{UNICODE_LRE}{value}{UNICODE_PDF}"


def rtl(value: str) -> str:
    return f"{UNICODE_RLE}{value}{UNICODE_PDF}"


PHET_LIBS = ["ohms-law", "joist"]


class TestAssemble:
    """Test assembly of the fixture checkout."""

    def test_string_map(self, checkout: Checkout, locale_info: LocaleInfoTable) -> None:
        result = get_string_map(
            "ohms-law",
            ["en", "es", "ar"],
            PHET_LIBS,
            [checkout.screen_view],
            config=checkout.config,
            locale_info=locale_info,
        )
        assert result.string_map == {
            "en": {
                "OHMS_LAW/title": ltr("Ohm's Law"),
                "OHMS_LAW/resistance": ltr("Resistance"),
                "OHMS_LAW/a11y.summary": ltr("Summary"),
                "JOIST/ResetAllButton.name": ltr("Reset All"),
            },
            "es": {
                "OHMS_LAW/title": ltr("Ley de Ohm"),
                "OHMS_LAW/resistance": ltr("Resistance"),
                "OHMS_LAW/a11y.summary": ltr("Summary"),
                "JOIST/ResetAllButton.name": ltr("Restablecer"),
            },
            "ar": {
                "OHMS_LAW/title": rtl("قانون أوم"),
                "OHMS_LAW/resistance": ltr("Resistance"),
                "OHMS_LAW/a11y.summary": ltr("Summary"),
                "JOIST/ResetAllButton.name": ltr("Reset All"),
            },
        }

    def test_metadata_only_from_english(
        self, checkout: Checkout, locale_info: LocaleInfoTable
    ) -> None:
        """Spanish title metadata is ignored; English resistance metadata is kept."""
        result = get_string_map(
            "ohms-law", ["en", "es"], PHET_LIBS, [checkout.screen_view],
            config=checkout.config, locale_info=locale_info,
        )
        assert result.string_metadata == {"OHMS_LAW/resistance": {"phetioReadOnly": True}}

    def test_json_shape(self, checkout: Checkout, locale_info: LocaleInfoTable) -> None:
        result = get_string_map(
            "ohms-law", ["en"], PHET_LIBS, [checkout.screen_view],
            config=checkout.config, locale_info=locale_info,
        )
        assert set(result.to_json_dict()) == {"stringMap", "stringMetadata"}

    def test_unused_keys_excluded(self, checkout: Checkout, locale_info: LocaleInfoTable) -> None:
        result = get_string_map(
            "ohms-law", ["en"], PHET_LIBS, [checkout.screen_view],
            config=checkout.config, locale_info=locale_info,
        )
        assert "OHMS_LAW/unused" not in result.string_map["en"]

    def test_family_fallback(self, checkout: Checkout, locale_info: LocaleInfoTable) -> None:
        """zh_CN falls back to zh before English."""
        write_json(
            checkout.root / "babel" / "ohms-law" / "ohms-law-strings_zh.json",
            {"title": {"value": "欧姆定律"}},
        )
        result = get_string_map(
            "ohms-law", ["en", "zh_CN"], PHET_LIBS, [checkout.screen_view],
            config=checkout.config, locale_info=locale_info,
        )
        assert result.string_map["zh_CN"]["OHMS_LAW/title"] == ltr("欧姆定律")
        assert "zh" not in result.string_map
        assert result.load_summary.get_by_locale("zh")

    def test_regional_overrides_family(
        self, checkout: Checkout, locale_info: LocaleInfoTable
    ) -> None:
        write_json(
            checkout.root / "babel" / "ohms-law" / "ohms-law-strings_zh.json",
            {"title": {"value": "family"}},
        )
        write_json(
            checkout.root / "babel" / "ohms-law" / "ohms-law-strings_zh_CN.json",
            {"title": {"value": "regional"}},
        )
        result = get_string_map(
            "ohms-law", ["en", "zh_CN"], PHET_LIBS, [checkout.screen_view],
            config=checkout.config, locale_info=locale_info,
        )
        assert result.string_map["zh_CN"]["OHMS_LAW/title"] == ltr("regional")

    def test_every_locale_has_every_key(
        self, checkout: Checkout, locale_info: LocaleInfoTable
    ) -> None:
        result = get_string_map(
            "ohms-law", ["en", "es", "ar", "zh_CN"], PHET_LIBS, [checkout.screen_view],
            config=checkout.config, locale_info=locale_info,
        )
        key_sets = {frozenset(values) for values in result.string_map.values()}
        assert len(key_sets) == 1

    def test_load_summary(self, checkout: Checkout, locale_info: LocaleInfoTable) -> None:
        result = get_string_map(
            "ohms-law", ["en", "es"], PHET_LIBS, [checkout.screen_view],
            config=checkout.config, locale_info=locale_info,
        )
        assert result.load_summary.total_attempted == 4
        assert result.load_summary.successful == 4

    def test_repo_without_manifest_skipped(
        self, checkout: Checkout, locale_info: LocaleInfoTable
    ) -> None:
        """Imports of string modules from repos not checked out are ignored."""
        module = checkout.add_module(
            "ohms-law/js/Other.js",
            "import GoneStrings from '../../gone/js/GoneStrings.js';\nGoneStrings.x;\n",
        )
        result = get_string_map(
            "ohms-law", ["en"], PHET_LIBS, [checkout.screen_view, module],
            config=checkout.config, locale_info=locale_info,
        )
        assert not any(key.startswith("GONE/") for key in result.string_map["en"])

    def test_undeclared_dependency_warns(
        self,
        checkout: Checkout,
        locale_info: LocaleInfoTable,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="simstrings.assembler"):
            get_string_map(
                "ohms-law", ["en"], ["ohms-law"], [checkout.screen_view],
                config=checkout.config, locale_info=locale_info,
            )
        assert "joist" in caplog.text

    def test_locale_info_from_babel(self, checkout: Checkout) -> None:
        """Without a table, directions come from Babel."""
        result = get_string_map(
            "ohms-law", ["en", "ar"], PHET_LIBS, [checkout.screen_view], config=checkout.config
        )
        assert result.string_map["ar"]["OHMS_LAW/title"] == rtl("قانون أوم")


class TestAssembleErrors:
    """Test failures that abort assembly."""

    def test_missing_key_fatal(self, checkout: Checkout, locale_info: LocaleInfoTable) -> None:
        module = checkout.add_module(
            "ohms-law/js/Broken.js",
            "import OhmsLawStrings from '../OhmsLawStrings.js';\nOhmsLawStrings.missing;\n",
        )
        with pytest.raises(MissingStringError) as exc_info:
            get_string_map(
                "ohms-law", ["en"], PHET_LIBS, [module],
                config=checkout.config, locale_info=locale_info,
            )
        assert exc_info.value.repo == "ohms-law"
        assert exc_info.value.partial_key == "missing"
        assert "Missing string information for ohms-law missing" in str(exc_info.value)

    def test_fallback_locale_required(
        self, checkout: Checkout, locale_info: LocaleInfoTable
    ) -> None:
        with pytest.raises(FallbackLocaleRequiredError) as exc_info:
            get_string_map(
                "ohms-law", ["es"], PHET_LIBS, [checkout.screen_view],
                config=checkout.config, locale_info=locale_info,
            )
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.FALLBACK_LOCALE_REQUIRED

    def test_unsupported_locale(self, checkout: Checkout, locale_info: LocaleInfoTable) -> None:
        with pytest.raises(UnsupportedLocaleError):
            get_string_map(
                "ohms-law", ["en", "fr"], PHET_LIBS, [checkout.screen_view],
                config=checkout.config, locale_info=locale_info,
            )

    def test_missing_namespace(self, checkout: Checkout, locale_info: LocaleInfoTable) -> None:
        write_json(checkout.root / "joist" / "package.json", {"name": "joist"})
        with pytest.raises(ConfigurationError, match="requirejsNamespace"):
            get_string_map(
                "ohms-law", ["en"], PHET_LIBS, [checkout.screen_view],
                config=checkout.config, locale_info=locale_info,
            )

    def test_missing_module(self, checkout: Checkout, locale_info: LocaleInfoTable) -> None:
        with pytest.raises(FileNotFoundError):
            get_string_map(
                "ohms-law", ["en"], PHET_LIBS, ["ohms-law/js/Nope.js"],
                config=checkout.config, locale_info=locale_info,
            )


class InMemoryLoader:
    """StringFileLoader over fixed trees; records every load."""

    def __init__(self, trees: dict[tuple[str, str], dict[str, Any]]) -> None:
        self.trees = trees
        self.calls: list[tuple[str, str, bool | None]] = []

    def load_with_result(
        self, repo: str, locale: str, *, is_rtl: bool | None = None
    ) -> tuple[dict[str, Any], StringFileLoadResult]:
        self.calls.append((repo, locale, is_rtl))
        tree = copy.deepcopy(self.trees.get((repo, locale), {}))
        status = LoadStatus.SUCCESS if tree else LoadStatus.NOT_FOUND
        return tree, StringFileLoadResult(repo, locale, status, Path(repo))

    def load(self, repo: str, locale: str, *, is_rtl: bool | None = None) -> dict[str, Any]:
        return self.load_with_result(repo, locale, is_rtl=is_rtl)[0]


class FixedExtractor:
    """StringUsageExtractor returning preset keys."""

    def __init__(self, keys: dict[str, frozenset[str]]) -> None:
        self.keys = keys

    def extract(self, file_contents: Sequence[str], repo: str) -> frozenset[str]:
        return self.keys.get(repo, frozenset())


class TestCollaborators:
    """Test assembly with injected loader and extractor."""

    def test_family_loaded_with_requester_direction(
        self, checkout: Checkout, locale_info: LocaleInfoTable
    ) -> None:
        loader = InMemoryLoader({("joist", "en"): {"ResetAllButton": {"name": {"value": "R"}}}})
        assembler = StringMapAssembler(
            checkout.config,
            locale_info=locale_info,
            loader=loader,
            extractor=FixedExtractor({"joist": frozenset({"ResetAllButton.name"})}),
        )
        assembler.assemble("ohms-law", ["en", "zh_CN", "ar"], PHET_LIBS, [checkout.screen_view])
        joist_calls = [(locale, is_rtl) for repo, locale, is_rtl in loader.calls if repo == "joist"]
        assert joist_calls == [("en", False), ("zh_CN", False), ("zh", False), ("ar", True)]

    def test_each_file_loaded_once(
        self, checkout: Checkout, locale_info: LocaleInfoTable
    ) -> None:
        loader = InMemoryLoader({})
        assembler = StringMapAssembler(
            checkout.config, locale_info=locale_info, loader=loader, extractor=FixedExtractor({})
        )
        assembler.assemble("ohms-law", ["en", "es", "es", "en"], PHET_LIBS, [checkout.screen_view])
        assert len(loader.calls) == len(set(loader.calls)) == 4

    def test_string_property_keys_skipped(
        self, checkout: Checkout, locale_info: LocaleInfoTable
    ) -> None:
        """Keys still naming a binding are neither emitted nor fatal."""
        assembler = StringMapAssembler(
            checkout.config,
            locale_info=locale_info,
            loader=InMemoryLoader({}),
            extractor=FixedExtractor({"ohms-law": frozenset({"titleStringProperty"})}),
        )
        result = assembler.assemble("ohms-law", ["en"], PHET_LIBS, [checkout.screen_view])
        assert result.string_map == {"en": {}}

    def test_config_property(self, checkout: Checkout) -> None:
        assert StringMapAssembler(checkout.config).config is checkout.config
