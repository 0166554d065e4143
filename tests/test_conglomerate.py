"""Tests for development conglomerate string files.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from simstrings.config import StringBuildConfig
from simstrings.conglomerate import (
    conglomerate_file_name,
    find_translation_files,
    generate_development_strings,
    locale_from_file_name,
)
from tests.helpers.checkout import Checkout, write_json


class TestFileNames:
    """Test conglomerate and locale file naming."""

    def test_conglomerate_file_name(self) -> None:
        assert conglomerate_file_name("ohms-law") == "ohms-law_all.json"

    @pytest.mark.parametrize(
        ("name", "locale"),
        [
            ("ohms-law-strings_es.json", "es"),
            ("babel/ohms-law/ohms-law-strings_zh_CN.json", "zh_CN"),
            ("joist-strings_en.json", "en"),
        ],
    )
    def test_locale_from_file_name(self, name: str, locale: str) -> None:
        assert locale_from_file_name(name) == locale

    @pytest.mark.parametrize("name", ["README.md", "ohms-law-strings.json", "x_.json"])
    def test_locale_from_bad_name(self, name: str) -> None:
        with pytest.raises(ValueError, match="Cannot determine locale"):
            locale_from_file_name(name)


class TestGenerateDevelopmentStrings:
    """Test generate_development_strings."""

    def test_writes_all_locales(self, checkout: Checkout) -> None:
        write_json(
            checkout.root / "babel" / "ohms-law" / "ohms-law-strings_zh_CN.json",
            {"title": {"value": "欧姆定律", "history": [{"user": "x"}]}},
        )
        output = generate_development_strings("ohms-law", checkout.config)

        assert output == (
            checkout.root / "babel" / "_generated_development_strings" / "ohms-law_all.json"
        )
        data = json.loads(output.read_text(encoding="utf-8"))
        assert set(data) == {"ar", "en", "es", "zh_CN"}
        assert data["es"] == {"title": {"value": "Ley de Ohm"}}
        assert data["zh_CN"] == {"title": {"value": "欧姆定律"}}
        assert data["en"]["resistance"] == {"value": "Resistance"}

    def test_output_is_indented(self, checkout: Checkout) -> None:
        output = generate_development_strings("joist", checkout.config)
        assert output is not None
        assert output.read_text(encoding="utf-8").startswith('{\n  "es": {\n')

    def test_english_only_repo(self, checkout: Checkout) -> None:
        """A repo without a translations directory still gets English."""
        write_json(checkout.root / "tambo" / "tambo-strings_en.json", {"a": {"value": "A"}})
        output = generate_development_strings("tambo", checkout.config)
        assert output is not None
        assert json.loads(output.read_text(encoding="utf-8")) == {"en": {"a": {"value": "A"}}}

    def test_nested_groups_flattened(self, checkout: Checkout) -> None:
        """Grouped strings are written under dotted keys, never as null values."""
        write_json(
            checkout.root / "tambo" / "tambo-strings_en.json",
            {
                "a11y": {"x": {"value": "X"}, "deeper": {"y": {"value": "Y"}}},
                "t": {"value": "T", "history": []},
            },
        )
        output = generate_development_strings("tambo", checkout.config)
        assert output is not None
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data == {
            "en": {
                "a11y.x": {"value": "X"},
                "a11y.deeper.y": {"value": "Y"},
                "t": {"value": "T"},
            }
        }

    def test_checkout_groups_flattened(self, checkout: Checkout) -> None:
        output = generate_development_strings("ohms-law", checkout.config)
        assert output is not None
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["en"]["a11y.summary"] == {"value": " Summary "}
        assert "a11y" not in data["en"]
        assert all(
            isinstance(entry["value"], str)
            for strings in data.values()
            for entry in strings.values()
        )

    def test_no_translations(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Nothing is written when a repo has no string files at all."""
        config = StringBuildConfig(root_dir=tmp_path)
        with caplog.at_level(logging.INFO, logger="simstrings.conglomerate"):
            assert generate_development_strings("tambo", config) is None
        assert "no translations found" in caplog.text
        assert not config.conglomerate_path.exists()

    def test_logs_timing(self, checkout: Checkout, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="simstrings.conglomerate"):
            generate_development_strings("joist", checkout.config)
        assert "Wrote" in caplog.text
        assert "ms" in caplog.text

    def test_find_translation_files_order(self, checkout: Checkout) -> None:
        """Translations come sorted, English last."""
        files = find_translation_files("ohms-law", checkout.config)
        assert [f.name for f in files] == [
            "ohms-law-strings_ar.json",
            "ohms-law-strings_es.json",
            "ohms-law-strings_en.json",
        ]
