"""Locale-info table: names and writing direction per supported locale.

The table is the single authority on which locales a build may target and
on whether a locale's strings receive right-to-left marks. It can be read
from a ``localeInfo.json`` data file or derived from Babel's CLDR data.

Data file format:
    {
      "ar": {"name": "Arabic", "localizedName": "عربي", "direction": "rtl"},
      "en": {"name": "English", "localizedName": "English", "direction": "ltr"}
    }

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from simstrings.diagnostics import ConfigurationError, Diagnostic, DiagnosticCode
from simstrings.diagnostics import UnsupportedLocaleError
from simstrings.enums import TextDirection
from simstrings.locale_utils import get_babel_locale
from simstrings.types import LocaleCode

__all__ = ["LocaleInfo", "LocaleInfoTable"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocaleInfo:
    """Immutable description of one locale.

    Attributes:
        locale: Locale code (e.g., 'zh_CN')
        name: English name of the locale
        localized_name: Name of the locale in its own language
        direction: Writing direction
    """

    locale: LocaleCode
    name: str
    localized_name: str
    direction: TextDirection

    @property
    def is_rtl(self) -> bool:
        """Check if strings in this locale read right-to-left."""
        return self.direction == TextDirection.RTL


class LocaleInfoTable:
    """Read-only mapping of locale code to LocaleInfo.

    Example:
        >>> table = LocaleInfoTable.from_babel(["en", "ar", "zh_CN"])
        >>> table.is_rtl("ar")
        True
        >>> "fr" in table
        False
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[LocaleInfo]) -> None:
        self._entries: dict[LocaleCode, LocaleInfo] = {entry.locale: entry for entry in entries}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Any]]) -> LocaleInfoTable:
        """Build a table from parsed ``localeInfo.json`` data.

        Any direction other than 'rtl', including a missing one, reads as
        left-to-right.

        Raises:
            ConfigurationError: If an entry is not an object
        """
        entries: list[LocaleInfo] = []
        for locale, info in data.items():
            if not isinstance(info, Mapping):
                diagnostic = Diagnostic(
                    code=DiagnosticCode.LOCALE_INFO_INVALID,
                    message=f"locale info for {locale} is not an object",
                    hint="Give each locale an object with name and direction",
                )
                raise ConfigurationError(diagnostic)
            direction = (
                TextDirection.RTL if info.get("direction") == TextDirection.RTL else TextDirection.LTR
            )
            entries.append(
                LocaleInfo(
                    locale=locale,
                    name=str(info.get("name", locale)),
                    localized_name=str(info.get("localizedName", info.get("name", locale))),
                    direction=direction,
                )
            )
        return cls(entries)

    @classmethod
    def from_json(cls, path: str | Path) -> LocaleInfoTable:
        """Read a ``localeInfo.json`` file.

        Raises:
            OSError: If the file cannot be read
            json.JSONDecodeError: If the file is not valid JSON
            ConfigurationError: If an entry is not an object
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        table = cls.from_mapping(data)
        logger.debug("Loaded %d locales from %s", len(table), path)
        return table

    @classmethod
    def from_babel(cls, locales: Iterable[LocaleCode]) -> LocaleInfoTable:
        """Derive entries from Babel's CLDR data.

        Raises:
            UnsupportedLocaleError: If Babel does not know a locale
        """
        # Lazy import: keeps Babel's CLDR load off the JSON-table path
        from babel import UnknownLocaleError  # noqa: PLC0415

        entries: list[LocaleInfo] = []
        for locale in locales:
            try:
                babel_locale = get_babel_locale(locale)
            except (UnknownLocaleError, ValueError) as e:
                raise UnsupportedLocaleError(locale, str(e)) from e
            direction = (
                TextDirection.RTL
                if babel_locale.character_order == "right-to-left"
                else TextDirection.LTR
            )
            entries.append(
                LocaleInfo(
                    locale=locale,
                    name=babel_locale.english_name or locale,
                    localized_name=babel_locale.display_name or locale,
                    direction=direction,
                )
            )
        return cls(entries)

    def __contains__(self, locale: object) -> bool:
        return locale in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LocaleCode]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"LocaleInfoTable(locales={len(self._entries)})"

    def get(self, locale: LocaleCode) -> LocaleInfo:
        """Return the entry for a locale.

        Raises:
            UnsupportedLocaleError: If the locale is not in the table
        """
        try:
            return self._entries[locale]
        except KeyError:
            raise UnsupportedLocaleError(locale) from None

    def direction(self, locale: LocaleCode) -> TextDirection:
        """Return the writing direction of a locale."""
        return self.get(locale).direction

    def is_rtl(self, locale: LocaleCode) -> bool:
        """Check if a locale reads right-to-left."""
        return self.get(locale).is_rtl
