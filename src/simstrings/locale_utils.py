"""Locale utilities: normalization, Babel lookup and fallback chains.

Centralizes locale handling used throughout the codebase so that the loader,
the assembler and the unbuilt loader agree on which files back a locale.

Fallback chains:
    Every locale resolves through its chain to FALLBACK_LOCALE:

        'zh_CN' -> ['zh_CN', 'zh', 'en']
        'es'    -> ['es', 'en']
        'en'    -> ['en']

Python 3.13+.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from typing import TYPE_CHECKING

from simstrings.constants import FALLBACK_LOCALE, FAMILY_LOCALE_LENGTH, RTL_LOCALE_PREFIXES

if TYPE_CHECKING:
    from babel import Locale

    from simstrings.types import LocaleCode

__all__ = [
    "fallbacks_for",
    "family_locale",
    "get_babel_locale",
    "is_rtl_locale",
    "locales_to_load",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to the underscore form used in file names.

    BCP-47 uses hyphens (zh-CN), while translation files and Babel use
    underscores (zh_CN). Case is preserved because file names are
    case-sensitive.

    Args:
        locale_code: BCP-47 locale code (e.g., "zh-CN", "pt-BR")

    Returns:
        Underscore-separated locale code (e.g., "zh_CN", "pt_BR")

    Example:
        >>> normalize_locale("zh-CN")
        'zh_CN'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or underscore form accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def family_locale(locale: LocaleCode) -> LocaleCode:
    """Return the language-family form of a locale ('zh_CN' -> 'zh')."""
    return locale[:FAMILY_LOCALE_LENGTH]


def fallbacks_for(locale: LocaleCode) -> list[LocaleCode]:
    """Return the locales to try, in order, when resolving a string.

    The chain starts with the locale itself, then its language-family form
    (when the locale is longer than the family form and the family is not
    the fallback locale), then the fallback locale. Unknown locales are
    processed syntactically.

    Args:
        locale: Requested locale

    Returns:
        One to three locale codes ending with FALLBACK_LOCALE

    Example:
        >>> fallbacks_for("zh_CN")
        ['zh_CN', 'zh', 'en']
        >>> fallbacks_for("en_GB")
        ['en_GB', 'en']
    """
    chain: list[LocaleCode] = []
    if locale != FALLBACK_LOCALE:
        chain.append(locale)
    family = family_locale(locale)
    if len(locale) > FAMILY_LOCALE_LENGTH and family != FALLBACK_LOCALE:
        chain.append(family)
    chain.append(FALLBACK_LOCALE)
    return chain


def locales_to_load(locales: Iterable[LocaleCode]) -> list[LocaleCode]:
    """Return requested locales plus any family forms they need.

    Each requested locale is followed by its family form when that form is
    not requested itself, so every file a fallback chain can hit is loaded
    exactly once.

    Example:
        >>> locales_to_load(["zh_CN", "en"])
        ['zh_CN', 'zh', 'en']
        >>> locales_to_load(["es_MX", "es", "en"])
        ['es_MX', 'es', 'en']
    """
    requested = list(locales)
    result: list[LocaleCode] = []
    for locale in requested:
        if locale not in result:
            result.append(locale)
        if len(locale) > FAMILY_LOCALE_LENGTH:
            family = family_locale(locale)
            if family not in requested and family not in result:
                result.append(family)
    return result


def is_rtl_locale(locale: LocaleCode) -> bool:
    """Guess direction from the locale prefix alone.

    Used where no locale-info table is available (the unbuilt loader, ad hoc
    loads). Covers Avestan, Arabic, Persian, Hebrew ('iw') and Urdu.
    """
    return locale.startswith(RTL_LOCALE_PREFIXES)
