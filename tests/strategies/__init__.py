"""Hypothesis strategies for simstrings property-based testing.

- locales: locale codes, including family and fallback forms
- strings: string values, identifiers and nested translation trees

Usage:
    from tests.strategies import locale_codes, string_trees
"""

from .locales import family_locale_codes, locale_codes, regional_locale_codes
from .strings import identifiers, string_trees, string_values

__all__ = [
    "family_locale_codes",
    "identifiers",
    "locale_codes",
    "regional_locale_codes",
    "string_trees",
    "string_values",
]
