"""Enumerations for simstrings type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so they compare equal to the raw
values found in JSON locale tables and serialize without boilerplate.

Python 3.13+.
"""

from enum import StrEnum


class TextDirection(StrEnum):
    """Writing direction of a locale.

    StrEnum provides automatic string conversion: str(TextDirection.RTL) == "rtl"
    """

    LTR = "ltr"
    """Left-to-right script (Latin, Cyrillic, CJK, ...)"""

    RTL = "rtl"
    """Right-to-left script (Arabic, Hebrew, Persian, Urdu, ...)"""


class LoadStatus(StrEnum):
    """Outcome of a single string file load attempt.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """File read and parsed"""

    NOT_FOUND = "not_found"
    """File does not exist (expected for untranslated locales)"""

    ERROR = "error"
    """File exists but could not be read or parsed"""


__all__ = [
    "LoadStatus",
    "TextDirection",
]
