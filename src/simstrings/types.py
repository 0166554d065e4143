"""Type aliases for the string-map domain.

Provides semantic type aliases used throughout simstrings and by user code
when annotating call sites.

Python 3.13+. Zero external dependencies.
"""

from typing import Any

__all__ = [
    "LocaleCode",
    "PartialStringKey",
    "RepoName",
    "StringKey",
    "StringMap",
    "StringMetadataMap",
    "StringTree",
]

type RepoName = str
"""Lowercase-with-dashes repository identifier (e.g., 'joist', 'ohms-law')."""

type LocaleCode = str
"""Locale identifier with underscore separator (e.g., 'en', 'zh_CN')."""

type PartialStringKey = str
"""Access path relative to a repo's string module (e.g., 'ResetAllButton.name')."""

type StringKey = str
"""Namespaced string key (e.g., 'JOIST/ResetAllButton.name')."""

type StringTree = dict[str, Any]
"""Parsed translation file: nested objects whose leaves carry a 'value'."""

type StringMap = dict[LocaleCode, dict[StringKey, str]]
"""locale -> string key -> string value."""

type StringMetadataMap = dict[StringKey, dict[str, Any]]
"""string key -> metadata object from the fallback locale."""
