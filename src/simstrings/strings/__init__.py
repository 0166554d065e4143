"""Translation tree handling: loading string files and walking their trees.

Submodules:
    tree    - Leaf detection, directional formatting, flattening, key lookup
    loading - StringFileLoader protocol, PathStringFileLoader,
              StringFileLoadResult, StringFileLoadSummary

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from simstrings.strings.loading import (
    PathStringFileLoader,
    StringFileLoader,
    StringFileLoadResult,
    StringFileLoadSummary,
    strings_file_name,
)
from simstrings.strings.tree import (
    add_directional_formatting,
    flatten,
    format_string_values,
    get_string_entry,
    is_string_entry,
    iter_string_entries,
    tokenize_access,
)

__all__ = [
    # Loading
    "StringFileLoader",
    "PathStringFileLoader",
    "StringFileLoadResult",
    "StringFileLoadSummary",
    "strings_file_name",
    # Tree walking
    "add_directional_formatting",
    "flatten",
    "format_string_values",
    "get_string_entry",
    "is_string_entry",
    "iter_string_entries",
    "tokenize_access",
]
