"""Walking nested translation trees.

A translation file is a nested JSON object. Any object whose ``value`` is a
string is a leaf (a string entry); every other object is a grouping keyed
by path segment:

    {
      "ResetAllButton": {
        "name": {"value": "Reset All", "metadata": {"phetioReadOnly": true}}
      },
      "a11y": {"title": {"value": "Title"}}
    }

Leaves are addressed by partial string keys, the dotted join of their path
segments ('ResetAllButton.name'). Segment tokenization is shared with the
string access scanner so a key assembled from source text navigates the tree
the same way it was built.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from typing import Any, Literal, TypeIs, overload

from simstrings.constants import UNICODE_LRE, UNICODE_PDF, UNICODE_RLE
from simstrings.types import PartialStringKey, StringTree

__all__ = [
    "ACCESS_CHUNK_PATTERN",
    "add_directional_formatting",
    "flatten",
    "format_string_values",
    "get_string_entry",
    "is_string_entry",
    "iter_string_entries",
    "split_partial_key",
    "tokenize_access",
]

# One access chunk off a string module: `.identifier` or `[ 'text' ]`.
# Whitespace inside brackets is allowed (unminified JS); either quote works.
ACCESS_CHUNK_PATTERN: str = r"\.[a-zA-Z_$][a-zA-Z0-9_$]*|\[\s*['\"][^'\"]+['\"]\s*\]"

_ACCESS_TOKEN_RE = re.compile(
    r"\.(?P<identifier>[a-zA-Z_$][a-zA-Z0-9_$]*)|\[\s*['\"](?P<text>[^'\"]+)['\"]\s*\]"
)


def is_string_entry(node: object) -> TypeIs[dict[str, Any]]:
    """Check if a tree node is a leaf string entry."""
    return isinstance(node, dict) and isinstance(node.get("value"), str)


def tokenize_access(access: str) -> list[str]:
    """Split an access path into segments.

    Example:
        >>> tokenize_access(".ResetAllButton.name")
        ['ResetAllButton', 'name']
        >>> tokenize_access("['A'].B[ 'C' ]")
        ['A', 'B', 'C']
    """
    return [
        match.group("identifier") or match.group("text")
        for match in _ACCESS_TOKEN_RE.finditer(access)
    ]


def split_partial_key(key: str) -> list[str]:
    """Split a partial string key or a raw access path into segments.

    Keys assembled by the scanner are dotted joins; raw access paths start
    with '.' or '['.
    """
    if key.startswith((".", "[")):
        return tokenize_access(key)
    return key.split(".")


def add_directional_formatting(value: str, is_rtl: bool) -> str:
    """Wrap a string in an embedding mark and a pop mark.

    Not idempotent: every call adds one more pair, so each value must be
    wrapped exactly once per build.
    """
    return f"{UNICODE_RLE if is_rtl else UNICODE_LRE}{value}{UNICODE_PDF}"


def format_string_values(tree: StringTree, is_rtl: bool) -> StringTree:
    """Trim and direction-mark every string value in the tree, in place.

    Empty values (after trimming) stay unmarked.

    Returns:
        The same tree, for chaining
    """
    for _key, entry in iter_string_entries(tree):
        value = entry["value"].strip()
        entry["value"] = add_directional_formatting(value, is_rtl) if value else value
    return tree


def iter_string_entries(
    tree: Mapping[str, Any], prefix: str = ""
) -> Iterator[tuple[PartialStringKey, dict[str, Any]]]:
    """Yield ``(partial_key, entry)`` for every leaf, depth first.

    Leaves are not descended into, so metadata objects are never mistaken
    for groupings.
    """
    for key, node in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if is_string_entry(node):
            yield path, node
        elif isinstance(node, Mapping):
            yield from iter_string_entries(node, path)


@overload
def flatten(
    tree: Mapping[str, Any], *, include_metadata: Literal[False] = False
) -> dict[PartialStringKey, str]: ...


@overload
def flatten(
    tree: Mapping[str, Any], *, include_metadata: Literal[True]
) -> tuple[dict[PartialStringKey, str], dict[PartialStringKey, dict[str, Any]]]: ...


def flatten(
    tree: Mapping[str, Any], *, include_metadata: bool = False
) -> (
    dict[PartialStringKey, str]
    | tuple[dict[PartialStringKey, str], dict[PartialStringKey, dict[str, Any]]]
):
    """Flatten a tree into ``{partial_key: value}``.

    Args:
        tree: Parsed translation tree
        include_metadata: Also collect ``{partial_key: metadata}`` for
            entries that carry metadata

    Returns:
        Value map, or ``(value_map, metadata_map)`` when include_metadata
    """
    values: dict[PartialStringKey, str] = {}
    metadata: dict[PartialStringKey, dict[str, Any]] = {}
    for key, entry in iter_string_entries(tree):
        values[key] = entry["value"]
        if include_metadata and entry.get("metadata") is not None:
            metadata[key] = entry["metadata"]
    if include_metadata:
        return values, metadata
    return values


def get_string_entry(tree: Mapping[str, Any], key: str) -> dict[str, Any] | None:
    """Look up the leaf entry at exactly the path a key names.

    An exact top-level match wins, which supports legacy flat files whose
    keys themselves contain dots. Otherwise the tree is navigated one
    segment at a time.

    Args:
        tree: Parsed translation tree
        key: Partial string key ('A.b') or access path (".A['b']")

    Returns:
        The entry ``{"value": ..., "metadata"?: ...}``, or None
    """
    direct = tree.get(key)
    if is_string_entry(direct):
        return direct

    node: Any = tree
    for segment in split_partial_key(key):
        if not isinstance(node, Mapping) or segment not in node:
            return None
        node = node[segment]
    return node if is_string_entry(node) else None
