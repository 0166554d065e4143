"""Text-based discovery of string usages in module source.

Finds which repositories a set of modules takes strings from, and which
string keys each module reads off a repository's string module. Scanning is
a regular-expression pass over source text (JS or minified TS output), not a
parse, so it is fast and dependency-free but imprecise in a few documented
ways:

- ``JoistStrings.something[ 0 ]`` and ``JoistStrings.something[ 'length' ]``
  yield keys that do not exist.
- ``JoistStrings.somethingStringProperty.value`` yields ``something``
  stripped of the binding accessor; a key that still ends with
  ``StringProperty`` after normalization names a binding, not a string.

The scanner sits behind the StringUsageExtractor protocol so a parser-based
extractor can replace it without touching the assembler.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Protocol

from simstrings.constants import (
    MINIFIED_IMPORT_ARTIFACT,
    STRING_MODULE_SUFFIX,
)
from simstrings.strings.tree import ACCESS_CHUNK_PATTERN, tokenize_access
from simstrings.types import PartialStringKey, RepoName

__all__ = [
    "RegexStringUsageExtractor",
    "StringUsageExtractor",
    "find_string_repos",
    "kebab_case",
    "pascal_case",
    "string_module_prefix",
]

# `import JoistStrings from '../../joist/js/JoistStrings.js';`
# [a-zA-Z_$][a-zA-Z0-9_$]* - a JS identifier, first character not a digit
# [^\n\r]+ - the rest of the path on the same line
_STRINGS_IMPORT_RE = re.compile(
    r"import [a-zA-Z_$][a-zA-Z0-9_$]*Strings from '[^\n\r]+Strings\.js';"
)
_IMPORT_NAME_RE = re.compile(r"/([\w-]+)Strings\.js")

# Word splitting for case conversion: "OhmsLaw" -> Ohms, Law; "XMLParser" -> XML, Parser
_WORD_RE = re.compile(r"[A-Z]?[a-z]+|[A-Z]+(?![a-z])|\d+")

# Applied in order to each raw match (terminating character already dropped).
# JoistStrings[ 'a-bStringProperty' ].value -> JoistStrings[ 'a-b']
_BRACKET_BINDING_RE = re.compile(r"StringProperty(['\"])\s*\].*")
# JoistStrings.aStringProperty.value -> JoistStrings.a
_DOT_BINDING_RE = re.compile(r"StringProperty.*")


def _words(text: str) -> list[str]:
    return _WORD_RE.findall(text)


def pascal_case(name: str) -> str:
    """Convert a repository name to PascalCase.

    Example:
        >>> pascal_case("ohms-law")
        'OhmsLaw'
        >>> pascal_case("joist")
        'Joist'
    """
    return "".join(word[0].upper() + word[1:].lower() for word in _words(name))


def kebab_case(name: str) -> str:
    """Convert an identifier to lowercase-with-dashes.

    Example:
        >>> kebab_case("OhmsLaw")
        'ohms-law'
        >>> kebab_case("sceneryPhet")
        'scenery-phet'
    """
    return "-".join(word.lower() for word in _words(name))


def string_module_prefix(repo: RepoName) -> str:
    """Return the identifier a repo's string module is imported as ('JoistStrings')."""
    return f"{pascal_case(repo)}{STRING_MODULE_SUFFIX}"


def find_string_repos(file_contents: Iterable[str]) -> list[RepoName]:
    """Return repos whose string modules are imported, in first-seen order.

    Example:
        >>> find_string_repos(["import OhmsLawStrings from '../OhmsLawStrings.js';"])
        ['ohms-law']
    """
    repos: list[RepoName] = []
    for content in file_contents:
        for statement in _STRINGS_IMPORT_RE.findall(content):
            name_match = _IMPORT_NAME_RE.search(statement)
            if name_match is None:
                continue
            repo = kebab_case(name_match.group(1))
            if repo not in repos:
                repos.append(repo)
    return repos


class StringUsageExtractor(Protocol):
    """Protocol for extracting a repo's partial string keys from module source.

    Example:
        >>> class FixedExtractor:
        ...     def extract(self, file_contents, repo):
        ...         return frozenset({"title"})
        >>> assembler = StringMapAssembler(config, extractor=FixedExtractor())
    """

    def extract(self, file_contents: Sequence[str], repo: RepoName) -> frozenset[PartialStringKey]:
        """Return the unique partial string keys read off ``repo``'s string module.

        Args:
            file_contents: Source text of every used module
            repo: Repository whose string module accesses are wanted

        Returns:
            Unique partial string keys (e.g., 'ResetAllButton.name')
        """
        ...


class RegexStringUsageExtractor:
    """Regular-expression StringUsageExtractor.

    A match is the string module prefix, one or more access chunks, and one
    final character that is neither '.' nor '['. That character only
    delimits the match and is dropped.
    """

    __slots__ = ()

    @staticmethod
    def access_pattern(prefix: str) -> re.Pattern[str]:
        """Compile the access regex for a string module prefix."""
        return re.compile(rf"{re.escape(prefix)}(?:{ACCESS_CHUNK_PATTERN})+[^.\[]")

    @staticmethod
    def normalize_access(match: str) -> str:
        """Drop the delimiting character and any binding accessor suffix."""
        access = match[:-1]
        access = _BRACKET_BINDING_RE.sub(r"\1]", access, count=1)
        return _DOT_BINDING_RE.sub("", access, count=1)

    def find_accesses(self, file_contents: Sequence[str], repo: RepoName) -> list[str]:
        """Return unique normalized accesses, prefix included, in first-seen order."""
        prefix = string_module_prefix(repo)
        pattern = self.access_pattern(prefix)
        accesses: dict[str, None] = {}
        for content in file_contents:
            # Only files that import the string module can reference it
            if f"import {prefix} from" not in content:
                continue
            for match in pattern.findall(content):
                accesses[self.normalize_access(match)] = None
        return list(accesses)

    def extract(self, file_contents: Sequence[str], repo: RepoName) -> frozenset[PartialStringKey]:
        prefix_length = len(string_module_prefix(repo))
        keys = {
            ".".join(tokenize_access(access[prefix_length:]))
            for access in self.find_accesses(file_contents, repo)
        }
        keys.discard(MINIFIED_IMPORT_ARTIFACT)
        # Normalization can consume every chunk (e.g. ".StringProperty")
        keys.discard("")
        return frozenset(keys)
