"""String file loading infrastructure.

Provides the protocol for translation-file loaders, a filesystem
implementation that follows the side-by-side checkout layout, and
result/summary data structures for tracking load attempts.

Layout (root is the directory holding every repository checkout):
    {root}/{repo}/{repo}-strings_en.json                      fallback locale
    {root}/babel/{repo}/{repo}-strings_{locale}.json          every other locale

A missing or unparsable file is not an error: it loads as an empty tree,
meaning "no overrides for this locale", and the fallback chain absorbs it.

Components:
    StringFileLoader - Protocol for loading string trees (structural typing)
    PathStringFileLoader - Disk-based loader with path-component validation
    StringFileLoadResult - Immutable result of a single load attempt
    StringFileLoadSummary - Immutable aggregate of load results

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from simstrings.constants import (
    DEFAULT_ROOT_DIR,
    DEFAULT_TRANSLATIONS_DIR,
    FALLBACK_LOCALE,
    STRINGS_FILE_INFIX,
)
from simstrings.enums import LoadStatus
from simstrings.locale_utils import is_rtl_locale
from simstrings.strings.tree import format_string_values
from simstrings.types import LocaleCode, RepoName, StringTree

if TYPE_CHECKING:
    from simstrings.locale_info import LocaleInfoTable

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "StringFileLoader",
    # Concrete loader
    "PathStringFileLoader",
    # Load result types
    "StringFileLoadResult",
    "StringFileLoadSummary",
    # Helpers
    "strings_file_name",
]

logger = logging.getLogger(__name__)


def strings_file_name(repo: RepoName, locale: LocaleCode) -> str:
    """Return the file name of a repo's strings for a locale.

    Example:
        >>> strings_file_name("ohms-law", "zh_CN")
        'ohms-law-strings_zh_CN.json'
    """
    return f"{repo}{STRINGS_FILE_INFIX}{locale}.json"


class StringFileLoader(Protocol):
    """Protocol for loading a repo's translation tree for one locale.

    Implementations return the parsed tree with every value already
    direction-marked, or an empty dict when no translation exists.

    Example:
        >>> class InMemoryLoader:
        ...     def __init__(self, trees):
        ...         self.trees = trees
        ...     def load_with_result(self, repo, locale, *, is_rtl=None):
        ...         tree = copy.deepcopy(self.trees.get((repo, locale), {}))
        ...         status = LoadStatus.SUCCESS if tree else LoadStatus.NOT_FOUND
        ...         return tree, StringFileLoadResult(repo, locale, status, Path(repo))
        ...     def load(self, repo, locale, *, is_rtl=None):
        ...         return self.load_with_result(repo, locale, is_rtl=is_rtl)[0]
    """

    def load(self, repo: RepoName, locale: LocaleCode, *, is_rtl: bool | None = None) -> StringTree:
        """Load and format the string tree for (repo, locale).

        Args:
            repo: Repository name
            locale: Locale code
            is_rtl: Direction override; None derives it from the locale

        Returns:
            Formatted tree, or {} if the file is missing or invalid
        """
        ...

    def load_with_result(
        self, repo: RepoName, locale: LocaleCode, *, is_rtl: bool | None = None
    ) -> tuple[StringTree, StringFileLoadResult]:
        """Load like load() and also report how the attempt went.

        Returns:
            Tuple of (formatted tree or {}, load result)
        """
        ...


@dataclass(frozen=True, slots=True)
class StringFileLoadResult:
    """Result of loading a single string file.

    Attributes:
        repo: Repository the file belongs to
        locale: Locale code of the file
        status: Load status (success, not_found, error)
        path: Path that was read
        error: Exception if status is ERROR, None otherwise
    """

    repo: RepoName
    locale: LocaleCode
    status: LoadStatus
    path: Path
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        """Check if the file loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if the file was not found (expected for untranslated locales)."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if the file existed but failed to load."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class StringFileLoadSummary:
    """Immutable aggregate of string file load results.

    Attributes:
        results: All individual load results (immutable tuple)
    """

    results: tuple[StringFileLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"StringFileLoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful loads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of files not found."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of files that could not be read or parsed."""
        return sum(1 for r in self.results if r.is_error)

    def get_errors(self) -> tuple[StringFileLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_by_locale(self, locale: LocaleCode) -> tuple[StringFileLoadResult, ...]:
        """Get all results for a specific locale."""
        return tuple(r for r in self.results if r.locale == locale)

    def get_by_repo(self, repo: RepoName) -> tuple[StringFileLoadResult, ...]:
        """Get all results for a specific repository."""
        return tuple(r for r in self.results if r.repo == repo)


@dataclass(frozen=True, slots=True)
class PathStringFileLoader:
    """File system string loader for the side-by-side checkout layout.

    Implements the StringFileLoader protocol. Does not cache: each call
    re-reads the file, so callers batch loads themselves.

    Security:
        Repository names and locale codes are single path components.
        Values containing path separators or ".." are rejected.

    Example:
        >>> loader = PathStringFileLoader("..")
        >>> loader.path_for("joist", "zh_CN")
        PosixPath('../babel/joist/joist-strings_zh_CN.json')

    Attributes:
        root_dir: Directory holding every repository checkout
        translations_dir: Name of the sibling translations checkout
        locale_info: Table used for direction when no override is passed;
            without one the locale prefix decides
    """

    root_dir: str | Path = DEFAULT_ROOT_DIR
    translations_dir: str = DEFAULT_TRANSLATIONS_DIR
    locale_info: LocaleInfoTable | None = None
    _root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_root", Path(self.root_dir))

    @staticmethod
    def _validate_component(kind: str, value: str) -> None:
        """Validate a repo name or locale code used as a path component.

        Raises:
            ValueError: If the value is empty or contains unsafe path components
        """
        if not value:
            msg = f"{kind} cannot be empty"
            raise ValueError(msg)
        if ".." in value:
            msg = f"Path traversal sequences not allowed in {kind}: '{value}'"
            raise ValueError(msg)
        if "/" in value or "\\" in value:
            msg = f"Path separators not allowed in {kind}: '{value}'"
            raise ValueError(msg)

    def path_for(self, repo: RepoName, locale: LocaleCode) -> Path:
        """Return the path of a repo's string file for a locale.

        Raises:
            ValueError: If repo or locale contains unsafe path components
        """
        self._validate_component("repo", repo)
        self._validate_component("locale", locale)
        file_name = strings_file_name(repo, locale)
        if locale == FALLBACK_LOCALE:
            return self._root / repo / file_name
        return self._root / self.translations_dir / repo / file_name

    def _is_rtl(self, locale: LocaleCode) -> bool:
        if self.locale_info is not None and locale in self.locale_info:
            return self.locale_info.is_rtl(locale)
        return is_rtl_locale(locale)

    def load_with_result(
        self, repo: RepoName, locale: LocaleCode, *, is_rtl: bool | None = None
    ) -> tuple[StringTree, StringFileLoadResult]:
        """Load a string file and report how the attempt went.

        Returns:
            Tuple of (formatted tree or {}, load result)

        Raises:
            ValueError: If repo or locale contains unsafe path components
        """
        path = self.path_for(repo, locale)
        tree: StringTree = {}
        try:
            parsed = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug("missing string file: %s", path)
            result = StringFileLoadResult(repo, locale, LoadStatus.NOT_FOUND, path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.debug("unreadable string file: %s: %s", path, e)
            result = StringFileLoadResult(repo, locale, LoadStatus.ERROR, path, e)
        else:
            if isinstance(parsed, dict):
                tree = parsed
                result = StringFileLoadResult(repo, locale, LoadStatus.SUCCESS, path)
            else:
                error = ValueError(f"expected a JSON object, got {type(parsed).__name__}")
                logger.debug("unreadable string file: %s: %s", path, error)
                result = StringFileLoadResult(repo, locale, LoadStatus.ERROR, path, error)

        format_string_values(tree, self._is_rtl(locale) if is_rtl is None else is_rtl)
        return tree, result

    def load(self, repo: RepoName, locale: LocaleCode, *, is_rtl: bool | None = None) -> StringTree:
        """Load and format a string file.

        Returns:
            Formatted tree, or {} if the file is missing or invalid

        Raises:
            ValueError: If repo or locale contains unsafe path components
        """
        tree, _result = self.load_with_result(repo, locale, is_rtl=is_rtl)
        return tree
