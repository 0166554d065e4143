"""Build configuration for string aggregation.

Provides a single frozen dataclass carrying the checkout layout shared by
the assembler, the conglomerator and the CLI.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from simstrings.constants import (
    CONGLOMERATE_DIR_NAME,
    DEFAULT_ROOT_DIR,
    DEFAULT_TRANSLATIONS_DIR,
    FALLBACK_LOCALE,
    PACKAGE_MANIFEST,
)
from simstrings.types import LocaleCode, RepoName

__all__ = ["StringBuildConfig"]


@dataclass(frozen=True, slots=True)
class StringBuildConfig:
    """Immutable description of where repositories and translations live.

    All fields have defaults matching a tool run from inside one checkout
    of a side-by-side layout; ``StringBuildConfig()`` is usable as is.

    Attributes:
        root_dir: Directory holding every repository checkout (default: "..")
        translations_dir: Sibling checkout holding non-fallback translations
            (default: "babel")
        conglomerate_dir_name: Directory inside translations_dir receiving
            development conglomerate files

    The fallback locale is not configurable; ``fallback_locale`` always
    returns FALLBACK_LOCALE.

    Example:
        >>> config = StringBuildConfig(root_dir="/work/phetsims")
        >>> config.repo_dir("joist")
        PosixPath('/work/phetsims/joist')
        >>> config.conglomerate_path
        PosixPath('/work/phetsims/babel/_generated_development_strings')
    """

    root_dir: str | Path = DEFAULT_ROOT_DIR
    translations_dir: str = DEFAULT_TRANSLATIONS_DIR
    conglomerate_dir_name: str = CONGLOMERATE_DIR_NAME

    def __post_init__(self) -> None:
        """Validate directory names at construction time.

        Raises:
            ValueError: If translations_dir or conglomerate_dir_name is empty or
                not a single path component
        """
        for name, value in (
            ("translations_dir", self.translations_dir),
            ("conglomerate_dir_name", self.conglomerate_dir_name),
        ):
            if not value:
                msg = f"{name} cannot be empty"
                raise ValueError(msg)
            if "/" in value or "\\" in value or value in (".", ".."):
                msg = f"{name} must be a single directory name, got: '{value}'"
                raise ValueError(msg)

    @property
    def fallback_locale(self) -> LocaleCode:
        """Locale every build includes and falls back to."""
        return FALLBACK_LOCALE

    @property
    def root(self) -> Path:
        """Root directory as a Path."""
        return Path(self.root_dir)

    @property
    def translations_path(self) -> Path:
        """Path of the translations checkout."""
        return self.root / self.translations_dir

    @property
    def conglomerate_path(self) -> Path:
        """Directory receiving development conglomerate files."""
        return self.translations_path / self.conglomerate_dir_name

    def repo_dir(self, repo: RepoName) -> Path:
        """Path of a repository checkout."""
        return self.root / repo

    def manifest_path(self, repo: RepoName) -> Path:
        """Path of a repository's package manifest."""
        return self.repo_dir(repo) / PACKAGE_MANIFEST
