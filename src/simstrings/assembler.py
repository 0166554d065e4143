"""String map assembly with locale fallback chains.

Builds ``string_map[locale]["NAMESPACE/partial.key"] = value`` for every
string a build actually uses, with fallbacks to English where needed, plus
``string_metadata["NAMESPACE/partial.key"]`` taken from English entries.

Algorithm:
    1. Validate locales: the fallback locale must be requested and every
       requested locale must be in the locale-info table.
    2. Read every used module and find the repositories whose string
       modules they import; keep those with a package manifest.
    3. Read each repository's namespace from its manifest.
    4. Load each (repo, locale) string file once, for the requested locales
       and the family forms their fallback chains need.
    5. Scan the modules for each repository's partial string keys.
    6. Resolve every key in every requested locale through the locale's
       fallback chain; the first hit wins.

Keys ending with ``StringProperty`` name live bindings rather than strings
and are not emitted. Any other key without an entry anywhere in its chain
aborts the build.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from simstrings.config import StringBuildConfig
from simstrings.constants import (
    FALLBACK_LOCALE,
    FAMILY_LOCALE_LENGTH,
    STRING_PROPERTY_SUFFIX,
)
from simstrings.diagnostics import (
    ConfigurationError,
    FallbackLocaleRequiredError,
    MissingStringError,
)
from simstrings.locale_info import LocaleInfoTable
from simstrings.locale_utils import fallbacks_for, family_locale
from simstrings.scanning import RegexStringUsageExtractor, StringUsageExtractor, find_string_repos
from simstrings.strings.loading import (
    PathStringFileLoader,
    StringFileLoader,
    StringFileLoadResult,
    StringFileLoadSummary,
)
from simstrings.strings.tree import get_string_entry
from simstrings.types import (
    LocaleCode,
    PartialStringKey,
    RepoName,
    StringMap,
    StringMetadataMap,
    StringTree,
)

__all__ = ["StringMapAssembler", "StringMapResult", "get_string_map"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StringMapResult:
    """Output of one string map assembly.

    Attributes:
        string_map: locale -> full string key -> value; every requested
            locale is present, possibly empty
        string_metadata: full string key -> metadata of the English entry
        load_summary: Outcome of every string file read
    """

    string_map: StringMap
    string_metadata: StringMetadataMap
    load_summary: StringFileLoadSummary

    def to_json_dict(self) -> dict[str, Any]:
        """Return the camelCase shape consumed by build scripts."""
        return {"stringMap": self.string_map, "stringMetadata": self.string_metadata}


class StringMapAssembler:
    """Combine scanned string accesses and translation files into a string map.

    Holds only collaborators; every call to assemble() builds fresh maps and
    reads every file it needs again.

    Example:
        >>> assembler = StringMapAssembler(StringBuildConfig(root_dir="/work/phetsims"))
        >>> result = assembler.assemble(
        ...     "ohms-law", ["en", "es"], ["joist", "ohms-law"],
        ...     ["ohms-law/js/ohms-law/view/ControlPanel.js"],
        ... )
        >>> result.string_map["es"]["OHMS_LAW/title"]
        '\\u202aLey de Ohm\\u202c'
    """

    __slots__ = ("_config", "_extractor", "_loader", "_locale_info")

    def __init__(
        self,
        config: StringBuildConfig | None = None,
        *,
        locale_info: LocaleInfoTable | None = None,
        loader: StringFileLoader | None = None,
        extractor: StringUsageExtractor | None = None,
    ) -> None:
        """Initialize the assembler.

        Args:
            config: Checkout layout (default: StringBuildConfig())
            locale_info: Locale-info table; None derives one from Babel for
                the requested locales at each assemble() call
            loader: String file loader (default: PathStringFileLoader over config)
            extractor: String usage extractor (default: RegexStringUsageExtractor)
        """
        self._config = config if config is not None else StringBuildConfig()
        self._locale_info = locale_info
        self._loader: StringFileLoader = (
            loader
            if loader is not None
            else PathStringFileLoader(
                self._config.root_dir, self._config.translations_dir, locale_info
            )
        )
        self._extractor: StringUsageExtractor = (
            extractor if extractor is not None else RegexStringUsageExtractor()
        )

    @property
    def config(self) -> StringBuildConfig:
        """Checkout layout used for every read."""
        return self._config

    def _directions(self, locales: Sequence[LocaleCode]) -> dict[LocaleCode, bool]:
        """Map each requested locale to its RTL flag.

        Raises:
            UnsupportedLocaleError: If a locale is not in the locale-info table
        """
        table = (
            self._locale_info
            if self._locale_info is not None
            else LocaleInfoTable.from_babel(locales)
        )
        return {locale: table.is_rtl(locale) for locale in locales}

    def _read_used_modules(self, used_modules: Iterable[str]) -> list[str]:
        root = self._config.root
        return [(root / module).read_text(encoding="utf-8") for module in used_modules]

    def _read_namespace(self, repo: RepoName) -> str:
        """Read a repository's namespace (e.g., 'JOIST') from its manifest.

        Raises:
            ConfigurationError: If the manifest has no namespace
        """
        manifest_path = self._config.manifest_path(repo)
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        try:
            return str(manifest["phet"]["requirejsNamespace"])
        except (KeyError, TypeError):
            msg = f"{manifest_path} does not define phet.requirejsNamespace"
            raise ConfigurationError(msg) from None

    @staticmethod
    def _check_dependencies(
        main_repo: RepoName, repos: Sequence[RepoName], phet_libs: Sequence[RepoName]
    ) -> None:
        if not phet_libs:
            return
        for repo in repos:
            if repo not in phet_libs:
                logger.warning(
                    "%s uses strings from %s, which is not one of its dependencies",
                    main_repo,
                    repo,
                )

    @staticmethod
    def _load_plan(
        locales: Sequence[LocaleCode], directions: Mapping[LocaleCode, bool]
    ) -> dict[LocaleCode, bool]:
        """Return every locale to load with the RTL flag to format it with.

        A family form that is not requested itself ('zh' for 'zh_CN') is
        formatted with the direction of the locale that needs it.
        """
        plan: dict[LocaleCode, bool] = {}
        for locale in locales:
            plan.setdefault(locale, directions[locale])
            if len(locale) > FAMILY_LOCALE_LENGTH:
                family = family_locale(locale)
                if family not in locales:
                    plan.setdefault(family, directions[locale])
        return plan

    def _load_string_files(
        self, repos: Sequence[RepoName], plan: Mapping[LocaleCode, bool]
    ) -> tuple[dict[RepoName, dict[LocaleCode, StringTree]], StringFileLoadSummary]:
        trees: dict[RepoName, dict[LocaleCode, StringTree]] = {}
        results: list[StringFileLoadResult] = []
        for repo in repos:
            repo_trees = trees[repo] = {}
            for locale, is_rtl in plan.items():
                tree, result = self._loader.load_with_result(repo, locale, is_rtl=is_rtl)
                repo_trees[locale] = tree
                results.append(result)
        return trees, StringFileLoadSummary(tuple(results))

    @staticmethod
    def _resolve_entry(
        repo_trees: Mapping[LocaleCode, StringTree],
        partial_key: PartialStringKey,
        locale: LocaleCode,
    ) -> dict[str, Any] | None:
        for fallback_locale in fallbacks_for(locale):
            tree = repo_trees.get(fallback_locale)
            if tree:
                entry = get_string_entry(tree, partial_key)
                if entry is not None:
                    return entry
        return None

    def assemble(
        self,
        main_repo: RepoName,
        locales: Sequence[LocaleCode],
        phet_libs: Sequence[RepoName],
        used_modules: Iterable[str],
    ) -> StringMapResult:
        """Build the string map for a build.

        Args:
            main_repo: Repository being built
            locales: Locales to build; must include the fallback locale
            phet_libs: Repositories the build depends on; string repos outside
                this list are reported
            used_modules: Module paths relative to the root directory

        Returns:
            StringMapResult with string map, metadata and load summary

        Raises:
            FallbackLocaleRequiredError: If locales lacks the fallback locale
            UnsupportedLocaleError: If a locale is not in the locale-info table
            MissingStringError: If a used key has no entry in its fallback chain
            ConfigurationError: If a used repo's manifest has no namespace
            OSError: If a used module or manifest cannot be read
        """
        start = time.perf_counter()
        locales = list(dict.fromkeys(locales))
        if FALLBACK_LOCALE not in locales:
            raise FallbackLocaleRequiredError(FALLBACK_LOCALE)
        directions = self._directions(locales)

        file_contents = self._read_used_modules(used_modules)
        repos = [
            repo
            for repo in find_string_repos(file_contents)
            if self._config.manifest_path(repo).exists()
        ]
        self._check_dependencies(main_repo, repos, phet_libs)
        namespaces = {repo: self._read_namespace(repo) for repo in repos}

        trees, load_summary = self._load_string_files(repos, self._load_plan(locales, directions))

        string_map: StringMap = {locale: {} for locale in locales}
        string_metadata: StringMetadataMap = {}
        key_count = 0
        for repo in repos:
            partial_keys = sorted(self._extractor.extract(file_contents, repo))
            logger.debug("%s: %d string keys used", repo, len(partial_keys))
            for partial_key in partial_keys:
                if partial_key.endswith(STRING_PROPERTY_SUFFIX):
                    continue
                key_count += 1
                string_key = f"{namespaces[repo]}/{partial_key}"
                for locale in locales:
                    entry = self._resolve_entry(trees[repo], partial_key, locale)
                    if entry is None:
                        raise MissingStringError(repo, partial_key)
                    string_map[locale][string_key] = entry["value"]
                    metadata = entry.get("metadata")
                    if metadata is not None and locale == FALLBACK_LOCALE:
                        string_metadata[string_key] = metadata

        logger.info(
            "Assembled %d strings from %d repos for %s in %d locales (%.0fms, %r)",
            key_count,
            len(repos),
            main_repo,
            len(locales),
            (time.perf_counter() - start) * 1000,
            load_summary,
        )
        return StringMapResult(string_map, string_metadata, load_summary)


def get_string_map(
    main_repo: RepoName,
    locales: Sequence[LocaleCode],
    phet_libs: Sequence[RepoName],
    used_modules: Iterable[str],
    *,
    config: StringBuildConfig | None = None,
    locale_info: LocaleInfoTable | None = None,
) -> StringMapResult:
    """Build a string map with the default loader and extractor.

    Convenience wrapper around ``StringMapAssembler(...).assemble(...)``.
    """
    assembler = StringMapAssembler(config, locale_info=locale_info)
    return assembler.assemble(main_repo, locales, phet_libs, used_modules)
