"""Unbuilt-mode string loading over HTTP.

Fetches the string files a development page needs straight from the served
checkouts, without a build step, and collects them into a StringContext.

    {base_url}/{repo}/{repo}-strings_en.json                   fallback locale
    {base_url}/babel/{repo}/{repo}-strings_{locale}.json       other locales
    {base_url}/babel/_generated_development_strings/{repo}_all.json

Loading model:
    For each locale, the main repository's file is fetched first; only when
    it exists are the other repositories' files for that locale fetched.
    All requests run concurrently and each yields an explicit FetchResult.
    A failed request is logged and recorded, never raised, and never stops
    the other requests. load() returns once every request has settled.

    In all-locales mode the conglomerate files are fetched instead, and the
    English files are fetched directly as well so edits to them show up
    without regenerating the conglomerates. Failures are expected there
    (not every repo has translations) and are not logged.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import httpx

from simstrings.conglomerate import conglomerate_file_name
from simstrings.constants import (
    CONGLOMERATE_DIR_NAME,
    DEFAULT_TRANSLATIONS_DIR,
    FALLBACK_LOCALE,
)
from simstrings.locale_utils import is_rtl_locale, locales_to_load
from simstrings.strings.loading import strings_file_name
from simstrings.strings.tree import add_directional_formatting, iter_string_entries
from simstrings.types import LocaleCode, RepoName, StringKey, StringTree

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Inputs
    "ALL_LOCALES",
    "StringRepo",
    # Results
    "StringContext",
    "FetchResult",
    "LoadOutcome",
    # Loader
    "UnbuiltStringLoader",
    "load_unbuilt_strings",
    "requested_locales",
]

logger = logging.getLogger(__name__)

ALL_LOCALES: str = "*"


@dataclass(frozen=True, slots=True)
class StringRepo:
    """A repository that provides strings, with its namespace.

    Attributes:
        repo: Repository name (e.g., 'joist')
        namespace: Namespace of its string keys (e.g., 'JOIST')
    """

    repo: RepoName
    namespace: str


class StringContext:
    """Resolved strings for every consumer loaded after string loading.

    Passed explicitly to whatever needs strings instead of living in a
    global. Entries are only ever added, never removed; readers see
    read-only views.

    Example:
        >>> context = StringContext()
        >>> context.add_string_file({"title": {"value": "Ohm's Law"}}, "OHMS_LAW", "en")
        1
        >>> context.get("en", "OHMS_LAW/title")
        "\\u202aOhm's Law\\u202c"
    """

    __slots__ = ("_metadata", "_strings")

    def __init__(self) -> None:
        self._strings: dict[LocaleCode, dict[StringKey, str]] = {}
        self._metadata: dict[StringKey, dict[str, Any]] = {}

    def __repr__(self) -> str:
        return f"StringContext(locales={sorted(self._strings)}, metadata={len(self._metadata)})"

    @property
    def strings(self) -> Mapping[LocaleCode, Mapping[StringKey, str]]:
        """locale -> full string key -> value (read-only)."""
        return MappingProxyType(
            {locale: MappingProxyType(values) for locale, values in self._strings.items()}
        )

    @property
    def metadata(self) -> Mapping[StringKey, dict[str, Any]]:
        """full string key -> metadata from fallback-locale files (read-only)."""
        return MappingProxyType(self._metadata)

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales with at least one loaded file."""
        return tuple(self._strings)

    def get(self, locale: LocaleCode, key: StringKey) -> str | None:
        """Return one value, or None if it was not loaded."""
        return self._strings.get(locale, {}).get(key)

    def add_string_file(
        self,
        tree: StringTree,
        namespace: str,
        locale: LocaleCode,
        *,
        is_rtl: bool | None = None,
        with_metadata: bool = True,
    ) -> int:
        """Add every string of one locale's tree under a namespace.

        Non-empty values are direction-marked. Metadata is recorded only for
        the fallback locale.

        Args:
            tree: Parsed string tree (raw, not yet formatted)
            namespace: Namespace prefix of the keys (e.g., 'JOIST')
            locale: Locale of the tree
            is_rtl: Direction; None derives it from the locale prefix
            with_metadata: Record fallback-locale metadata

        Returns:
            Number of strings added
        """
        rtl = is_rtl_locale(locale) if is_rtl is None else is_rtl
        locale_strings = self._strings.setdefault(locale, {})
        count = 0
        for partial_key, entry in iter_string_entries(tree):
            value = entry["value"]
            if value:
                value = add_directional_formatting(value, rtl)
            string_key = f"{namespace}/{partial_key}"
            locale_strings[string_key] = value
            if with_metadata and locale == FALLBACK_LOCALE and entry.get("metadata") is not None:
                self._metadata[string_key] = entry["metadata"]
            count += 1
        return count

    def add_conglomerate(self, conglomerate: Mapping[LocaleCode, StringTree], namespace: str) -> int:
        """Add a conglomerate file's locales under a namespace.

        Conglomerates carry no metadata.

        Returns:
            Number of strings added across all locales
        """
        return sum(
            self.add_string_file(tree, namespace, locale, with_metadata=False)
            for locale, tree in conglomerate.items()
            if isinstance(tree, dict)
        )


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Outcome of one request.

    Attributes:
        url: Requested URL
        data: Parsed JSON object when the request succeeded
        error: Failure (HTTP, network or JSON error) otherwise
    """

    url: str
    data: StringTree | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """Check if the request succeeded."""
        return self.error is None


@dataclass(frozen=True, slots=True)
class LoadOutcome:
    """Everything an unbuilt load produced.

    Attributes:
        context: Loaded strings
        results: Every request's outcome
    """

    context: StringContext
    results: tuple[FetchResult, ...]

    @property
    def failures(self) -> tuple[FetchResult, ...]:
        """Requests that failed."""
        return tuple(r for r in self.results if not r.ok)


def requested_locales(
    locale: LocaleCode | None = None, locales: Sequence[LocaleCode] = ()
) -> list[LocaleCode]:
    """Return the locales to fetch: fallback first, then each request and its family.

    Example:
        >>> requested_locales("zh_CN", ["es"])
        ['en', 'zh_CN', 'zh', 'es']
    """
    wanted = [FALLBACK_LOCALE]
    wanted.extend(code for code in (locale, *locales) if code)
    return locales_to_load(wanted)


type _Fetched = list[tuple[StringRepo, FetchResult]]


class UnbuiltStringLoader:
    """Concurrent HTTP loader for unbuilt-mode strings.

    Example:
        >>> loader = UnbuiltStringLoader("http://localhost:8080/phetsims")
        >>> outcome = asyncio.run(loader.load(
        ...     "ohms-law",
        ...     [StringRepo("ohms-law", "OHMS_LAW"), StringRepo("joist", "JOIST")],
        ...     locale="es",
        ... ))
        >>> outcome.context.get("es", "OHMS_LAW/title")
    """

    __slots__ = ("_base_url", "_client", "_timeout", "_translations_dir")

    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        translations_dir: str = DEFAULT_TRANSLATIONS_DIR,
    ) -> None:
        """Initialize the loader.

        Args:
            base_url: URL under which repository checkouts are served
            client: Client to use; the caller keeps ownership. None creates
                a client per load() call.
            timeout: Per-request timeout in seconds for a created client;
                None waits indefinitely
            translations_dir: Name of the translations checkout
        """
        self._base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout
        self._translations_dir = translations_dir

    def string_url(self, repo: RepoName, locale: LocaleCode) -> str:
        """Return the URL of a repo's string file for a locale."""
        file_name = strings_file_name(repo, locale)
        if locale == FALLBACK_LOCALE:
            return f"{self._base_url}/{repo}/{file_name}"
        return f"{self._base_url}/{self._translations_dir}/{repo}/{file_name}"

    def conglomerate_url(self, repo: RepoName) -> str:
        """Return the URL of a repo's development conglomerate file."""
        return (
            f"{self._base_url}/{self._translations_dir}/"
            f"{CONGLOMERATE_DIR_NAME}/{conglomerate_file_name(repo)}"
        )

    @asynccontextmanager
    async def _client_context(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client

    @staticmethod
    async def _fetch(client: httpx.AsyncClient, url: str, *, quiet: bool) -> FetchResult:
        """Fetch and parse one JSON object. Never raises for request failures."""
        try:
            response = await client.get(url)
            response.raise_for_status()
            data = response.json()
            if not isinstance(data, dict):
                msg = f"expected a JSON object, got {type(data).__name__}"
                raise ValueError(msg)
        except (httpx.HTTPError, ValueError) as e:
            if not quiet:
                logger.warning("Could not load %s: %s", url, e)
            return FetchResult(url, error=e)
        logger.debug("Loaded %s", url)
        return FetchResult(url, data=data)

    async def _fetch_repos(
        self,
        client: httpx.AsyncClient,
        url_for: Callable[[RepoName], str],
        main: StringRepo,
        others: Sequence[StringRepo],
        *,
        quiet: bool,
    ) -> _Fetched:
        """Fetch the main repo's file, then, if it exists, every other repo's."""
        main_result = await self._fetch(client, url_for(main.repo), quiet=quiet)
        fetched: _Fetched = [(main, main_result)]
        if main_result.ok:
            other_results = await asyncio.gather(
                *(self._fetch(client, url_for(other.repo), quiet=quiet) for other in others)
            )
            fetched.extend(zip(others, other_results, strict=True))
        return fetched

    async def load(
        self,
        main_repo: RepoName,
        string_repos: Sequence[StringRepo],
        *,
        locale: LocaleCode | None = None,
        locales: Sequence[LocaleCode] | str = (),
    ) -> LoadOutcome:
        """Fetch every needed string file and build a StringContext.

        Args:
            main_repo: Repository whose page is loading
            string_repos: Repositories providing strings; must include main_repo
            locale: Locale the page runs in
            locales: Additional locales, a comma-separated string of them,
                or ALL_LOCALES for all-locales mode

        Returns:
            LoadOutcome with the context and every request's result

        Raises:
            ValueError: If main_repo is not in string_repos
        """
        main = next((r for r in string_repos if r.repo == main_repo), None)
        if main is None:
            msg = f"'{main_repo}' is not one of the string repos"
            raise ValueError(msg)
        others = [r for r in string_repos if r.repo != main_repo]

        context = StringContext()
        results: list[FetchResult] = []

        async with self._client_context() as client:
            if locales == ALL_LOCALES:
                conglomerates, english = await asyncio.gather(
                    self._fetch_repos(client, self.conglomerate_url, main, others, quiet=True),
                    self._fetch_repos(
                        client,
                        lambda repo: self.string_url(repo, FALLBACK_LOCALE),
                        main,
                        others,
                        quiet=True,
                    ),
                )
                # English files go last so they override the conglomerate copies
                for string_repo, result in conglomerates:
                    results.append(result)
                    if result.data is not None:
                        context.add_conglomerate(result.data, string_repo.namespace)
                for string_repo, result in english:
                    results.append(result)
                    if result.data is not None:
                        context.add_string_file(result.data, string_repo.namespace, FALLBACK_LOCALE)
            else:
                extra = (
                    [code.strip() for code in locales.split(",") if code.strip()]
                    if isinstance(locales, str)
                    else list(locales)
                )
                plan = requested_locales(locale, extra)
                per_locale = await asyncio.gather(
                    *(
                        self._fetch_repos(
                            client,
                            lambda repo, code=code: self.string_url(repo, code),
                            main,
                            others,
                            quiet=False,
                        )
                        for code in plan
                    )
                )
                for code, fetched in zip(plan, per_locale, strict=True):
                    for string_repo, result in fetched:
                        results.append(result)
                        if result.data is not None:
                            context.add_string_file(result.data, string_repo.namespace, code)

        outcome = LoadOutcome(context, tuple(results))
        logger.info(
            "Loaded strings for %s: %d requests, %d failed, locales %s",
            main_repo,
            len(outcome.results),
            len(outcome.failures),
            ", ".join(context.locales),
        )
        return outcome


def load_unbuilt_strings(
    base_url: str,
    main_repo: RepoName,
    string_repos: Sequence[StringRepo],
    *,
    locale: LocaleCode | None = None,
    locales: Sequence[LocaleCode] | str = (),
    timeout: float | None = None,
    translations_dir: str = DEFAULT_TRANSLATIONS_DIR,
) -> LoadOutcome:
    """Run an unbuilt load to completion from synchronous code."""
    loader = UnbuiltStringLoader(base_url, timeout=timeout, translations_dir=translations_dir)
    return asyncio.run(loader.load(main_repo, string_repos, locale=locale, locales=locales))
