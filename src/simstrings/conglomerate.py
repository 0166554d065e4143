"""Development conglomerate string files.

Combines every locale's translation file for a repository into one JSON
file, so that unbuilt development mode with ``locales=*`` needs one request
per repository instead of one per locale:

    {root}/babel/_generated_development_strings/{repo}_all.json

    {"en": {"title": {"value": "Ohm's Law"}}, "es": {"title": {"value": "Ley de Ohm"}}}

Only each string's ``value`` is kept; history and other fields of the raw
translation format are dropped. Nested groups are flattened to dotted keys
(``"a11y.summary"``). Keys are not namespaced here, the consumer adds the
namespace.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import re
import time
from pathlib import Path
from typing import Any

from simstrings.config import StringBuildConfig
from simstrings.constants import CONGLOMERATE_SUFFIX, FALLBACK_LOCALE
from simstrings.strings.loading import strings_file_name
from simstrings.strings.tree import iter_string_entries
from simstrings.types import LocaleCode, PartialStringKey, RepoName

__all__ = [
    "conglomerate_file_name",
    "find_translation_files",
    "generate_development_strings",
    "locale_from_file_name",
]

logger = logging.getLogger(__name__)

# "ohms-law-strings_zh_CN.json" -> "zh_CN": from the first underscore of the
# base name up to ".json". Repo names never contain underscores.
_LOCALE_RE = re.compile(r"(?<=_)(.*)(?=\.json)")


def conglomerate_file_name(repo: RepoName) -> str:
    """Return the conglomerate file name for a repo ('ohms-law_all.json')."""
    return f"{repo}{CONGLOMERATE_SUFFIX}"


def locale_from_file_name(path: str | Path) -> LocaleCode:
    """Extract the locale from a string file name.

    Raises:
        ValueError: If the name does not follow ``{repo}-strings_{locale}.json``

    Example:
        >>> locale_from_file_name("babel/ohms-law/ohms-law-strings_zh_CN.json")
        'zh_CN'
    """
    name = Path(path).name
    match = _LOCALE_RE.search(name)
    if match is None or not match.group(1):
        msg = f"Cannot determine locale from string file name: '{name}'"
        raise ValueError(msg)
    return match.group(1)


def find_translation_files(repo: RepoName, config: StringBuildConfig) -> list[Path]:
    """Return every candidate string file for a repo.

    All files in the repo's translations directory (a missing directory is
    tolerated), followed by the repo's own English file if it exists.
    """
    files: list[Path] = []
    translations_repo_dir = config.translations_path / repo
    try:
        files.extend(sorted(p for p in translations_repo_dir.iterdir() if p.is_file()))
    except FileNotFoundError:
        logger.debug("no translations directory: %s", translations_repo_dir)
    english_path = config.repo_dir(repo) / strings_file_name(repo, FALLBACK_LOCALE)
    if english_path.exists():
        files.append(english_path)
    return files


def _reduce_to_values(contents: dict[str, Any]) -> dict[PartialStringKey, dict[str, str]]:
    return {key: {"value": entry["value"]} for key, entry in iter_string_entries(contents)}


def generate_development_strings(
    repo: RepoName, config: StringBuildConfig | None = None
) -> Path | None:
    """Write the conglomerate string file for a repo.

    Args:
        repo: Repository to combine translations for
        config: Checkout layout (default: StringBuildConfig())

    Returns:
        Path of the written file, or None when the repo has no string files

    Raises:
        OSError: If a string file cannot be read or the output not written
        json.JSONDecodeError: If a string file is not valid JSON
        ValueError: If a file name does not carry a locale
    """
    config = config if config is not None else StringBuildConfig()
    start = time.perf_counter()

    string_files = find_translation_files(repo, config)
    if not string_files:
        logger.info("no translations found")
        return None

    conglomerate: dict[LocaleCode, dict[PartialStringKey, dict[str, str]]] = {}
    for string_file in string_files:
        locale = locale_from_file_name(string_file)
        contents = json.loads(string_file.read_text(encoding="utf-8"))
        conglomerate[locale] = _reduce_to_values(contents)

    output_dir = config.conglomerate_path
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / conglomerate_file_name(repo)
    output_path.write_text(json.dumps(conglomerate, indent=2, ensure_ascii=False), encoding="utf-8")

    logger.info("Wrote %s in %dms", output_path, (time.perf_counter() - start) * 1000)
    return output_path
