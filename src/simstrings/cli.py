"""Command-line entry point for string build steps.

Subcommands:
    generate-development-strings  Write conglomerate files for repositories
    string-map                    Assemble a build's string map as JSON
    fetch-strings                 Load unbuilt-mode strings over HTTP

Exit codes:
    0: Success.
    1: Build error (missing string, unsupported locale, bad configuration)
       or unreadable input.

Usage:
    simstrings generate-development-strings ohms-law joist
    simstrings --root-dir /work/phetsims string-map --repo ohms-law \\
        --locales en,es --used-modules used-modules.txt --output string-map.json
    simstrings fetch-strings --base-url http://localhost/phetsims --repo ohms-law \\
        --string-repo ohms-law=OHMS_LAW --string-repo joist=JOIST --locale es

Python 3.13+.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from simstrings.assembler import StringMapAssembler
from simstrings.config import StringBuildConfig
from simstrings.conglomerate import generate_development_strings
from simstrings.constants import DEFAULT_ROOT_DIR, DEFAULT_TRANSLATIONS_DIR
from simstrings.diagnostics import StringMapError
from simstrings.locale_info import LocaleInfoTable
from simstrings.unbuilt import ALL_LOCALES, StringRepo, load_unbuilt_strings

__all__ = ["main"]

logger = logging.getLogger(__name__)


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _string_repo(value: str) -> StringRepo:
    repo, sep, namespace = value.partition("=")
    if not sep or not repo or not namespace:
        msg = f"expected REPO=NAMESPACE, got '{value}'"
        raise argparse.ArgumentTypeError(msg)
    return StringRepo(repo, namespace)


def _read_used_modules(path: Path) -> list[str]:
    """Read module paths, one per line; blank lines and '#' comments are skipped."""
    lines = path.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip() and not line.lstrip().startswith("#")]


def _write_json(data: object, output: Path | None) -> None:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if output is None:
        sys.stdout.write(text + "\n")
    else:
        output.write_text(text, encoding="utf-8")
        logger.info("Wrote %s", output)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="simstrings",
        description="String map and development string tooling for multi-repo builds.",
    )
    parser.add_argument(
        "--root-dir",
        default=DEFAULT_ROOT_DIR,
        help="Directory holding every repository checkout (default: %(default)s).",
    )
    parser.add_argument(
        "--translations-dir",
        default=DEFAULT_TRANSLATIONS_DIR,
        help="Name of the translations checkout (default: %(default)s).",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate-development-strings",
        help="Combine every locale's strings of a repo into one file.",
    )
    generate.add_argument("repos", nargs="+", metavar="REPO")

    string_map = subparsers.add_parser(
        "string-map",
        help="Assemble the string map for a build.",
    )
    string_map.add_argument("--repo", required=True, help="Repository being built.")
    string_map.add_argument(
        "--locales",
        type=_split_csv,
        required=True,
        help="Comma-separated locales; must include en.",
    )
    string_map.add_argument(
        "--used-modules",
        type=Path,
        required=True,
        help="File listing used module paths relative to the root, one per line.",
    )
    string_map.add_argument(
        "--phet-libs",
        type=_split_csv,
        default=[],
        help="Comma-separated repositories the build depends on.",
    )
    string_map.add_argument(
        "--locale-info",
        type=Path,
        help="Locale-info JSON file (default: derive from Babel).",
    )
    string_map.add_argument("--output", type=Path, help="Output file (default: stdout).")

    fetch = subparsers.add_parser(
        "fetch-strings",
        help="Load unbuilt-mode strings from a server.",
    )
    fetch.add_argument("--base-url", required=True, help="URL serving the checkouts.")
    fetch.add_argument("--repo", required=True, help="Repository whose page is loading.")
    fetch.add_argument(
        "--string-repo",
        dest="string_repos",
        type=_string_repo,
        action="append",
        required=True,
        metavar="REPO=NAMESPACE",
        help="Repository providing strings (repeatable).",
    )
    fetch.add_argument("--locale", help="Locale the page runs in.")
    fetch.add_argument(
        "--locales",
        default="",
        help="Comma-separated additional locales, or * for all locales.",
    )
    fetch.add_argument("--timeout", type=float, help="Per-request timeout in seconds.")
    fetch.add_argument("--output", type=Path, help="Output file (default: stdout).")

    return parser.parse_args(argv)


def _run_generate(args: argparse.Namespace, config: StringBuildConfig) -> int:
    for repo in args.repos:
        generate_development_strings(repo, config)
    return 0


def _run_string_map(args: argparse.Namespace, config: StringBuildConfig) -> int:
    locale_info = LocaleInfoTable.from_json(args.locale_info) if args.locale_info else None
    assembler = StringMapAssembler(config, locale_info=locale_info)
    result = assembler.assemble(
        args.repo, args.locales, args.phet_libs, _read_used_modules(args.used_modules)
    )
    _write_json(result.to_json_dict(), args.output)
    return 0


def _run_fetch(args: argparse.Namespace, config: StringBuildConfig) -> int:
    locales: list[str] | str = (
        ALL_LOCALES if args.locales.strip() == ALL_LOCALES else _split_csv(args.locales)
    )
    outcome = load_unbuilt_strings(
        args.base_url,
        args.repo,
        args.string_repos,
        locale=args.locale,
        locales=locales,
        timeout=args.timeout,
        translations_dir=config.translations_dir,
    )
    context = outcome.context
    _write_json(
        {
            "strings": {locale: dict(values) for locale, values in context.strings.items()},
            "metadata": dict(context.metadata),
        },
        args.output,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run a string build subcommand."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = StringBuildConfig(root_dir=args.root_dir, translations_dir=args.translations_dir)
        match args.command:
            case "generate-development-strings":
                return _run_generate(args, config)
            case "string-map":
                return _run_string_map(args, config)
            case _:
                return _run_fetch(args, config)
    except StringMapError as e:
        if e.diagnostic is not None:
            print(e.diagnostic.format_error(), file=sys.stderr)
        else:
            print(f"error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
