"""simstrings - String maps and development strings for multi-repo simulation builds.

Collects the translatable strings a build actually uses from per-repository
translation files, resolves each one through its locale fallback chain, and
marks every value with Unicode directional formatting. Also produces the
per-repository conglomerate files and loads strings over HTTP for unbuilt
development pages.

Public API:
    get_string_map - Assemble the string map for a build
    StringMapAssembler - Assembly with injectable loader and extractor
    generate_development_strings - Write a repo's conglomerate string file
    UnbuiltStringLoader - Concurrent HTTP loader for unbuilt mode
    fallbacks_for - Locale fallback chain
    LocaleInfoTable - Supported locales and their directions
    StringBuildConfig - Checkout layout

Exceptions:
    StringMapError - Base exception class
    ConfigurationError - Unusable build configuration
    FallbackLocaleRequiredError - Fallback locale not requested
    UnsupportedLocaleError - Locale missing from the locale-info table
    MissingStringError - Used string key with no entry in any fallback

Submodules:
    simstrings.scanning - String repository and string access scanning
    simstrings.strings - String file loading and tree walking
    simstrings.diagnostics - Error types and diagnostic codes
    simstrings.cli - Command-line entry point
"""

from .assembler import StringMapAssembler, StringMapResult, get_string_map
from .config import StringBuildConfig
from .conglomerate import generate_development_strings
from .diagnostics import (
    ConfigurationError,
    FallbackLocaleRequiredError,
    MissingStringError,
    StringMapError,
    UnsupportedLocaleError,
)
from .locale_info import LocaleInfo, LocaleInfoTable
from .locale_utils import fallbacks_for
from .unbuilt import LoadOutcome, StringContext, StringRepo, UnbuiltStringLoader

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("simstrings")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigurationError",
    "FallbackLocaleRequiredError",
    "LoadOutcome",
    "LocaleInfo",
    "LocaleInfoTable",
    "MissingStringError",
    "StringBuildConfig",
    "StringContext",
    "StringMapAssembler",
    "StringMapError",
    "StringMapResult",
    "StringRepo",
    "UnbuiltStringLoader",
    "UnsupportedLocaleError",
    "__version__",
    "fallbacks_for",
    "generate_development_strings",
    "get_string_map",
]
