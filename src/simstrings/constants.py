"""Shared constants for simstrings.

Centralizes the file-naming conventions, locale constants and Unicode
directional marks used by the loader, the assembler, the conglomerator and
the unbuilt string loader. Placing them here avoids circular imports.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locales
    "FALLBACK_LOCALE",
    "FAMILY_LOCALE_LENGTH",
    "RTL_LOCALE_PREFIXES",
    # Directional formatting
    "UNICODE_LRE",
    "UNICODE_RLE",
    "UNICODE_PDF",
    # Files and directories
    "DEFAULT_ROOT_DIR",
    "DEFAULT_TRANSLATIONS_DIR",
    "CONGLOMERATE_DIR_NAME",
    "CONGLOMERATE_SUFFIX",
    "PACKAGE_MANIFEST",
    "STRINGS_FILE_INFIX",
    # String access scanning
    "STRING_MODULE_SUFFIX",
    "STRING_PROPERTY_SUFFIX",
    "MINIFIED_IMPORT_ARTIFACT",
]

# ============================================================================
# LOCALES
# ============================================================================

# Locale guaranteed to carry a complete string set; last entry of every
# fallback chain and the only source of string metadata.
FALLBACK_LOCALE: str = "en"

# Length of the language-family form of a locale ("zh_CN" -> "zh").
FAMILY_LOCALE_LENGTH: int = 2

# Prefix rule used by the unbuilt loader, which runs before the locale-info
# table is available.
RTL_LOCALE_PREFIXES: tuple[str, ...] = ("ae", "ar", "fa", "iw", "ur")

# ============================================================================
# DIRECTIONAL FORMATTING
# ============================================================================

UNICODE_LRE: str = "\u202a"  # U+202A LEFT-TO-RIGHT EMBEDDING
UNICODE_RLE: str = "\u202b"  # U+202B RIGHT-TO-LEFT EMBEDDING
UNICODE_PDF: str = "\u202c"  # U+202C POP DIRECTIONAL FORMATTING

# ============================================================================
# FILES AND DIRECTORIES
# ============================================================================

# Repositories are checked out side by side; tooling runs from inside one.
DEFAULT_ROOT_DIR: str = ".."

# Sibling checkout holding every non-fallback translation.
DEFAULT_TRANSLATIONS_DIR: str = "babel"

# Leading underscore sorts it first and keeps it apart from repo names.
CONGLOMERATE_DIR_NAME: str = "_generated_development_strings"
CONGLOMERATE_SUFFIX: str = "_all.json"

PACKAGE_MANIFEST: str = "package.json"

# "{repo}-strings_{locale}.json"
STRINGS_FILE_INFIX: str = "-strings_"

# ============================================================================
# STRING ACCESS SCANNING
# ============================================================================

# PascalCase(repo) + STRING_MODULE_SUFFIX names a repo's string module.
STRING_MODULE_SUFFIX: str = "Strings"

# Accesses ending here obtain a live-updating binding, not a string value.
STRING_PROPERTY_SUFFIX: str = "StringProperty"

# Scanning minified import paths can yield this bogus partial key.
MINIFIED_IMPORT_ARTIFACT: str = "js"
