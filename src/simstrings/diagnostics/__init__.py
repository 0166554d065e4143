"""Diagnostic system for simstrings errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConfigurationError,
    FallbackLocaleRequiredError,
    MissingStringError,
    StringMapError,
    UnsupportedLocaleError,
)

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "FallbackLocaleRequiredError",
    "MissingStringError",
    "StringMapError",
    "UnsupportedLocaleError",
]
