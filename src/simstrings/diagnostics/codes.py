"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by simstrings
exceptions.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (locales, locale info)
        2000-2999: String resolution errors (missing entries)
    """

    # Configuration errors (1000-1999)
    FALLBACK_LOCALE_REQUIRED = 1001
    UNSUPPORTED_LOCALE = 1002
    LOCALE_INFO_INVALID = 1003

    # Resolution errors (2000-2999)
    STRING_NOT_FOUND = 2001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        location: File or repository the problem was found in
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    location: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Example output:
            error[STRING_NOT_FOUND]: Missing string information for joist ResetAllButton.name
              --> joist
              = help: Add the key to joist-strings_en.json

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.location:
            lines.append(f"  --> {self.location}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
