"""simstrings exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic object for rich error
information. Configuration and resolution errors abort a build; missing
translation files never raise.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = [
    "ConfigurationError",
    "FallbackLocaleRequiredError",
    "MissingStringError",
    "StringMapError",
    "UnsupportedLocaleError",
]


class StringMapError(Exception):
    """Base exception for all simstrings errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize StringMapError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigurationError(StringMapError):
    """Build configuration is unusable.

    Raised before any string file is read; the build cannot proceed.
    """


class FallbackLocaleRequiredError(ConfigurationError):
    """Requested locales do not include the fallback locale."""

    def __init__(self, fallback_locale: str) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.FALLBACK_LOCALE_REQUIRED,
            message=f"fallback locale is required: '{fallback_locale}'",
            hint=f"Add '{fallback_locale}' to the requested locales",
        )
        super().__init__(diagnostic)
        self.fallback_locale = fallback_locale


class UnsupportedLocaleError(ConfigurationError):
    """Locale is missing from the locale-info table.

    Attributes:
        locale_code: The locale that could not be found
    """

    def __init__(self, locale_code: str, detail: str | None = None) -> None:
        message = f"unsupported locale: {locale_code}"
        if detail:
            message = f"{message} ({detail})"
        diagnostic = Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_LOCALE,
            message=message,
            hint="Check the locale code against the locale-info table",
        )
        super().__init__(diagnostic)
        self.locale_code = locale_code


class MissingStringError(StringMapError):
    """A string access resolves to no entry anywhere in its fallback chain.

    Attributes:
        repo: Repository whose string module was accessed
        partial_key: The access path that could not be resolved
    """

    def __init__(self, repo: str, partial_key: str) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.STRING_NOT_FOUND,
            message=f"Missing string information for {repo} {partial_key}",
            hint=f"Add '{partial_key}' to {repo}-strings_en.json",
            location=repo,
        )
        super().__init__(diagnostic)
        self.repo = repo
        self.partial_key = partial_key
