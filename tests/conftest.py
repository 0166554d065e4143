"""Pytest configuration for the simstrings test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/

Shared fixtures build a miniature side-by-side checkout under tmp_path:

    root/
      ohms-law/package.json, ohms-law-strings_en.json, js/OhmsLawScreenView.js
      joist/package.json, joist-strings_en.json
      babel/ohms-law/ohms-law-strings_es.json, ohms-law-strings_ar.json
      babel/joist/joist-strings_es.json
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from simstrings.config import StringBuildConfig
from simstrings.enums import TextDirection
from simstrings.locale_info import LocaleInfo, LocaleInfoTable
from tests.helpers.checkout import SCREEN_VIEW_SOURCE, Checkout, write_json

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# CHECKOUT FIXTURES
# =============================================================================


@pytest.fixture
def checkout(tmp_path: Path) -> Checkout:
    """Two repos with English strings, Spanish and Arabic translations."""
    write_json(tmp_path / "ohms-law" / "package.json", {"phet": {"requirejsNamespace": "OHMS_LAW"}})
    write_json(
        tmp_path / "ohms-law" / "ohms-law-strings_en.json",
        {
            "title": {"value": "Ohm's Law"},
            "resistance": {"value": "Resistance", "metadata": {"phetioReadOnly": True}},
            "a11y": {"summary": {"value": " Summary "}},
            "unused": {"value": "Unused"},
        },
    )
    write_json(tmp_path / "joist" / "package.json", {"phet": {"requirejsNamespace": "JOIST"}})
    write_json(
        tmp_path / "joist" / "joist-strings_en.json",
        {"ResetAllButton": {"name": {"value": "Reset All"}}},
    )
    write_json(
        tmp_path / "babel" / "ohms-law" / "ohms-law-strings_es.json",
        {"title": {"value": "Ley de Ohm", "metadata": {"phetioReadOnly": False}}},
    )
    write_json(
        tmp_path / "babel" / "ohms-law" / "ohms-law-strings_ar.json",
        {"title": {"value": "قانون أوم"}},
    )
    write_json(
        tmp_path / "babel" / "joist" / "joist-strings_es.json",
        {"ResetAllButton": {"name": {"value": "Restablecer"}}},
    )
    screen_view = "ohms-law/js/OhmsLawScreenView.js"
    result = Checkout(tmp_path, StringBuildConfig(root_dir=tmp_path), screen_view)
    result.add_module(screen_view, SCREEN_VIEW_SOURCE)
    return result


@pytest.fixture
def locale_info() -> LocaleInfoTable:
    """Locale table independent of Babel's CLDR data."""
    return LocaleInfoTable(
        [
            LocaleInfo("en", "English", "English", TextDirection.LTR),
            LocaleInfo("es", "Spanish", "Español", TextDirection.LTR),
            LocaleInfo("ar", "Arabic", "عربي", TextDirection.RTL),
            LocaleInfo("zh_CN", "Chinese (Simplified)", "中文 (中国)", TextDirection.LTR),
            LocaleInfo("zh", "Chinese", "中文", TextDirection.LTR),
        ]
    )
