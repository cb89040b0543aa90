"""Shared pytest configuration for parsewright.

Hypothesis profiles:
    dev      500 examples per property (default)
    ci       50 derandomized examples, selected when CI=true
    verbose  100 examples with per-example output

HYPOTHESIS_PROFILE overrides the choice. Tests marked ``fuzz`` only run
under ``pytest -m fuzz``.
"""

import os

import pytest
from hypothesis import Verbosity, settings

settings.register_profile("dev", max_examples=500)
settings.register_profile("ci", max_examples=50, derandomize=True, print_blob=True)
settings.register_profile("verbose", max_examples=100, verbosity=Verbosity.verbose)

_PROFILES = frozenset({"dev", "ci", "verbose"})


def _profile_name() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE", "")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_profile_name())


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip grammar fuzzing unless the run selects the fuzz marker."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return

    skip_fuzz = pytest.mark.skip(reason="grammar fuzzing: run with pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)
