"""
Pytest fixtures for the approval engine tests.

Every test runs with:
- no CI indicators and no APPROVALS_* variables in the environment
- no graphical display (diff tools are never launched)
- fresh process-wide defaults, reporter registry and settings
"""

from collections.abc import Callable, Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from approvals.core.defaults import reset_defaults
from approvals.core.namer import FixedNamer
from approvals.domain.constants import (
    CI_INDICATORS,
    ENV_CONFIG_PATH,
    ENV_DEFAULT_REPORTERS,
    ENV_FRONT_LOADED_REPORTER,
    ENV_NORMALIZE_LINE_ENDINGS,
)
from approvals.reporters.base import Reporter
from approvals.reporters.registry import reset_registry
from approvals.settings import ApprovalSettings, override_settings

# =============================================================================
# Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_engine(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clean environment and process-wide state around every test."""
    for name in (
        *CI_INDICATORS,
        ENV_CONFIG_PATH,
        ENV_DEFAULT_REPORTERS,
        ENV_FRONT_LOADED_REPORTER,
        ENV_NORMALIZE_LINE_ENDINGS,
        "DISPLAY",
        "WAYLAND_DISPLAY",
    ):
        monkeypatch.delenv(name, raising=False)

    # Default chain = assertion only: a failing test never opens a diff tool
    override_settings(ApprovalSettings(default_reporters=("assert",)))
    reset_defaults()
    reset_registry()

    yield

    reset_defaults()
    reset_registry()
    override_settings(None)


@pytest.fixture
def ci_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend to run on GitHub Actions."""
    monkeypatch.setenv("GITHUB_ACTIONS", "true")

# =============================================================================
# Reporter / Namer Fixtures
# =============================================================================

@pytest.fixture
def make_reporter() -> Callable[..., MagicMock]:
    """Factory for mock reporters with a fixed usability answer."""

    def factory(usable: bool = True, name: str = "mock") -> MagicMock:
        reporter = MagicMock(spec=Reporter)
        reporter.name = name
        reporter.is_working_in_this_environment.return_value = usable
        return reporter

    return factory


@pytest.fixture
def fixed_namer(tmp_path: Path) -> FixedNamer:
    """Namer writing sample.approved.* / sample.received.* under tmp_path."""
    return FixedNamer(tmp_path, "sample")
