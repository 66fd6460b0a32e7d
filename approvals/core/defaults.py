"""
Process-wide defaults: default reporter, front-loaded reporter, namer,
approver.

Everything registered here affects ALL later verifications in the process,
on every thread, not just the current call. Unset values come from
settings (approvals.yaml / environment).
"""

import logging
import threading
from collections.abc import Callable, Generator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from approvals.reporters.base import Reporter, as_reporter
from approvals.reporters.introduction import IntroductionReporter
from approvals.reporters.registry import get_reporter
from approvals.settings import get_settings

from .namer import Namer, StackFrameNamer

logger = logging.getLogger(__name__)

_UNSET: Any = object()

_lock = threading.Lock()
_default_reporter: Reporter | None = None
_front_loaded: Any = _UNSET
_namer_factory: Callable[[], Namer] | None = None
_approver_factory: Callable[..., Any] | None = None
_introduction = IntroductionReporter()


@dataclass(frozen=True)
class EngineDefaults:
    """Snapshot of the process-wide defaults, taken once per verification."""
    reporter: Reporter
    front_loaded: Reporter | None
    normalize_line_endings: bool
    namer_factory: Callable[[], Namer]
    # None means FileApprover
    approver_factory: Callable[..., Any] | None = None


def register_default_reporter(reporter: Any) -> None:
    """Replace the default reporter (None restores the introduction reporter)."""
    global _default_reporter
    instance = as_reporter(reporter) if reporter is not None else None
    with _lock:
        _default_reporter = instance
    logger.debug(f"Default reporter set to {instance!r}")


def register_front_loaded_reporter(reporter: Any) -> None:
    """Replace the process-wide front-loaded reporter (None disables it)."""
    global _front_loaded
    instance = as_reporter(reporter) if reporter is not None else None
    with _lock:
        _front_loaded = instance
    logger.debug(f"Front-loaded reporter set to {instance!r}")


@contextmanager
def set_front_loaded_reporter(reporter: Any) -> Generator[Reporter | None, None, None]:
    """
    Install a front-loaded reporter for the duration of a `with` block.

    The previous front-loaded reporter is restored on exit.
    """
    global _front_loaded
    instance = as_reporter(reporter) if reporter is not None else None
    with _lock:
        previous = _front_loaded
        _front_loaded = instance
    try:
        yield instance
    finally:
        with _lock:
            _front_loaded = previous


def register_default_namer(factory: Callable[[], Namer] | None) -> None:
    """Replace the namer factory used when no namer is passed (None restores default)."""
    global _namer_factory
    with _lock:
        _namer_factory = factory


def register_default_approver(factory: Callable[..., Any] | None) -> None:
    """
    Replace the approver used for every verification (None restores FileApprover).

    The factory is called as factory(writer, identity, normalize_line_endings)
    and must return an object whose approve() returns Pass or Fail.
    """
    global _approver_factory
    with _lock:
        _approver_factory = factory
    logger.debug(f"Default approver set to {factory!r}")


def reset_defaults() -> None:
    """Forget every registration made through this module."""
    global _default_reporter, _front_loaded, _namer_factory, _approver_factory
    with _lock:
        _default_reporter = None
        _front_loaded = _UNSET
        _namer_factory = None
        _approver_factory = None


def snapshot_defaults() -> EngineDefaults:
    """
    Current defaults, with unset values filled from settings.

    Raises:
        ReporterConfigurationError: UNKNOWN_REPORTER for a bad front-loaded name
    """
    settings = get_settings()
    with _lock:
        reporter = _default_reporter
        front_loaded = _front_loaded
        namer_factory = _namer_factory
        approver_factory = _approver_factory

    if front_loaded is _UNSET:
        name = settings.front_loaded_reporter
        front_loaded = get_reporter(name) if name else None

    return EngineDefaults(
        reporter=reporter or _introduction,
        front_loaded=front_loaded,
        normalize_line_endings=settings.normalize_line_endings,
        namer_factory=namer_factory or StackFrameNamer,
        approver_factory=approver_factory,
    )
