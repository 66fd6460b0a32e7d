"""
Reporter abstract interface.

A reporter surfaces a failed verification: it opens a diff tool, raises the
test framework's failure signal, prints a command, or delegates to others.

Every reporter answers two questions:
- is_working_in_this_environment(probe_key): can it run on this machine?
- report(received_path, approved_path): surface the discrepancy
"""

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any

from approvals.domain.errors import ErrorCodes, ReporterConfigurationError

logger = logging.getLogger(__name__)


class Reporter(ABC):
    """Base class for failure reporters."""

    name: str = ""

    def is_working_in_this_environment(self, probe_key: str) -> bool:
        """
        Whether this reporter can run here for a file named like `probe_key`.

        Defaults to always usable.
        """
        return True

    @abstractmethod
    def report(self, received_path: Path, approved_path: Path) -> None:
        """Surface the difference between the two files."""

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<{type(self).__name__}{label}>"


class CallableReporter(Reporter):
    """Adapts a plain `fn(received_path, approved_path)` into an always-usable reporter."""

    def __init__(self, func: Callable[[Path, Path], Any], name: str = "") -> None:
        self.func = func
        self.name = name or getattr(func, "__name__", "callable")

    def report(self, received_path: Path, approved_path: Path) -> None:
        self.func(received_path, approved_path)


def as_reporter(obj: Any) -> Reporter:
    """
    Coerce a reporter reference into a Reporter instance.

    Accepts a Reporter instance, a Reporter subclass (instantiated with no
    arguments) or a callable taking (received_path, approved_path).

    Raises:
        ReporterConfigurationError: INVALID_REPORTER
    """
    if isinstance(obj, Reporter):
        return obj
    if inspect.isclass(obj) and issubclass(obj, Reporter):
        return obj()
    if callable(obj) and not inspect.isclass(obj):
        return CallableReporter(obj)
    raise ReporterConfigurationError(
        ErrorCodes.INVALID_REPORTER,
        reporter=repr(obj),
    )


def is_usable(reporter: Reporter, probe_key: str) -> bool:
    """
    Probe a reporter without letting probe errors escape.

    A probe that raises counts as "not usable".
    """
    try:
        return bool(reporter.is_working_in_this_environment(probe_key))
    except Exception as e:
        logger.debug(f"Reporter probe failed for {reporter!r} ({probe_key}): {e}")
        return False
