"""
Composite reporters.

FirstWorkingReporter: try members in order, report with the first one that
is usable here, otherwise with the fallback.
MultiReporter: report with every usable member.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from approvals.domain.errors import ErrorCodes, ReporterConfigurationError

from .assertion import AssertionReporter
from .base import Reporter, as_reporter, is_usable

logger = logging.getLogger(__name__)

_DEFAULT_FALLBACK = object()


class FirstWorkingReporter(Reporter):
    """
    Ordered fallback chain.

    The fallback defaults to AssertionReporter, which is always usable, so a
    default chain can never run out of reporters. Passing fallback=None
    builds a strict chain that raises NO_REPORTER_AVAILABLE instead.
    """

    name = "first_working"

    def __init__(
        self,
        reporters: Iterable[Any],
        fallback: Any = _DEFAULT_FALLBACK,
    ) -> None:
        self.reporters = [as_reporter(r) for r in reporters]
        if fallback is _DEFAULT_FALLBACK:
            self.fallback: Reporter | None = AssertionReporter()
        elif fallback is None:
            self.fallback = None
        else:
            self.fallback = as_reporter(fallback)

    def select(self, probe_key: str) -> Reporter | None:
        """First usable member for `probe_key`, without the fallback."""
        for reporter in self.reporters:
            if is_usable(reporter, probe_key):
                logger.debug(f"Selected {reporter!r} for {probe_key}")
                return reporter
            logger.debug(f"Skipping {reporter!r}: not usable for {probe_key}")
        return None

    def is_working_in_this_environment(self, probe_key: str) -> bool:
        if self.select(probe_key) is not None:
            return True
        return self.fallback is not None and is_usable(self.fallback, probe_key)

    def report(self, received_path: Path, approved_path: Path) -> None:
        reporter = self.select(str(received_path))
        if reporter is None:
            if self.fallback is None:
                raise ReporterConfigurationError(
                    ErrorCodes.NO_REPORTER_AVAILABLE,
                    candidates=[repr(r) for r in self.reporters],
                    received=str(received_path),
                )
            logger.debug(f"No member usable, falling back to {self.fallback!r}")
            reporter = self.fallback
        reporter.report(received_path, approved_path)


class MultiReporter(Reporter):
    """Report with every member that is usable here."""

    name = "multi"

    def __init__(self, reporters: Iterable[Any]) -> None:
        self.reporters = [as_reporter(r) for r in reporters]

    def is_working_in_this_environment(self, probe_key: str) -> bool:
        return any(is_usable(r, probe_key) for r in self.reporters)

    def report(self, received_path: Path, approved_path: Path) -> None:
        probe_key = str(received_path)
        for reporter in self.reporters:
            if is_usable(reporter, probe_key):
                reporter.report(received_path, approved_path)
