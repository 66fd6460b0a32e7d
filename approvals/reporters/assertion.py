"""
Reporters that fail the test directly.

AssertionReporter is the guaranteed last resort: it is usable everywhere and
raises ApprovalMismatchError (an AssertionError) naming both files, with an
inline diff summary when one can be produced.

CIReporter behaves the same but only claims to be usable on CI, which makes
it the natural front-loaded reporter: on a build agent it wins before any
GUI diff tool gets a chance to launch.
"""

import logging
import os
from pathlib import Path

from approvals.domain.constants import CI_INDICATORS
from approvals.domain.errors import ApprovalMismatchError, ErrorCodes
from approvals.utils.diff import diff_summary

from .base import Reporter

logger = logging.getLogger(__name__)


def detect_ci_environment() -> str | None:
    """Name of the first CI indicator set in the environment, or None."""
    for indicator in CI_INDICATORS:
        if os.getenv(indicator):
            return indicator
    return None


class AssertionReporter(Reporter):
    """Raise the test framework's failure signal with both paths and a diff."""

    name = "assert"

    def __init__(self, include_diff: bool = True) -> None:
        self.include_diff = include_diff

    def _detail(self, received_path: Path, approved_path: Path) -> str:
        if not self.include_diff:
            return ""
        try:
            return diff_summary(received_path, approved_path)
        except OSError as e:
            logger.debug(f"Diff summary unavailable for {received_path}: {e}")
            return ""

    def report(self, received_path: Path, approved_path: Path) -> None:
        code = (
            ErrorCodes.CONTENT_MISMATCH
            if approved_path.exists()
            else ErrorCodes.BASELINE_MISSING
        )
        raise ApprovalMismatchError(
            code,
            received_path=received_path,
            approved_path=approved_path,
            detail=self._detail(received_path, approved_path),
        )


class CIReporter(AssertionReporter):
    """AssertionReporter that is only usable when a CI environment is detected."""

    name = "ci"

    def is_working_in_this_environment(self, probe_key: str) -> bool:
        indicator = detect_ci_environment()
        if indicator:
            logger.debug(f"CI environment detected via {indicator}")
        return indicator is not None
