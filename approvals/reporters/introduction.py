"""
Default reporter.

On the first failure in a process it shows a short introduction on how to
configure reporters (in the failure message, or as a warning when the
failure is shown elsewhere), then delegates to the configured fallback chain
(settings `reporters.default`, else every catalogue diff tool, ending in
AssertionReporter).
"""

import logging
import threading
from pathlib import Path

from approvals.domain.errors import ApprovalMismatchError
from approvals.settings import get_settings

from .base import Reporter, is_usable
from .composite import FirstWorkingReporter
from .registry import diff_tool_names, get_reporter

logger = logging.getLogger(__name__)

INTRODUCTION_TEXT = """\
Approval failed. The received file was kept next to the approved file for review.

To change how failures are shown:
  - decorate a test or test class with @use_reporter(...)
  - list reporters under `reporters.default` in approvals.yaml
  - set APPROVALS_DEFAULT_REPORTERS=meld,vscode,command_line
Approve a result by renaming *.received.* to *.approved.* or run `approvals-approve`.
"""


class IntroductionReporter(Reporter):
    """
    Show the introduction once, then delegate to the default chain.

    When the delegate fails the test, the introduction is appended to that
    failure message; otherwise it is logged as a warning.
    """

    name = "introduction"

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._introduced = False

    def delegate(self) -> FirstWorkingReporter:
        settings = get_settings()
        names = settings.default_reporters
        if names is None:
            names = tuple(diff_tool_names())
        return FirstWorkingReporter([get_reporter(name) for name in names])

    def is_working_in_this_environment(self, probe_key: str) -> bool:
        return is_usable(self.delegate(), probe_key)

    def _claim_introduction(self) -> bool:
        """True exactly once per process (and never when disabled)."""
        if not get_settings().introduction:
            return False
        with self._lock:
            if self._introduced:
                return False
            self._introduced = True
            return True

    def report(self, received_path: Path, approved_path: Path) -> None:
        introduce = self._claim_introduction()
        try:
            self.delegate().report(received_path, approved_path)
        except ApprovalMismatchError as e:
            if not introduce:
                raise
            detail = f"{e.detail}\n\n{INTRODUCTION_TEXT}" if e.detail else INTRODUCTION_TEXT
            raise ApprovalMismatchError(
                e.code,
                received_path=e.received_path,
                approved_path=e.approved_path,
                detail=detail,
            ) from None
        if introduce:
            logger.warning(INTRODUCTION_TEXT)
