"""
Error definitions for the approval engine.

Rules:
- A content mismatch is a test failure (AssertionError), never an operational error
- Operational I/O problems surface as ArtifactIOError, distinct from mismatches
- Reporter probe failures are recovered locally and never reach the caller
"""

from pathlib import Path
from typing import Any


class ApprovalError(Exception):
    """
    Base error for everything that is not a content mismatch.

    Usage:
        raise ApprovalError(ErrorCodes.INVALID_CONFIG, path=str(path), key="reporters")
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """For logs / JSON serialization."""
        return {
            "code": self.code,
            **self.context,
        }


class ArtifactIOError(ApprovalError):
    """Reading, writing or deleting an artifact file failed."""


class ReporterConfigurationError(ApprovalError):
    """No usable reporter, or a reporter reference that cannot be used."""


class ApprovalMismatchError(AssertionError):
    """
    Verification failure signal.

    Subclasses AssertionError so the host test framework marks the test as
    failed rather than errored.
    """

    def __init__(
        self,
        code: str,
        received_path: Path,
        approved_path: Path,
        detail: str = "",
    ) -> None:
        self.code = code
        self.received_path = received_path
        self.approved_path = approved_path
        self.detail = detail
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.code == ErrorCodes.BASELINE_MISSING:
            headline = "Approved file does not exist yet"
        else:
            headline = "Received file does not match approved file"
        message = (
            f"[{self.code}] {headline}\n"
            f"  Received: {self.received_path}\n"
            f"  Approved: {self.approved_path}"
        )
        if self.detail:
            message = f"{message}\n{self.detail}"
        return message


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """Error code constants."""

    # === Verification outcome ===
    BASELINE_MISSING = "BASELINE_MISSING"
    CONTENT_MISMATCH = "CONTENT_MISMATCH"

    # === Artifact I/O ===
    ARTIFACT_WRITE_FAILED = "ARTIFACT_WRITE_FAILED"
    ARTIFACT_READ_FAILED = "ARTIFACT_READ_FAILED"
    ARTIFACT_DELETE_FAILED = "ARTIFACT_DELETE_FAILED"

    # === Reporters ===
    NO_REPORTER_AVAILABLE = "NO_REPORTER_AVAILABLE"
    INVALID_REPORTER = "INVALID_REPORTER"
    UNKNOWN_REPORTER = "UNKNOWN_REPORTER"

    # === Configuration ===
    INVALID_CONFIG = "INVALID_CONFIG"
    DUPLICATE_MARKER = "DUPLICATE_MARKER"
    NAMER_NO_CALLER = "NAMER_NO_CALLER"

    # === Review CLI ===
    APPROVAL_LOCK_TIMEOUT = "APPROVAL_LOCK_TIMEOUT"
