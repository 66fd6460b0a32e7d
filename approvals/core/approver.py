"""
Verification orchestrator.

Flow of one verification:
1. capture the caller context
2. resolve the effective configuration
3. write <stem>.received.<ext>
4. read <stem>.approved.<ext> if present
5. compare
6. Pass -> delete the received file
   Fail -> report, then raise ApprovalMismatchError
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from approvals.domain.errors import ApprovalMismatchError, ErrorCodes
from approvals.domain.schemas import ArtifactIdentity, ComparisonOutcome, EffectiveConfig, Fail
from approvals.reporters.assertion import AssertionReporter
from approvals.reporters.base import as_reporter, is_usable

from .caller import capture
from .comparator import compare
from .defaults import snapshot_defaults
from .namer import Namer
from .resolver import resolve
from .storage import read_approved, remove_received, write_received
from .writers import Writer

logger = logging.getLogger(__name__)


class FileApprover:
    """Write, load, compare and clean up one approved/received pair."""

    def __init__(
        self,
        writer: Writer,
        identity: ArtifactIdentity,
        normalize_line_endings: bool = True,
    ) -> None:
        self.writer = writer
        self.identity = identity
        self.normalize_line_endings = normalize_line_endings

    def approve(self) -> ComparisonOutcome:
        """
        Run the comparison.

        Returns:
            Pass (received file removed) or Fail (received file kept)

        Raises:
            ArtifactIOError: Artifact could not be written, read or removed
        """
        received_path = self.identity.received_path
        approved_path = self.identity.approved_path

        received = self.writer.content()
        write_received(received_path, received)
        approved = read_approved(approved_path)

        outcome = compare(
            received,
            approved,
            normalize_line_endings=self.normalize_line_endings and self.writer.is_text,
        )
        if outcome.passed:
            remove_received(received_path)
            logger.debug(f"Approved: {approved_path}")
        return outcome


def report_failure(outcome: Fail, identity: ArtifactIdentity, config: EffectiveConfig) -> None:
    """
    Hand a failed comparison to exactly one reporter.

    The received file must already be on disk. A resolved reporter that is
    not usable for this file is replaced by AssertionReporter.
    """
    received_path = identity.received_path
    approved_path = identity.approved_path
    reporter = config.reporter

    if not is_usable(reporter, str(received_path)):
        logger.warning(
            f"Reporter {reporter!r} is not usable for {received_path.name}; "
            f"falling back to assertion reporter"
        )
        reporter = AssertionReporter()

    state = "missing baseline" if outcome.baseline_missing else "content mismatch"
    logger.info(f"Reporting {state} with {reporter!r}: {received_path}")
    reporter.report(received_path, approved_path)


def verify_with_writer(
    writer: Writer,
    namer: Namer | None = None,
    reporter: Any = None,
    on_failure: Callable[[Fail], None] | None = None,
) -> None:
    """
    Verify the writer's content against the approved artifact.

    Args:
        writer: Content producer
        namer: Explicit namer (None = process default)
        reporter: Explicit reporter; bypasses marker resolution
        on_failure: Called with the Fail outcome before reporting

    Raises:
        ApprovalMismatchError: Content differs or no approved file exists
        ArtifactIOError: Operational I/O failure
    """
    ctx = capture()
    defaults = snapshot_defaults()
    config = resolve(ctx, defaults)
    if reporter is not None:
        config = replace(config, reporter=as_reporter(reporter))

    identity = (namer or defaults.namer_factory()).get_identity(ctx, writer.extension)
    approver_factory = defaults.approver_factory or FileApprover
    outcome = approver_factory(writer, identity, config.normalize_line_endings).approve()
    if outcome.passed:
        return

    if on_failure is not None:
        on_failure(outcome)
    report_failure(outcome, identity, config)

    code = ErrorCodes.BASELINE_MISSING if outcome.baseline_missing else ErrorCodes.CONTENT_MISMATCH
    raise ApprovalMismatchError(
        code,
        received_path=identity.received_path,
        approved_path=identity.approved_path,
    )
