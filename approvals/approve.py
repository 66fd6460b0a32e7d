#!/usr/bin/env python
"""
Review pending received files.

Lists *.received.* files left by failing verifications and promotes the
reviewed ones to *.approved.*.

WARNING: approving replaces the baseline. Review the received files first.
NEVER run this automatically in CI.

Usage:
    python -m approvals.approve --list
    python -m approvals.approve test_report.TestReport.test_totals
    python -m approvals.approve --all
    python -m approvals.approve --clean
"""

import argparse
import logging
import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path

from filelock import FileLock, Timeout

from approvals.core.storage import TEMP_PREFIX, remove_received
from approvals.domain.constants import (
    APPROVE_LOCK_FILENAME,
    APPROVE_LOCK_TIMEOUT,
    APPROVED_TOKEN,
    RECEIVED_TOKEN,
)
from approvals.domain.errors import ApprovalError, ArtifactIOError, ErrorCodes
from approvals.reporters.assertion import detect_ci_environment

logger = logging.getLogger(__name__)

RECEIVED_PATTERN = re.compile(rf"^(?P<stem>.+)\.{RECEIVED_TOKEN}\.(?P<ext>[^.]+)$")


class CIEnvironmentError(RuntimeError):
    """Raised when approving is attempted in a CI environment."""
    pass


def _check_ci_environment() -> None:
    """
    Block approvals on CI.

    Raises:
        CIEnvironmentError: If a CI environment is detected
    """
    indicator = detect_ci_environment()
    if indicator:
        raise CIEnvironmentError(
            f"ERROR: approvals cannot be approved in a CI environment.\n"
            f"Detected CI indicator: {indicator}={os.getenv(indicator)}\n\n"
            f"Approved files must be reviewed and approved locally.\n\n"
            f"To approve:\n"
            f"  1. Run the tests locally\n"
            f"  2. Review the *.received.* files\n"
            f"  3. Run: python -m approvals.approve --all\n"
            f"  4. Commit the *.approved.* files"
        )


@dataclass
class PendingApproval:
    """A received file waiting for review."""
    received_path: Path
    stem: str
    extension: str

    @property
    def approved_path(self) -> Path:
        return self.received_path.with_name(f"{self.stem}.{APPROVED_TOKEN}.{self.extension}")

    @property
    def has_baseline(self) -> bool:
        return self.approved_path.exists()

    def matches(self, names: list[str]) -> bool:
        return self.stem in names or self.received_path.name in names


def discover_pending(root: Path) -> list[PendingApproval]:
    """
    Find every received file under `root`.

    Args:
        root: Directory to search recursively

    Returns:
        Pending approvals sorted by path
    """
    pending = []
    for path in root.rglob(f"*.{RECEIVED_TOKEN}.*"):
        if not path.is_file() or path.name.startswith(TEMP_PREFIX):
            continue
        match = RECEIVED_PATTERN.match(path.name)
        if match:
            pending.append(PendingApproval(
                received_path=path,
                stem=match.group("stem"),
                extension=match.group("ext"),
            ))
    return sorted(pending, key=lambda p: str(p.received_path))


def approve_one(item: PendingApproval) -> Path:
    """
    Promote a received file to approved (atomic replace).

    Raises:
        ArtifactIOError: ARTIFACT_WRITE_FAILED
    """
    try:
        os.replace(item.received_path, item.approved_path)
    except OSError as e:
        raise ArtifactIOError(
            ErrorCodes.ARTIFACT_WRITE_FAILED,
            path=str(item.approved_path),
            error=str(e),
        ) from e
    logger.info(f"Approved {item.approved_path}")
    return item.approved_path


def approve_pending(
    root: Path,
    names: list[str] | None = None,
    lock_timeout: float = APPROVE_LOCK_TIMEOUT,
) -> list[Path]:
    """
    Approve pending received files under `root`.

    Args:
        root: Directory to search
        names: Stems or received file names to approve (None = all)
        lock_timeout: Seconds to wait for another approval run

    Returns:
        Approved file paths

    Raises:
        ApprovalError: APPROVAL_LOCK_TIMEOUT
    """
    lock = FileLock(str(root / APPROVE_LOCK_FILENAME), timeout=lock_timeout)
    try:
        with lock:
            items = discover_pending(root)
            if names is not None:
                items = [item for item in items if item.matches(names)]
            return [approve_one(item) for item in items]
    except Timeout as e:
        raise ApprovalError(
            ErrorCodes.APPROVAL_LOCK_TIMEOUT,
            lock=str(root / APPROVE_LOCK_FILENAME),
            timeout=lock_timeout,
        ) from e


def clean_pending(root: Path) -> list[Path]:
    """Delete every received file under `root` without approving it."""
    removed = []
    for item in discover_pending(root):
        remove_received(item.received_path)
        removed.append(item.received_path)
    return removed


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Review and approve pending *.received.* files",
        epilog="WARNING: Review received files before approving!",
    )
    parser.add_argument(
        "names",
        nargs="*",
        help="Stems or received file names to approve",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path.cwd(),
        help="Directory to search (default: current directory)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List pending received files without approving",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Approve every pending received file",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Delete pending received files without approving",
    )

    args = parser.parse_args(argv)

    # List mode is read-only
    if args.list or not (args.names or args.all or args.clean):
        pending = discover_pending(args.root)
        if not pending:
            print(f"No pending received files in {args.root}")
            return 0
        print("Pending received files:")
        for item in pending:
            status = "✓" if item.has_baseline else "○"
            print(f"  {status} {item.received_path}")
        return 0

    if args.clean:
        removed = clean_pending(args.root)
        print(f"Removed {len(removed)} received file(s)")
        return 0

    # Block approvals in CI environments
    try:
        _check_ci_environment()
    except CIEnvironmentError as e:
        print(str(e), file=sys.stderr)
        return 1

    try:
        approved = approve_pending(args.root, names=None if args.all else args.names)
    except ApprovalError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1

    if not approved:
        print("No matching received files found.")
        return 1

    print("=" * 60)
    for path in approved:
        print(f"  ✓ Approved: {path}")
    print("=" * 60)
    print("Done. Please review the approved files before committing.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
