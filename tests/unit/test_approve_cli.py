"""
test_approve_cli.py - Review CLI tests

Checks:
- Pending received files are discovered, temp files ignored
- Approving replaces received -> approved
- Approving is refused in CI environments
- Lock timeout surfaces as APPROVAL_LOCK_TIMEOUT
"""

from pathlib import Path

import pytest
from filelock import FileLock

from approvals.approve import (
    CIEnvironmentError,
    _check_ci_environment,
    approve_pending,
    clean_pending,
    discover_pending,
    main,
)
from approvals.domain.constants import APPROVE_LOCK_FILENAME
from approvals.domain.errors import ApprovalError, ErrorCodes


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    (tmp_path / "pkg").mkdir()
    (tmp_path / "test_a.test_one.received.txt").write_text("one")
    (tmp_path / "test_a.test_one.approved.txt").write_text("old")
    (tmp_path / "pkg" / "test_b.TestB.test_two.received.json").write_text("{}")
    (tmp_path / ".approvals-abc.received.tmp").write_text("partial")
    return tmp_path

# =============================================================================
# CI guard
# =============================================================================

class TestCIGuard:

    def test_local_ok(self):
        _check_ci_environment()

    def test_blocked_on_ci(self, ci_environment):
        with pytest.raises(CIEnvironmentError) as exc_info:
            _check_ci_environment()
        assert "GITHUB_ACTIONS" in str(exc_info.value)

    def test_main_refuses_on_ci(self, workspace: Path, ci_environment, capsys):
        assert main(["--root", str(workspace), "--all"]) == 1
        assert "CI environment" in capsys.readouterr().err
        assert (workspace / "test_a.test_one.received.txt").exists()

# =============================================================================
# Discovery / approval
# =============================================================================

class TestDiscoverPending:

    def test_finds_received_files_sorted_by_path(self, workspace: Path):
        """Temp files from interrupted writes are not pending approvals."""
        pending = discover_pending(workspace)
        assert [p.received_path for p in pending] == [
            workspace / "pkg" / "test_b.TestB.test_two.received.json",
            workspace / "test_a.test_one.received.txt",
        ]

    def test_stems_and_baseline(self, workspace: Path):
        by_stem = {p.stem: p for p in discover_pending(workspace)}
        assert set(by_stem) == {"test_a.test_one", "test_b.TestB.test_two"}
        assert by_stem["test_a.test_one"].has_baseline
        assert not by_stem["test_b.TestB.test_two"].has_baseline
        assert by_stem["test_b.TestB.test_two"].approved_path.name == "test_b.TestB.test_two.approved.json"


class TestApprovePending:

    def test_approve_all(self, workspace: Path):
        approved = approve_pending(workspace)

        assert len(approved) == 2
        assert (workspace / "test_a.test_one.approved.txt").read_text() == "one"
        assert not (workspace / "test_a.test_one.received.txt").exists()
        assert (workspace / "pkg" / "test_b.TestB.test_two.approved.json").exists()

    def test_approve_by_name(self, workspace: Path):
        approved = approve_pending(workspace, names=["test_a.test_one"])

        assert approved == [workspace / "test_a.test_one.approved.txt"]
        assert (workspace / "pkg" / "test_b.TestB.test_two.received.json").exists()

    def test_lock_timeout(self, workspace: Path):
        with FileLock(str(workspace / APPROVE_LOCK_FILENAME)):
            with pytest.raises(ApprovalError) as exc_info:
                approve_pending(workspace, lock_timeout=0.05)
        assert exc_info.value.code == ErrorCodes.APPROVAL_LOCK_TIMEOUT

    def test_clean(self, workspace: Path):
        removed = clean_pending(workspace)
        assert len(removed) == 2
        assert discover_pending(workspace) == []
        assert (workspace / "test_a.test_one.approved.txt").read_text() == "old"

# =============================================================================
# main()
# =============================================================================

class TestMain:

    def test_default_is_list(self, workspace: Path, capsys):
        assert main(["--root", str(workspace)]) == 0
        out = capsys.readouterr().out
        assert "test_a.test_one.received.txt" in out
        assert (workspace / "test_a.test_one.received.txt").exists()

    def test_nothing_pending(self, tmp_path: Path, capsys):
        assert main(["--root", str(tmp_path), "--list"]) == 0
        assert "No pending received files" in capsys.readouterr().out

    def test_approve_names(self, workspace: Path, capsys):
        assert main(["--root", str(workspace), "test_a.test_one"]) == 0
        assert "Approved" in capsys.readouterr().out
        assert (workspace / "test_a.test_one.approved.txt").read_text() == "one"

    def test_no_match(self, workspace: Path):
        assert main(["--root", str(workspace), "no_such_test"]) == 1

    def test_clean(self, workspace: Path):
        assert main(["--root", str(workspace), "--clean"]) == 0
        assert discover_pending(workspace) == []
