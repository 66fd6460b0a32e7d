"""
test_assertion.py - Assertion / CI / command-line reporter tests
"""

import io
import os
from pathlib import Path

import pytest

from approvals.domain.errors import ApprovalMismatchError, ErrorCodes
from approvals.reporters.assertion import AssertionReporter, CIReporter, detect_ci_environment
from approvals.reporters.command_line import CommandLineReporter, approve_command

# =============================================================================
# CI detection
# =============================================================================

class TestDetectCI:

    def test_not_ci_by_default(self):
        assert detect_ci_environment() is None

    def test_detects_indicator(self, ci_environment):
        assert detect_ci_environment() == "GITHUB_ACTIONS"

    def test_empty_value_ignored(self, monkeypatch):
        monkeypatch.setenv("CI", "")
        assert detect_ci_environment() is None

# =============================================================================
# AssertionReporter
# =============================================================================

class TestAssertionReporter:
    """Failure signal raised by the last-resort reporter."""

    def test_is_assertion_error_with_both_paths(self, tmp_path: Path):
        received = tmp_path / "a.received.txt"
        approved = tmp_path / "a.approved.txt"
        received.write_text("B\n")
        approved.write_text("A\n")

        with pytest.raises(AssertionError) as exc_info:
            AssertionReporter().report(received, approved)

        error = exc_info.value
        assert isinstance(error, ApprovalMismatchError)
        assert error.code == ErrorCodes.CONTENT_MISMATCH
        assert str(received) in str(error)
        assert str(approved) in str(error)
        assert "-A" in error.detail and "+B" in error.detail

    def test_missing_baseline_code(self, tmp_path: Path):
        received = tmp_path / "a.received.txt"
        received.write_text("42")

        with pytest.raises(ApprovalMismatchError) as exc_info:
            AssertionReporter().report(received, tmp_path / "a.approved.txt")

        assert exc_info.value.code == ErrorCodes.BASELINE_MISSING
        assert "does not exist yet" in str(exc_info.value)

    def test_without_diff(self, tmp_path: Path):
        received = tmp_path / "a.received.txt"
        received.write_text("x")

        with pytest.raises(ApprovalMismatchError) as exc_info:
            AssertionReporter(include_diff=False).report(received, tmp_path / "a.approved.txt")

        assert exc_info.value.detail == ""

    def test_unreadable_received_still_raises(self, tmp_path: Path):
        """No received file: the failure is still raised, without a diff."""
        with pytest.raises(ApprovalMismatchError) as exc_info:
            AssertionReporter().report(tmp_path / "gone.received.bin", tmp_path / "gone.approved.bin")
        assert exc_info.value.code == ErrorCodes.BASELINE_MISSING
        assert exc_info.value.detail == ""

    def test_always_usable(self):
        assert AssertionReporter().is_working_in_this_environment("anything.png")


class TestCIReporter:

    def test_unusable_locally(self):
        assert not CIReporter().is_working_in_this_environment("default.txt")

    def test_usable_on_ci(self, ci_environment):
        assert CIReporter().is_working_in_this_environment("default.txt")

# =============================================================================
# CommandLineReporter
# =============================================================================

class TestCommandLineReporter:

    def test_prints_move_command(self, tmp_path: Path):
        stream = io.StringIO()
        received = tmp_path / "a.received.txt"
        approved = tmp_path / "a.approved.txt"

        CommandLineReporter(stream=stream).report(received, approved)

        output = stream.getvalue()
        assert approve_command(received, approved) in output
        assert str(received) in output

    @pytest.mark.skipif(os.name == "nt", reason="POSIX quoting")
    def test_posix_command(self):
        command = approve_command(Path("/t/a b.received.txt"), Path("/t/a b.approved.txt"))
        assert command == "mv -f '/t/a b.received.txt' '/t/a b.approved.txt'"
