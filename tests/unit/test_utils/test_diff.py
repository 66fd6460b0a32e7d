"""
test_diff.py - Inline diff summary tests
"""

from pathlib import Path

import pytest

from approvals.utils.diff import diff_summary, format_diff_report


class TestFormatDiffReport:

    def test_empty(self):
        assert format_diff_report([]) == "No differences found."

    def test_truncated(self):
        report = format_diff_report([f"+{i}" for i in range(5)], max_lines=2)
        assert report.splitlines() == ["+0", "+1", "... and 3 more diff lines"]


class TestDiffSummary:

    def test_unified_diff(self, tmp_path: Path):
        received = tmp_path / "a.received.txt"
        approved = tmp_path / "a.approved.txt"
        received.write_text("one\nTWO\n")
        approved.write_text("one\ntwo\n")

        summary = diff_summary(received, approved)

        assert "--- a.approved.txt" in summary
        assert "+++ a.received.txt" in summary
        assert "-two" in summary
        assert "+TWO" in summary

    def test_missing_approved_shows_all_added(self, tmp_path: Path):
        received = tmp_path / "a.received.txt"
        received.write_text("42")
        assert "+42" in diff_summary(received, tmp_path / "a.approved.txt")

    def test_line_endings_only(self, tmp_path: Path):
        received = tmp_path / "a.received.txt"
        approved = tmp_path / "a.approved.txt"
        received.write_bytes(b"a\r\nb")
        approved.write_bytes(b"a\nb")
        assert diff_summary(received, approved) == "Contents differ only in line endings."

    def test_binary_by_size(self, tmp_path: Path):
        received = tmp_path / "a.received.bin"
        approved = tmp_path / "a.approved.bin"
        received.write_bytes(b"\xff\xfe\x00")
        approved.write_bytes(b"\xff")
        assert diff_summary(received, approved) == (
            "Binary content differs (received 3 bytes, approved 1 bytes)"
        )

    def test_missing_received_raises(self, tmp_path: Path):
        with pytest.raises(OSError):
            diff_summary(tmp_path / "gone.received.txt", tmp_path / "gone.approved.txt")
