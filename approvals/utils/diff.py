"""
Diff summary utilities.

Provides the short inline diff shown in failure messages. Visual diffing is
left to diff tool reporters.
"""

import difflib
from pathlib import Path

DEFAULT_MAX_LINES = 40


def _read_text(path: Path, missing_ok: bool = False) -> list[str] | None:
    """File lines, or None if not decodable as UTF-8 ([] if missing and missing_ok)."""
    try:
        return path.read_bytes().decode("utf-8").splitlines()
    except FileNotFoundError:
        if not missing_ok:
            raise
        return []
    except UnicodeDecodeError:
        return None


def format_diff_report(lines: list[str], max_lines: int = DEFAULT_MAX_LINES) -> str:
    """
    Truncate a list of diff lines into a report.

    Args:
        lines: Unified diff lines
        max_lines: Maximum number of lines to show

    Returns:
        Formatted diff report string
    """
    if not lines:
        return "No differences found."

    shown = lines[:max_lines]
    if len(lines) > max_lines:
        shown.append(f"... and {len(lines) - max_lines} more diff lines")
    return "\n".join(shown)


def diff_summary(
    received_path: Path,
    approved_path: Path,
    max_lines: int = DEFAULT_MAX_LINES,
) -> str:
    """
    Unified diff of approved -> received, truncated.

    Binary content is summarized by size only.

    Raises:
        OSError: If the received file cannot be read
    """
    received = _read_text(received_path)
    approved = _read_text(approved_path, missing_ok=True)

    if received is None or approved is None:
        received_size = received_path.stat().st_size
        approved_size = approved_path.stat().st_size if approved_path.exists() else 0
        return (
            f"Binary content differs "
            f"(received {received_size} bytes, approved {approved_size} bytes)"
        )

    lines = list(difflib.unified_diff(
        approved,
        received,
        fromfile=approved_path.name,
        tofile=received_path.name,
        lineterm="",
    ))
    if not lines:
        # Same lines, different line-break bytes
        return "Contents differ only in line endings."
    return format_diff_report(lines, max_lines=max_lines)
