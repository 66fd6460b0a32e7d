"""
Artifact comparator.

Full-content equality, optionally after canonicalizing line breaks.
A missing approved artifact is always a Fail.
"""

from approvals.domain.schemas import ComparisonOutcome, Fail, Pass


def canonicalize_line_endings(content: bytes | str) -> bytes | str:
    """Turn every \\r\\n and lone \\r into \\n."""
    if isinstance(content, bytes):
        return content.replace(b"\r\n", b"\n").replace(b"\r", b"\n")
    return content.replace("\r\n", "\n").replace("\r", "\n")


def _as_bytes(content: bytes | str) -> bytes:
    return content if isinstance(content, bytes) else content.encode("utf-8")


def compare(
    received: bytes | str,
    approved: bytes | str | None,
    normalize_line_endings: bool = True,
) -> ComparisonOutcome:
    """
    Compare received content against approved content.

    Args:
        received: Freshly produced content
        approved: Approved content, None when no approved file exists
        normalize_line_endings: Ignore differences in line-break sequences

    Returns:
        Pass, or Fail carrying both contents
    """
    if approved is None:
        return Fail(received=received, approved=None)

    left: bytes | str = received
    right: bytes | str = approved
    if type(left) is not type(right):
        left, right = _as_bytes(left), _as_bytes(right)

    if normalize_line_endings:
        left = canonicalize_line_endings(left)
        right = canonicalize_line_endings(right)

    if left == right:
        return Pass()
    return Fail(received=received, approved=approved)
