"""
Public verification API.

    from approvals import verify

    def test_greeting():
        verify(greet("World"))

The first run fails and leaves test_module.test_greeting.received.txt next
to the test file. Review it and rename it to *.approved.txt; later runs
pass as long as the output does not change.
"""

import json
import os
import re
import tempfile
import traceback
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

from approvals.core.approver import report_failure, verify_with_writer
from approvals.core.caller import capture
from approvals.core.namer import Namer
from approvals.core.resolver import resolve
from approvals.core.storage import atomic_write_bytes
from approvals.core.writers import BinaryWriter, ExistingFileWriter, TextWriter
from approvals.domain.constants import DEFAULT_EXTENSION
from approvals.domain.errors import ApprovalMismatchError, ErrorCodes
from approvals.domain.schemas import ArtifactIdentity, Fail
from approvals.reporters.base import as_reporter
from approvals.utils.scrubbers import Scrubber


def verify(
    data: Any,
    scrubber: Scrubber | None = None,
    extension: str = DEFAULT_EXTENSION,
    namer: Namer | None = None,
    reporter: Any = None,
) -> None:
    """
    Verify text (or `str(data)`) against the approved file.

    Args:
        data: Content to verify
        scrubber: Applied to the text before comparison
        extension: File extension of the artifacts
        namer: Explicit namer (None = named after the calling test)
        reporter: Explicit reporter (None = resolved from markers and defaults)

    Raises:
        ApprovalMismatchError: Content differs or no approved file yet
    """
    text = data if isinstance(data, str) else str(data)
    if scrubber is not None:
        text = scrubber(text)
    verify_with_writer(TextWriter(text, extension), namer=namer, reporter=reporter)


def verify_binary(
    data: bytes,
    extension: str,
    namer: Namer | None = None,
    reporter: Any = None,
) -> None:
    """Verify raw bytes; compared exactly."""
    verify_with_writer(BinaryWriter(data, extension), namer=namer, reporter=reporter)


def verify_file(
    path: Path | str,
    namer: Namer | None = None,
    reporter: Any = None,
) -> None:
    """Verify the content of an existing file; the extension is taken from it."""
    verify_with_writer(ExistingFileWriter(path), namer=namer, reporter=reporter)

# =============================================================================
# Collections
# =============================================================================

def format_all(
    items: Iterable[Any],
    formatter: Callable[[Any], str] | None = None,
    label: str | None = None,
    header: str | None = None,
) -> str:
    """
    One line per item: `formatter(item)`, else `label[index] = item`.

    A header is followed by a blank line.
    """
    if formatter is not None:
        lines = [f"{formatter(item)}\n" for item in items]
    else:
        lines = [f"{label or ''}[{index}] = {item}\n" for index, item in enumerate(items)]
    body = "".join(lines)
    return f"{header}\n\n{body}" if header is not None else body


def verify_all(
    items: Iterable[Any],
    formatter: Callable[[Any], str] | None = None,
    label: str | None = None,
    header: str | None = None,
    namer: Namer | None = None,
    reporter: Any = None,
) -> None:
    """Verify a sequence, one formatted item per line."""
    verify(
        format_all(items, formatter=formatter, label=label, header=header),
        namer=namer,
        reporter=reporter,
    )


def verify_dict(
    mapping: Mapping[Any, Any] | None,
    formatter: Callable[[Any, Any], str] | None = None,
    header: str | None = None,
    namer: Namer | None = None,
    reporter: Any = None,
) -> None:
    """Verify a mapping sorted by key, as `key => value` unless formatted."""
    pairs = sorted((mapping or {}).items(), key=lambda pair: pair[0])
    if formatter is None:
        def formatter(key: Any, value: Any) -> str:
            return f"{key} => {value}"
    verify(
        format_all(pairs, formatter=lambda pair: formatter(*pair), header=header),
        namer=namer,
        reporter=reporter,
    )


def verify_json(
    data: Any,
    namer: Namer | None = None,
    reporter: Any = None,
) -> None:
    """Verify JSON pretty-printed with two-space indentation (.json artifacts)."""
    if isinstance(data, (str, bytes)):
        data = json.loads(data)
    text = json.dumps(data, indent=2, ensure_ascii=False)
    verify(text, extension="json", namer=namer, reporter=reporter)


def exception_text(exc: BaseException) -> str:
    cls = type(exc)
    name = cls.__qualname__ if cls.__module__ == "builtins" else f"{cls.__module__}.{cls.__qualname__}"
    return f"{name}: {exc}"


def verify_exception(
    exc: BaseException,
    namer: Namer | None = None,
    reporter: Any = None,
) -> None:
    """Verify `<qualified type>: <message>` of an exception."""
    verify(exception_text(exc), namer=namer, reporter=reporter)


_TRACE_LOCATION = re.compile(r'File "(?:[^"]*[\\/])?([^"\\/]+)", line \d+')
_TRACE_MARKER = re.compile(r"^\s*[~^]+\s*$")


def stacktrace_text(exc: BaseException) -> str:
    """
    Formatted traceback with the parts that vary between machines removed.

    Directories and line numbers are dropped from `File` lines, and the
    `^^^` position markers under source lines are removed.
    """
    text = "".join(traceback.format_exception(exc))
    text = _TRACE_LOCATION.sub(r'File "\1", line <N>', text)
    return "".join(
        line for line in text.splitlines(keepends=True) if not _TRACE_MARKER.match(line)
    )


def verify_exception_with_stacktrace(
    exc: BaseException,
    namer: Namer | None = None,
    reporter: Any = None,
) -> None:
    """Verify the scrubbed traceback of an exception, chained causes included."""
    verify(stacktrace_text(exc), namer=namer, reporter=reporter)


def verify_with_callback(
    data: Any,
    callback: Callable[[str], Any],
    namer: Namer | None = None,
    reporter: Any = None,
) -> None:
    """
    Verify text; on failure call `callback(text)` before reporting.

    Useful when the received text is itself something to run (a query, a
    command) and its result helps review the change.
    """
    text = data if isinstance(data, str) else str(data)

    def on_failure(outcome: Fail) -> None:
        callback(text)

    verify_with_writer(TextWriter(text), namer=namer, reporter=reporter, on_failure=on_failure)

# =============================================================================
# Plain String Assertions
# =============================================================================

def assert_equals_directory() -> Path:
    """Where assert_equals writes its pair for this process."""
    return Path(tempfile.gettempdir()) / f"approvals-assert-equals-{os.getpid()}"


def assert_equals(expected: str, actual: str, reporter: Any = None) -> None:
    """
    Assert two strings are equal, reporting a mismatch like a verification.

    Both strings are written to an approved/received pair so the reporter
    (and any diff tool) can show them. The pair lives in one directory per
    process and is overwritten by the next failing call.

    Raises:
        ApprovalMismatchError: CONTENT_MISMATCH
    """
    if expected == actual:
        return

    config = resolve(capture())
    if reporter is not None:
        config = replace(config, reporter=as_reporter(reporter))

    directory = assert_equals_directory()
    directory.mkdir(parents=True, exist_ok=True)
    identity = ArtifactIdentity(stem=directory / "assert_equals", extension=DEFAULT_EXTENSION)
    atomic_write_bytes(identity.approved_path, expected.encode("utf-8"))
    atomic_write_bytes(identity.received_path, actual.encode("utf-8"))

    report_failure(Fail(received=actual, approved=expected), identity, config)
    raise ApprovalMismatchError(
        ErrorCodes.CONTENT_MISMATCH,
        received_path=identity.received_path,
        approved_path=identity.approved_path,
    )
