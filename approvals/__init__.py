"""
Approval testing for Python.

A test verifies freshly produced output (the received file) against a
reviewed baseline (the approved file). On mismatch a reporter surfaces the
difference and the test fails.

Philosophy:
- Name artifacts after the calling test, no explicit names needed
- Configure per test or class with decorators, per process with defaults
- Never launch a GUI where it cannot run (CI wins first)
"""

from .api import (
    assert_equals,
    verify,
    verify_all,
    verify_binary,
    verify_dict,
    verify_exception,
    verify_exception_with_stacktrace,
    verify_file,
    verify_json,
    verify_with_callback,
)
from .core import (
    FixedNamer,
    StackFrameNamer,
    front_loaded_reporter,
    ignore_line_endings,
    register_default_approver,
    register_default_namer,
    register_default_reporter,
    register_front_loaded_reporter,
    reset_defaults,
    set_front_loaded_reporter,
    use_reporter,
)
from .domain import ApprovalError, ApprovalMismatchError, ArtifactIOError
from .reporters import register_reporter

__all__ = [
    # Verification
    "verify",
    "verify_all",
    "verify_binary",
    "verify_dict",
    "verify_exception",
    "verify_exception_with_stacktrace",
    "verify_file",
    "verify_json",
    "verify_with_callback",
    "assert_equals",
    # Markers
    "use_reporter",
    "ignore_line_endings",
    "front_loaded_reporter",
    # Process-wide defaults
    "register_default_approver",
    "register_default_namer",
    "register_default_reporter",
    "register_front_loaded_reporter",
    "register_reporter",
    "reset_defaults",
    "set_front_loaded_reporter",
    # Namers
    "FixedNamer",
    "StackFrameNamer",
    # Errors
    "ApprovalError",
    "ApprovalMismatchError",
    "ArtifactIOError",
]
