"""
Caller context tracker.

Captures the call chain of the current thread from the verification
boundary outward. Frames belonging to this package are skipped; every other
frame is kept, up to the outermost one.
"""

import inspect
from collections.abc import Iterator
from types import FrameType

from approvals.domain.constants import PACKAGE_NAME
from approvals.domain.schemas import CallFrame, VerificationContext

from .markers import markers_for

LOCALS_MARKER = "<locals>"


def is_own_module(module: str) -> bool:
    return module == PACKAGE_NAME or module.startswith(PACKAGE_NAME + ".")


def enclosing_scopes(qualname: str) -> Iterator[str]:
    """
    The scope itself, then each enclosing class scope.

    "TestA.Inner.test_x" -> "TestA.Inner.test_x", "TestA.Inner", "TestA"
    Stops at a function boundary ("<locals>").
    """
    yield qualname
    parts = qualname.split(".")
    for end in range(len(parts) - 1, 0, -1):
        if parts[end - 1] == LOCALS_MARKER:
            break
        yield ".".join(parts[:end])


def _frames_for(frame: FrameType, module: str) -> list[CallFrame]:
    code = frame.f_code
    qualname = getattr(code, "co_qualname", code.co_name)
    frames = []
    for index, scope in enumerate(enclosing_scopes(qualname)):
        innermost = index == 0
        frames.append(CallFrame(
            module=module,
            qualname=scope,
            function=code.co_name if innermost else "",
            filename=code.co_filename,
            lineno=frame.f_lineno if innermost else 0,
            markers=markers_for(module, scope),
        ))
    return frames


def capture() -> VerificationContext:
    """
    Capture the caller-owned call chain, innermost first.

    Never raises; outside any identifiable caller the context is empty.
    """
    frames: list[CallFrame] = []
    frame = inspect.currentframe()
    try:
        frame = frame.f_back if frame is not None else None
        while frame is not None:
            module = frame.f_globals.get("__name__", "")
            if not is_own_module(module):
                frames.extend(_frames_for(frame, module))
            frame = frame.f_back
    finally:
        del frame
    return VerificationContext(frames=tuple(frames))
