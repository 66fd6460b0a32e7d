"""
Configuration markers: decorators that attach per-scope options.

Markers are registered ahead of time, keyed by the scope's (module,
qualname), and found later by the caller context tracker. Decorators return
the decorated function or class unchanged, so the live frame's qualname
matches the registered one.

    @use_reporter(CommandLineReporter)
    class TestReports:

        @ignore_line_endings(False)
        def test_exact_bytes(self):
            verify(render())
"""

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

from approvals.domain.errors import ApprovalError, ErrorCodes
from approvals.domain.schemas import (
    ConfigurationMarker,
    CustomReporterMarker,
    FrontLoadedReporterMarker,
    LineEndingMarker,
)
from approvals.reporters.base import as_reporter

logger = logging.getLogger(__name__)

T = TypeVar("T")

MARKERS_ATTR = "__approval_markers__"

_lock = threading.Lock()
_registry: dict[tuple[str, str], dict[type, ConfigurationMarker]] = {}


def attach_marker(obj: T, marker: ConfigurationMarker) -> T:
    """
    Register `marker` for the scope declared by `obj`.

    Raises:
        ApprovalError: DUPLICATE_MARKER if `obj` already carries this kind
    """
    module = getattr(obj, "__module__", None)
    qualname = getattr(obj, "__qualname__", None)
    if not module or not qualname:
        raise ApprovalError(
            ErrorCodes.INVALID_CONFIG,
            target=repr(obj),
            reason="markers apply to functions and classes only",
        )

    own: dict[type, ConfigurationMarker] | None = vars(obj).get(MARKERS_ATTR)
    if own is None:
        own = {}
        setattr(obj, MARKERS_ATTR, own)
    kind = type(marker)
    if kind in own:
        raise ApprovalError(
            ErrorCodes.DUPLICATE_MARKER,
            scope=f"{module}.{qualname}",
            marker=kind.__name__,
        )
    own[kind] = marker

    with _lock:
        # Re-import of the same module replaces the earlier registration
        _registry.setdefault((module, qualname), {})[kind] = marker
    logger.debug(f"Registered {kind.__name__} on {module}.{qualname}")
    return obj


def markers_for(module: str, qualname: str) -> tuple[ConfigurationMarker, ...]:
    """Markers registered for exactly this scope."""
    with _lock:
        found = _registry.get((module, qualname))
        return tuple(found.values()) if found else ()

# =============================================================================
# Decorators
# =============================================================================

def use_reporter(reporter: Any) -> Callable[[T], T]:
    """Report failures under the decorated test or class with `reporter`."""
    marker = CustomReporterMarker(as_reporter(reporter))

    def decorator(obj: T) -> T:
        return attach_marker(obj, marker)

    return decorator


def front_loaded_reporter(reporter: Any) -> Callable[[T], T]:
    """Try `reporter` before anything else, when it is usable here."""
    marker = FrontLoadedReporterMarker(as_reporter(reporter))

    def decorator(obj: T) -> T:
        return attach_marker(obj, marker)

    return decorator


def ignore_line_endings(ignore: Any = True) -> Any:
    """
    Set the line-ending policy for the decorated test or class.

    `@ignore_line_endings` and `@ignore_line_endings()` normalize line
    endings; `@ignore_line_endings(False)` compares line-break bytes exactly.
    """
    if callable(ignore):
        return attach_marker(ignore, LineEndingMarker(normalize=True))

    marker = LineEndingMarker(normalize=bool(ignore))

    def decorator(obj: T) -> T:
        return attach_marker(obj, marker)

    return decorator
