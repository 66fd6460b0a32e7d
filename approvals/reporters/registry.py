"""
Process-wide reporter registry: name -> Reporter.

Built-ins ("assert", "ci", "command_line" and every diff tool in the
packaged catalogue) are registered on first access. Settings refer to
reporters by these names.
"""

import logging
import threading
from typing import Any

from approvals.domain.errors import ErrorCodes, ReporterConfigurationError

from .assertion import AssertionReporter, CIReporter
from .base import Reporter, as_reporter
from .command_line import CommandLineReporter
from .diff_tool import load_diff_tools

logger = logging.getLogger(__name__)

_lock = threading.RLock()
_reporters: dict[str, Reporter] = {}
_diff_tool_names: list[str] = []
_builtins_loaded = False


def _ensure_builtins() -> None:
    global _builtins_loaded
    with _lock:
        if _builtins_loaded:
            return
        for reporter in (AssertionReporter(), CIReporter(), CommandLineReporter()):
            _reporters.setdefault(reporter.name, reporter)
        for tool in load_diff_tools():
            _reporters.setdefault(tool.name, tool)
            _diff_tool_names.append(tool.name)
        _builtins_loaded = True
        logger.debug(f"Registered built-in reporters: {sorted(_reporters)}")


def register_reporter(name: str, reporter: Any) -> Reporter:
    """
    Register (or replace) a reporter under `name`.

    Affects every later lookup in this process.
    """
    _ensure_builtins()
    instance = as_reporter(reporter)
    with _lock:
        _reporters[name] = instance
    return instance


def get_reporter(name: str) -> Reporter:
    """
    Look up a registered reporter.

    Raises:
        ReporterConfigurationError: UNKNOWN_REPORTER
    """
    _ensure_builtins()
    with _lock:
        reporter = _reporters.get(name)
        known = sorted(_reporters)
    if reporter is None:
        raise ReporterConfigurationError(
            ErrorCodes.UNKNOWN_REPORTER,
            name=name,
            known=known,
        )
    return reporter


def diff_tool_names() -> list[str]:
    """Names of the catalogue diff tools, in catalogue order."""
    _ensure_builtins()
    with _lock:
        return list(_diff_tool_names)


def reset_registry() -> None:
    """Forget custom registrations; built-ins are reloaded on next access."""
    global _builtins_loaded
    with _lock:
        _reporters.clear()
        _diff_tool_names.clear()
        _builtins_loaded = False
