"""
Failure reporters.

Variants:
- DiffToolReporter: launch an external diff tool
- AssertionReporter / CIReporter: raise the test failure signal
- CommandLineReporter: print the approve command
- FirstWorkingReporter / MultiReporter: composites
- IntroductionReporter: process default
"""

from .assertion import AssertionReporter, CIReporter, detect_ci_environment
from .base import CallableReporter, Reporter, as_reporter, is_usable
from .command_line import CommandLineReporter
from .composite import FirstWorkingReporter, MultiReporter
from .diff_tool import DiffToolReporter, load_diff_tools
from .introduction import IntroductionReporter
from .registry import diff_tool_names, get_reporter, register_reporter, reset_registry

__all__ = [
    # Base
    "Reporter",
    "CallableReporter",
    "as_reporter",
    "is_usable",
    # Variants
    "AssertionReporter",
    "CIReporter",
    "CommandLineReporter",
    "DiffToolReporter",
    "FirstWorkingReporter",
    "MultiReporter",
    "IntroductionReporter",
    # Catalogue / registry
    "detect_ci_environment",
    "load_diff_tools",
    "diff_tool_names",
    "get_reporter",
    "register_reporter",
    "reset_registry",
]
