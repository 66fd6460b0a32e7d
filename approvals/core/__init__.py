"""
Core layer: the decision engine.

Role:
- caller context capture, marker registry, configuration resolution
- comparison, artifact storage, orchestration
"""

from .approver import FileApprover, report_failure, verify_with_writer
from .caller import capture
from .comparator import canonicalize_line_endings, compare
from .defaults import (
    EngineDefaults,
    register_default_approver,
    register_default_namer,
    register_default_reporter,
    register_front_loaded_reporter,
    reset_defaults,
    set_front_loaded_reporter,
    snapshot_defaults,
)
from .markers import front_loaded_reporter, ignore_line_endings, use_reporter
from .namer import FixedNamer, Namer, StackFrameNamer
from .resolver import resolve
from .writers import BinaryWriter, ExistingFileWriter, TextWriter, Writer

__all__ = [
    # approver
    "FileApprover",
    "report_failure",
    "verify_with_writer",
    # caller / markers / resolver
    "capture",
    "front_loaded_reporter",
    "ignore_line_endings",
    "use_reporter",
    "resolve",
    # comparator
    "canonicalize_line_endings",
    "compare",
    # defaults
    "EngineDefaults",
    "register_default_approver",
    "register_default_namer",
    "register_default_reporter",
    "register_front_loaded_reporter",
    "reset_defaults",
    "set_front_loaded_reporter",
    "snapshot_defaults",
    # namers / writers
    "FixedNamer",
    "Namer",
    "StackFrameNamer",
    "BinaryWriter",
    "ExistingFileWriter",
    "TextWriter",
    "Writer",
]
