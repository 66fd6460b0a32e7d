"""Reporter that prints the shell command approving the received file."""

import logging
import os
import shlex
import sys
from pathlib import Path
from typing import TextIO

from .base import Reporter

logger = logging.getLogger(__name__)


def approve_command(received_path: Path, approved_path: Path) -> str:
    """Platform-appropriate command that moves received over approved."""
    if os.name == "nt":
        return f'move /Y "{received_path}" "{approved_path}"'
    return f"mv -f {shlex.quote(str(received_path))} {shlex.quote(str(approved_path))}"


class CommandLineReporter(Reporter):
    """Write the approve command to a stream (stderr by default)."""

    name = "command_line"

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def report(self, received_path: Path, approved_path: Path) -> None:
        command = approve_command(received_path, approved_path)
        logger.info(f"To approve: {command}")
        print(f"To approve run:\n  {command}", file=self.stream or sys.stderr)
