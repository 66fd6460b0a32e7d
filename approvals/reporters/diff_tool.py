"""
Diff tool reporters: launch an external diff program on the file pair.

Tools are described in diff_tools.yaml (package data). Launches are
fire-and-forget; the engine never waits for the tool to exit.
"""

import logging
import os
import shutil
import subprocess
import sys
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from approvals.domain.constants import DIFF_TOOLS_FILENAME
from approvals.domain.errors import ApprovalError, ErrorCodes, ReporterConfigurationError

from .base import Reporter

logger = logging.getLogger(__name__)


def has_display() -> bool:
    """Whether GUI programs can be shown on this machine."""
    if os.name == "nt" or sys.platform == "darwin":
        return True
    return bool(os.getenv("DISPLAY") or os.getenv("WAYLAND_DISPLAY"))


class DiffToolReporter(Reporter):
    """
    Open received and approved files in an external diff tool.

    Usable when one of the candidate commands resolves, the file extension
    is supported, and (for GUI tools) a display is available.
    """

    def __init__(
        self,
        name: str,
        commands: list[str],
        arguments: list[str] | None = None,
        extensions: list[str] | None = None,
        requires_display: bool = False,
    ) -> None:
        """
        Args:
            name: Registry name (e.g. "meld")
            commands: Candidate executables, tried in order
            arguments: Argument templates with {received}/{approved}
            extensions: Supported extensions without dot (None = any)
            requires_display: Tool needs a graphical display
        """
        self.name = name
        self.commands = list(commands)
        self.arguments = list(arguments or ["{received}", "{approved}"])
        self.extensions = (
            {ext.lower().lstrip(".") for ext in extensions} if extensions else None
        )
        self.requires_display = requires_display

    def resolve_command(self) -> str | None:
        """First candidate command found on this machine."""
        for command in self.commands:
            found = shutil.which(command)
            if found:
                return found
        return None

    def supports(self, probe_key: str) -> bool:
        if self.extensions is None:
            return True
        ext = Path(probe_key).suffix.lower().lstrip(".")
        return ext in self.extensions

    def is_working_in_this_environment(self, probe_key: str) -> bool:
        if not self.supports(probe_key):
            return False
        if self.requires_display and not has_display():
            return False
        return self.resolve_command() is not None

    def build_command(self, received_path: Path, approved_path: Path) -> list[str]:
        command = self.resolve_command()
        if command is None:
            raise ReporterConfigurationError(
                ErrorCodes.NO_REPORTER_AVAILABLE,
                reporter=self.name,
                commands=self.commands,
            )
        args = [
            arg.replace("{received}", str(received_path)).replace("{approved}", str(approved_path))
            for arg in self.arguments
        ]
        return [command, *args]

    def report(self, received_path: Path, approved_path: Path) -> None:
        cmd = self.build_command(received_path, approved_path)
        if not approved_path.exists():
            logger.info(f"No approved file yet; {self.name} will show {approved_path} as missing")

        logger.info(f"Launching diff tool {self.name}: {cmd}")
        kwargs: dict[str, Any] = {}
        if os.name != "nt":
            kwargs["start_new_session"] = True
        try:
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                **kwargs,
            )
        except OSError as e:
            logger.warning(f"Failed to launch diff tool {self.name} ({cmd[0]}): {e}")


# =============================================================================
# Catalogue Loading
# =============================================================================

def _parse_tool(entry: Any, source: str) -> DiffToolReporter:
    if not isinstance(entry, dict) or not entry.get("name") or not entry.get("commands"):
        raise ApprovalError(
            ErrorCodes.INVALID_CONFIG,
            source=source,
            entry=entry,
            reason="diff tool needs 'name' and 'commands'",
        )
    return DiffToolReporter(
        name=str(entry["name"]),
        commands=[str(c) for c in entry["commands"]],
        arguments=[str(a) for a in entry.get("arguments") or []] or None,
        extensions=entry.get("extensions"),
        requires_display=bool(entry.get("requires_display", False)),
    )


def load_diff_tools(path: Path | None = None) -> list[DiffToolReporter]:
    """
    Load diff tool reporters from a catalogue file.

    Args:
        path: Catalogue YAML (None = packaged diff_tools.yaml)

    Returns:
        Reporters in catalogue order

    Raises:
        ApprovalError: INVALID_CONFIG
    """
    if path is None:
        source = DIFF_TOOLS_FILENAME
        text = resources.files("approvals.reporters").joinpath(DIFF_TOOLS_FILENAME).read_text(
            encoding="utf-8"
        )
    else:
        source = str(path)
        text = path.read_text(encoding="utf-8")

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ApprovalError(ErrorCodes.INVALID_CONFIG, source=source, error=str(e)) from e

    entries = data.get("diff_tools") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ApprovalError(
            ErrorCodes.INVALID_CONFIG,
            source=source,
            reason="'diff_tools' must be a list",
        )
    return [_parse_tool(entry, source) for entry in entries]
