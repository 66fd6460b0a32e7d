"""
Namers: derive the artifact file-path stem.

Default layout, next to the test file:

    tests/test_report.py::TestReport::test_totals
    -> tests/test_report.TestReport.test_totals.approved.txt
"""

from abc import ABC, abstractmethod
from pathlib import Path

from approvals.domain.errors import ApprovalError, ErrorCodes
from approvals.domain.schemas import ArtifactIdentity, CallFrame, VerificationContext
from approvals.settings import get_settings

from .caller import LOCALS_MARKER

MODULE_SCOPE = "<module>"


class Namer(ABC):
    """Supplies the file-path stem for a verification."""

    @abstractmethod
    def get_stem(self, ctx: VerificationContext) -> Path:
        """Stem without `.approved.<ext>` / `.received.<ext>`."""

    def get_identity(self, ctx: VerificationContext, extension: str) -> ArtifactIdentity:
        return ArtifactIdentity(stem=self.get_stem(ctx), extension=extension)


class StackFrameNamer(Namer):
    """
    Name after the innermost test function in the call chain.

    A test function is one whose name starts with the test prefix; if none
    is found the innermost caller frame is used.
    """

    def __init__(
        self,
        test_prefix: str | None = None,
        approvals_subdir: str | None = None,
    ) -> None:
        settings = get_settings()
        self.test_prefix = test_prefix or settings.test_prefix
        self.approvals_subdir = (
            approvals_subdir if approvals_subdir is not None else settings.approvals_subdir
        )

    def select_frame(self, ctx: VerificationContext) -> CallFrame | None:
        code_frames = [frame for frame in ctx if frame.function]
        for frame in code_frames:
            if frame.function.startswith(self.test_prefix):
                return frame
        return code_frames[0] if code_frames else None

    def get_stem(self, ctx: VerificationContext) -> Path:
        frame = self.select_frame(ctx)
        if frame is None or not frame.filename:
            raise ApprovalError(
                ErrorCodes.NAMER_NO_CALLER,
                frames=len(ctx),
                reason="no caller frame to name the artifact after; pass an explicit namer",
            )

        source = Path(frame.filename)
        directory = source.parent
        if self.approvals_subdir:
            directory = directory / self.approvals_subdir

        parts = [
            part for part in frame.qualname.split(".")
            if part not in (LOCALS_MARKER, MODULE_SCOPE)
        ]
        return directory / ".".join([source.stem, *parts])


class FixedNamer(Namer):
    """Explicit directory and name, ignoring the call chain."""

    def __init__(self, directory: Path | str, name: str) -> None:
        self.directory = Path(directory)
        self.name = name

    def get_stem(self, ctx: VerificationContext) -> Path:
        return self.directory / self.name
