"""
Data schemas for the approval engine.

Rules:
- CallFrame / VerificationContext are immutable once captured
- EffectiveConfig is never partially resolved
- ComparisonOutcome is Pass or Fail; Fail with approved=None means no baseline yet
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Union

from .constants import APPROVED_TOKEN, RECEIVED_TOKEN

if TYPE_CHECKING:
    from approvals.reporters.base import Reporter

# =============================================================================
# Configuration Markers
# =============================================================================

@dataclass(frozen=True)
class CustomReporterMarker:
    """Use this reporter for verifications under the marked scope."""
    reporter: Reporter


@dataclass(frozen=True)
class LineEndingMarker:
    """Line-ending policy for verifications under the marked scope."""
    normalize: bool


@dataclass(frozen=True)
class FrontLoadedReporterMarker:
    """Reporter tried before everything else when usable in this environment."""
    reporter: Reporter


ConfigurationMarker = Union[CustomReporterMarker, LineEndingMarker, FrontLoadedReporterMarker]

# =============================================================================
# Call Context
# =============================================================================

@dataclass(frozen=True)
class CallFrame:
    """
    One caller-owned scope in the captured call chain.

    A code frame of `TestFoo.test_bar` yields two CallFrames: one for the
    method scope, then one for the enclosing `TestFoo` class scope.
    """
    module: str
    qualname: str
    function: str
    filename: str = ""
    lineno: int = 0
    markers: tuple[ConfigurationMarker, ...] = ()

    def marker(self, kind: type) -> ConfigurationMarker | None:
        """Return this frame's marker of the given kind, if any."""
        for marker in self.markers:
            if isinstance(marker, kind):
                return marker
        return None


@dataclass(frozen=True)
class VerificationContext:
    """Ordered call chain, innermost (closest to the verify call) first."""
    frames: tuple[CallFrame, ...] = ()

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self):
        return iter(self.frames)

    def first_marker(self, kind: type) -> ConfigurationMarker | None:
        """Nearest marker of `kind`, scanning innermost-first."""
        for frame in self.frames:
            marker = frame.marker(kind)
            if marker is not None:
                return marker
        return None


@dataclass(frozen=True)
class EffectiveConfig:
    """Resolved configuration for one verification."""
    reporter: Reporter
    normalize_line_endings: bool = True

# =============================================================================
# Artifact Identity
# =============================================================================

@dataclass(frozen=True)
class ArtifactIdentity:
    """File-path identity of an approved/received pair."""
    stem: Path
    extension: str

    def _path_for(self, token: str) -> Path:
        ext = self.extension.lstrip(".")
        return self.stem.with_name(f"{self.stem.name}.{token}.{ext}")

    @property
    def approved_path(self) -> Path:
        return self._path_for(APPROVED_TOKEN)

    @property
    def received_path(self) -> Path:
        return self._path_for(RECEIVED_TOKEN)

# =============================================================================
# Comparison Outcome
# =============================================================================

@dataclass(frozen=True)
class Pass:
    """Received content equals approved content."""

    @property
    def passed(self) -> bool:
        return True


@dataclass(frozen=True)
class Fail:
    """
    Received content differs from approved content.

    `approved is None` when no approved file exists yet (first run).
    """
    received: bytes | str
    approved: bytes | str | None = field(default=None)

    @property
    def passed(self) -> bool:
        return False

    @property
    def baseline_missing(self) -> bool:
        return self.approved is None


ComparisonOutcome = Union[Pass, Fail]
