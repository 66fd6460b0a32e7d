"""Domain layer: errors, constants and schemas."""

from .errors import (
    ApprovalError,
    ApprovalMismatchError,
    ArtifactIOError,
    ErrorCodes,
    ReporterConfigurationError,
)
from .schemas import (
    ArtifactIdentity,
    CallFrame,
    ComparisonOutcome,
    CustomReporterMarker,
    EffectiveConfig,
    Fail,
    FrontLoadedReporterMarker,
    LineEndingMarker,
    Pass,
    VerificationContext,
)

__all__ = [
    "ApprovalError",
    "ApprovalMismatchError",
    "ArtifactIOError",
    "ErrorCodes",
    "ReporterConfigurationError",
    "ArtifactIdentity",
    "CallFrame",
    "ComparisonOutcome",
    "CustomReporterMarker",
    "EffectiveConfig",
    "Fail",
    "FrontLoadedReporterMarker",
    "LineEndingMarker",
    "Pass",
    "VerificationContext",
]
