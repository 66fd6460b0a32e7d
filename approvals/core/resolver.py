"""
Configuration resolver.

Precedence (reporter):
1. Front-loaded reporter (nearest marker, else process-wide), if usable here
2. Nearest custom reporter marker
3. Process-wide default reporter

Line endings: nearest marker, else process-wide default (normalize).

Given the same context, defaults and environment the result is identical.
"""

import logging

from approvals.domain.constants import DEFAULT_PROBE_KEY
from approvals.domain.schemas import (
    CustomReporterMarker,
    EffectiveConfig,
    FrontLoadedReporterMarker,
    LineEndingMarker,
    VerificationContext,
)
from approvals.reporters.base import Reporter, is_usable

from .defaults import EngineDefaults, snapshot_defaults

logger = logging.getLogger(__name__)


def resolve_reporter(ctx: VerificationContext, defaults: EngineDefaults) -> Reporter:
    marker = ctx.first_marker(FrontLoadedReporterMarker)
    front_loaded = marker.reporter if marker is not None else defaults.front_loaded

    if front_loaded is not None and is_usable(front_loaded, DEFAULT_PROBE_KEY):
        logger.debug(f"Front-loaded reporter {front_loaded!r} is usable; it wins")
        return front_loaded

    custom = ctx.first_marker(CustomReporterMarker)
    if custom is not None:
        logger.debug(f"Using custom reporter {custom.reporter!r}")
        return custom.reporter

    return defaults.reporter


def resolve_line_endings(ctx: VerificationContext, defaults: EngineDefaults) -> bool:
    marker = ctx.first_marker(LineEndingMarker)
    if marker is not None:
        return marker.normalize
    return defaults.normalize_line_endings


def resolve(
    ctx: VerificationContext,
    defaults: EngineDefaults | None = None,
) -> EffectiveConfig:
    """
    Resolve the effective configuration for one verification.

    Args:
        ctx: Captured call chain
        defaults: Process-wide defaults snapshot (None = take one now)

    Returns:
        Fully populated EffectiveConfig
    """
    if defaults is None:
        defaults = snapshot_defaults()
    return EffectiveConfig(
        reporter=resolve_reporter(ctx, defaults),
        normalize_line_endings=resolve_line_endings(ctx, defaults),
    )
