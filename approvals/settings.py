"""
Process-wide settings.

Sources, later wins:
1. Built-in defaults
2. approvals.yaml ($APPROVALS_CONFIG, else ./approvals.yaml if present)
3. Environment variables (a .env in the working directory is loaded first)

Example approvals.yaml:

    reporters:
      default: [meld, vscode, command_line]
      front_loaded: ci
    line_endings:
      normalize: true
    namer:
      test_prefix: test
      approvals_subdir: approved_files
    introduction: true
"""

import logging
import os
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

from approvals.domain.constants import (
    CONFIG_FILENAME,
    ENV_CONFIG_PATH,
    ENV_DEFAULT_REPORTERS,
    ENV_FRONT_LOADED_REPORTER,
    ENV_NORMALIZE_LINE_ENDINGS,
)
from approvals.domain.errors import ApprovalError, ErrorCodes

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_NONE_VALUES = {"", "none", "null", "off"}


@dataclass(frozen=True)
class ApprovalSettings:
    """Resolved settings snapshot."""
    # Reporter names tried in order by the default reporter (None = every diff tool)
    default_reporters: tuple[str, ...] | None = None
    # Name of the process-wide front-loaded reporter (None = disabled)
    front_loaded_reporter: str | None = "ci"
    normalize_line_endings: bool = True
    test_prefix: str = "test"
    approvals_subdir: str | None = None
    introduction: bool = True
    source: str | None = None


def _parse_bool(value: Any, key: str, source: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ApprovalError(ErrorCodes.INVALID_CONFIG, source=source, key=key, value=value)


def _parse_names(value: Any, key: str, source: str) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(name.strip() for name in value.split(",") if name.strip())
    if isinstance(value, list):
        return tuple(str(name) for name in value)
    raise ApprovalError(ErrorCodes.INVALID_CONFIG, source=source, key=key, value=value)


def _parse_optional_name(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return None if text.lower() in _NONE_VALUES else text


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ApprovalError(ErrorCodes.INVALID_CONFIG, source=str(path), error=str(e)) from e

    if not isinstance(data, dict):
        raise ApprovalError(
            ErrorCodes.INVALID_CONFIG,
            source=str(path),
            reason="top level must be a mapping",
        )
    return data


def _section(data: dict[str, Any], key: str, source: str) -> dict[str, Any]:
    """Nested mapping under `key`; missing or null means empty."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ApprovalError(
            ErrorCodes.INVALID_CONFIG,
            source=source,
            key=key,
            reason="must be a mapping",
        )
    return value


def _find_config(environ: Mapping[str, str]) -> Path | None:
    explicit = environ.get(ENV_CONFIG_PATH)
    if explicit:
        path = Path(explicit)
        if not path.exists():
            raise ApprovalError(ErrorCodes.INVALID_CONFIG, source=explicit, reason="file not found")
        return path

    candidate = Path.cwd() / CONFIG_FILENAME
    return candidate if candidate.exists() else None


def load_settings(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ApprovalSettings:
    """
    Build settings from a YAML file and environment variables.

    Args:
        config_path: Explicit YAML file (None = discover)
        environ: Environment mapping (None = os.environ)

    Returns:
        ApprovalSettings

    Raises:
        ApprovalError: INVALID_CONFIG
    """
    env = os.environ if environ is None else environ
    path = config_path or _find_config(env)
    values: dict[str, Any] = {}

    if path is not None:
        source = str(path)
        data = _load_yaml(path)
        reporters = _section(data, "reporters", source)
        line_endings = _section(data, "line_endings", source)
        namer = _section(data, "namer", source)

        if "default" in reporters and reporters["default"] is not None:
            values["default_reporters"] = _parse_names(reporters["default"], "reporters.default", source)
        if "front_loaded" in reporters:
            values["front_loaded_reporter"] = _parse_optional_name(reporters["front_loaded"])
        if "normalize" in line_endings:
            values["normalize_line_endings"] = _parse_bool(
                line_endings["normalize"], "line_endings.normalize", source
            )
        if namer.get("test_prefix"):
            values["test_prefix"] = str(namer["test_prefix"])
        if namer.get("approvals_subdir"):
            values["approvals_subdir"] = str(namer["approvals_subdir"])
        if "introduction" in data:
            values["introduction"] = _parse_bool(data["introduction"], "introduction", source)
        values["source"] = source
        logger.debug(f"Loaded approval settings from {source}")

    if env.get(ENV_DEFAULT_REPORTERS):
        values["default_reporters"] = _parse_names(
            env[ENV_DEFAULT_REPORTERS], ENV_DEFAULT_REPORTERS, "environment"
        )
    if ENV_FRONT_LOADED_REPORTER in env:
        values["front_loaded_reporter"] = _parse_optional_name(env[ENV_FRONT_LOADED_REPORTER])
    if env.get(ENV_NORMALIZE_LINE_ENDINGS):
        values["normalize_line_endings"] = _parse_bool(
            env[ENV_NORMALIZE_LINE_ENDINGS], ENV_NORMALIZE_LINE_ENDINGS, "environment"
        )

    return ApprovalSettings(**values)


# =============================================================================
# Cached Process-wide Settings
# =============================================================================

_lock = threading.Lock()
_settings: ApprovalSettings | None = None


def get_settings() -> ApprovalSettings:
    """Settings for this process, loaded on first use."""
    global _settings
    with _lock:
        if _settings is None:
            load_dotenv(find_dotenv(usecwd=True))
            _settings = load_settings()
        return _settings


def reload_settings() -> ApprovalSettings:
    """Drop the cached settings and load them again."""
    global _settings
    with _lock:
        _settings = None
    return get_settings()


def override_settings(settings: ApprovalSettings | None) -> None:
    """Install a settings snapshot directly (None = reload on next use)."""
    global _settings
    with _lock:
        _settings = settings
