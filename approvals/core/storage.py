"""
Artifact storage: received writes, approved reads, cleanup.

Rules:
- Received files are written atomically: temp -> os.replace (no partial file)
- A missing approved file is not an error (None)
- Any other OSError becomes ArtifactIOError, never a content mismatch
"""

import logging
import os
import tempfile
from pathlib import Path

from approvals.domain.errors import ArtifactIOError, ErrorCodes

logger = logging.getLogger(__name__)

TEMP_PREFIX = ".approvals-"
TEMP_SUFFIX = ".tmp"


def _current_umask() -> int:
    # os.umask only reports the mask by setting it; read once, before any threads
    mask = os.umask(0)
    os.umask(mask)
    return mask


# Mode of a plain open(path, "w"); NamedTemporaryFile creates 0600
FILE_MODE = 0o666 & ~_current_umask()


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """
    Atomic overwrite of `path` with `data`.

    - No intermediate state: temp -> rename
    - Final file gets the umask-derived mode, not the temp file's 0600
    - fsync failure is logged and ignored
    - On failure the temp file is removed and the original kept

    Args:
        path: Target file path
        data: Content to write
    """
    dir_path = path.parent
    dir_path.mkdir(parents=True, exist_ok=True)

    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=dir_path,
            prefix=TEMP_PREFIX,
            suffix=TEMP_SUFFIX,
            delete=False,
        ) as f:
            temp_path = Path(f.name)
            f.write(data)
            f.flush()
            try:
                os.fsync(f.fileno())
            except OSError as e:
                logger.warning(f"File fsync failed for {path}: {e}")

        os.chmod(temp_path, FILE_MODE)
        os.replace(temp_path, path)

    except Exception:
        if temp_path and temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass
        raise


def write_received(path: Path, data: bytes) -> None:
    """
    Write the received artifact.

    Raises:
        ArtifactIOError: ARTIFACT_WRITE_FAILED
    """
    try:
        atomic_write_bytes(path, data)
    except OSError as e:
        raise ArtifactIOError(
            ErrorCodes.ARTIFACT_WRITE_FAILED,
            path=str(path),
            error=str(e),
        ) from e


def read_artifact(path: Path) -> bytes:
    """
    Read an artifact that must exist.

    Raises:
        ArtifactIOError: ARTIFACT_READ_FAILED
    """
    try:
        return path.read_bytes()
    except OSError as e:
        raise ArtifactIOError(
            ErrorCodes.ARTIFACT_READ_FAILED,
            path=str(path),
            error=str(e),
        ) from e


def read_approved(path: Path) -> bytes | None:
    """
    Read the approved artifact, None if it does not exist yet.

    Raises:
        ArtifactIOError: ARTIFACT_READ_FAILED
    """
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise ArtifactIOError(
            ErrorCodes.ARTIFACT_READ_FAILED,
            path=str(path),
            error=str(e),
        ) from e


def remove_received(path: Path) -> None:
    """
    Delete the received artifact; a missing file is fine.

    Raises:
        ArtifactIOError: ARTIFACT_DELETE_FAILED
    """
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise ArtifactIOError(
            ErrorCodes.ARTIFACT_DELETE_FAILED,
            path=str(path),
            error=str(e),
        ) from e
