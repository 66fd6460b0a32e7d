"""
Writers: turn produced content into the bytes of a received artifact.

Each writer declares its file extension and whether it holds text (only
text artifacts get line-ending normalization).
"""

from abc import ABC, abstractmethod
from pathlib import Path

from approvals.domain.constants import DEFAULT_EXTENSION, TEXT_EXTENSIONS

from .storage import read_artifact


class Writer(ABC):
    """Content producer for one verification."""

    extension: str = DEFAULT_EXTENSION
    is_text: bool = True

    @abstractmethod
    def content(self) -> bytes:
        """Bytes to store in the received file."""


class TextWriter(Writer):
    """Text content, written as-is (no newline translation)."""

    def __init__(
        self,
        text: str,
        extension: str = DEFAULT_EXTENSION,
        encoding: str = "utf-8",
    ) -> None:
        self.text = text
        self.extension = extension.lstrip(".")
        self.encoding = encoding

    def content(self) -> bytes:
        return self.text.encode(self.encoding)


class BinaryWriter(Writer):
    """Raw bytes; compared exactly."""

    is_text = False

    def __init__(self, data: bytes, extension: str) -> None:
        self.data = bytes(data)
        self.extension = extension.lstrip(".")

    def content(self) -> bytes:
        return self.data


class ExistingFileWriter(Writer):
    """Use the content of a file produced elsewhere."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.extension = self.path.suffix.lstrip(".") or DEFAULT_EXTENSION
        self.is_text = self.extension.lower() in TEXT_EXTENSIONS

    def content(self) -> bytes:
        return read_artifact(self.path)
