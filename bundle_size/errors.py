"""Exceptions raised while measuring bundle sizes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class BundleSizeError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        """Store the offending path alongside the message."""
        super().__init__(message)
        self.path = path


class FileAccessError(BundleSizeError):
    """Raised when a manifest, asset or snapshot file cannot be read."""


class ParseError(BundleSizeError):
    """Raised when a manifest or snapshot is not valid JSON of the expected shape."""
