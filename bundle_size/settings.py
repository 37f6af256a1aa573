"""Settings module for runtime configuration."""

from __future__ import annotations

import os

DEFAULT_BUILD_DIR = ".next"
DEFAULT_SIGNIFICANCE_THRESHOLD = 1000


def _parse_threshold(value: str | None) -> int:
    """Parse the significance threshold from an environment value.

    Args:
        value: String value to parse, or None when unset

    Returns:
        The threshold in bytes, falling back to the default when unset
    """
    if value is None or not value.strip():
        return DEFAULT_SIGNIFICANCE_THRESHOLD
    threshold = int(value)
    if threshold < 0:
        msg = f"Significance threshold must be non-negative, got {threshold}"
        raise ValueError(msg)
    return threshold


class Settings:
    """Simple settings class for runtime configuration."""

    def __init__(self) -> None:
        """Initialize settings from environment variables."""
        self._build_dir = os.environ.get("BUNDLE_SIZE_BUILD_DIR") or DEFAULT_BUILD_DIR
        self._significance_threshold = _parse_threshold(os.environ.get("BUNDLE_SIZE_THRESHOLD"))

    @property
    def build_dir(self) -> str:
        """Name of the build output directory inside the working directory."""
        return self._build_dir

    @build_dir.setter
    def build_dir(self, value: str) -> None:
        """Set the build output directory name."""
        self._build_dir = value

    @property
    def significance_threshold(self) -> int:
        """Smallest absolute diff (bytes) reported for a changed page."""
        return self._significance_threshold

    @significance_threshold.setter
    def significance_threshold(self, value: int) -> None:
        """Set the significance threshold."""
        self._significance_threshold = value


# Global settings instance
settings = Settings()
