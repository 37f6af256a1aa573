"""Data types shared by the manifest resolver, size computation and reporter."""

from __future__ import annotations

import enum
from dataclasses import dataclass

# Logical page path (or loadable module id) to its relative asset file paths.
BuildManifest = dict[str, list[str]]


@dataclass(frozen=True)
class PageSize:
    """Gzipped size of every asset a page depends on."""

    page: str
    size: int


# One snapshot of a build.
PageBundleSizes = list[PageSize]


class ChangeType(enum.StrEnum):
    """Enum for how a page differs from the reference build."""

    ADDED = enum.auto()
    CHANGED = enum.auto()
    REMOVED = enum.auto()


@dataclass(frozen=True)
class PageChangeInfo:
    """A single row of the comparison report.

    Attributes:
        page: Page path, compared by exact string equality
        type: Whether the page was added, changed or removed
        size: Current size in bytes, always 0 for removed pages
        diff: Current size minus reference size, always 0 for removed pages
    """

    page: str
    type: ChangeType
    size: int
    diff: int
