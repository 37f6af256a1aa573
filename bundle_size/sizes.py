"""Compute the gzipped size of every page in a build."""

from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import orjson

from bundle_size.errors import FileAccessError, ParseError
from bundle_size.manifest import resolve_dynamic_chunks, resolve_static_pages
from bundle_size.models import PageSize
from bundle_size.settings import settings

if TYPE_CHECKING:
    from bundle_size.models import BuildManifest, PageBundleSizes

logger = logging.getLogger(__name__)


class GzipCompressor:
    """Compressor class for gzip encoding.

    Attributes:
        encoding (str): The encoding name, always 'gzip'.
        compression_level (int): Compression level for gzip (zlib default: 6).
    """

    encoding: str = "gzip"
    compression_level: int = 6

    def compress(self: GzipCompressor, data: bytes) -> bytes:
        """Compress a bytes object using gzip.

        Args:
            data (bytes): The data to compress.

        Returns:
            bytes: The compressed data.
        """
        return gzip.compress(data, compresslevel=self.compression_level, mtime=0)

    def compressed_size(self: GzipCompressor, data: bytes) -> int:
        """Return the length of ``data`` once gzipped."""
        return len(self.compress(data))


def build_output_dir(working_dir: str | Path) -> Path:
    """Return the build output directory for a project checked out in ``working_dir``."""
    return Path.cwd() / working_dir / settings.build_dir


def page_sizes_from_manifest(
    manifest: BuildManifest,
    build_dir: Path,
    compressor: GzipCompressor | None = None,
) -> PageBundleSizes:
    """Sum the gzipped size of each page's asset files.

    Args:
    ----
        manifest: Mapping of page to asset files relative to ``build_dir``
        build_dir: The build output directory
        compressor: Compressor to measure with, gzip by default

    Returns:
    -------
        One entry per page, in manifest order

    Raises:
    ------
        FileAccessError: If any asset file cannot be read

    """
    compressor = compressor or GzipCompressor()
    sizes: PageBundleSizes = []
    for page, files in manifest.items():
        total = 0
        for file_name in files:
            path = build_dir / file_name
            try:
                data = path.read_bytes()
            except OSError as e:
                msg = f"Cannot read asset {file_name} of page {page}: {e}"
                raise FileAccessError(msg, path) from e
            total += compressor.compressed_size(data)
        logger.debug(f"{page}: {len(files)} files, {total} bytes gzipped")
        sizes.append(PageSize(page=page, size=total))
    return sizes


def get_static_bundle_sizes(working_dir: str | Path) -> PageBundleSizes:
    """Measure every statically bundled page of the build in ``working_dir``."""
    build_dir = build_output_dir(working_dir)
    sizes = page_sizes_from_manifest(resolve_static_pages(build_dir), build_dir)
    logger.info(f"Measured {len(sizes)} static pages in {build_dir}")
    return sizes


def get_dynamic_bundle_sizes(working_dir: str | Path) -> PageBundleSizes:
    """Measure every first-party dynamically loaded chunk of the build in ``working_dir``."""
    build_dir = build_output_dir(working_dir)
    sizes = page_sizes_from_manifest(resolve_dynamic_chunks(build_dir), build_dir)
    logger.info(f"Measured {len(sizes)} dynamic chunks in {build_dir}")
    return sizes


def dump_snapshot(sizes: PageBundleSizes) -> bytes:
    """Serialise a snapshot as ``[{"page": ..., "size": ...}, ...]`` JSON."""
    return orjson.dumps(sizes, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE)


def save_snapshot(sizes: PageBundleSizes, path: str | Path) -> None:
    """Write a snapshot to ``path``, creating parent directories as needed."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        f.write(dump_snapshot(sizes))
    logger.info(f"Wrote {len(sizes)} page sizes to {output_path}")


def load_snapshot(path: str | Path) -> PageBundleSizes:
    """Load a snapshot previously written by ``save_snapshot``.

    Raises:
        FileAccessError: If the file cannot be read
        ParseError: If the file is not a JSON list of ``{"page", "size"}`` objects

    """
    snapshot_path = Path(path)
    try:
        with snapshot_path.open("rb") as f:
            content = orjson.loads(f.read())
    except OSError as e:
        msg = f"Cannot read snapshot {snapshot_path}: {e}"
        raise FileAccessError(msg, snapshot_path) from e
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON in snapshot {snapshot_path}: {e}"
        raise ParseError(msg, snapshot_path) from e

    if not isinstance(content, list):
        msg = f"Expected a list of page sizes in {snapshot_path}"
        raise ParseError(msg, snapshot_path)

    sizes: PageBundleSizes = []
    for item in content:
        page = item.get("page") if isinstance(item, dict) else None
        size = item.get("size") if isinstance(item, dict) else None
        if not isinstance(page, str) or not isinstance(size, int) or isinstance(size, bool):
            msg = f"Expected {{'page': str, 'size': int}} in {snapshot_path}, got {item!r}"
            raise ParseError(msg, snapshot_path)
        sizes.append(PageSize(page=page, size=size))

    logger.debug(f"Loaded {len(sizes)} page sizes from {snapshot_path}")
    return sizes
