"""Resolve which compiled asset files belong to each page of a build.

Two kinds of pages are supported:

- static pages, listed in ``build-manifest.json`` and ``app-build-manifest.json``
- dynamically loaded chunks, listed in ``react-loadable-manifest.json``

The loadable manifest has had two shapes over time. Older builds map each module
id to a list of ``{"id", "file"}`` records, newer ones to a single
``{"id", "files"}`` record. ``chunk_files`` projects both onto a plain file list.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import orjson

from bundle_size.errors import FileAccessError, ParseError

if TYPE_CHECKING:
    from pathlib import Path

    from bundle_size.models import BuildManifest

logger = logging.getLogger(__name__)

BUILD_MANIFEST = "build-manifest.json"
APP_BUILD_MANIFEST = "app-build-manifest.json"
LOADABLE_MANIFEST = "react-loadable-manifest.json"

# Page whose assets are shared by every dynamically loaded chunk
SHELL_PAGE = "/_app"
# Module ids containing this segment come from third-party packages
THIRD_PARTY_MARKER = "/node_modules/"

# [{"id": ..., "file": ...}, ...]
ChunkRecordList = list[dict[str, Any]]
# {"id": ..., "files": [...]}
ChunkFileGroup = dict[str, Any]
LoadableEntry = ChunkRecordList | ChunkFileGroup


def _read_json(path: Path) -> Any:  # noqa: ANN401
    """Read and decode a JSON file.

    Raises:
        FileAccessError: If the file does not exist or cannot be read
        ParseError: If the content is not valid JSON

    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        msg = f"Cannot read {path}: {e}"
        raise FileAccessError(msg, path) from e

    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise ParseError(msg, path) from e


def _is_file_list(value: object) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def load_build_manifest(build_dir: Path, file_name: str = APP_BUILD_MANIFEST) -> BuildManifest:
    """Load the ``pages`` mapping of a build manifest.

    Args:
    ----
        build_dir: The build output directory
        file_name: Manifest file name inside ``build_dir``

    Returns:
    -------
        Mapping of page path to the asset files it loads

    Raises:
    ------
        FileAccessError: If the manifest cannot be read
        ParseError: If the manifest is not JSON shaped like ``{"pages": {page: [file, ...]}}``

    """
    path = build_dir / file_name
    content = _read_json(path)

    pages = content.get("pages") if isinstance(content, dict) else None
    if not isinstance(pages, dict):
        msg = f"Expected an object with a 'pages' mapping in {path}"
        raise ParseError(msg, path)

    for page, files in pages.items():
        if not _is_file_list(files):
            msg = f"Expected a list of file names for page {page!r} in {path}"
            raise ParseError(msg, path)

    logger.debug(f"Loaded {len(pages)} pages from {path}")
    return pages


def resolve_static_pages(build_dir: Path) -> BuildManifest:
    """Merge the pages and app-router manifests, app-router entries taking precedence."""
    page_manifest = load_build_manifest(build_dir, BUILD_MANIFEST)
    app_manifest = load_build_manifest(build_dir, APP_BUILD_MANIFEST)
    return {**page_manifest, **app_manifest}


def load_loadable_manifest(build_dir: Path) -> dict[str, LoadableEntry]:
    """Load the raw loadable manifest, keyed by module id.

    Raises:
        FileAccessError: If the manifest cannot be read
        ParseError: If the manifest is not a JSON object

    """
    path = build_dir / LOADABLE_MANIFEST
    content = _read_json(path)
    if not isinstance(content, dict):
        msg = f"Expected an object keyed by module id in {path}"
        raise ParseError(msg, path)

    logger.debug(f"Loaded {len(content)} loadable modules from {path}")
    return content


def chunk_files(entry: LoadableEntry) -> list[str]:
    """Return the files of a loadable manifest entry, whichever shape it has.

    Args:
    ----
        entry: Either a ``{"files": [...]}`` record or a list of ``{"file": ...}`` records

    Returns:
    -------
        The entry's file names, in manifest order

    Raises:
    ------
        ParseError: If the entry matches neither shape

    """
    if isinstance(entry, dict) and "files" in entry:
        files = entry["files"]
    elif isinstance(entry, list) and all(isinstance(record, dict) and "file" in record for record in entry):
        files = [record["file"] for record in entry]
    else:
        msg = f"Unrecognised loadable manifest entry: {entry!r}"
        raise ParseError(msg)

    if not _is_file_list(files):
        msg = f"Expected file names in loadable manifest entry: {entry!r}"
        raise ParseError(msg)
    return files


def resolve_dynamic_chunks(build_dir: Path) -> BuildManifest:
    """Map each first-party loadable module to the files only it loads.

    Files that the shell page already loads are shared chunks and are left out.
    Keys are the raw module ids from the loadable manifest.
    """
    page_manifest = load_build_manifest(build_dir, BUILD_MANIFEST)
    shell_files = page_manifest.get(SHELL_PAGE)
    if shell_files is None:
        logger.warning(f"No {SHELL_PAGE} page in {build_dir / BUILD_MANIFEST}, no files treated as shared")
        shell_files = []
    shared = set(shell_files)

    chunks: BuildManifest = {}
    for module_id, entry in load_loadable_manifest(build_dir).items():
        if THIRD_PARTY_MARKER in module_id:
            continue
        unique_files = dict.fromkeys(chunk_files(entry))
        chunks[module_id] = [file for file in unique_files if file not in shared]

    logger.debug(f"Resolved {len(chunks)} first-party dynamic chunks")
    return chunks
