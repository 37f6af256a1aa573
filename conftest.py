"""Fixtures for the test suite."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import orjson
import pytest

from bundle_size.settings import settings

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path

logging.basicConfig(
    force=True,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)

SHELL_FILES = ["static/chunks/framework.js", "static/chunks/main.js", "static/chunks/pages/_app.js"]


def write_json(path: Path, content: object) -> None:
    """Write ``content`` as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(content))


def write_asset(build_dir: Path, name: str, content: bytes) -> None:
    """Write a compiled asset file below the build directory."""
    path = build_dir / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


@pytest.fixture(name="build_dir")
def build_dir_fixture(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A small Next.js style build output below ``tmp_path/app/.next``.

    The current directory is switched to ``tmp_path`` so the project can be
    addressed with the relative working directory ``app``.
    """
    monkeypatch.chdir(tmp_path)
    build_dir = tmp_path / "app" / ".next"

    write_json(
        build_dir / "build-manifest.json",
        {
            "pages": {
                "/": [*SHELL_FILES[:2], "static/chunks/pages/index.js"],
                "/_app": SHELL_FILES,
                "/about": [*SHELL_FILES[:2], "static/chunks/pages/about.js"],
            },
        },
    )
    write_json(
        build_dir / "app-build-manifest.json",
        {
            "pages": {
                "/about": ["static/chunks/app/about/page.js"],
                "/dashboard/page": ["static/chunks/app/dashboard/page.js"],
            },
        },
    )
    write_json(
        build_dir / "react-loadable-manifest.json",
        {
            "components/Chart.tsx -> ./ChartImpl": {
                "id": 101,
                "files": ["static/chunks/chart.js", "static/chunks/main.js", "static/chunks/chart.js"],
            },
            "../node_modules/some-lib/index.js -> ./lazy": {
                "id": 102,
                "files": ["static/chunks/vendor-lazy.js"],
            },
        },
    )

    for index, name in enumerate(
        [
            *SHELL_FILES,
            "static/chunks/pages/index.js",
            "static/chunks/pages/about.js",
            "static/chunks/app/about/page.js",
            "static/chunks/app/dashboard/page.js",
            "static/chunks/chart.js",
            "static/chunks/vendor-lazy.js",
        ],
    ):
        write_asset(build_dir, name, f"console.log({index});\n".encode() * (index + 1) * 50)

    return build_dir


@pytest.fixture
def threshold() -> Generator[int]:
    """Restore the significance threshold after a test changes it."""
    original_setting = settings.significance_threshold
    yield original_setting
    settings.significance_threshold = original_setting
