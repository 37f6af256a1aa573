"""Markdown reports comparing two bundle size snapshots."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from bundle_size.models import ChangeType, PageChangeInfo
from bundle_size.settings import settings

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bundle_size.models import PageBundleSizes

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")
KILO = 1024
TWO_PLACES = Decimal("0.01")


def diff_page_sizes(reference: PageBundleSizes, current: PageBundleSizes) -> list[PageChangeInfo]:
    """Compare two snapshots page by page.

    Pages are matched by exact string equality. Added and changed pages come first,
    in ``current`` order, followed by removed pages in ``reference`` order.

    Args:
    ----
        reference: Snapshot of the reference build
        current: Snapshot of the build under review

    Returns:
    -------
        One row per page present in either snapshot

    """
    reference_sizes: dict[str, int] = {}
    for entry in reference:
        reference_sizes.setdefault(entry.page, entry.size)

    rows = []
    for entry in current:
        if entry.page in reference_sizes:
            diff = entry.size - reference_sizes[entry.page]
            rows.append(PageChangeInfo(entry.page, ChangeType.CHANGED, entry.size, diff))
        else:
            rows.append(PageChangeInfo(entry.page, ChangeType.ADDED, entry.size, entry.size))

    current_pages = {entry.page for entry in current}
    rows.extend(
        PageChangeInfo(entry.page, ChangeType.REMOVED, 0, 0)
        for entry in reference
        if entry.page not in current_pages
    )
    return rows


def keep_significant(rows: Iterable[PageChangeInfo], threshold: int | None = None) -> list[PageChangeInfo]:
    """Drop changed pages whose size moved by less than ``threshold`` bytes."""
    if threshold is None:
        threshold = settings.significance_threshold
    return [row for row in rows if row.type != ChangeType.CHANGED or abs(row.diff) >= threshold]


def format_bytes(num_bytes: int, *, signed: bool = False) -> str:
    """Format a byte count in human-readable form, e.g. ``1.5 KB``.

    Args:
    ----
        num_bytes: Byte count, may be negative
        signed: Prefix the result with ``+`` or ``-``

    Returns:
    -------
        ``"no change"`` for zero, otherwise the value in the largest fitting unit
        with at most two decimals

    """
    if num_bytes == 0:
        return "no change"

    magnitude = abs(num_bytes)
    unit_index = 0
    while unit_index < len(BYTE_UNITS) - 1 and magnitude >= KILO ** (unit_index + 1):
        unit_index += 1

    scaled = (Decimal(magnitude) / Decimal(KILO**unit_index)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    number = f"{scaled:f}".rstrip("0").rstrip(".")

    sign = ""
    if signed:
        sign = "-" if num_bytes < 0 else "+"
    return f"{sign}{number} {BYTE_UNITS[unit_index]}"


def _format_table_no_diff(name: str, rows: Iterable[PageChangeInfo]) -> str:
    lines = [f"| {name} | Size (gzipped) |", "| --- | --- |"]
    lines.extend(f"| `{row.page}` | {format_bytes(row.size)} |" for row in rows)
    return "\n".join(lines)


def _format_table(name: str, rows: Iterable[PageChangeInfo]) -> str:
    lines = [f"| {name} | Size (gzipped) | Diff |", "| --- | --- | --- |"]
    for row in rows:
        diff = format_bytes(row.diff, signed=True) if row.type == ChangeType.CHANGED else str(row.type)
        lines.append(f"| `{row.page}` | {format_bytes(row.size)} | {diff} |")
    return "\n".join(lines)


def render_single(name: str, sizes: PageBundleSizes) -> str:
    """Render one snapshot as a two-column markdown table."""
    return _format_table_no_diff(name, diff_page_sizes([], sizes))


def render_comparison(name: str, reference: PageBundleSizes, current: PageBundleSizes) -> str | None:
    """Render the changes between two snapshots as a markdown table.

    Without a reference (first build) every page is listed with its size. Otherwise
    only added pages, removed pages and significant size changes are listed.

    Returns:
        The markdown table, or None if there is nothing worth reporting

    """
    rows = diff_page_sizes(reference, current)
    if not rows:
        return None

    if not reference:
        return _format_table_no_diff(name, rows)

    significant = keep_significant(rows)
    if significant:
        return _format_table(name, significant)
    return None
