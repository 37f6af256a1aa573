"""Gzipped bundle size measurement and comparison reports for Next.js builds."""

from bundle_size.errors import BundleSizeError, FileAccessError, ParseError
from bundle_size.models import ChangeType, PageChangeInfo, PageSize
from bundle_size.report import render_comparison, render_single
from bundle_size.sizes import get_dynamic_bundle_sizes, get_static_bundle_sizes

__all__ = [
    "BundleSizeError",
    "ChangeType",
    "FileAccessError",
    "PageChangeInfo",
    "PageSize",
    "ParseError",
    "get_dynamic_bundle_sizes",
    "get_static_bundle_sizes",
    "render_comparison",
    "render_single",
]
