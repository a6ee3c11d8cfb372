"""
Endpoint coverage

Tracks exercised contract operations and renders coverage summaries.
"""

from .tracker import CoverageReport, CoverageStore, TRACKED_METHODS, declared_endpoints
from .report import render_console, render_markdown, write_markdown

__all__ = [
    "CoverageReport",
    "CoverageStore",
    "TRACKED_METHODS",
    "declared_endpoints",
    "render_console",
    "render_markdown",
    "write_markdown",
]
