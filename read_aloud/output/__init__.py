"""
Output writers.

Reading files (bounded chunks for sequential consumption) and reports
(one archival file per run).
"""

from .reading_files import create_reading_files
from .report import SiteResult, render_html, render_markdown, write_report, write_sites_index

__all__ = [
    "create_reading_files",
    "write_report",
    "render_markdown",
    "render_html",
    "write_sites_index",
    "SiteResult",
]
