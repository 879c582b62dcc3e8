"""
read-aloud - fetch, summarize and cut text into reading files.

This package turns RSS news and website summaries into numbered,
bounded-size text files meant to be consumed one at a time (for instance
by a text-to-speech step), plus one archival Markdown report per run.

Main entry point is the CLI via the `read-aloud` command.

Example:
    $ read-aloud news -c config.yaml -o output/
"""

__all__ = [
    "__version__",
    "Article",
    "SegmentationPolicy",
    "InvalidPolicyError",
    "segment",
    "create_reading_files",
    "write_report",
]
__version__ = "0.1.0"

from .core.segmenter import segment
from .core.types import Article, InvalidPolicyError, SegmentationPolicy
from .output.reading_files import create_reading_files
from .output.report import write_report
