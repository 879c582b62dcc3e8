"""
Content fetching and extraction.

This package handles HTTP fetching, feed parsing and HTML text
extraction for both pipelines.
"""

from .extractor import clean_text, extract_text
from .fetcher import FetchResult, fetch_url, fetch_with_config
from .rss import FeedFetchError, fetch_feed, parse_feed

__all__ = [
    "FetchResult",
    "fetch_url",
    "fetch_with_config",
    "extract_text",
    "clean_text",
    "FeedFetchError",
    "fetch_feed",
    "parse_feed",
]
