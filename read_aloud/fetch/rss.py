"""RSS/Atom feed fetching."""

from __future__ import annotations

import feedparser

from ..config import FetchConfig
from ..core.types import FeedEntry
from .fetcher import FetchResult, fetch_with_config


class FeedFetchError(RuntimeError):
    """Raised when a feed cannot be downloaded."""

    def __init__(self, result: FetchResult):
        super().__init__(f"{result.url}: {result.error}")
        self.result = result


def fetch_feed(url: str, cfg: FetchConfig) -> list[FeedEntry]:
    """Download and parse one feed.

    Raises:
        FeedFetchError: If the download failed after all retries
    """
    result = fetch_with_config(url, cfg)
    if not result.ok:
        raise FeedFetchError(result)
    return parse_feed(result.text or "")


def parse_feed(document: str) -> list[FeedEntry]:
    """Map parsed feed items to FeedEntry records.

    ``content`` prefers the full content:encoded body and falls back to
    the description; ``source`` is the feed title.
    """
    feed = feedparser.parse(document)
    source = feed.feed.get("title") or "Unknown"

    entries = []
    for item in feed.entries:
        description = item.get("description") or item.get("summary") or ""
        content = _first_content(item) or description
        entries.append(
            FeedEntry(
                title=item.get("title") or "",
                description=description,
                content=content,
                link=item.get("link") or "",
                pub_date=item.get("published") or item.get("updated") or "",
                source=source,
            )
        )
    return entries


def _first_content(item) -> str:
    for block in item.get("content") or []:
        value = block.get("value")
        if value:
            return value
    return ""
