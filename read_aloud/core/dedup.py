"""
Feed entry deduplication using link matching and fuzzy title comparison.

This module removes duplicate entries based on:
1. Exact link matches (the same item syndicated by two feeds)
2. Title similarity (threshold 100 keeps only exact title matches)
"""

from __future__ import annotations

from rapidfuzz import fuzz

from .types import FeedEntry


def dedup_entries(entries: list[FeedEntry], threshold: int = 100) -> list[FeedEntry]:
    """Remove duplicate entries from a list, first occurrence wins.

    Args:
        entries: Entries in feed order
        threshold: Similarity threshold (0-100) for title matching.
                   The default 100 treats only identical titles as duplicates.

    Returns:
        Deduplicated list of entries, preserving original order
    """
    seen_links: set[str] = set()
    kept: list[FeedEntry] = []
    titles: list[str] = []

    for entry in entries:
        if entry.link and entry.link in seen_links:
            continue
        if _is_similar_title(entry.title, titles, threshold):
            continue
        if entry.link:
            seen_links.add(entry.link)
        titles.append(entry.title)
        kept.append(entry)

    return kept


def _is_similar_title(title: str, titles: list[str], threshold: int) -> bool:
    """Check if a title is similar to any title in the given list.

    Uses rapidfuzz's ratio, a normalized Levenshtein similarity in 0-100.
    """
    for existing in titles:
        if title == existing or fuzz.ratio(title, existing) >= threshold:
            return True
    return False
