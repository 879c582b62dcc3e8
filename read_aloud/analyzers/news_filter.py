"""
Keyword filtering and extractive summaries for feed entries.

No language model is involved here: entries are matched against keywords,
deduplicated by title, limited, and summarized by keeping leading
sentences that fit the configured length.
"""

from __future__ import annotations

import re

from ..core.dedup import dedup_entries
from ..core.types import Article, FeedEntry


_TAG_RE = re.compile(r"<[^>]*>")
_ENTITY_RE = re.compile(r"&[^;\s]+;")
_SENTENCE_SPLIT_RE = re.compile(r"[。．！？\n]")


def contains_keywords(text: str, keywords: list[str]) -> bool:
    """Case-insensitive substring match against any keyword."""
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def select_entries(
    entries: list[FeedEntry],
    keywords: list[str],
    max_articles: int,
    dedup_threshold: int = 100,
) -> list[FeedEntry]:
    """Keep keyword matches, drop duplicate titles, cut to ``max_articles``."""
    relevant = [
        entry
        for entry in entries
        if contains_keywords(f"{entry.title} {entry.description} {entry.content}", keywords)
    ]
    unique = dedup_entries(relevant, dedup_threshold)
    return unique[:max_articles]


def summarize_text(text: str, max_length: int) -> str:
    """Build an extractive summary of at most about ``max_length`` characters.

    Markup and entities are removed, the text is split on Japanese
    sentence ends and newlines, and leading sentences are joined with "。"
    while they fit (each sentence costs its length plus one). When not even
    the first sentence fits, the first ``max_length`` characters are
    returned followed by "...".
    """
    clean = _ENTITY_RE.sub("", _TAG_RE.sub("", text))
    sentences = [s.strip() for s in _SENTENCE_SPLIT_RE.split(clean) if s.strip()]

    picked: list[str] = []
    used = 0
    for sentence in sentences:
        if used + len(sentence) + 1 > max_length:
            break
        picked.append(sentence)
        used += len(sentence) + 1

    summary = "。".join(picked)
    if summary and not summary.endswith("。"):
        summary += "。"
    return summary or clean[:max_length] + "..."


def to_article(entry: FeedEntry, summary_length: int) -> Article:
    return Article(
        title=entry.title,
        summary=summarize_text(entry.content or entry.description, summary_length),
        source=entry.source,
        pub_date=entry.pub_date,
        link=entry.link,
    )
