"""Core types, segmentation and deduplication."""

from .dedup import dedup_entries
from .segmenter import force_split, segment, split_sentences, terminator_predicate
from .types import (
    DEFAULT_TERMINATORS,
    JA_TERMINATORS,
    LATIN_TERMINATORS,
    Article,
    FeedEntry,
    InvalidPolicyError,
    SegmentationPolicy,
)

__all__ = [
    "Article",
    "FeedEntry",
    "SegmentationPolicy",
    "InvalidPolicyError",
    "DEFAULT_TERMINATORS",
    "JA_TERMINATORS",
    "LATIN_TERMINATORS",
    "segment",
    "split_sentences",
    "force_split",
    "terminator_predicate",
    "dedup_entries",
]
