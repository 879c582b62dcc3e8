"""
Core data types for read-aloud.

This module defines the records passed between the pipelines and the
writers:
- FeedEntry: Raw item parsed from an RSS/Atom feed
- Article: Summarized item ready to be written to reading files and reports
- SegmentationPolicy: How an Article stream is cut into reading files
"""

from __future__ import annotations

from dataclasses import dataclass


JA_TERMINATORS = "。．！？"
LATIN_TERMINATORS = ".!?"
DEFAULT_TERMINATORS = LATIN_TERMINATORS + JA_TERMINATORS


class InvalidPolicyError(ValueError):
    """Raised when a segmentation policy cannot produce bounded chunks."""


@dataclass
class FeedEntry:
    """Represents one item of a fetched feed before filtering.

    Attributes:
        title: The item headline
        description: Short description or content snippet
        content: Full content (content:encoded) or the description
        link: URL of the item, empty when the feed has none
        pub_date: Publish date as given by the feed, not parsed
        source: Feed title, or "Unknown"
    """
    title: str
    description: str = ""
    content: str = ""
    link: str = ""
    pub_date: str = ""
    source: str = "Unknown"


@dataclass(frozen=True)
class Article:
    """A summarized item to be read aloud and archived.

    Only ``summary`` is segmented when reading files are produced; every
    other field is copied verbatim into the outputs.

    Attributes:
        title: Display title
        summary: Body text, unbounded length
        source: Provenance label (feed name, site URL)
        pub_date: Display date, free text
        link: URL or empty string
    """
    title: str
    summary: str
    source: str = ""
    pub_date: str = ""
    link: str = ""


@dataclass(frozen=True)
class SegmentationPolicy:
    """Resolved reading-file policy for one run.

    Attributes:
        split_files: Segment each article on its own when True, otherwise
            concatenate all articles into one stream first
        max_chars_per_file: Upper bound on the length of each chunk
        include_metadata: Prepend "Article N." style markers
        output_prefix: Filename prefix of every reading file
        terminators: Characters that end a sentence
        language: Label language for metadata markers ("ja" or "en")
    """
    split_files: bool = True
    max_chars_per_file: int = 300
    include_metadata: bool = False
    output_prefix: str = "news_reading_"
    terminators: str = DEFAULT_TERMINATORS
    language: str = "ja"

    def __post_init__(self) -> None:
        validate_max_length(self.max_chars_per_file)


def validate_max_length(max_length: int) -> None:
    """Reject chunk sizes that cannot bound anything."""
    if isinstance(max_length, bool) or not isinstance(max_length, int):
        raise InvalidPolicyError(f"max_chars_per_file must be an integer, got {max_length!r}")
    if max_length <= 0:
        raise InvalidPolicyError(f"max_chars_per_file must be positive, got {max_length}")
