"""
HTML content extraction with multiple fallback strategies.

This module provides a chain of extraction methods:
1. trafilatura: Fast, purpose-built for article content (default)
2. readability: Mozilla's readability algorithm (fallback)
3. bs4: BeautifulSoup plain text extraction (last resort)

and ``clean_text`` which normalizes text before it is sent to a language
model.
"""

from __future__ import annotations

import re
from typing import Callable

from bs4 import BeautifulSoup
import trafilatura
from readability import Document


_TAG_RE = re.compile(r"<[^>]*>")
_SPECIAL_TOKEN_RE = re.compile(r"<\|[^|]*\|>")
_WHITESPACE_RE = re.compile(r"\s+")


def extract_text(html: str, primary: str, fallback: list[str]) -> str | None:
    """Extract plain text from HTML using a chain of extractors.

    Tries each extraction method in order until one produces non-empty
    output.

    Args:
        html: The HTML content to extract text from
        primary: Name of the primary extraction method to try first
        fallback: List of fallback method names to try if primary fails

    Returns:
        Extracted plain text with leading/trailing whitespace stripped,
        or None if all methods fail
    """
    order = [primary] + [name for name in fallback if name != primary]
    for method in order:
        extractor = _get_extractor(method)
        if not extractor:
            continue
        text = extractor(html)
        if text:
            return text.strip()
    return None


def clean_text(text: str) -> str:
    """Strip markup, model special tokens and NULs, collapse whitespace.

    Examples:
        >>> clean_text("<p>Hello <|endoftext|>  world</p>")
        'Hello world'
    """
    text = _SPECIAL_TOKEN_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    text = text.replace("\x00", "")
    return _WHITESPACE_RE.sub(" ", text).strip()


def _get_extractor(name: str) -> Callable[[str], str | None] | None:
    if name == "trafilatura":
        return _extract_trafilatura
    if name == "readability":
        return _extract_readability
    if name == "bs4":
        return _extract_bs4
    return None


def _extract_trafilatura(html: str) -> str | None:
    return trafilatura.extract(html)


def _extract_readability(html: str) -> str | None:
    doc = Document(html)
    # Use bs4 to convert the readability HTML to plain text
    return _extract_bs4(doc.summary())


def _extract_bs4(html: str) -> str | None:
    """Extract plain text from HTML using BeautifulSoup.

    Removes script/style tags and keeps non-empty lines only.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = soup.get_text(separator="\n")
    cleaned = "\n".join([line.strip() for line in text.splitlines() if line.strip()])
    return cleaned if cleaned else None
