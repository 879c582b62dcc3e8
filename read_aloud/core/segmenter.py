"""
Sentence-respecting text segmentation.

Long generated text is cut into chunks of at most ``max_length`` characters.
Chunks end on sentence boundaries whenever a sentence fits; a sentence that
is longer than the limit on its own is cut at the character limit.

The boundary test is a predicate over single characters so callers can
swap the terminator set per locale without touching the chunking logic.
"""

from __future__ import annotations

from typing import Callable, Iterable

from .types import DEFAULT_TERMINATORS, validate_max_length


BoundaryPredicate = Callable[[str], bool]


def terminator_predicate(terminators: Iterable[str] = DEFAULT_TERMINATORS) -> BoundaryPredicate:
    """Build a boundary predicate from a set of terminal characters.

    Examples:
        >>> is_terminal = terminator_predicate("。！？")
        >>> is_terminal("。"), is_terminal(".")
        (True, False)
    """
    chars = frozenset(terminators)
    return chars.__contains__


_DEFAULT_PREDICATE = terminator_predicate()


def split_sentences(text: str, is_terminal: BoundaryPredicate | None = None) -> list[str]:
    """Split text into sentences, keeping each terminator on its sentence.

    A run of consecutive terminators ("?!", "。。") stays with the sentence
    it closes. Trailing text without a terminator is returned as the last
    sentence. ``"".join(split_sentences(text)) == text`` always holds.
    """
    is_terminal = is_terminal or _DEFAULT_PREDICATE
    sentences: list[str] = []
    start = 0
    idx = 0
    length = len(text)
    while idx < length:
        if is_terminal(text[idx]):
            # Absorb the whole run of terminators
            while idx + 1 < length and is_terminal(text[idx + 1]):
                idx += 1
            sentences.append(text[start : idx + 1])
            start = idx + 1
        idx += 1
    if start < length:
        sentences.append(text[start:])
    return sentences


def force_split(text: str, max_length: int) -> list[str]:
    """Cut text into consecutive pieces of at most ``max_length`` characters."""
    return [text[i : i + max_length] for i in range(0, len(text), max_length)]


def segment(
    text: str,
    max_length: int,
    is_terminal: BoundaryPredicate | None = None,
) -> list[str]:
    """Split text into ordered, non-empty chunks bounded by ``max_length``.

    Sentences are accumulated greedily: a sentence joins the current chunk
    while the chunk stays within the limit, otherwise the chunk is closed
    and the sentence starts the next one. A sentence longer than the limit
    is force-split and its pieces are emitted on their own, never merged
    with neighbours. Every chunk is stripped, and chunks that are empty
    after stripping are dropped.

    Args:
        text: Text to segment
        max_length: Maximum characters per chunk, must be positive
        is_terminal: Sentence boundary predicate, defaults to Latin and
            Japanese full stops, exclamation and question marks

    Returns:
        The chunks in reading order; empty for empty or blank input

    Raises:
        InvalidPolicyError: If ``max_length`` is not a positive integer
    """
    validate_max_length(max_length)

    chunks: list[str] = []
    current = ""

    for sentence in split_sentences(text, is_terminal):
        if len(current) + len(sentence) <= max_length:
            current += sentence
            continue

        if current:
            chunks.append(current.strip())
            current = ""

        if len(sentence) > max_length:
            chunks.extend(piece.strip() for piece in force_split(sentence, max_length))
        else:
            current = sentence

    if current:
        chunks.append(current.strip())

    return [chunk for chunk in chunks if chunk]
