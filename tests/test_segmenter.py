"""Tests for sentence-respecting segmentation."""

import pytest

from read_aloud.core.segmenter import force_split, segment, split_sentences, terminator_predicate
from read_aloud.core.types import InvalidPolicyError


SAMPLES = [
    "これは一文目。これは二文目。これは三文目。",
    "Short. " + "x" * 25 + ". End.",
    "No punctuation at all in this rather long line of text",
    "Really?! Yes. 本当に？はい！  Spaces   between.  ",
    "ab. cd. ef.",
]


def _squash(value: str) -> str:
    return "".join(value.split())


def test_japanese_sentences_end_each_chunk():
    text = "これは一文目。これは二文目。これは三文目。"

    chunks = segment(text, 10)

    assert chunks == ["これは一文目。", "これは二文目。", "これは三文目。"]
    assert all(len(chunk) <= 10 and chunk.endswith("。") for chunk in chunks)
    assert "".join(chunks) == text


def test_sentence_without_terminator_is_force_split():
    chunks = segment("a" * 50, 20)

    assert [len(chunk) for chunk in chunks] == [20, 20, 10]


def test_greedy_accumulation_packs_sentences():
    assert segment("ab. cd. ef.", 8) == ["ab. cd.", "ef."]


def test_long_sentence_pieces_are_not_merged_with_neighbours():
    text = "Short. " + "x" * 25 + ". End."

    chunks = segment(text, 10)

    assert chunks[0] == "Short."
    assert chunks[-1] == "End."
    assert chunks[1:-1] == ["x" * 9, "x" * 10, "x" * 6 + "."]


@pytest.mark.parametrize("text", SAMPLES)
@pytest.mark.parametrize("max_length", [1, 3, 7, 10, 40, 500])
def test_chunks_are_bounded_non_empty_and_preserve_content(text, max_length):
    chunks = segment(text, max_length)

    assert chunks
    assert all(chunk and chunk == chunk.strip() for chunk in chunks)
    assert all(len(chunk) <= max_length for chunk in chunks)
    assert _squash("".join(chunks)) == _squash(text)


def test_segment_is_deterministic():
    text = SAMPLES[3]
    assert segment(text, 9) == segment(text, 9)


@pytest.mark.parametrize("text", ["", "   ", "\n\t "])
def test_blank_input_yields_no_chunks(text):
    assert segment(text, 10) == []


@pytest.mark.parametrize("max_length", [0, -5])
def test_non_positive_length_is_rejected(max_length):
    with pytest.raises(InvalidPolicyError):
        segment("text.", max_length)


def test_split_sentences_keeps_terminator_runs_together():
    text = "Really?! Yes. 本当に？はい"

    sentences = split_sentences(text)

    assert sentences == ["Really?!", " Yes.", " 本当に？", "はい"]
    assert "".join(sentences) == text


def test_custom_boundary_predicate():
    is_terminal = terminator_predicate("。")

    assert split_sentences("v1.2 release。next", is_terminal) == ["v1.2 release。", "next"]
    assert segment("v1.2 release。next", 14, is_terminal) == ["v1.2 release。", "next"]


def test_force_split_covers_text_in_order():
    assert force_split("abcdefg", 3) == ["abc", "def", "g"]
