"""Tests for map-reduce website summarization helpers."""

import pytest

from read_aloud.analyzers.website_summarizer import WebsiteSummarizer, split_for_llm, url_subdir
from read_aloud.llm.prompts import build_combine_prompt, build_map_prompt, length_instruction
from read_aloud.llm.rate_limiter import TokenRateLimiter


class _DummyProvider:
    """Records prompts and answers with a numbered summary."""

    def __init__(self):
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return f"summary-{len(self.prompts)}"


def _limiter() -> TokenRateLimiter:
    return TokenRateLimiter(max_requests=1000, max_tokens=10_000_000, window_seconds=60)


def test_split_for_llm_short_text_is_single_window():
    assert split_for_llm("  short text  ", 100, 10) == ["short text"]
    assert split_for_llm("   ", 100, 10) == []


def test_split_for_llm_windows_are_bounded_and_cover_text():
    words = [f"word{i}" for i in range(200)]
    text = " ".join(words)

    windows = split_for_llm(text, 100, 20)

    assert len(windows) > 1
    assert all(len(window) <= 100 for window in windows)
    assert windows[0].startswith("word0 ")
    assert windows[-1].endswith("word199")
    covered = set(" ".join(windows).split())
    assert set(words) <= covered


def test_split_for_llm_windows_overlap():
    text = "。".join(f"文{i:03d}" for i in range(100))

    windows = split_for_llm(text, 50, 10)

    for previous, current in zip(windows, windows[1:]):
        assert current[:3] in previous


@pytest.mark.parametrize("chunk_size, overlap", [(0, 0), (10, 10), (10, -1)])
def test_split_for_llm_rejects_bad_sizes(chunk_size, overlap):
    with pytest.raises(ValueError):
        split_for_llm("text", chunk_size, overlap)


def test_url_subdir():
    assert url_subdir("https://example.com/news/today.html") == "example_com_news_today_html"
    assert url_subdir("https://example.com") == "example_com"
    assert len(url_subdir("https://example.com/" + "a" * 100)) == 50


def test_length_instruction_variants():
    assert "2-3文" in length_instruction("short")
    assert "2-3文" in length_instruction("BRIEF")
    assert "5-8文" in length_instruction("medium")
    assert "10-15文" in length_instruction("detailed")
    assert length_instruction("150") == "約150文字程度で要約してください。"
    assert length_instruction("whatever") == "適度な長さで要約してください。"


def test_prompts_embed_instruction_and_text():
    map_prompt = build_map_prompt("本文 {braces}", "short")
    combine_prompt = build_combine_prompt(["a", "b"], "long")

    assert map_prompt.startswith("簡潔に2-3文で要約してください。")
    assert "テキスト: 本文 {braces}" in map_prompt
    assert "要約リスト:\na\n\nb" in combine_prompt
    assert combine_prompt.endswith("最終要約:")


def test_single_window_skips_combine_step():
    provider = _DummyProvider()
    steps = []
    summarizer = WebsiteSummarizer(provider, _limiter(), chunk_size=1000, chunk_overlap=10, on_step=lambda s, t: steps.append((s, t)))

    outcome = summarizer.summarize("短い本文。", "short")

    assert outcome.text == "summary-1"
    assert outcome.chunks == 1
    assert outcome.requests == 1
    assert len(provider.prompts) == 1
    assert steps == [(1, 1)]


def test_multiple_windows_are_combined():
    provider = _DummyProvider()
    limiter = _limiter()
    steps = []
    summarizer = WebsiteSummarizer(provider, limiter, chunk_size=50, chunk_overlap=5, on_step=lambda s, t: steps.append((s, t)))
    text = " ".join(f"token{i}" for i in range(40))

    outcome = summarizer.summarize(text, "medium")

    map_count = len(split_for_llm(text, 50, 5))
    assert outcome.chunks == map_count
    assert outcome.requests == map_count + 1
    assert outcome.text == f"summary-{map_count + 1}"
    combine_prompt = provider.prompts[-1]
    for idx in range(1, map_count + 1):
        assert f"summary-{idx}" in combine_prompt
    assert steps[-1] == (map_count + 1, map_count + 1)
    assert limiter.requests_in_window == map_count + 1


def test_empty_text_makes_no_requests():
    provider = _DummyProvider()

    outcome = WebsiteSummarizer(provider, _limiter()).summarize("   ", "short")

    assert outcome.text == ""
    assert provider.prompts == []
