"""
Map-reduce website summarization.

Page text is cut into large overlapping windows, each window is summarized
on its own (map), and the partial summaries are merged by one more request
(combine). Every request goes through the token rate limiter first.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable
from urllib.parse import urlparse

from ..llm.prompts import build_combine_prompt, build_map_prompt
from ..llm.providers.base import SummaryProvider
from ..llm.rate_limiter import TokenRateLimiter


_BREAKS = ("\n\n", "\n", "。", ". ", "！", "？", "! ", "? ", " ")


def split_for_llm(text: str, chunk_size: int, overlap: int) -> list[str]:
    """Cut text into windows of at most ``chunk_size`` characters.

    Windows end at the last paragraph, line, sentence or word break found
    in the second half of the window, falling back to a hard cut.
    Consecutive windows share up to ``overlap`` characters.

    Raises:
        ValueError: If ``chunk_size`` is not positive or ``overlap`` is not
            smaller than ``chunk_size``
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if overlap < 0 or overlap >= chunk_size:
        raise ValueError("overlap must be in [0, chunk_size)")

    text = text.strip()
    if not text:
        return []

    windows: list[str] = []
    start = 0
    length = len(text)
    while start < length:
        end = min(start + chunk_size, length)
        if end < length:
            end = _break_point(text, start, end)
        window = text[start:end].strip()
        if window:
            windows.append(window)
        if end >= length:
            break
        start = max(end - overlap, start + 1)
    return windows


def _break_point(text: str, start: int, end: int) -> int:
    floor = start + (end - start) // 2
    for sep in _BREAKS:
        idx = text.rfind(sep, floor, end)
        if idx != -1:
            return idx + len(sep)
    return end


def url_subdir(url: str, max_length: int = 50) -> str:
    """Folder name for a URL: host and path with "." and "/" as "_".

    Examples:
        >>> url_subdir("https://example.com/news/today.html")
        'example_com_news_today_html'
    """
    parsed = urlparse(url)
    hostname = (parsed.hostname or "").replace(".", "_")
    path = parsed.path.replace("/", "_").replace(".", "_")
    return f"{hostname}{path}"[:max_length] or "site"


@dataclass
class SummaryOutcome:
    """Summary text plus the request accounting of one summarization."""
    text: str
    chunks: int
    requests: int
    waited_seconds: float


class WebsiteSummarizer:
    """Summarize long page text with a provider under a rate limit.

    Args:
        provider: Completion backend
        limiter: Shared rate limiter
        chunk_size: Characters per map window
        chunk_overlap: Characters shared by consecutive windows
        chars_per_token: Characters per token used to estimate request size
        on_step: Optional callback receiving (step, total) after each request
    """

    def __init__(
        self,
        provider: SummaryProvider,
        limiter: TokenRateLimiter,
        chunk_size: int = 30000,
        chunk_overlap: int = 1000,
        chars_per_token: int = 4,
        on_step: Callable[[int, int], None] | None = None,
    ):
        self.provider = provider
        self.limiter = limiter
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.chars_per_token = chars_per_token
        self.on_step = on_step

    def summarize(self, text: str, length: str) -> SummaryOutcome:
        windows = split_for_llm(text, self.chunk_size, self.chunk_overlap)
        if not windows:
            return SummaryOutcome(text="", chunks=0, requests=0, waited_seconds=0.0)

        total = len(windows) + (1 if len(windows) > 1 else 0)
        waited = 0.0
        partials: list[str] = []
        for window in windows:
            prompt = build_map_prompt(window, length)
            waited += self.limiter.wait_if_needed(self._estimate(prompt))
            partials.append(self.provider.complete(prompt))
            self._step(len(partials), total)

        if len(partials) == 1:
            return SummaryOutcome(text=partials[0], chunks=1, requests=1, waited_seconds=waited)

        prompt = build_combine_prompt(partials, length)
        waited += self.limiter.wait_if_needed(self._estimate(prompt))
        final = self.provider.complete(prompt)
        self._step(total, total)
        return SummaryOutcome(text=final, chunks=len(windows), requests=total, waited_seconds=waited)

    def _estimate(self, prompt: str) -> int:
        return math.ceil(len(prompt) / self.chars_per_token)

    def _step(self, step: int, total: int) -> None:
        if self.on_step is not None:
            self.on_step(step, total)
