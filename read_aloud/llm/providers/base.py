"""Abstract interface for text-completion backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class SummaryProvider(ABC):
    """Provider interface used by the website summarizer."""

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """Return the model's text reply to a single-turn prompt.

        Raises:
            httpx.HTTPError: On transport or HTTP status failures
        """
        raise NotImplementedError
