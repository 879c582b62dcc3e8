"""Google Gemini provider."""

from __future__ import annotations

from typing import Any

import httpx

from ...config import ProviderConfig
from .base import SummaryProvider


class GeminiProvider(SummaryProvider):
    """Gemini-backed provider using the ``generateContent`` endpoint."""

    def __init__(self, cfg: ProviderConfig, api_key: str | None):
        if not api_key:
            raise ValueError("Missing Google API key")
        self.cfg = cfg
        self.api_key = api_key

    def complete(self, prompt: str) -> str:
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": self.cfg.temperature},
        }
        data = self._post(payload)
        return _extract_text(data).strip()

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.cfg.base_url.rstrip('/')}/v1beta/models/{self.cfg.model}:generateContent"
        params = {"key": self.api_key}
        with httpx.Client(timeout=self.cfg.timeout_seconds, trust_env=self.cfg.trust_env) as client:
            resp = client.post(url, params=params, json=payload)
            resp.raise_for_status()
            return resp.json()


def _extract_text(data: dict[str, Any]) -> str:
    """Join the text parts of the first candidate, skipping thought parts.

    Falls back to every text part when the reply holds only thoughts.
    """
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""
    texts = [part.get("text", "") for part in parts if not part.get("thought")]
    if not any(texts):
        texts = [part.get("text", "") for part in parts]
    return "".join(texts)
