"""OpenAI-compatible chat completions provider."""

from __future__ import annotations

from typing import Any

import httpx

from ...config import ProviderConfig
from .base import SummaryProvider


class OpenAICompatibleProvider(SummaryProvider):
    """Calls ``{base_url}/chat/completions`` with a single user message."""

    def __init__(self, cfg: ProviderConfig, api_key: str | None):
        if not api_key:
            raise ValueError(f"Missing API key (set {cfg.api_key_env})")
        self.cfg = cfg
        self.api_key = api_key

    def complete(self, prompt: str) -> str:
        payload = {
            "model": self.cfg.model,
            "temperature": self.cfg.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        data = self._post(payload)
        return _extract_text(data).strip()

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.cfg.base_url.rstrip('/')}/chat/completions"
        headers = {"Authorization": f"Bearer {self.api_key}"}
        with httpx.Client(timeout=self.cfg.timeout_seconds, trust_env=self.cfg.trust_env) as client:
            resp = client.post(url, headers=headers, json=payload)
            resp.raise_for_status()
            return resp.json()


def _extract_text(data: dict[str, Any]) -> str:
    try:
        return data["choices"][0]["message"]["content"] or ""
    except (KeyError, IndexError, TypeError):
        return ""
