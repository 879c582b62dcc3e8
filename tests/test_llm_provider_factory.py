"""Tests for hot-swappable LLM provider factory and response parsing."""

import pytest

from read_aloud.config import ProviderConfig
from read_aloud.llm.providers import gemini, openai_compatible
from read_aloud.llm.providers.factory import available_providers, create_provider
from read_aloud.llm.providers.gemini import GeminiProvider
from read_aloud.llm.providers.openai_compatible import OpenAICompatibleProvider


def test_available_providers_contains_expected_backends():
    names = available_providers()
    assert "gemini" in names
    assert "openai" in names
    assert "openai_compatible" in names


def test_create_provider_gemini():
    provider = create_provider(
        ProviderConfig(
            name="gemini",
            model="gemini-2.0-flash",
            api_key="test-key",
            base_url="https://generativelanguage.googleapis.com",
        )
    )
    assert isinstance(provider, GeminiProvider)


def test_create_provider_openai_compatible():
    provider = create_provider(ProviderConfig(name=" OpenAI ", api_key="test-key"))
    assert isinstance(provider, OpenAICompatibleProvider)


def test_create_provider_rejects_unknown_backend():
    with pytest.raises(ValueError, match="Unsupported provider"):
        create_provider(ProviderConfig(name="unknown-provider", api_key="test-key"))


def test_create_provider_requires_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(ValueError, match="Missing API key"):
        create_provider(ProviderConfig(name="openai"))


def test_openai_complete_sends_model_and_prompt(monkeypatch):
    provider = OpenAICompatibleProvider(ProviderConfig(model="gpt-4o-mini", temperature=0.1), "key")
    sent = {}

    def fake_post(payload):
        sent.update(payload)
        return {"choices": [{"message": {"content": "  要約です。 "}}]}

    monkeypatch.setattr(provider, "_post", fake_post)

    assert provider.complete("prompt text") == "要約です。"
    assert sent["model"] == "gpt-4o-mini"
    assert sent["temperature"] == 0.1
    assert sent["messages"] == [{"role": "user", "content": "prompt text"}]


def test_openai_extract_text_handles_missing_choices():
    assert openai_compatible._extract_text({}) == ""
    assert openai_compatible._extract_text({"choices": []}) == ""


def test_gemini_extract_text_joins_non_thought_parts():
    data = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"thought": True, "text": "internal reasoning"},
                        {"text": "first half, "},
                        {"text": "second half"},
                    ]
                }
            }
        ]
    }

    assert gemini._extract_text(data) == "first half, second half"


def test_gemini_extract_text_falls_back_to_all_text_when_only_thought():
    data = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"thought": True, "text": "first"},
                        {"thought": True, "text": " second"},
                    ]
                }
            }
        ]
    }

    assert gemini._extract_text(data) == "first second"


def test_gemini_extract_text_without_candidates():
    assert gemini._extract_text({"candidates": []}) == ""
