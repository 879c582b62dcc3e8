"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from read_aloud.config import AppConfig, ProviderConfig, ReadingConfig, get_api_key, load_config
from read_aloud.core.types import InvalidPolicyError


def test_load_config_without_path_returns_defaults():
    cfg = load_config(None)

    assert isinstance(cfg, AppConfig)
    assert cfg.news.reading.max_chars_per_file == 300
    assert cfg.news.reading.output_prefix == "news_reading_"
    assert cfg.websites.reading.max_chars_per_file == 100
    assert cfg.websites.reading.include_metadata is True
    assert cfg.provider.model == "gpt-4o-mini"


def test_defaults_are_not_shared_between_loads():
    first = load_config(None)
    first.news.keywords.append("changed")

    assert "changed" not in load_config(None).news.keywords


def test_nested_sections_merge_key_by_key(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "\n".join(
            [
                "news:",
                "  keywords: [Python]",
                "  reading:",
                "    max_chars_per_file: 120",
                "    split_files: false",
                "websites:",
                "  urls:",
                "    - https://example.com",
                "unknown_section:",
                "  value: 1",
                "logging:",
                "  level: DEBUG",
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.news.keywords == ["Python"]
    assert cfg.news.reading.max_chars_per_file == 120
    assert cfg.news.reading.split_files is False
    assert cfg.news.reading.output_prefix == "news_reading_"
    assert cfg.news.max_articles == 5
    assert cfg.websites.urls == ["https://example.com"]
    assert cfg.websites.reading.output_prefix == "website_summary_"
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.format == "jsonl"


def test_empty_yaml_file_uses_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(str(path)) == AppConfig()


def test_reading_config_resolves_policy():
    policy = ReadingConfig(max_chars_per_file=42, output_prefix="x_").to_policy("en")

    assert policy.max_chars_per_file == 42
    assert policy.output_prefix == "x_"
    assert policy.language == "en"


@pytest.mark.parametrize("size", [0, -1])
def test_reading_config_rejects_non_positive_size(size):
    with pytest.raises(InvalidPolicyError):
        ReadingConfig(max_chars_per_file=size).to_policy("ja")


def test_get_api_key_prefers_inline_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "from-env")

    assert get_api_key(ProviderConfig(api_key="inline")) == "inline"
    assert get_api_key(ProviderConfig()) == "from-env"


def test_get_api_key_missing(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    assert get_api_key(ProviderConfig()) is None
