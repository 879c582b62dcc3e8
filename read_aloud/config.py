"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ReadingConfig: Reading-file segmentation settings (nested in news/websites)
- NewsConfig: RSS news fetching and summarizing settings
- WebsitesConfig: Website summarizing settings
- FetchConfig: HTTP fetching and extraction settings
- ProviderConfig: LLM provider settings
- RateLimitConfig: LLM request/token budget settings
- OutputConfig: Output directory and report format
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml

from .core.types import DEFAULT_TERMINATORS, SegmentationPolicy


DEFAULT_FEEDS = [
    "https://news.yahoo.co.jp/rss/topics/it.xml",
    "https://feeds.feedburner.com/itmedia/news",
    "https://rss.cnn.com/rss/edition.rss",
    "https://feeds.bbci.co.uk/news/technology/rss.xml",
]


@dataclass
class ReadingConfig:
    """Configuration for reading-file generation.

    Attributes:
        split_files: One file set per article (True) or one merged stream (False)
        max_chars_per_file: Maximum characters per reading file
        include_metadata: Prepend "Article N." markers and a run header
        output_prefix: Filename prefix for reading files
        terminators: Sentence terminal characters used for segmentation
    """

    split_files: bool = True
    max_chars_per_file: int = 300
    include_metadata: bool = False
    output_prefix: str = "news_reading_"
    terminators: str = DEFAULT_TERMINATORS

    def to_policy(self, language: str) -> SegmentationPolicy:
        """Resolve into an immutable policy; raises InvalidPolicyError."""
        return SegmentationPolicy(
            split_files=self.split_files,
            max_chars_per_file=self.max_chars_per_file,
            include_metadata=self.include_metadata,
            output_prefix=self.output_prefix,
            terminators=self.terminators,
            language=language,
        )


@dataclass
class NewsConfig:
    """Configuration for the RSS news pipeline.

    Attributes:
        keywords: Case-insensitive keywords an entry must contain
        max_articles: Maximum number of articles kept after filtering
        summary_length: Maximum characters of each extractive summary
        output_file: Report file name inside the output directory
        language: Label language for reading files ("ja" or "en")
        feeds: RSS/Atom feed URLs, fetched in order
        dedup_threshold: rapidfuzz title similarity treated as duplicate
        reading: Reading-file settings
    """

    keywords: list[str] = field(default_factory=lambda: ["AI", "人工知能", "テクノロジー"])
    max_articles: int = 5
    summary_length: int = 200
    output_file: str = "news_summary.md"
    language: str = "ja"
    feeds: list[str] = field(default_factory=lambda: list(DEFAULT_FEEDS))
    dedup_threshold: int = 100
    reading: ReadingConfig = field(default_factory=ReadingConfig)


@dataclass
class WebsitesConfig:
    """Configuration for the website summarizer.

    Attributes:
        urls: Websites summarized when no URL is given on the command line
        output_dir: Root directory for per-site output folders
        summary_length: "short", "medium", "long" or a character count
        language: Label language for reading files ("ja" or "en")
        report_file: Per-site report file name
        reading: Reading-file settings
    """

    urls: list[str] = field(default_factory=list)
    output_dir: str = "website_summaries"
    summary_length: str = "medium"
    language: str = "ja"
    report_file: str = "website_summary_report.md"
    reading: ReadingConfig = field(
        default_factory=lambda: ReadingConfig(
            split_files=True,
            max_chars_per_file=100,
            include_metadata=True,
            output_prefix="website_summary_",
        )
    )


@dataclass
class FetchConfig:
    """Configuration for HTTP content fetching.

    Attributes:
        timeout_seconds: HTTP request timeout
        retries: Number of retry attempts for failed requests
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
        extract_primary: Primary extraction method ("trafilatura", "readability", or "bs4")
        extract_fallback: Fallback methods to try if primary fails
    """

    timeout_seconds: float = 30.0
    retries: int = 2
    trust_env: bool = True
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    extract_primary: str = "trafilatura"
    extract_fallback: list[str] = field(default_factory=lambda: ["readability", "bs4"])


@dataclass
class ProviderConfig:
    """Configuration for LLM provider.

    Attributes:
        name: Provider name ("openai" or "gemini")
        model: Model identifier
        api_key_env: Environment variable name containing the API key
        base_url: Base URL for the provider API
        api_key: Optional inline API key (overrides env var)
        temperature: Sampling temperature
        trust_env: Whether to respect system proxy settings for API requests
        timeout_seconds: Request timeout
        chunk_size: Maximum characters of source text per map request
        chunk_overlap: Characters shared by consecutive map chunks
    """

    name: str = "openai"
    model: str = "gpt-4o-mini"
    api_key_env: str = "OPENAI_API_KEY"
    base_url: str = "https://api.openai.com/v1"
    api_key: str | None = None
    temperature: float = 0.1
    trust_env: bool = True
    timeout_seconds: float = 120.0
    chunk_size: int = 30000
    chunk_overlap: int = 1000


@dataclass
class RateLimitConfig:
    """Configuration for the LLM sliding-window rate limiter.

    Attributes:
        max_requests: Requests allowed per window
        max_tokens: Estimated tokens allowed per window
        window_seconds: Window length
        chars_per_token: Characters per token used for estimates
    """

    max_requests: int = 200
    max_tokens: int = 150000
    window_seconds: float = 60.0
    chars_per_token: int = 4


@dataclass
class OutputConfig:
    """Configuration for output generation.

    Attributes:
        dir: Output directory of the news pipeline
        report_format: "markdown", or "html" to also render an HTML report
    """

    dir: str = "output"
    report_format: str = "markdown"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = True
    format: str = "jsonl"
    filename: str = "run.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    news: NewsConfig = field(default_factory=NewsConfig)
    websites: WebsitesConfig = field(default_factory=WebsitesConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    _merge_dict(data, raw)
    return _fromdict(data)


def _merge_dict(data: dict[str, Any], raw: dict[str, Any]) -> None:
    """Update ``data`` in place; unknown keys are ignored, sections merge per key."""
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            _merge_dict(data[key], value)
        else:
            data[key] = value


def _reading_asdict(cfg: ReadingConfig) -> dict[str, Any]:
    return {
        "split_files": cfg.split_files,
        "max_chars_per_file": cfg.max_chars_per_file,
        "include_metadata": cfg.include_metadata,
        "output_prefix": cfg.output_prefix,
        "terminators": cfg.terminators,
    }


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "news": {
            "keywords": list(cfg.news.keywords),
            "max_articles": cfg.news.max_articles,
            "summary_length": cfg.news.summary_length,
            "output_file": cfg.news.output_file,
            "language": cfg.news.language,
            "feeds": list(cfg.news.feeds),
            "dedup_threshold": cfg.news.dedup_threshold,
            "reading": _reading_asdict(cfg.news.reading),
        },
        "websites": {
            "urls": list(cfg.websites.urls),
            "output_dir": cfg.websites.output_dir,
            "summary_length": cfg.websites.summary_length,
            "language": cfg.websites.language,
            "report_file": cfg.websites.report_file,
            "reading": _reading_asdict(cfg.websites.reading),
        },
        "fetch": {
            "timeout_seconds": cfg.fetch.timeout_seconds,
            "retries": cfg.fetch.retries,
            "trust_env": cfg.fetch.trust_env,
            "user_agent": cfg.fetch.user_agent,
            "extract_primary": cfg.fetch.extract_primary,
            "extract_fallback": list(cfg.fetch.extract_fallback),
        },
        "provider": {
            "name": cfg.provider.name,
            "model": cfg.provider.model,
            "api_key_env": cfg.provider.api_key_env,
            "base_url": cfg.provider.base_url,
            "api_key": cfg.provider.api_key,
            "temperature": cfg.provider.temperature,
            "trust_env": cfg.provider.trust_env,
            "timeout_seconds": cfg.provider.timeout_seconds,
            "chunk_size": cfg.provider.chunk_size,
            "chunk_overlap": cfg.provider.chunk_overlap,
        },
        "rate_limit": {
            "max_requests": cfg.rate_limit.max_requests,
            "max_tokens": cfg.rate_limit.max_tokens,
            "window_seconds": cfg.rate_limit.window_seconds,
            "chars_per_token": cfg.rate_limit.chars_per_token,
        },
        "output": {
            "dir": cfg.output.dir,
            "report_format": cfg.output.report_format,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    news = dict(data["news"])
    news["reading"] = ReadingConfig(**news["reading"])
    websites = dict(data["websites"])
    websites["reading"] = ReadingConfig(**websites["reading"])
    return AppConfig(
        news=NewsConfig(**news),
        websites=WebsitesConfig(**websites),
        fetch=FetchConfig(**data["fetch"]),
        provider=ProviderConfig(**data["provider"]),
        rate_limit=RateLimitConfig(**data["rate_limit"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    return os.getenv(cfg.api_key_env)
