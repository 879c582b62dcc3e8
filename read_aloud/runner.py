"""
Pipeline orchestration for read-aloud.

Two pipelines share the same writers:

News:
1. Fetch every configured RSS feed
2. Filter by keywords, deduplicate titles, limit the count
3. Summarize each entry extractively
4. Write the report and the reading files

Websites (per URL):
1. Fetch the page and extract its text
2. Summarize with the LLM provider (map-reduce, rate limited)
3. Write reading files and a report into a per-site folder
and finally an index report across all processed sites.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import httpx
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from .analyzers.news_filter import select_entries, to_article
from .analyzers.website_summarizer import WebsiteSummarizer, url_subdir
from .config import AppConfig
from .core.types import Article, FeedEntry, SegmentationPolicy
from .fetch.extractor import clean_text, extract_text
from .fetch.fetcher import fetch_with_config
from .fetch.rss import FeedFetchError, fetch_feed
from .llm.providers.factory import create_provider
from .llm.rate_limiter import TokenRateLimiter
from .logging_utils import log_event, setup_logging
from .output.reading_files import create_reading_files
from .output.report import SiteResult, render_html, write_report, write_sites_index


WEBSITE_TITLES = {
    "ja": "ウェブサイト要約: {url}",
    "en": "Website summary: {url}",
}

WEBSITE_REPORT_TITLES = {
    "ja": "ウェブサイト要約レポート",
    "en": "Website Summary Report",
}


@dataclass
class NewsRunResult:
    """Files produced by one news run.

    ``report_path`` is None when no entry matched the keywords.
    """
    articles: list[Article] = field(default_factory=list)
    report_path: Path | None = None
    html_path: Path | None = None
    reading_files: list[Path] = field(default_factory=list)
    fetched: int = 0


@dataclass
class WebsiteRunResult:
    """Per-site results of one website run plus the cross-site index."""
    sites: list[SiteResult] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    index_path: Path | None = None


def run_news(
    cfg: AppConfig,
    output_dir: Path,
    console: Console | None = None,
) -> NewsRunResult:
    """Run the RSS news pipeline.

    Feeds that fail to download are logged and skipped.

    Args:
        cfg: Application configuration
        output_dir: Directory receiving the report, reading files and log
        console: Rich console for output (creates default if None)

    Returns:
        NewsRunResult describing what was written
    """
    console = console or Console()
    news = cfg.news
    # Resolve first so a bad policy fails before the output dir is touched
    policy = news.reading.to_policy(news.language)
    logger = setup_logging(cfg.logging, output_dir)

    log_event(
        logger,
        "News run start",
        event="news_start",
        keywords=news.keywords,
        max_articles=news.max_articles,
        summary_length=news.summary_length,
        feeds=len(news.feeds),
    )

    entries: list[FeedEntry] = []
    for feed_url in news.feeds:
        try:
            feed_entries = fetch_feed(feed_url, cfg.fetch)
        except FeedFetchError as exc:
            logger.warning("Feed fetch failed: %s", exc, extra={"event": "feed_error", "url": feed_url})
            continue
        log_event(logger, "Feed fetched", event="feed_fetched", url=feed_url, count=len(feed_entries))
        entries.extend(feed_entries)

    selected = select_entries(entries, news.keywords, news.max_articles, news.dedup_threshold)
    articles = [to_article(entry, news.summary_length) for entry in selected]
    result = NewsRunResult(articles=articles, fetched=len(entries))
    log_event(logger, "Entries selected", event="news_selected", fetched=len(entries), selected=len(articles))

    if not articles:
        console.print("No news matched the configured keywords.")
        return result

    title = "ニュース要約レポート" if news.language == "ja" else "News Summary Report"
    result.report_path = write_report(
        articles,
        output_dir,
        news.output_file,
        title=title,
        extra={"Keywords": ", ".join(news.keywords)},
    )
    if cfg.output.report_format == "html":
        result.html_path = render_html(articles, output_dir / f"{Path(news.output_file).stem}.html", title)
    result.reading_files = create_reading_files(articles, policy, output_dir)

    log_event(
        logger,
        "News run complete",
        event="news_complete",
        report=str(result.report_path),
        reading_files=len(result.reading_files),
    )
    return result


def run_websites(
    urls: list[str],
    output_dir: Path,
    cfg: AppConfig,
    length: str | None = None,
    show_progress: bool = True,
    console: Console | None = None,
) -> WebsiteRunResult:
    """Summarize each URL and write per-site outputs plus an index report.

    A URL is logged and skipped when its page cannot be fetched or yields
    no text, when summarization fails, or when its output cannot be written.

    Args:
        urls: Websites to summarize, in order
        output_dir: Root output directory; each site gets a subfolder
        cfg: Application configuration
        length: Summary length override, defaults to ``websites.summary_length``
        show_progress: Whether to display a progress bar
        console: Rich console for output (creates default if None)

    Returns:
        WebsiteRunResult with successful sites and failed URLs
    """
    console = console or Console()
    sites_cfg = cfg.websites
    length = length or sites_cfg.summary_length
    policy = sites_cfg.reading.to_policy(sites_cfg.language)
    logger = setup_logging(cfg.logging, output_dir)

    provider = create_provider(cfg.provider)
    limiter = TokenRateLimiter(
        max_requests=cfg.rate_limit.max_requests,
        max_tokens=cfg.rate_limit.max_tokens,
        window_seconds=cfg.rate_limit.window_seconds,
    )

    result = WebsiteRunResult()
    progress = Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        disable=not show_progress,
    )

    with progress:
        site_task = progress.add_task("Websites", total=len(urls))
        for url in urls:
            request_task = progress.add_task(f"Summarize {url}", total=None)

            def on_step(step: int, total: int, task_id=request_task) -> None:
                progress.update(task_id, completed=step, total=total)

            summarizer = WebsiteSummarizer(
                provider,
                limiter,
                chunk_size=cfg.provider.chunk_size,
                chunk_overlap=cfg.provider.chunk_overlap,
                chars_per_token=cfg.rate_limit.chars_per_token,
                on_step=on_step,
            )
            site = _process_url(url, output_dir, length, policy, summarizer, cfg, logger)
            if site is None:
                result.failed.append(url)
            else:
                result.sites.append(site)
            progress.remove_task(request_task)
            progress.advance(site_task, 1)

    if result.sites:
        result.index_path = write_sites_index(result.sites, output_dir)
    log_event(
        logger,
        "Website run complete",
        event="websites_complete",
        succeeded=len(result.sites),
        failed=len(result.failed),
        index=str(result.index_path) if result.index_path else None,
    )
    return result


def _process_url(
    url: str,
    output_dir: Path,
    length: str,
    policy: SegmentationPolicy,
    summarizer: WebsiteSummarizer,
    cfg: AppConfig,
    logger,
) -> SiteResult | None:
    log_event(logger, "Website start", event="site_start", url=url, length=length)

    fetched = fetch_with_config(url, cfg.fetch)
    if not fetched.ok:
        logger.error("Website fetch failed: %s", fetched.error, extra={"event": "site_fetch_error", "url": url})
        return None

    extracted = extract_text(fetched.text or "", cfg.fetch.extract_primary, cfg.fetch.extract_fallback)
    text = clean_text(extracted or fetched.text or "")
    if not text:
        logger.error("No text to summarize", extra={"event": "site_empty", "url": url})
        return None
    log_event(logger, "Website text ready", event="site_text", url=url, chars=len(text))

    try:
        outcome = summarizer.summarize(text, length)
    except httpx.HTTPError as exc:
        logger.error(
            "Summarization failed: %s: %s",
            type(exc).__name__,
            exc,
            extra={"event": "site_llm_error", "url": url},
        )
        return None
    if not outcome.text:
        logger.error("Provider returned an empty summary", extra={"event": "site_empty_summary", "url": url})
        return None

    site_dir = output_dir / url_subdir(url)
    article = Article(
        title=WEBSITE_TITLES.get(policy.language, WEBSITE_TITLES["en"]).format(url=url),
        summary=outcome.text,
        source=url,
        pub_date=_now_display(),
        link=url,
    )
    report_title = WEBSITE_REPORT_TITLES.get(policy.language, WEBSITE_REPORT_TITLES["en"])
    try:
        reading_files = create_reading_files([article], policy, site_dir)
        report_path = write_report([article], site_dir, cfg.websites.report_file, title=report_title)
        if cfg.output.report_format == "html":
            render_html([article], site_dir / f"{Path(cfg.websites.report_file).stem}.html", article.title)
    except OSError as exc:
        logger.error(
            "Writing site output failed: %s: %s",
            type(exc).__name__,
            exc,
            extra={"event": "site_write_error", "url": url, "output_dir": str(site_dir)},
        )
        return None

    log_event(
        logger,
        "Website complete",
        event="site_complete",
        url=url,
        chunks=outcome.chunks,
        requests=outcome.requests,
        waited_seconds=round(outcome.waited_seconds, 1),
        reading_files=len(reading_files),
    )
    return SiteResult(
        url=url,
        summary=outcome.text,
        report_path=report_path,
        output_dir=site_dir,
        reading_files=reading_files,
    )


def split_text_file(
    input_path: Path,
    output_dir: Path,
    cfg: AppConfig,
    title: str | None = None,
) -> list[Path]:
    """Turn an existing text file into reading files with the news policy."""
    text = input_path.read_text(encoding="utf-8")
    policy = cfg.news.reading.to_policy(cfg.news.language)
    article = Article(title=title or "", summary=text, source=str(input_path))
    return create_reading_files([article], policy, output_dir)


def _now_display() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")
