"""
Command-line interface for read-aloud.

Uses Typer to provide the ``news``, ``website`` and ``split`` commands.
Supports loading .env files for API key configuration.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from .config import AppConfig, load_config
from .core.types import InvalidPolicyError
from .runner import run_news, run_websites, split_text_file

app = typer.Typer(add_completion=False, help="Fetch, summarize and cut text into reading files.")
console = Console()


def _load(config: Path | None, log_level: str | None) -> AppConfig:
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    return cfg


@app.command()
def news(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Fetch RSS news, keep keyword matches and write report plus reading files."""
    cfg = _load(config, log_level)
    output_dir = output or Path(cfg.output.dir)

    console.print("[bold]=== News fetch and summary ===[/bold]")
    console.print(f"Keywords: {', '.join(cfg.news.keywords)}")
    console.print(f"Max articles: {cfg.news.max_articles}  Summary length: {cfg.news.summary_length}")

    try:
        result = run_news(cfg, output_dir, console=console)
    except InvalidPolicyError as exc:
        console.print(f"[red]Invalid reading settings:[/red] {exc}")
        raise typer.Exit(code=1)

    console.print(f"Fetched {result.fetched} entries, kept {len(result.articles)}.")
    if result.report_path is None:
        return
    console.print(f"Report: {result.report_path}")
    console.print(f"Reading files: {len(result.reading_files)}")


@app.command()
def website(
    url: list[str] | None = typer.Option(
        None, "--url", "-u", help="URL to summarize; repeatable. Defaults to websites.urls."
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory."),
    length: str | None = typer.Option(
        None, "--length", "-l", help="short, medium, long, or a number of characters."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Summarize websites with the language model and write reading files."""
    cfg = _load(config, log_level)
    urls = list(url or []) or list(cfg.websites.urls)
    if not urls:
        console.print("[red]No URL given.[/red] Pass --url or set websites.urls in the config:")
        console.print('  websites:\n    urls:\n      - "https://example.com"')
        raise typer.Exit(code=1)
    output_dir = output or Path(cfg.websites.output_dir)

    console.print(f"[bold]Summarizing {len(urls)} website(s)[/bold]")
    for idx, item in enumerate(urls, start=1):
        console.print(f"  {idx}. {item}")

    try:
        result = run_websites(urls, output_dir, cfg, length=length, show_progress=progress, console=console)
    except ValueError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=1)

    for site in result.sites:
        console.print(f"[green]OK[/green] {site.url}")
        console.print(site.summary)
        console.print(f"  Report: {site.report_path}")
        for path in site.reading_files:
            console.print(f"  - {path}")
    for failed in result.failed:
        console.print(f"[red]Failed[/red] {failed}")
    if result.index_path:
        console.print(f"Index report: {result.index_path}")
    if not result.sites:
        raise typer.Exit(code=1)


@app.command()
def split(
    input: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    output: Path = typer.Option(Path("output"), "--output", "-o"),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    max_chars: int | None = typer.Option(None, "--max-chars", help="Maximum characters per file."),
    prefix: str | None = typer.Option(None, "--prefix", help="Reading file name prefix."),
    merge: bool | None = typer.Option(
        None, "--merge/--split", help="Merge everything into one stream or keep articles apart."
    ),
    metadata: bool | None = typer.Option(
        None, "--metadata/--no-metadata", help="Prepend article markers."
    ),
    title: str | None = typer.Option(None, "--title", help="Title read before the text."),
):
    """Cut an existing text file into numbered reading files."""
    cfg = _load(config, None)
    if max_chars is not None:
        cfg.news.reading.max_chars_per_file = max_chars
    if prefix is not None:
        cfg.news.reading.output_prefix = prefix
    if merge is not None:
        cfg.news.reading.split_files = not merge
    if metadata is not None:
        cfg.news.reading.include_metadata = metadata

    try:
        paths = split_text_file(input, output, cfg, title=title)
    except InvalidPolicyError as exc:
        console.print(f"[red]Invalid reading settings:[/red] {exc}")
        raise typer.Exit(code=1)

    for path in paths:
        console.print(str(path))
    console.print(f"Reading files: {len(paths)}")


if __name__ == "__main__":
    app()
