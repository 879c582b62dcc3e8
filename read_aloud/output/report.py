"""
Report rendering for Markdown and HTML output.

The report is the archival counterpart of the reading files: one file
holding every article with its metadata and its full, unsegmented summary.
Markdown is built line by line; HTML goes through a Jinja2 template.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..core.types import Article


@dataclass
class SiteResult:
    """Outcome of summarizing one website, used by the index report."""
    url: str
    summary: str
    report_path: Path
    output_dir: Path
    reading_files: list[Path]


def write_report(
    articles: list[Article],
    output_dir: Path | str,
    file_name: str,
    title: str = "News Summary Report",
    extra: dict[str, str] | None = None,
    generated_at: datetime | None = None,
) -> Path:
    """Write all articles into a single Markdown report.

    An empty article list still produces the header block.

    Args:
        articles: Articles in report order
        output_dir: Directory for the report, created if missing
        file_name: Report file name
        title: Top-level heading
        extra: Additional "label: value" lines for the header block
        generated_at: Timestamp to print, defaults to now

    Returns:
        Path of the written report
    """
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    output_path = out_dir / file_name
    output_path.write_text(render_markdown(articles, title, extra, generated_at), encoding="utf-8")
    return output_path


def render_markdown(
    articles: list[Article],
    title: str,
    extra: dict[str, str] | None = None,
    generated_at: datetime | None = None,
) -> str:
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    lines = [f"# {title}", f"Generated: {stamp}"]
    for label, value in (extra or {}).items():
        lines.append(f"{label}: {value}")
    lines.append(f"Articles: {len(articles)}")
    lines.append("")

    for idx, art in enumerate(articles, start=1):
        lines.append(f"## {idx}. {art.title}")
        lines.append(f"**Source**: {art.source}")
        lines.append(f"**Published**: {art.pub_date}")
        lines.append(f"**URL**: {art.link}")
        lines.append("")
        lines.append("**Summary**:")
        lines.append(art.summary)
        lines.append("")
        lines.append("---")
        lines.append("")

    return "\n".join(lines)


def render_html(
    articles: list[Article],
    output_path: Path,
    title: str,
    generated_at: datetime | None = None,
) -> Path:
    """Render articles as an HTML report using the Jinja2 template."""
    env = Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=select_autoescape(["html"]),
    )
    template = env.get_template("report.html")
    html = template.render(
        title=title,
        generated_at=(generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M"),
        articles=articles,
        total=len(articles),
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    return output_path


def write_sites_index(
    results: list[SiteResult],
    output_dir: Path | str,
    generated_at: datetime | None = None,
) -> Path:
    """Write the multi-website overview into ``all_summaries/``.

    Lists every processed URL, then each summary with a link to the
    per-site report.
    """
    index_dir = Path(output_dir) / "all_summaries"
    index_dir.mkdir(parents=True, exist_ok=True)
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")

    lines = ["# Website Summaries", "", f"Generated: {stamp}", "", "## Processed URLs", ""]
    for idx, result in enumerate(results, start=1):
        lines.append(f"{idx}. [{result.url}]({result.url})")
    lines.append("")
    lines.append("## Summaries")
    lines.append("")
    for result in results:
        lines.append(f"### {result.url}")
        lines.append("")
        lines.append(result.summary)
        lines.append("")
        lines.append(f"[Full report]({result.report_path})")
        lines.append("")

    index_path = index_dir / "all_websites_summary.md"
    index_path.write_text("\n".join(lines), encoding="utf-8")
    return index_path
