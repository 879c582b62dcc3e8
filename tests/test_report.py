from datetime import datetime
from pathlib import Path

from read_aloud.core.types import Article
from read_aloud.output.report import SiteResult, render_html, write_report, write_sites_index


GENERATED_AT = datetime(2026, 1, 2, 3, 4, 5)


def _sample_articles() -> list[Article]:
    return [
        Article(
            title="AI上陸",
            summary="長い要約。" * 80,
            source="Tech Feed",
            pub_date="Mon, 06 Sep 2021",
            link="https://example.com/a",
        ),
        Article(title="Second", summary="Plain summary", source="Other", link=""),
    ]


def test_write_report_contains_every_field(tmp_path: Path) -> None:
    articles = _sample_articles()

    path = write_report(
        articles,
        tmp_path / "out",
        "news_summary.md",
        title="ニュース要約レポート",
        extra={"Keywords": "AI, 人工知能"},
        generated_at=GENERATED_AT,
    )
    text = path.read_text(encoding="utf-8")

    assert path == tmp_path / "out" / "news_summary.md"
    assert text.startswith("# ニュース要約レポート\nGenerated: 2026-01-02 03:04:05\n")
    assert "Keywords: AI, 人工知能" in text
    assert "Articles: 2" in text
    assert "## 1. AI上陸" in text
    assert "**Source**: Tech Feed" in text
    assert "**Published**: Mon, 06 Sep 2021" in text
    assert "**URL**: https://example.com/a" in text
    assert "## 2. Second" in text
    # Summaries are never segmented in the report
    assert articles[0].summary in text
    assert text.count("---") == 2


def test_write_report_with_no_articles_keeps_header(tmp_path: Path) -> None:
    path = write_report([], tmp_path, "empty.md", generated_at=GENERATED_AT)
    text = path.read_text(encoding="utf-8")

    assert text.startswith("# News Summary Report")
    assert "Articles: 0" in text
    assert "## " not in text


def test_render_html_escapes_content(tmp_path: Path) -> None:
    article = Article(
        title="Story",
        summary="総括<script>alert(1)</script>",
        source="Site",
        link="https://example.com/story",
    )

    path = render_html([article], tmp_path / "report.html", "日報", generated_at=GENERATED_AT)
    html = path.read_text(encoding="utf-8")

    assert '<a href="https://example.com/story"' in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "<title>日報</title>" in html
    assert "1 articles" in html


def test_write_sites_index_links_each_site(tmp_path: Path) -> None:
    report = tmp_path / "example_com" / "website_summary_report.md"
    results = [
        SiteResult(
            url="https://example.com",
            summary="サイトの要約。",
            report_path=report,
            output_dir=report.parent,
            reading_files=[],
        )
    ]

    path = write_sites_index(results, tmp_path, generated_at=GENERATED_AT)
    text = path.read_text(encoding="utf-8")

    assert path == tmp_path / "all_summaries" / "all_websites_summary.md"
    assert "1. [https://example.com](https://example.com)" in text
    assert "### https://example.com" in text
    assert "サイトの要約。" in text
    assert f"[Full report]({report})" in text
