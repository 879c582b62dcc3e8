"""
Reading-file generation.

Articles are turned into numbered plain-text files, each holding one chunk
produced by the segmenter, so a downstream reader (e.g. a text-to-speech
step) can consume them one file at a time in name order.

File names:
- split mode:  {prefix}{article:0W}_{chunk:0W}.txt
- merged mode: {prefix}{chunk:0W}.txt

Indices are 1-based and zero-padded to max(2, digits of the largest index
in the run), so lexicographic order always matches reading order.
"""

from __future__ import annotations

from pathlib import Path

from ..core.segmenter import segment, terminator_predicate
from ..core.types import Article, SegmentationPolicy, validate_max_length


LABELS: dict[str, dict[str, str]] = {
    "ja": {
        "article": "記事{index}。",
        "header": "ニュース要約。{count}件の記事があります。",
        "stop": "。",
        "gap": "",
    },
    "en": {
        "article": "Article {index}. ",
        "header": "News summary. There are {count} articles. ",
        "stop": ". ",
        "gap": " ",
    },
}


def create_reading_files(
    articles: list[Article],
    policy: SegmentationPolicy,
    output_dir: Path | str,
) -> list[Path]:
    """Segment articles and write one file per chunk.

    The output directory (and missing parents) is created before anything
    is written, also when ``articles`` is empty. Files are fully
    overwritten. There is no all-or-nothing guarantee: if a write fails,
    files written before it stay on disk and the OSError propagates.

    Args:
        articles: Articles in reading order
        policy: Resolved segmentation policy
        output_dir: Directory receiving the files

    Returns:
        Paths of the written files, in (article, chunk) order

    Raises:
        InvalidPolicyError: If the policy has a non-positive chunk size;
            raised before the filesystem is touched
    """
    validate_max_length(policy.max_chars_per_file)
    labels = _labels(policy.language)
    is_terminal = terminator_predicate(policy.terminators)

    if policy.split_files:
        per_article = [
            segment(
                _article_text(article, index, policy, labels, is_terminal, close_summary=False),
                policy.max_chars_per_file,
                is_terminal,
            )
            for index, article in enumerate(articles, start=1)
        ]
    else:
        per_article = [
            segment(_merged_text(articles, policy, labels, is_terminal), policy.max_chars_per_file, is_terminal)
        ] if articles else []

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    if not per_article:
        return []

    chunk_width = _pad_width(max(len(chunks) for chunks in per_article))
    written: list[Path] = []

    if policy.split_files:
        article_width = _pad_width(len(per_article))
        for article_idx, chunks in enumerate(per_article, start=1):
            for chunk_idx, chunk in enumerate(chunks, start=1):
                name = (
                    f"{policy.output_prefix}{article_idx:0{article_width}d}"
                    f"_{chunk_idx:0{chunk_width}d}.txt"
                )
                written.append(_write(out_dir / name, chunk))
    else:
        for chunk_idx, chunk in enumerate(per_article[0], start=1):
            name = f"{policy.output_prefix}{chunk_idx:0{chunk_width}d}.txt"
            written.append(_write(out_dir / name, chunk))

    return written


def _article_text(
    article: Article,
    index: int,
    policy: SegmentationPolicy,
    labels: dict[str, str],
    is_terminal,
    close_summary: bool,
) -> str:
    parts = []
    if policy.include_metadata:
        parts.append(labels["article"].format(index=index))
    parts.append(_close_sentence(article.title, labels, is_terminal))
    if close_summary:
        parts.append(_close_sentence(article.summary, labels, is_terminal))
    else:
        parts.append(article.summary)
    return "".join(parts)


def _merged_text(
    articles: list[Article],
    policy: SegmentationPolicy,
    labels: dict[str, str],
    is_terminal,
) -> str:
    parts = []
    if policy.include_metadata:
        parts.append(labels["header"].format(count=len(articles)))
    for index, article in enumerate(articles, start=1):
        parts.append(_article_text(article, index, policy, labels, is_terminal, close_summary=True))
    return "".join(parts)


def _close_sentence(text: str, labels: dict[str, str], is_terminal) -> str:
    """End text with a sentence terminator so it never runs into the next one."""
    text = text.strip()
    if not text:
        return ""
    if is_terminal(text[-1]):
        return text + labels["gap"]
    return text + labels["stop"]


def _labels(language: str) -> dict[str, str]:
    return LABELS.get(language, LABELS["en"])


def _pad_width(largest_index: int) -> int:
    return max(2, len(str(largest_index)))


def _write(path: Path, chunk: str) -> Path:
    path.write_text(chunk, encoding="utf-8")
    return path
