"""Prompt loading and rendering helpers for the website summarizer."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path


_PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"


@lru_cache(maxsize=None)
def _load_template(name: str) -> str:
    path = _PROMPT_DIR / f"{name}.md"
    return path.read_text(encoding="utf-8").strip()


def _render_template(name: str, **values: str) -> str:
    template = _load_template(name)
    return template.format(**values)


def length_instruction(length: str) -> str:
    """Translate a summary length setting into an instruction sentence.

    Accepts "short"/"brief", "medium"/"normal", "long"/"detailed", or a
    number of characters such as "100".
    """
    key = str(length).strip().lower()
    if key in ("short", "brief"):
        return "簡潔に2-3文で要約してください。"
    if key in ("medium", "normal"):
        return "適度な長さ（5-8文程度）で要約してください。"
    if key in ("long", "detailed"):
        return "詳細に10-15文程度で要約してください。"
    if _is_number(key):
        return f"約{key}文字程度で要約してください。"
    return "適度な長さで要約してください。"


def build_map_prompt(text: str, length: str) -> str:
    return _render_template("map", instruction=length_instruction(length), text=text)


def build_combine_prompt(summaries: list[str], length: str) -> str:
    joined = "\n\n".join(summaries)
    return _render_template("combine", instruction=length_instruction(length), text=joined)


def _is_number(value: str) -> bool:
    return value.replace(".", "", 1).isdigit()
