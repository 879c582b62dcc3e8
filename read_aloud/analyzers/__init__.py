"""Entry selection and summarization."""

from .news_filter import contains_keywords, select_entries, summarize_text, to_article
from .website_summarizer import SummaryOutcome, WebsiteSummarizer, split_for_llm, url_subdir

__all__ = [
    "contains_keywords",
    "select_entries",
    "summarize_text",
    "to_article",
    "WebsiteSummarizer",
    "SummaryOutcome",
    "split_for_llm",
    "url_subdir",
]
