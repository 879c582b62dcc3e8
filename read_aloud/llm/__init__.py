"""LLM providers, prompts and rate limiting."""

from .prompts import build_combine_prompt, build_map_prompt, length_instruction
from .providers.base import SummaryProvider
from .providers.factory import available_providers, create_provider
from .rate_limiter import TokenRateLimiter

__all__ = [
    "SummaryProvider",
    "create_provider",
    "available_providers",
    "TokenRateLimiter",
    "length_instruction",
    "build_map_prompt",
    "build_combine_prompt",
]
