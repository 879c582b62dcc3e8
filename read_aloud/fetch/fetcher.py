"""
HTTP content fetching.

A synchronous httpx client with retry logic, timeout configuration and
environment proxy support. Failures are reported in the result instead of
being raised so a batch run can skip one URL and continue.
"""

from __future__ import annotations

from dataclasses import dataclass
import time

import httpx

from ..config import FetchConfig


@dataclass
class FetchResult:
    """Result of an HTTP fetch operation.

    Either text will be populated (success) or error will be populated (failure),
    but never both. status_code may be None for network-level failures.

    Attributes:
        url: The URL that was fetched
        status_code: HTTP status code, or None if request failed before getting response
        text: The response body text, or None on error
        error: Error message if fetch failed, None on success
    """
    url: str
    status_code: int | None
    text: str | None
    error: str | None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


def fetch_url(
    url: str,
    timeout: float,
    retries: int,
    user_agent: str,
    trust_env: bool,
    sleep=time.sleep,
) -> FetchResult:
    """Fetch a URL using httpx with retry logic.

    Non-2xx responses count as failures and are retried like network
    errors.

    Args:
        url: The URL to fetch
        timeout: Request timeout in seconds
        retries: Number of retry attempts after initial failure
        user_agent: User-Agent header string
        trust_env: Whether to respect system proxy settings from environment
        sleep: Sleep function used between attempts

    Returns:
        FetchResult with text on success or error message on failure
    """
    headers = {"User-Agent": user_agent}
    last_error: str | None = None
    last_status: int | None = None

    for attempt in range(retries + 1):
        try:
            with httpx.Client(
                timeout=timeout,
                headers=headers,
                follow_redirects=True,
                trust_env=trust_env,
            ) as client:
                resp = client.get(url)
                resp.raise_for_status()
                return FetchResult(url=url, status_code=resp.status_code, text=resp.text, error=None)
        except httpx.HTTPStatusError as exc:
            last_status = exc.response.status_code
            last_error = f"HTTP {last_status}: {exc.response.reason_phrase}"
        except httpx.HTTPError as exc:
            last_error = f"{type(exc).__name__}: {exc}"
        if attempt < retries:
            # Linear backoff: 0.5s, 1.0s, 1.5s...
            sleep(0.5 * (attempt + 1))

    return FetchResult(url=url, status_code=last_status, text=None, error=last_error)


def fetch_with_config(url: str, cfg: FetchConfig) -> FetchResult:
    return fetch_url(
        url,
        timeout=cfg.timeout_seconds,
        retries=cfg.retries,
        user_agent=cfg.user_agent,
        trust_env=cfg.trust_env,
    )
