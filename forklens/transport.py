"""
Shared HTTP transport pieces for ForkLens.

Holds the retry configuration for GitHub's "still computing" responses, the
response container handed to callers, and the mapping from error responses to
typed exceptions.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx

from forklens.exceptions import (
    AuthenticationError,
    ForkLensError,
    NotFoundError,
    RateLimitError,
    UpstreamError,
)

GITHUB_API_URL = "https://api.github.com"
GITHUB_ACCEPT = "application/vnd.github.v3+json"


@dataclass
class RetryConfig:
    """Configuration for retrying 202 Accepted responses."""

    max_retries: int = 5
    initial_delay: float = 2.0
    backoff_factor: float = 2.0
    max_backoff: float = 30.0  # Maximum wait between attempts in seconds
    retry_on: list[int] = field(default_factory=lambda: [202])

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait before retry number ``attempt`` (0-indexed)."""
        return min(self.initial_delay * self.backoff_factor ** attempt, self.max_backoff)


@dataclass(frozen=True)
class ApiResponse:
    """A successful (or tolerated) GitHub response."""

    status_code: int
    body: Any
    headers: httpx.Headers

    @property
    def link(self) -> str | None:
        return self.headers.get("link")


def build_headers(token: str | None) -> dict[str, str]:
    """Request headers for the versioned GitHub API."""
    headers = {"Accept": GITHUB_ACCEPT}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def read_error_body(response: httpx.Response) -> dict[str, Any]:
    """Best-effort JSON decode of an error body."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def parse_reset_time(value: str | None) -> datetime | None:
    """Convert an ``x-ratelimit-reset`` epoch value into local time."""
    if not value:
        return None
    try:
        return datetime.fromtimestamp(int(value))
    except (ValueError, OverflowError, OSError):
        return None


def parse_error_response(response: httpx.Response) -> ForkLensError:
    """
    Parse an error response into a typed exception.

    Args:
        response: HTTP response with error status

    Returns:
        Appropriate ForkLensError subclass
    """
    status_code = response.status_code

    if status_code == 401:
        return AuthenticationError()
    if status_code == 403:
        return RateLimitError(parse_reset_time(response.headers.get("x-ratelimit-reset")))

    data = read_error_body(response)
    detail = data.get("message") or "Unknown error"
    message = f"Failed to fetch from GitHub: {response.reason_phrase} - {detail}"

    if status_code == 404:
        return NotFoundError(message)
    return UpstreamError(message, status_code=status_code)
