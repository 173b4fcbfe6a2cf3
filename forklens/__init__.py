"""ForkLens - fork and contributor analytics for GitHub repositories."""

from forklens.aggregator import aggregate, parse_contributor_stats
from forklens.async_client import AsyncForkLensClient
from forklens.async_transport import AsyncHTTPTransport
from forklens.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DeadlineExceededError,
    ForkLensError,
    InvalidUrlError,
    NotFoundError,
    RateLimitError,
    StatsUnavailableError,
    UpstreamError,
)
from forklens.export import forks_to_csv
from forklens.logging import configure_logging, get_logger
from forklens.pagination import collect_all, parse_link_header
from forklens.resolver import CommitCountResolver
from forklens.transport import ApiResponse, RetryConfig
from forklens.urls import parse_repo_url

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main Client
    "AsyncForkLensClient",
    # Core
    "CommitCountResolver",
    "aggregate",
    "parse_contributor_stats",
    "collect_all",
    "parse_link_header",
    "parse_repo_url",
    "forks_to_csv",
    # Exceptions
    "ForkLensError",
    "ConfigurationError",
    "InvalidUrlError",
    "AuthenticationError",
    "RateLimitError",
    "UpstreamError",
    "NotFoundError",
    "StatsUnavailableError",
    "DeadlineExceededError",
    # Transport
    "AsyncHTTPTransport",
    "ApiResponse",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
