"""
ForkLens async client.

Assembles the summary and detail views of a GitHub repository from the
resource clients.
"""

import asyncio
import dataclasses
import os
from collections.abc import Awaitable, Iterable
from typing import Any, TypeVar

import httpx

from forklens.aggregator import aggregate, count_recent_commits
from forklens.async_clients import AsyncForksClient, AsyncReposClient, AsyncStatsClient
from forklens.async_transport import AsyncHTTPTransport
from forklens.exceptions import ConfigurationError, DeadlineExceededError, StatsUnavailableError
from forklens.export import forks_to_csv
from forklens.logging import get_logger
from forklens.pagination import DEFAULT_MAX_PAGES
from forklens.transport import GITHUB_API_URL, RetryConfig
from forklens.types.activity import RepoDetail, RepoSummary
from forklens.types.forks import ForkDetails, ForkSummary
from forklens.urls import parse_repo_url

logger = get_logger()

T = TypeVar("T")

TOP_CONTRIBUTORS = 10


class AsyncForkLensClient:
    """
    Async client for fork and contributor analytics of GitHub repositories.

    Example:
        ```python
        import asyncio
        from forklens import AsyncForkLensClient

        async def main():
            async with AsyncForkLensClient.from_env() as client:
                summary = await client.get_repo_summary("https://github.com/facebook/react")
                for fork in summary.forks[:5]:
                    print(fork.full_name, fork.commit_count)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = GITHUB_API_URL
    DEFAULT_TIMEOUT = 30.0
    DEFAULT_MAX_CONCURRENCY = 8

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        max_pages: int = DEFAULT_MAX_PAGES,
        deadline: float | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the async ForkLens client.

        Args:
            token: Default GitHub access token (optional; calls may pass their own)
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Per-request timeout in seconds (default: 30.0)
            retry_config: Retry behavior for 202 "still computing" responses
            max_concurrency: Ceiling on forks resolved concurrently (default: 8)
            max_pages: Upper bound on pages walked per listing (default: 100)
            deadline: Overall seconds allowed per summary/detail request (optional)
            http_transport: httpx transport override, mainly for tests

        Raises:
            ConfigurationError: If numeric limits are not positive
        """
        if max_concurrency < 1:
            raise ConfigurationError("max_concurrency must be at least 1")
        if max_pages < 1:
            raise ConfigurationError("max_pages must be at least 1")
        if deadline is not None and deadline <= 0:
            raise ConfigurationError("deadline must be positive")

        self.base_url = base_url
        self.timeout = timeout
        self.deadline = deadline

        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
            http_transport=http_transport,
        )

        self.repos = AsyncReposClient(self._transport, max_pages=max_pages)
        self.forks = AsyncForksClient(
            self._transport, max_concurrency=max_concurrency, max_pages=max_pages
        )
        self.stats = AsyncStatsClient(self._transport)

    @classmethod
    def from_env(
        cls,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> "AsyncForkLensClient":
        """
        Create an async client from environment variables.

        Environment variables:
            GITHUB_ACCESS_TOKEN: Default access token (optional)
            FORKLENS_BASE_URL: Base URL for API (optional, default: https://api.github.com)
            FORKLENS_MAX_CONCURRENCY: Fork resolution concurrency ceiling (optional, default: 8)

        Raises:
            ConfigurationError: If FORKLENS_MAX_CONCURRENCY is not an integer
        """
        token = os.environ.get("GITHUB_ACCESS_TOKEN") or None
        base_url = os.environ.get("FORKLENS_BASE_URL", cls.DEFAULT_BASE_URL)
        concurrency = os.environ.get("FORKLENS_MAX_CONCURRENCY")

        max_concurrency = cls.DEFAULT_MAX_CONCURRENCY
        if concurrency:
            try:
                max_concurrency = int(concurrency)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid FORKLENS_MAX_CONCURRENCY: {concurrency}. Must be an integer"
                ) from None

        return cls(
            token=token,
            base_url=base_url,
            timeout=timeout,
            retry_config=retry_config,
            max_concurrency=max_concurrency,
        )

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport (for advanced use cases)."""
        return self._transport

    async def get_repo_summary(self, url: str, token: str | None = None) -> RepoSummary:
        """
        Build the summary view for a repository URL.

        Fetches metadata, every fork with its commit count, and the top
        contributors.

        Raises:
            InvalidUrlError: If the URL does not name a GitHub repository
            ForkLensError: On authentication, rate limit or upstream failures
        """
        repo_id = parse_repo_url(url)
        return await self._with_deadline(self._repo_summary(repo_id.owner, repo_id.name, token))

    async def get_repo_detail(self, owner: str, repo: str, token: str | None = None) -> RepoDetail:
        """
        Build the detail view: contributor totals, weekly activity and the
        number of commits in the last 48 hours.

        Contributor stats GitHub never finishes computing are reported as an
        empty set with ``stats_available=False``.
        """
        return await self._with_deadline(self._repo_detail(owner, repo, token))

    async def get_fork_details(self, owner: str, repo: str, token: str | None = None) -> ForkDetails:
        """Top contributor and lines added for a single fork."""
        return await self.forks.get_details(owner, repo, token=token)

    async def enrich_forks(
        self,
        forks: Iterable[ForkSummary],
        token: str | None = None,
    ) -> list[ForkSummary]:
        """Fill in top contributor and lines added for each fork, keeping order."""
        forks = list(forks)
        semaphore = asyncio.Semaphore(self.forks.max_concurrency)

        async def enrich_one(fork: ForkSummary) -> ForkSummary:
            owner, name = fork.full_name.split("/", 1)
            async with semaphore:
                details = await self.forks.get_details(owner, name, token=token)
            return dataclasses.replace(
                fork,
                top_contributor=details.top_contributor,
                lines_added=details.lines_added,
            )

        return list(await asyncio.gather(*(enrich_one(fork) for fork in forks)))

    async def export_forks_csv(self, forks: Iterable[ForkSummary], token: str | None = None) -> str:
        """Enrich forks with their details and render them as CSV."""
        return forks_to_csv(await self.enrich_forks(forks, token=token))

    async def list_recent_commit_messages(
        self,
        owner: str,
        repo: str,
        token: str | None = None,
        limit: int = 30,
    ) -> list[str]:
        """Messages of the most recent commits, newest first."""
        commits = await self.repos.list_commits(owner, repo, limit=limit, token=token)
        return [commit.message for commit in commits if commit.message]

    async def _repo_summary(self, owner: str, repo: str, token: str | None) -> RepoSummary:
        metadata = await self.repos.get(owner, repo, token=token)
        forks = await self.forks.list(owner, repo, token=token)
        logger.info("Resolving commit counts for %d forks of %s", len(forks), metadata.full_name)

        summaries = await self.forks.summarize(forks, metadata.default_branch, token=token)
        committers = await self.repos.list_contributors(
            owner, repo, limit=TOP_CONTRIBUTORS, token=token
        )

        return RepoSummary(
            forks_count=metadata.forks_count,
            forks=tuple(summaries),
            recent_committers=tuple(committers),
        )

    async def _repo_detail(self, owner: str, repo: str, token: str | None) -> RepoDetail:
        stats_available = True
        try:
            stats = await self.stats.contributors(owner, repo, token=token)
        except StatsUnavailableError:
            logger.warning("Contributor stats for %s/%s are still being computed", owner, repo)
            stats = []
            stats_available = False

        recent = await count_recent_commits(self._transport, owner, repo, token=token)
        totals = aggregate(stats)

        return RepoDetail(
            total_commits=totals.total_commits,
            lines_added=totals.lines_added,
            lines_deleted=totals.lines_deleted,
            commits_in_last_48_hours=recent,
            contributors=tuple(stats),
            commit_activity=totals.commit_activity,
            stats_available=stats_available,
        )

    async def _with_deadline(self, operation: Awaitable[T]) -> T:
        if self.deadline is None:
            return await operation
        try:
            return await asyncio.wait_for(operation, timeout=self.deadline)
        except asyncio.TimeoutError:
            raise DeadlineExceededError(self.deadline) from None

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncForkLensClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
