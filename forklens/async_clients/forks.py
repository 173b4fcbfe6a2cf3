"""Async Forks resource client."""

import asyncio
from typing import TYPE_CHECKING, Any

from forklens.aggregator import top_contributor
from forklens.async_clients.stats import AsyncStatsClient
from forklens.exceptions import StatsUnavailableError
from forklens.logging import get_logger
from forklens.pagination import DEFAULT_MAX_PAGES, collect_all
from forklens.resolver import CommitCountResolver
from forklens.types.forks import ForkDetails, ForkRef, ForkSummary

if TYPE_CHECKING:
    from forklens.async_transport import AsyncHTTPTransport

logger = get_logger()

FORKS_PAGE_SIZE = 100


def _parse_fork(item: dict[str, Any]) -> ForkRef:
    owner = (item.get("owner") or {}).get("login") or item["full_name"].split("/")[0]
    return ForkRef(
        id=item["id"],
        owner=owner,
        name=item["name"],
        full_name=item.get("full_name", f"{owner}/{item['name']}"),
        url=item.get("html_url", ""),
        default_branch=item.get("default_branch", "main"),
    )


class AsyncForksClient:
    """Async client for listing forks and counting their commits."""

    def __init__(
        self,
        transport: "AsyncHTTPTransport",
        resolver: CommitCountResolver | None = None,
        max_concurrency: int = 8,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> None:
        """
        Initialize the async forks client.

        Args:
            transport: Async HTTP transport for making requests
            resolver: Commit count resolver (default: compare with fallbacks)
            max_concurrency: Ceiling on forks resolved at the same time
            max_pages: Upper bound on pages walked for the fork listing
        """
        self.transport = transport
        self.resolver = resolver or CommitCountResolver(transport)
        self.max_concurrency = max_concurrency
        self.max_pages = max_pages
        self._stats = AsyncStatsClient(transport)

    async def summarize(
        self,
        forks: list[ForkRef],
        parent_default_branch: str,
        token: str | None = None,
    ) -> list[ForkSummary]:
        """
        Resolve commit counts for all forks concurrently.

        Returns:
            ForkSummary objects sorted by commit count, highest first. Ties
            keep listing order.
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def summarize_one(fork: ForkRef) -> ForkSummary:
            async with semaphore:
                count = await self.resolver.resolve(fork, parent_default_branch, token)
            return ForkSummary(
                id=fork.id,
                name=fork.name,
                full_name=fork.full_name,
                url=fork.url,
                commit_count=count.value,
                commit_count_source=count.source,
            )

        summaries = await asyncio.gather(*(summarize_one(fork) for fork in forks))
        return sorted(summaries, key=lambda s: s.commit_count, reverse=True)

    async def get_details(
        self,
        owner: str,
        repo: str,
        token: str | None = None,
    ) -> ForkDetails:
        """
        Get the top contributor and lines added for a fork.

        Computed from the fork's own contributor statistics; a fork whose
        stats GitHub never finishes computing reports no contributor.
        """
        try:
            stats = await self._stats.contributors(owner, repo, token=token)
        except StatsUnavailableError:
            logger.warning("Contributor stats unavailable for %s/%s", owner, repo)
            stats = []

        return ForkDetails(
            top_contributor=top_contributor(stats),
            lines_added=sum(stat.lines_added for stat in stats),
        )

    async def list(self, owner: str, repo: str, token: str | None = None) -> list[ForkRef]:
        """
        List every fork, most-starred first.

        Returns:
            List of ForkRef objects (empty when the repository has none)
        """
        items = await collect_all(
            self.transport,
            f"/repos/{owner}/{repo}/forks",
            params={"per_page": FORKS_PAGE_SIZE, "sort": "stargazers"},
            token=token,
            max_pages=self.max_pages,
        )
        return [_parse_fork(item) for item in items if isinstance(item, dict)]
