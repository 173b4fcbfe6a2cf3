"""Async Statistics resource client."""

from typing import TYPE_CHECKING

from forklens.aggregator import parse_contributor_stats
from forklens.types.contributors import ContributorStat

if TYPE_CHECKING:
    from forklens.async_transport import AsyncHTTPTransport


class AsyncStatsClient:
    """Async client for GitHub's precomputed repository statistics."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        self.transport = transport

    async def contributors(
        self,
        owner: str,
        repo: str,
        token: str | None = None,
    ) -> list[ContributorStat]:
        """
        Get weekly additions/deletions/commits per contributor.

        GitHub answers 202 while it computes these; the transport retries.
        A 404 (empty repository) or a non-list body yields an empty list.

        Raises:
            StatsUnavailableError: If GitHub never finishes computing
        """
        response = await self.transport.request(
            f"/repos/{owner}/{repo}/stats/contributors",
            token=token,
            empty_on_not_found=True,
        )
        return parse_contributor_stats(response.body)
