"""Async Repositories resource client."""

from datetime import datetime
from typing import TYPE_CHECKING, Any

from forklens.aggregator import to_github_timestamp
from forklens.pagination import DEFAULT_MAX_PAGES, collect_all
from forklens.types.contributors import ContributorRef
from forklens.types.repos import CommitInfo, Repository

if TYPE_CHECKING:
    from forklens.async_transport import AsyncHTTPTransport


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class AsyncReposClient:
    """Async client for repository metadata, contributors and commits."""

    def __init__(
        self,
        transport: "AsyncHTTPTransport",
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> None:
        """
        Initialize the async repos client.

        Args:
            transport: Async HTTP transport for making requests
            max_pages: Upper bound on pages walked per listing
        """
        self.transport = transport
        self.max_pages = max_pages

    async def get(self, owner: str, repo: str, token: str | None = None) -> Repository:
        """
        Get repository metadata.

        Returns:
            Repository with default branch and fork count

        Raises:
            NotFoundError: If the repository does not exist
        """
        response = await self.transport.request(f"/repos/{owner}/{repo}", token=token)

        data = response.body or {}
        return Repository(
            owner=data.get("owner", {}).get("login", owner),
            name=data.get("name", repo),
            full_name=data.get("full_name", f"{owner}/{repo}"),
            default_branch=data.get("default_branch", "main"),
            forks_count=data.get("forks_count", 0),
            html_url=data.get("html_url", f"https://github.com/{owner}/{repo}"),
        )

    async def list_contributors(
        self,
        owner: str,
        repo: str,
        limit: int = 10,
        token: str | None = None,
    ) -> list[ContributorRef]:
        """
        List the top contributors by contribution count.

        Only the first page is requested; GitHub orders contributors by
        contributions already.

        Returns:
            Up to ``limit`` ContributorRef objects, most commits first
        """
        response = await self.transport.request(
            f"/repos/{owner}/{repo}/contributors",
            params={"per_page": limit},
            token=token,
            empty_on_not_found=True,
        )

        body = response.body if isinstance(response.body, list) else []
        contributors = [
            ContributorRef(
                name=item.get("login") or item.get("name") or "anonymous",
                avatar_url=item.get("avatar_url", ""),
                commits=item.get("contributions", 0),
            )
            for item in body
            if isinstance(item, dict)
        ]
        contributors.sort(key=lambda c: c.commits, reverse=True)
        return contributors[:limit]

    async def list_commits(
        self,
        owner: str,
        repo: str,
        since: datetime | None = None,
        limit: int | None = None,
        token: str | None = None,
    ) -> list[CommitInfo]:
        """
        List commits on the default branch, newest first.

        Args:
            since: Only commits after this time (optional)
            limit: Stop after this many commits (a limit below 1 yields none); walks
                every page when None
        """
        if limit is not None and limit < 1:
            return []

        params: dict[str, Any] = {"per_page": min(limit, 100) if limit is not None else 100}
        if since is not None:
            params["since"] = to_github_timestamp(since)

        max_pages = self.max_pages
        if limit is not None:
            max_pages = min(max_pages, -(-limit // params["per_page"]))

        items = await collect_all(
            self.transport,
            f"/repos/{owner}/{repo}/commits",
            params=params,
            token=token,
            max_pages=max_pages,
        )
        if limit is not None:
            items = items[:limit]

        commits = []
        for item in items:
            if not isinstance(item, dict):
                continue
            commit = item.get("commit") or {}
            author = commit.get("author") or {}
            commits.append(
                CommitInfo(
                    sha=item.get("sha", ""),
                    message=commit.get("message", ""),
                    author_name=author.get("name"),
                    committed_at=_parse_timestamp(author.get("date")),
                )
            )
        return commits
