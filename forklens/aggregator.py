"""
Contributor and activity aggregation.

Turns GitHub's per-contributor weekly statistics into repository totals and a
weekly commit series.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

from forklens.exceptions import UpstreamError
from forklens.logging import get_logger
from forklens.pagination import collect_all
from forklens.types.activity import ActivityAggregate, CommitActivityPoint
from forklens.types.contributors import ContributorRef, ContributorStat, ContributorWeek

if TYPE_CHECKING:
    from forklens.async_transport import AsyncHTTPTransport

logger = get_logger()

RECENT_WINDOW = timedelta(hours=48)

# GitHub answers 409 Conflict when listing commits of an empty repository
EMPTY_REPOSITORY_STATUS = 409

_SECONDS_PER_DAY = 86400


def parse_contributor_stats(payload: Any) -> list[ContributorStat]:
    """
    Convert a ``/stats/contributors`` payload into ContributorStat records.

    Anything other than a list (GitHub still computing, repository too large,
    empty object) is treated as no contributors. Entries without an author
    (deleted accounts) are kept under the name ``"ghost"``.
    """
    if not isinstance(payload, list):
        return []

    stats = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        author = entry.get("author") or {}
        weeks = tuple(
            ContributorWeek(
                week_start=int(week.get("w", 0)),
                additions=int(week.get("a", 0)),
                deletions=int(week.get("d", 0)),
                commits=int(week.get("c", 0)),
            )
            for week in entry.get("weeks") or []
        )
        total = int(entry.get("total", 0))
        stats.append(
            ContributorStat(
                author=ContributorRef(
                    name=author.get("login", "ghost"),
                    avatar_url=author.get("avatar_url", ""),
                    commits=total,
                ),
                total=total,
                weeks=weeks,
            )
        )
    return stats


def week_start_date(epoch_seconds: int) -> str:
    """ISO date (UTC) of the day containing ``epoch_seconds``."""
    day_start = epoch_seconds - epoch_seconds % _SECONDS_PER_DAY
    return datetime.fromtimestamp(day_start, tz=timezone.utc).date().isoformat()


def commit_activity(stats: Iterable[ContributorStat]) -> tuple[CommitActivityPoint, ...]:
    """Weekly commits summed across contributors, oldest first, zero weeks omitted."""
    per_week: dict[str, int] = defaultdict(int)
    for stat in stats:
        for week in stat.weeks:
            per_week[week_start_date(week.week_start)] += week.commits

    return tuple(
        CommitActivityPoint(week_start_date=date, commits=commits)
        for date, commits in sorted(per_week.items())
        if commits > 0
    )


def aggregate(stats: Iterable[ContributorStat]) -> ActivityAggregate:
    """Compute commit and line totals plus the weekly commit series."""
    stats = list(stats)
    return ActivityAggregate(
        total_commits=sum(stat.total for stat in stats),
        lines_added=sum(stat.lines_added for stat in stats),
        lines_deleted=sum(stat.lines_deleted for stat in stats),
        commit_activity=commit_activity(stats),
    )


def top_contributor(stats: Iterable[ContributorStat]) -> ContributorRef | None:
    """The contributor with the most commits, or None for an empty set."""
    best = max(stats, key=lambda stat: stat.total, default=None)
    return best.author if best else None


def to_github_timestamp(value: datetime) -> str:
    """ISO 8601 UTC timestamp as GitHub expects it. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


async def count_commits_since(
    transport: "AsyncHTTPTransport",
    owner: str,
    repo: str,
    since: datetime,
    token: str | None = None,
    max_pages: int = 10,
) -> int:
    """
    Number of commits on the default branch since ``since``.

    An empty repository (GitHub answers 409 Conflict) has no commits.
    """
    try:
        commits = await collect_all(
            transport,
            f"/repos/{owner}/{repo}/commits",
            params={"since": to_github_timestamp(since), "per_page": 100},
            token=token,
            max_pages=max_pages,
        )
    except UpstreamError as e:
        if e.status_code != EMPTY_REPOSITORY_STATUS:
            raise
        logger.debug("%s/%s is empty, counting no commits", owner, repo)
        return 0
    return len(commits)


async def count_recent_commits(
    transport: "AsyncHTTPTransport",
    owner: str,
    repo: str,
    token: str | None = None,
    now: datetime | None = None,
) -> int:
    """Commits in the last 48 hours."""
    now = now or datetime.now(timezone.utc)
    return await count_commits_since(transport, owner, repo, now - RECENT_WINDOW, token=token)
