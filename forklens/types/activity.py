"""Top-level result records consumed by the presentation layer."""

from dataclasses import dataclass

from forklens.types.contributors import ContributorRef, ContributorStat
from forklens.types.forks import ForkSummary


@dataclass(frozen=True)
class CommitActivityPoint:
    """Commits across all contributors for one week."""

    week_start_date: str  # ISO date, e.g. "2024-01-07"
    commits: int


@dataclass(frozen=True)
class ActivityAggregate:
    """Totals computed from contributor statistics."""

    total_commits: int
    lines_added: int
    lines_deleted: int
    commit_activity: tuple[CommitActivityPoint, ...]


@dataclass(frozen=True)
class RepoSummary:
    """Summary view: forks ranked by commits ahead, plus top committers."""

    forks_count: int
    forks: tuple[ForkSummary, ...]
    recent_committers: tuple[ContributorRef, ...]


@dataclass(frozen=True)
class RepoDetail:
    """Detail view: contributor totals and weekly activity."""

    total_commits: int
    lines_added: int
    lines_deleted: int
    commits_in_last_48_hours: int
    contributors: tuple[ContributorStat, ...]
    commit_activity: tuple[CommitActivityPoint, ...]
    stats_available: bool = True
