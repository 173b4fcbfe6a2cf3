"""Contributor-related data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ContributorRef:
    """A single actor's aggregate activity. Compared by login only."""

    name: str
    avatar_url: str = field(compare=False)
    commits: int = field(compare=False)


@dataclass(frozen=True)
class ContributorWeek:
    """One week of a contributor's activity."""

    week_start: int  # epoch seconds
    additions: int
    deletions: int
    commits: int


@dataclass(frozen=True)
class ContributorStat:
    """Per-contributor weekly statistics from GitHub's stats endpoint."""

    author: ContributorRef
    total: int
    weeks: tuple[ContributorWeek, ...] = ()

    @property
    def lines_added(self) -> int:
        return sum(week.additions for week in self.weeks)

    @property
    def lines_deleted(self) -> int:
        return sum(week.deletions for week in self.weeks)
