"""Fork-related data models."""

from dataclasses import dataclass
from enum import Enum

from forklens.types.contributors import ContributorRef


class CountSource(str, Enum):
    """Which resolution strategy produced a fork's commit count."""

    COMPARE = "compare"
    LINK_HEADER = "link_header"
    EXHAUSTIVE = "exhaustive"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class ForkRef:
    """The fields of a fork listing entry needed to count its commits."""

    id: int
    owner: str
    name: str
    full_name: str
    url: str
    default_branch: str


@dataclass(frozen=True)
class CommitCount:
    """Resolved commit count plus its provenance."""

    value: int
    source: CountSource

    @property
    def is_exact(self) -> bool:
        return self.source is CountSource.COMPARE


@dataclass(frozen=True)
class ForkSummary:
    """A fork as shown in the summary view."""

    id: int
    name: str
    full_name: str
    url: str
    commit_count: int
    top_contributor: ContributorRef | None = None
    lines_added: int = 0
    commit_count_source: CountSource = CountSource.COMPARE

    @property
    def is_exact(self) -> bool:
        """False when the count answers "commits on the branch" rather than "commits ahead"."""
        return self.commit_count_source is CountSource.COMPARE


@dataclass(frozen=True)
class ForkDetails:
    """Extra per-fork figures derived from the fork's own contributor stats."""

    top_contributor: ContributorRef | None
    lines_added: int
