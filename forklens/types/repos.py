"""Repository-related data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class RepositoryIdentifier:
    """Owner/name pair identifying a GitHub repository."""

    owner: str
    name: str

    def __post_init__(self) -> None:
        if not self.owner or not self.name:
            raise ValueError("owner and name must both be non-empty")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class Repository:
    """Repository metadata used by the summary view."""

    owner: str
    name: str
    full_name: str
    default_branch: str
    forks_count: int
    html_url: str


@dataclass(frozen=True)
class CommitInfo:
    """A single commit from a repository's history."""

    sha: str
    message: str
    author_name: str | None
    committed_at: datetime | None
