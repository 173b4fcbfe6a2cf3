"""ForkLens type definitions.

This module exports all data model types used by the package.
"""

from forklens.types.activity import (
    ActivityAggregate,
    CommitActivityPoint,
    RepoDetail,
    RepoSummary,
)
from forklens.types.contributors import ContributorRef, ContributorStat, ContributorWeek
from forklens.types.forks import CommitCount, CountSource, ForkDetails, ForkRef, ForkSummary
from forklens.types.repos import CommitInfo, Repository, RepositoryIdentifier

__all__ = [
    # Repository types
    "RepositoryIdentifier",
    "Repository",
    "CommitInfo",
    # Contributor types
    "ContributorRef",
    "ContributorWeek",
    "ContributorStat",
    # Fork types
    "CountSource",
    "CommitCount",
    "ForkRef",
    "ForkSummary",
    "ForkDetails",
    # Result records
    "CommitActivityPoint",
    "ActivityAggregate",
    "RepoSummary",
    "RepoDetail",
]
