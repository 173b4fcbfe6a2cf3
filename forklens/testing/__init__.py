"""ForkLens testing utilities.

Provides a mock GitHub API, payload builders and pytest fixtures for testing
code that uses ForkLens.
"""

from forklens.testing.fixtures import (
    link_header,
    make_commit_payload,
    make_contributor_payload,
    make_fork_payload,
    make_repo_payload,
    make_stat_payload,
)
from forklens.testing.mock import MockCall, MockGitHubAPI, MockResponse

__all__ = [
    # Mock API
    "MockGitHubAPI",
    "MockCall",
    "MockResponse",
    # Payload builders
    "make_repo_payload",
    "make_fork_payload",
    "make_contributor_payload",
    "make_stat_payload",
    "make_commit_payload",
    "link_header",
]
