"""
Pytest fixtures and payload builders for ForkLens testing.

The ``make_*`` helpers build GitHub-shaped JSON payloads; the fixtures wire
them into a MockGitHubAPI.
"""

from collections.abc import Generator
from typing import Any

import pytest

from forklens.testing.mock import MockGitHubAPI

API = "https://api.github.com"


# ============================================================================
# Payload builders
# ============================================================================


def make_repo_payload(
    owner: str = "octo",
    name: str = "hello",
    default_branch: str = "main",
    forks_count: int = 0,
) -> dict[str, Any]:
    """Build a ``GET /repos/{owner}/{repo}`` payload."""
    return {
        "id": 1,
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": {"login": owner},
        "html_url": f"https://github.com/{owner}/{name}",
        "default_branch": default_branch,
        "forks_count": forks_count,
    }


def make_fork_payload(
    fork_id: int,
    owner: str,
    name: str = "hello",
    default_branch: str = "main",
) -> dict[str, Any]:
    """Build one entry of a ``/forks`` listing."""
    return {
        "id": fork_id,
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": {"login": owner},
        "html_url": f"https://github.com/{owner}/{name}",
        "default_branch": default_branch,
    }


def make_contributor_payload(login: str, contributions: int) -> dict[str, Any]:
    """Build one entry of a ``/contributors`` listing."""
    return {
        "login": login,
        "avatar_url": f"https://avatars.githubusercontent.com/{login}",
        "contributions": contributions,
    }


def make_stat_payload(
    login: str,
    weeks: list[tuple[int, int, int, int]],
    total: int | None = None,
) -> dict[str, Any]:
    """
    Build one entry of a ``/stats/contributors`` payload.

    Args:
        login: Contributor login
        weeks: (week_start, additions, deletions, commits) tuples
        total: Total commits (default: sum of weekly commits)
    """
    return {
        "author": {
            "login": login,
            "avatar_url": f"https://avatars.githubusercontent.com/{login}",
        },
        "total": total if total is not None else sum(week[3] for week in weeks),
        "weeks": [{"w": w, "a": a, "d": d, "c": c} for w, a, d, c in weeks],
    }


def make_commit_payload(sha: str, message: str = "Update README") -> dict[str, Any]:
    """Build one entry of a ``/commits`` listing."""
    return {
        "sha": sha,
        "commit": {
            "message": message,
            "author": {"name": "Octo Cat", "date": "2024-01-15T10:30:00Z"},
        },
    }


def link_header(path: str, **pages: int) -> str:
    """
    Build a Link header, e.g. ``link_header("/repos/o/r/commits", next=2, last=5)``.
    """
    separator = "&" if "?" in path else "?"
    return ", ".join(
        f'<{API}{path}{separator}page={page}>; rel="{rel}"' for rel, page in pages.items()
    )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_github() -> Generator[MockGitHubAPI, None, None]:
    """
    Provide an empty MockGitHubAPI.

    Example:
        ```python
        async def test_my_feature(mock_github):
            mock_github.add("/repos/octo/hello", json=make_repo_payload())
            async with mock_github.client() as client:
                ...
        ```
    """
    api = MockGitHubAPI()
    yield api
    api.reset()


@pytest.fixture
def sample_contributor_stats() -> list[dict[str, Any]]:
    """Two contributors overlapping in one week (2024-01-07)."""
    return [
        make_stat_payload("alice", [(1704585600, 100, 10, 3), (1705190400, 50, 5, 2)]),
        make_stat_payload("bob", [(1704585600, 20, 2, 1), (1705795200, 0, 0, 0)]),
    ]


@pytest.fixture
def mock_repo_with_forks(mock_github: MockGitHubAPI) -> MockGitHubAPI:
    """
    ``octo/hello`` with three forks exercising each commit count strategy.

    - ``ann/hello``: compare succeeds, 7 commits ahead
    - ``ben/hello``: compare fails, Link header says 42 commits
    - ``cat/hello``: compare fails, no Link header, 3 commits listed
    """
    mock_github.add("/repos/octo/hello", json=make_repo_payload(forks_count=3))
    mock_github.add(
        "/repos/octo/hello/forks",
        json=[
            make_fork_payload(1, "ann"),
            make_fork_payload(2, "ben"),
            make_fork_payload(3, "cat"),
        ],
    )
    mock_github.add("/repos/ann/hello/compare/main...main", json={"ahead_by": 7})
    mock_github.add(
        "/repos/ben/hello/compare/main...main",
        status_code=404,
        json={"message": "No common ancestor"},
    )
    mock_github.add(
        "/repos/ben/hello/commits",
        json=[make_commit_payload("b1")],
        params={"per_page": 1},
        headers={"Link": link_header("/repos/ben/hello/commits", next=2, last=42)},
    )
    mock_github.add(
        "/repos/cat/hello/compare/main...main",
        status_code=404,
        json={"message": "Not Found"},
    )
    mock_github.add(
        "/repos/cat/hello/commits",
        json=[make_commit_payload("c1")],
        params={"per_page": 1},
    )
    mock_github.add(
        "/repos/cat/hello/commits",
        json=[make_commit_payload(f"c{i}") for i in range(3)],
        params={"per_page": 100},
    )
    mock_github.add(
        "/repos/octo/hello/contributors",
        json=[
            make_contributor_payload("bob", 5),
            make_contributor_payload("alice", 12),
        ],
    )
    return mock_github
