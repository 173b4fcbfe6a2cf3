"""
Pytest plugin for ForkLens testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["forklens.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from forklens.testing.fixtures import (
    mock_github,
    mock_repo_with_forks,
    sample_contributor_stats,
)

__all__ = [
    "mock_github",
    "mock_repo_with_forks",
    "sample_contributor_stats",
]
