"""ForkLens async resource clients."""

from forklens.async_clients.forks import AsyncForksClient
from forklens.async_clients.repos import AsyncReposClient
from forklens.async_clients.stats import AsyncStatsClient

__all__ = [
    "AsyncReposClient",
    "AsyncForksClient",
    "AsyncStatsClient",
]
