"""
Commit count resolution for forks.

The count of commits a fork has beyond its parent comes from GitHub's compare
endpoint. When compare fails (unrelated histories, deleted or empty
branches) two weaker fallbacks count the commits on the fork's branch
instead. Strategies are tried in order and the first success wins.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import quote

from forklens.exceptions import ForkLensError
from forklens.logging import get_logger
from forklens.pagination import page_number, parse_link_header
from forklens.types.forks import CommitCount, CountSource, ForkRef

if TYPE_CHECKING:
    from forklens.async_transport import AsyncHTTPTransport

logger = get_logger("resolver")

EXHAUSTIVE_PAGE_SIZE = 100


@dataclass(frozen=True)
class StrategyOutcome:
    """Either a commit count or the reason a strategy could not produce one."""

    source: CountSource
    count: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.count is not None

    @classmethod
    def success(cls, source: CountSource, count: int) -> "StrategyOutcome":
        return cls(source=source, count=max(count, 0))

    @classmethod
    def failure(cls, source: CountSource, error: str) -> "StrategyOutcome":
        return cls(source=source, error=error)


Strategy = Callable[
    ["AsyncHTTPTransport", ForkRef, str, "str | None"], Awaitable[StrategyOutcome]
]


def _commits_path(fork: ForkRef) -> str:
    return f"/repos/{fork.owner}/{fork.name}/commits"


async def compare_strategy(
    transport: "AsyncHTTPTransport",
    fork: ForkRef,
    parent_default_branch: str,
    token: str | None,
) -> StrategyOutcome:
    """Commits ahead of the parent's default branch, via the compare endpoint."""
    basehead = f"{quote(parent_default_branch, safe='/')}...{quote(fork.default_branch, safe='/')}"
    try:
        response = await transport.request(
            f"/repos/{fork.owner}/{fork.name}/compare/{basehead}", token=token
        )
    except ForkLensError as e:
        return StrategyOutcome.failure(CountSource.COMPARE, str(e))

    body = response.body
    if not isinstance(body, dict) or not isinstance(body.get("ahead_by"), int):
        return StrategyOutcome.failure(CountSource.COMPARE, "compare response has no ahead_by")
    return StrategyOutcome.success(CountSource.COMPARE, body["ahead_by"])


async def link_header_strategy(
    transport: "AsyncHTTPTransport",
    fork: ForkRef,
    parent_default_branch: str,
    token: str | None,
) -> StrategyOutcome:
    """
    Total commits on the fork's branch, read off the ``last`` page number.

    With ``per_page=1`` the last page number equals the number of commits.
    """
    try:
        response = await transport.request(
            _commits_path(fork),
            params={"sha": fork.default_branch, "per_page": 1},
            token=token,
        )
    except ForkLensError as e:
        return StrategyOutcome.failure(CountSource.LINK_HEADER, str(e))

    last = parse_link_header(response.link).get("last")
    if last is None:
        return StrategyOutcome.failure(CountSource.LINK_HEADER, "no last link")

    count = page_number(last)
    if count is None:
        return StrategyOutcome.failure(CountSource.LINK_HEADER, f"no page number in {last}")
    return StrategyOutcome.success(CountSource.LINK_HEADER, count)


async def exhaustive_strategy(
    transport: "AsyncHTTPTransport",
    fork: ForkRef,
    parent_default_branch: str,
    token: str | None,
) -> StrategyOutcome:
    """Length of the branch's commit list; only reached when it fits on one page."""
    try:
        response = await transport.request(
            _commits_path(fork),
            params={"sha": fork.default_branch, "per_page": EXHAUSTIVE_PAGE_SIZE},
            token=token,
        )
    except ForkLensError as e:
        return StrategyOutcome.failure(CountSource.EXHAUSTIVE, str(e))

    if not isinstance(response.body, list):
        return StrategyOutcome.failure(CountSource.EXHAUSTIVE, "commit listing is not a list")
    return StrategyOutcome.success(CountSource.EXHAUSTIVE, len(response.body))


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    compare_strategy,
    link_header_strategy,
    exhaustive_strategy,
)


class CommitCountResolver:
    """Resolves a fork's commit count with an ordered list of strategies."""

    def __init__(
        self,
        transport: "AsyncHTTPTransport",
        strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
    ) -> None:
        self.transport = transport
        self.strategies = tuple(strategies)

    async def resolve(
        self,
        fork: ForkRef,
        parent_default_branch: str,
        token: str | None = None,
    ) -> CommitCount:
        """
        Resolve the commit count for ``fork``.

        Never raises for API failures: when every strategy fails the count is
        0 with source ``UNRESOLVED``.
        """
        errors = []
        for strategy in self.strategies:
            outcome = await strategy(self.transport, fork, parent_default_branch, token)
            if outcome.ok:
                if errors:
                    logger.info(
                        "Counted %s via %s fallback (%d commits)",
                        fork.full_name,
                        outcome.source.value,
                        outcome.count,
                    )
                return CommitCount(value=outcome.count, source=outcome.source)

            logger.debug("%s strategy failed for %s: %s", outcome.source.value, fork.full_name, outcome.error)
            errors.append(f"{outcome.source.value}: {outcome.error}")

        logger.warning(
            "Could not count commits for %s, using 0 (%s)", fork.full_name, "; ".join(errors)
        )
        return CommitCount(value=0, source=CountSource.UNRESOLVED)
