#!/usr/bin/env python3
"""
Basic ForkLens usage example.

Prints the most active forks and the top contributors of a repository, then
its contributor totals and weekly activity.

Run with: python examples/basic_usage.py https://github.com/octocat/Hello-World
Set GITHUB_ACCESS_TOKEN to raise the GitHub rate limit.
"""

import asyncio
import logging
import sys

from forklens import AsyncForkLensClient, ForkLensError, RateLimitError, configure_logging


async def main(url: str) -> int:
    configure_logging(level=logging.INFO)

    async with AsyncForkLensClient.from_env(timeout=60.0) as client:
        try:
            summary = await client.get_repo_summary(url)
        except RateLimitError as e:
            print(f"Rate limited until {e.reset_time}")
            return 1
        except ForkLensError as e:
            print(f"Error: {e.message}")
            return 1

        print(f"{summary.forks_count} forks\n")
        print("Most active forks:")
        for fork in summary.forks[:10]:
            marker = "" if fork.is_exact else " (estimated)"
            print(f"   {fork.full_name:40} {fork.commit_count:6}{marker}")

        print("\nTop contributors:")
        for contributor in summary.recent_committers:
            print(f"   {contributor.name:30} {contributor.commits:6}")

        owner, name = url.rstrip("/").split("/")[3:5]
        detail = await client.get_repo_detail(owner, name)

    if not detail.stats_available:
        print("\nGitHub is still computing contributor statistics; try again shortly.")
        return 0

    print(f"\nTotal commits:      {detail.total_commits}")
    print(f"Lines added:        {detail.lines_added}")
    print(f"Lines deleted:      {detail.lines_deleted}")
    print(f"Commits in last 48h: {detail.commits_in_last_48_hours}")

    print("\nWeekly activity:")
    for point in detail.commit_activity[-8:]:
        print(f"   {point.week_start_date} {'#' * min(point.commits, 60)}")

    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(f"Usage: {sys.argv[0]} <github-repository-url>")
        sys.exit(2)
    sys.exit(asyncio.run(main(sys.argv[1])))
