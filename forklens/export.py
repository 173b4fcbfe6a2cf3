"""CSV export of fork summaries."""

import csv
import io
from collections.abc import Iterable

from forklens.types.forks import ForkSummary

CSV_HEADER = ("Repository", "Total Commits", "Top Contributor", "Lines of Code Added")


def forks_to_csv(forks: Iterable[ForkSummary]) -> str:
    """Render forks as CSV, one row per fork in the given order."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for fork in forks:
        contributor = fork.top_contributor.name if fork.top_contributor else "N/A"
        writer.writerow((fork.full_name, fork.commit_count, contributor, fork.lines_added))
    return buffer.getvalue()
