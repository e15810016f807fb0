"""Partition pull requests into opened, closed and merged."""

from typing import Iterable, List, NamedTuple

from pr_report.models import Category, PullRequest, Report, ReportWindow
from pr_report.services.window import filter_recent


class CategorizedPulls(NamedTuple):
    opened: List[PullRequest]
    closed: List[PullRequest]
    merged: List[PullRequest]

    @property
    def total(self) -> int:
        return len(self.opened) + len(self.closed) + len(self.merged)


def categorize(pulls: Iterable[PullRequest]) -> CategorizedPulls:
    """Single pass; each pull request lands in exactly one list, order kept."""
    result = CategorizedPulls(opened=[], closed=[], merged=[])
    buckets = {
        Category.OPENED: result.opened,
        Category.CLOSED: result.closed,
        Category.MERGED: result.merged,
    }
    for pr in pulls:
        buckets[pr.category].append(pr)
    return result


def build_report(pulls: Iterable[PullRequest], window: ReportWindow) -> Report:
    """Filter to the window and categorize into a Report."""
    parts = categorize(filter_recent(pulls, window.cutoff))
    return Report(
        window=window,
        opened=tuple(parts.opened),
        closed=tuple(parts.closed),
        merged=tuple(parts.merged),
    )
