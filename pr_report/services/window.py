"""Keep pull requests created inside the report window."""

from datetime import datetime
from typing import Iterable, List

from pr_report.models import PullRequest
from pr_report.models.timestamps import as_utc


def filter_recent(pulls: Iterable[PullRequest], cutoff: datetime) -> List[PullRequest]:
    """Pull requests with ``created_at >= cutoff`` (inclusive), input order kept."""
    cutoff = as_utc(cutoff)
    return [pr for pr in pulls if pr.created_at >= cutoff]
