"""Source-control API adapters."""

from pr_report.adapters.base import PullRequestSource
from pr_report.adapters.github import GitHubClient

__all__ = ["PullRequestSource", "GitHubClient"]
