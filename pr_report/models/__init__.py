"""Data models for repositories, pull requests, and reports (Pydantic)."""

from pr_report.models.pull_request import Category, PRState, PullRequest
from pr_report.models.rate_limit import RateLimitStatus
from pr_report.models.report import Report, ReportWindow
from pr_report.models.repository import RepositoryIdentifier, RepositoryMetadata

__all__ = [
    "Category",
    "PRState",
    "PullRequest",
    "RateLimitStatus",
    "Report",
    "ReportWindow",
    "RepositoryIdentifier",
    "RepositoryMetadata",
]
