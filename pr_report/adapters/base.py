"""Abstract base for pull request sources."""

from abc import ABC, abstractmethod
from typing import List

from pr_report.models import PullRequest, RateLimitStatus, RepositoryIdentifier, RepositoryMetadata


class PullRequestSource(ABC):
    """Interface the fetcher talks to (GitHub today)."""

    @abstractmethod
    def verify_repository(self, repo: RepositoryIdentifier) -> RepositoryMetadata:
        """Confirm the repository exists and is accessible."""
        ...

    @abstractmethod
    def list_pull_requests(self, repo: RepositoryIdentifier) -> List[PullRequest]:
        """Return every pull request (all states), in listing order."""
        ...

    def current_rate_limit_status(self) -> RateLimitStatus:
        """Quota snapshot. Override if the platform exposes one."""
        return RateLimitStatus.unknown()
