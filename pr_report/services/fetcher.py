"""Retrieve all pull requests of a repository after verifying access."""

import logging
from typing import List

from pr_report.adapters.base import PullRequestSource
from pr_report.errors import ReportError
from pr_report.models import PullRequest, RepositoryIdentifier

VERIFY_STAGE = "verifying repository"
FETCH_STAGE = "fetching pull requests"


class PullRequestFetcher:
    """Verify, then list. Errors keep their kind and gain the stage name."""

    def __init__(self, source: PullRequestSource) -> None:
        self._source = source

    def fetch_all(self, repo: RepositoryIdentifier) -> List[PullRequest]:
        try:
            meta = self._source.verify_repository(repo)
        except ReportError as e:
            raise e.with_stage(VERIFY_STAGE)
        log = logging.getLogger("pr_report.fetcher")
        log.debug("Repository %s verified (private=%s)", meta.full_name, meta.private)
        try:
            return self._source.list_pull_requests(repo)
        except ReportError as e:
            raise e.with_stage(FETCH_STAGE)
