"""One report run: fetch, filter, categorize, render.

Failures come back as a PipelineResult carrying the tagged error rather
than as an exception, so callers handle every outcome at one place.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from pr_report.adapters.base import PullRequestSource
from pr_report.adapters.github import GitHubClient
from pr_report.config import ReportSettings
from pr_report.errors import ReportError
from pr_report.models import Report, ReportWindow
from pr_report.models.timestamps import utc_now
from pr_report.services.categorizer import build_report
from pr_report.services.fetcher import PullRequestFetcher
from pr_report.services.formatter import render_report


@dataclass(frozen=True)
class PipelineResult:
    """Either a rendered report or the error of the first failing stage."""

    report: Report | None = None
    text: str | None = None
    error: ReportError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, report: Report, text: str) -> "PipelineResult":
        return cls(report=report, text=text)

    @classmethod
    def failure(cls, error: ReportError) -> "PipelineResult":
        return cls(error=error)


def make_client(settings: ReportSettings) -> GitHubClient:
    """Fresh client for one run (its rate-limit counters start at zero)."""
    return GitHubClient(
        token=settings.token.get_secret_value(),
        api_url=settings.api_url,
        timeout=settings.timeout,
        per_page=settings.per_page,
    )


def generate_report(
    settings: ReportSettings,
    client: PullRequestSource | None = None,
    now: datetime | None = None,
) -> PipelineResult:
    """Run the pipeline once for settings.repository over the last settings.days."""
    source = client or make_client(settings)
    window = ReportWindow(repository=settings.repository, days=settings.days, now=now or utc_now())
    try:
        pulls = PullRequestFetcher(source).fetch_all(settings.repository)
    except ReportError as e:
        logging.getLogger("pr_report.pipeline").debug("Pipeline failed: %s (%s)", e, e.kind.value)
        return PipelineResult.failure(e)
    report = build_report(pulls, window)
    logging.getLogger("pr_report.pipeline").info(
        "%s: %d of %d pull requests since %s",
        settings.repository,
        report.total,
        len(pulls),
        window.cutoff.isoformat(),
    )
    text = render_report(report, sender=settings.mail_from, recipient=settings.mail_to)
    return PipelineResult.success(report, text)
