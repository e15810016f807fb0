"""Report window and categorized report value."""

from datetime import datetime, timedelta
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pr_report.models.pull_request import PullRequest
from pr_report.models.repository import RepositoryIdentifier
from pr_report.models.timestamps import as_utc


class ReportWindow(BaseModel):
    """Inclusive range ``[now - days, now]`` for one repository."""

    model_config = ConfigDict(frozen=True)

    repository: RepositoryIdentifier
    days: int = Field(ge=0)
    now: datetime

    @field_validator("now")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def cutoff(self) -> datetime:
        return self.now - timedelta(days=self.days)

    def contains(self, pr: PullRequest) -> bool:
        return pr.created_at >= self.cutoff


class Report(BaseModel):
    """Pull requests of one window, partitioned by category in listing order."""

    model_config = ConfigDict(frozen=True)

    window: ReportWindow
    opened: Tuple[PullRequest, ...] = ()
    closed: Tuple[PullRequest, ...] = ()
    merged: Tuple[PullRequest, ...] = ()

    @property
    def total(self) -> int:
        return len(self.opened) + len(self.closed) + len(self.merged)
