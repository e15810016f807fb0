"""Pull request record and its lifecycle category."""

from datetime import datetime
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pr_report.models.timestamps import as_utc


class PRState(str, Enum):
    """State as reported by the API."""

    OPEN = "open"
    CLOSED = "closed"


class Category(str, Enum):
    """Mutually exclusive report category."""

    OPENED = "Opened"
    CLOSED = "Closed"
    MERGED = "Merged"


class PullRequest(BaseModel):
    """Pull request as listed by the API. Never mutated after construction."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(gt=0)
    title: str = ""
    url: str = ""
    author_login: str = ""
    author_name: str | None = None
    author_email: str | None = None
    created_at: datetime
    closed_at: datetime | None = None
    merged_at: datetime | None = None
    state: PRState
    labels: Tuple[str, ...] = ()

    @field_validator("created_at", "closed_at", "merged_at")
    @classmethod
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    @property
    def category(self) -> Category:
        # merged_at wins over whatever state says
        if self.merged_at is not None:
            return Category.MERGED
        if self.state == PRState.CLOSED:
            return Category.CLOSED
        return Category.OPENED

    @property
    def submitter(self) -> str:
        """Display name when known, else the login."""
        return self.author_name or self.author_login

    @property
    def category_timestamp(self) -> datetime | None:
        """Timestamp of the transition into the current category."""
        category = self.category
        if category == Category.MERGED:
            return self.merged_at
        if category == Category.CLOSED:
            return self.closed_at
        return self.created_at
