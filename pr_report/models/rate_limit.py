"""API quota snapshot."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from pr_report.models.timestamps import as_utc


class RateLimitStatus(BaseModel):
    """Remaining requests and reset time.

    ``remaining=None`` means the quota is unknown, which is never treated as
    exhausted.
    """

    model_config = ConfigDict(frozen=True)

    remaining: int | None = None
    reset_at: datetime | None = None

    @field_validator("reset_at")
    @classmethod
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    @classmethod
    def unknown(cls) -> "RateLimitStatus":
        return cls()

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0

    def seconds_until_reset(self, now: datetime) -> float:
        """Seconds from now until reset, floored at zero (zero if unknown)."""
        if self.reset_at is None:
            return 0.0
        return max(0.0, (self.reset_at - as_utc(now)).total_seconds())
