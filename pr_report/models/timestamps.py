"""UTC helpers shared by the models."""

from datetime import UTC, datetime


def as_utc(value: datetime) -> datetime:
    """Return value as an aware UTC datetime (naive values are read as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_utc(value: datetime | None) -> str:
    """Render a timestamp as ``YYYY-MM-DD HH:MM:SS UTC`` or ``unknown``."""
    if value is None:
        return "unknown"
    return as_utc(value).strftime("%Y-%m-%d %H:%M:%S UTC")
