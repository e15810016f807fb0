"""Shared fixtures: fixed clock, mocked HTTP responses, API payloads."""

import os
from datetime import UTC, datetime, timedelta
from typing import Any, Callable
from unittest.mock import Mock

import pytest

from pr_report.config import ReportSettings
from pr_report.models import PRState, PullRequest, RepositoryIdentifier

NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=UTC)


def iso(value: datetime) -> str:
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_response() -> Callable[..., Mock]:
    """Build a Mock standing in for requests.Response."""

    def _make(
        status: int = 200,
        json_data: Any = None,
        headers: dict[str, str] | None = None,
        text: str = "",
    ) -> Mock:
        resp = Mock()
        resp.status_code = status
        resp.headers = headers or {}
        resp.text = text
        resp.reason = ""
        if isinstance(json_data, Exception):
            resp.json.side_effect = json_data
        else:
            resp.json.return_value = json_data
        return resp

    return _make


@pytest.fixture
def pr_payload() -> Callable[..., dict[str, Any]]:
    """Build a pull request object as returned by GET /repos/{o}/{n}/pulls."""

    def _make(
        number: int,
        state: str = "open",
        created_days_ago: float = 1,
        merged_days_ago: float | None = None,
        closed_days_ago: float | None = None,
        title: str | None = None,
        login: str = "octocat",
        labels: tuple[str, ...] = (),
    ) -> dict[str, Any]:
        if merged_days_ago is not None and closed_days_ago is None:
            closed_days_ago = merged_days_ago
        return {
            "number": number,
            "title": title if title is not None else f"PR {number}",
            "html_url": f"https://github.com/acme/widgets/pull/{number}",
            "state": state,
            "user": {"login": login},
            "labels": [{"name": name} for name in labels],
            "created_at": iso(NOW - timedelta(days=created_days_ago)),
            "closed_at": iso(NOW - timedelta(days=closed_days_ago)) if closed_days_ago is not None else None,
            "merged_at": iso(NOW - timedelta(days=merged_days_ago)) if merged_days_ago is not None else None,
        }

    return _make


@pytest.fixture
def make_pr() -> Callable[..., PullRequest]:
    """Build a PullRequest model directly."""

    def _make(number: int, state: str = "open", created_at: datetime | None = None, **kwargs: Any) -> PullRequest:
        return PullRequest(
            number=number,
            title=kwargs.pop("title", f"PR {number}"),
            url=kwargs.pop("url", f"https://github.com/acme/widgets/pull/{number}"),
            author_login=kwargs.pop("author_login", "octocat"),
            created_at=created_at or NOW - timedelta(days=1),
            state=PRState(state),
            **kwargs,
        )

    return _make


@pytest.fixture
def settings() -> ReportSettings:
    return ReportSettings(
        token="test-token",
        repository=RepositoryIdentifier.parse("acme/widgets"),
        days=7,
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Isolate tests from PR_REPORT_* variables and any ./.env file."""
    for key in list(os.environ):
        if key.startswith("PR_REPORT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
