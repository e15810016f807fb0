"""Tests for the pagination state machine (Paginator)."""

from datetime import UTC, datetime, timedelta
from unittest.mock import Mock

import pytest

from pr_report.adapters.pagination import Done, Failed, Fetching, Paginator, WaitingForReset
from pr_report.errors import RateLimitExceededError, TransportError
from pr_report.models import RateLimitStatus

NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=UTC)


def _pages(*pages):
    """fetch_page that serves pages (or raises errors) in call order."""
    queue = list(pages)

    def fetch(page: int):
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    return Mock(side_effect=fetch)


def _paginator(fetch_page, per_page: int = 2, sleep=None, reset_lookup=None) -> Paginator:
    kwargs = {}
    if reset_lookup is not None:
        kwargs["reset_lookup"] = reset_lookup
    return Paginator(fetch_page=fetch_page, per_page=per_page, sleep=sleep or Mock(), clock=lambda: NOW, **kwargs)


def test_full_pages_then_short_page() -> None:
    fetch = _pages(["A", "B"], ["C"], [])
    p = _paginator(fetch)
    assert p.run() == ["A", "B", "C"]
    assert [c.args[0] for c in fetch.call_args_list] == [1, 2]
    assert p.history == [Fetching(1), Fetching(2), Done()]


def test_empty_page_terminates() -> None:
    fetch = _pages(["A", "B"], [])
    assert _paginator(fetch).run() == ["A", "B"]
    assert fetch.call_count == 2


def test_first_page_empty() -> None:
    p = _paginator(_pages([]))
    assert p.run() == []
    assert p.history == [Fetching(1), Done()]


def test_rate_limit_wait_then_retry_same_page() -> None:
    sleep = Mock()
    reset = NOW + timedelta(seconds=2)
    fetch = _pages(["A", "B"], RateLimitExceededError("limited", reset_at=reset), ["C"])
    p = _paginator(fetch, sleep=sleep)

    assert p.run() == ["A", "B", "C"]
    sleep.assert_called_once_with(2.0)
    assert [c.args[0] for c in fetch.call_args_list] == [1, 2, 2]
    assert p.history == [
        Fetching(1),
        Fetching(2),
        WaitingForReset(page=2, until=reset),
        Fetching(2, retried=True),
        Done(),
    ]


def test_retry_budget_is_per_page() -> None:
    """A later page gets its own single retry."""
    sleep = Mock()
    fetch = _pages(
        RateLimitExceededError("limited", reset_at=NOW),
        ["A", "B"],
        RateLimitExceededError("limited", reset_at=NOW),
        ["C"],
    )
    assert _paginator(fetch, sleep=sleep).run() == ["A", "B", "C"]
    assert sleep.call_count == 2


def test_second_rate_limit_fails() -> None:
    err = RateLimitExceededError("again", reset_at=NOW)
    fetch = _pages(RateLimitExceededError("limited", reset_at=NOW), err)
    p = _paginator(fetch)
    with pytest.raises(RateLimitExceededError) as exc_info:
        p.run()
    assert exc_info.value is err
    assert isinstance(p.history[-1], Failed)


def test_other_errors_fail_immediately() -> None:
    sleep = Mock()
    fetch = _pages(["A", "B"], TransportError("timed out"))
    p = _paginator(fetch, sleep=sleep)
    with pytest.raises(TransportError):
        p.run()
    sleep.assert_not_called()
    assert isinstance(p.history[-1], Failed)


def test_reset_lookup_used_without_reset_time() -> None:
    sleep = Mock()
    lookup = Mock(return_value=RateLimitStatus(remaining=0, reset_at=NOW + timedelta(seconds=7)))
    fetch = _pages(RateLimitExceededError("limited"), ["A"])
    assert _paginator(fetch, sleep=sleep, reset_lookup=lookup).run() == ["A"]
    lookup.assert_called_once()
    sleep.assert_called_once_with(7.0)


def test_unknown_reset_waits_zero() -> None:
    sleep = Mock()
    fetch = _pages(RateLimitExceededError("limited"), ["A"])
    assert _paginator(fetch, sleep=sleep).run() == ["A"]
    sleep.assert_called_once_with(0.0)
