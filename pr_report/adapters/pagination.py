"""Pagination state machine with a single rate-limit retry per page.

States and transitions:

- Fetching(page) -> Fetching(page + 1) on a full page
- Fetching(page) -> Done on a short or empty page
- Fetching(page) -> WaitingForReset(page, until) on a rate-limit signal
- WaitingForReset -> Fetching(page, retried=True) after the wait
- Fetching(page, retried=True) -> Failed on a second rate-limit signal
- Fetching -> Failed on any other error

Pages are consumed strictly in order and concatenated as returned.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Generic, List, TypeVar, Union

from pr_report.errors import RateLimitExceededError, ReportError
from pr_report.models import RateLimitStatus
from pr_report.models.timestamps import as_utc

T = TypeVar("T")


@dataclass(frozen=True)
class Fetching:
    page: int
    retried: bool = False


@dataclass(frozen=True)
class WaitingForReset:
    page: int
    until: datetime


@dataclass(frozen=True)
class Done:
    pass


@dataclass(frozen=True)
class Failed:
    error: ReportError


PaginationState = Union[Fetching, WaitingForReset, Done, Failed]


@dataclass
class Paginator(Generic[T]):
    """Drive ``fetch_page(page)`` until a short page, collecting items in order.

    ``fetch_page`` raises RateLimitExceededError for a rate-limit signal and
    any other ReportError for fatal failures. When the error carries no reset
    time, ``reset_lookup`` is asked once before waiting.
    """

    fetch_page: Callable[[int], List[T]]
    per_page: int
    sleep: Callable[[float], None]
    clock: Callable[[], datetime]
    reset_lookup: Callable[[], RateLimitStatus] = RateLimitStatus.unknown
    history: List[PaginationState] = field(default_factory=list)

    def run(self) -> List[T]:
        items: List[T] = []
        state: PaginationState = Fetching(page=1)
        while True:
            self.history.append(state)
            if isinstance(state, Done):
                return items
            if isinstance(state, Failed):
                raise state.error
            if isinstance(state, WaitingForReset):
                state = self._wait(state)
            else:
                state = self._fetch(state, items)

    def _fetch(self, state: Fetching, items: List[T]) -> PaginationState:
        try:
            page_items = self.fetch_page(state.page)
        except RateLimitExceededError as e:
            if state.retried:
                return Failed(e)
            return WaitingForReset(page=state.page, until=self._reset_time(e))
        except ReportError as e:
            return Failed(e)
        items.extend(page_items)
        if len(page_items) < self.per_page:
            return Done()
        return Fetching(page=state.page + 1)

    def _wait(self, state: WaitingForReset) -> PaginationState:
        seconds = max(0.0, (state.until - as_utc(self.clock())).total_seconds())
        logging.getLogger("pr_report.pagination").warning(
            "Rate limit exceeded on page %s; waiting %.0fs for reset", state.page, seconds
        )
        self.sleep(seconds)
        return Fetching(page=state.page, retried=True)

    def _reset_time(self, error: RateLimitExceededError) -> datetime:
        if error.reset_at is not None:
            return as_utc(error.reset_at)
        status = self.reset_lookup()
        if status.reset_at is not None:
            return status.reset_at
        return as_utc(self.clock())
