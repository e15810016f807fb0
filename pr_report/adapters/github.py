"""GitHub API adapter."""

import logging
import time
from datetime import UTC, datetime, timedelta
from typing import Any, Callable, Dict, List, Mapping, Tuple

import requests

from pr_report.adapters.base import PullRequestSource
from pr_report.adapters.pagination import Paginator
from pr_report.errors import (
    AccessForbiddenError,
    AuthenticationError,
    MalformedResponseError,
    RateLimitExceededError,
    ReportError,
    RepositoryNotFoundError,
    TransportError,
    UnexpectedApiError,
)
from pr_report.models import PullRequest, RateLimitStatus, RepositoryIdentifier, RepositoryMetadata
from pr_report.models.timestamps import as_utc, utc_now

DEFAULT_API_URL = "https://api.github.com"
# (connect, read) seconds
DEFAULT_TIMEOUT: Tuple[float, float] = (5.0, 10.0)
MAX_PER_PAGE = 100


def _rate_limit_from_headers(headers: Mapping[str, str]) -> RateLimitStatus | None:
    """Parse X-RateLimit-Remaining / X-RateLimit-Reset; None when absent."""
    remaining = headers.get("X-RateLimit-Remaining")
    if remaining is None:
        return None
    try:
        reset = headers.get("X-RateLimit-Reset")
        reset_at = datetime.fromtimestamp(int(reset), UTC) if reset is not None else None
        return RateLimitStatus(remaining=int(remaining), reset_at=reset_at)
    except (TypeError, ValueError):
        logging.getLogger("pr_report.github").debug(
            "Could not parse rate limit headers: %r / %r", remaining, headers.get("X-RateLimit-Reset")
        )
        return None


def _retry_after(headers: Mapping[str, str], now: datetime) -> datetime | None:
    value = headers.get("Retry-After")
    if value is None:
        return None
    try:
        return as_utc(now) + timedelta(seconds=int(value))
    except (TypeError, ValueError):
        return None


def _api_message(resp: requests.Response) -> str:
    msg = resp.text or resp.reason or str(resp.status_code)
    try:
        data = resp.json()
    except ValueError:
        return msg
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return msg


def _pr_from_api(data: Dict[str, Any]) -> PullRequest:
    user = data.get("user") or {}
    labels = tuple(lb["name"] for lb in (data.get("labels") or []) if isinstance(lb, dict) and "name" in lb)
    return PullRequest(
        number=data["number"],
        title=data.get("title") or "",
        url=data.get("html_url") or data.get("url") or "",
        author_login=user.get("login", ""),
        author_name=user.get("name"),
        author_email=user.get("email"),
        created_at=data["created_at"],
        closed_at=data.get("closed_at"),
        merged_at=data.get("merged_at"),
        state=data.get("state", "open"),
        labels=labels,
    )


class GitHubClient(PullRequestSource):
    """GitHub REST implementation with timeouts and rate-limit handling.

    Build one per run: ``requests_made``, ``rate_limit_waits`` and
    ``last_rate_limit`` belong to this instance only.
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float | Tuple[float, float] = DEFAULT_TIMEOUT,
        per_page: int = MAX_PER_PAGE,
        sleep: Callable[[float], None] | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if not 1 <= per_page <= MAX_PER_PAGE:
            raise ValueError(f"per_page must be between 1 and {MAX_PER_PAGE}")
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._per_page = per_page
        self._sleep = sleep
        self._clock = clock
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"
        self.requests_made = 0
        self.rate_limit_waits = 0
        self.last_rate_limit: RateLimitStatus | None = None

    def _request(self, method: str, path: str, params: Dict[str, Any] | None = None) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, params=params, timeout=self._timeout)
        except requests.Timeout as e:
            raise TransportError(f"Request to {path} timed out: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"Request to {path} failed: {e}") from e
        self.requests_made += 1
        logging.getLogger("pr_report.github").debug("%s %s -> %s", method, path, resp.status_code)
        status = _rate_limit_from_headers(resp.headers)
        if status is not None:
            self.last_rate_limit = status
        if resp.status_code >= 400:
            raise self._error_for(resp, status)
        return resp

    def _error_for(self, resp: requests.Response, rate: RateLimitStatus | None) -> ReportError:
        code = resp.status_code
        msg = _api_message(resp)
        rate_limited = code == 429 or (
            code == 403 and ((rate is not None and rate.exhausted) or "rate limit" in msg.lower())
        )
        if rate_limited:
            reset_at = rate.reset_at if rate is not None else None
            reset_at = reset_at or _retry_after(resp.headers, self._clock())
            return RateLimitExceededError(f"API rate limit exceeded ({code}: {msg})", reset_at=reset_at)
        if code == 401:
            return AuthenticationError(f"Authentication failed (401: {msg})")
        if code == 403:
            return AccessForbiddenError(f"Access forbidden (403: {msg})")
        if code == 404:
            return RepositoryNotFoundError(f"Not found (404: {msg})")
        return UnexpectedApiError(f"Unexpected API response ({code}: {msg})", status_code=code)

    def _json(self, resp: requests.Response, path: str) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response from {path} is not valid JSON: {e}") from e

    def verify_repository(self, repo: RepositoryIdentifier) -> RepositoryMetadata:
        path = f"/repos/{repo.full_name}"
        try:
            resp = self._request("GET", path)
        except RepositoryNotFoundError as e:
            raise RepositoryNotFoundError(f"The specified repository '{repo}' was not found") from e
        data = self._json(resp, path)
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected an object from {path}, got {type(data).__name__}")
        try:
            return RepositoryMetadata.model_validate({"full_name": repo.full_name, **data})
        except ValueError as e:
            raise MalformedResponseError(f"Unexpected repository payload from {path}: {e}") from e

    def _list_page(self, repo: RepositoryIdentifier, page: int) -> List[PullRequest]:
        path = f"/repos/{repo.full_name}/pulls"
        params = {"state": "all", "per_page": self._per_page, "page": page}
        data = self._json(self._request("GET", path, params=params), path)
        if not isinstance(data, list):
            raise MalformedResponseError(f"Expected a list from {path} (page {page}), got {type(data).__name__}")
        try:
            return [_pr_from_api(d) for d in data]
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise MalformedResponseError(f"Unexpected pull request payload from {path} (page {page}): {e}") from e

    def list_pull_requests(self, repo: RepositoryIdentifier) -> List[PullRequest]:
        paginator: Paginator[PullRequest] = Paginator(
            fetch_page=lambda page: self._list_page(repo, page),
            per_page=self._per_page,
            sleep=self._do_sleep,
            clock=self._clock,
            reset_lookup=self.current_rate_limit_status,
        )
        pulls = paginator.run()
        logging.getLogger("pr_report.github").info("Fetched %d pull requests from %s", len(pulls), repo)
        return pulls

    def _do_sleep(self, seconds: float) -> None:
        self.rate_limit_waits += 1
        (self._sleep or time.sleep)(seconds)

    def current_rate_limit_status(self) -> RateLimitStatus:
        """Core quota from /rate_limit; unknown (never raises) on any failure."""
        path = "/rate_limit"
        try:
            data = self._json(self._request("GET", path), path)
            core = data["resources"]["core"]
            return RateLimitStatus(
                remaining=int(core["remaining"]),
                reset_at=datetime.fromtimestamp(int(core["reset"]), UTC),
            )
        except (ReportError, KeyError, TypeError, ValueError) as e:
            logging.getLogger("pr_report.github").debug("Rate limit status unavailable, assuming quota left: %s", e)
            return RateLimitStatus.unknown()
