"""Error taxonomy for the report pipeline.

Every failure is a ReportError subclass tagged with an ErrorKind. The
fetcher adds the pipeline stage so messages read "Error verifying
repository: ..." while the kind stays intact. Each class carries a hint:
one concrete next step shown to the user.
"""

from datetime import datetime
from enum import Enum


class ErrorKind(str, Enum):
    """Flat set of failure kinds."""

    INVALID_REPOSITORY_FORMAT = "InvalidRepositoryFormat"
    MISSING_CONFIGURATION = "MissingConfiguration"
    INVALID_CONFIGURATION = "InvalidConfiguration"
    AUTHENTICATION = "AuthenticationError"
    ACCESS_FORBIDDEN = "AccessForbiddenError"
    REPOSITORY_NOT_FOUND = "RepositoryNotFoundError"
    RATE_LIMIT_EXCEEDED = "RateLimitExceeded"
    TRANSPORT = "TransportError"
    MALFORMED_RESPONSE = "MalformedResponseError"
    UNEXPECTED_API = "UnexpectedApiError"


class ReportError(Exception):
    """Base for all pipeline failures."""

    kind: ErrorKind = ErrorKind.UNEXPECTED_API
    hint: str = ""

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage

    def with_stage(self, stage: str) -> "ReportError":
        """Tag with the pipeline stage and return self (for ``raise err.with_stage(...)``)."""
        self.stage = stage
        return self

    def __str__(self) -> str:
        if self.stage:
            return f"Error {self.stage}: {self.message}"
        return f"Error: {self.message}"


class InvalidRepositoryFormatError(ReportError):
    kind = ErrorKind.INVALID_REPOSITORY_FORMAT
    hint = "Pass the repository as 'owner/name', e.g. --repo octocat/hello-world."


class MissingConfigurationError(ReportError):
    """Token or repository absent after all configuration sources were merged."""

    kind = ErrorKind.MISSING_CONFIGURATION
    hint = "Set them with --token/--repo, PR_REPORT_TOKEN/PR_REPORT_REPO, or a .env file."

    def __init__(self, missing: list[str], stage: str | None = None) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required configuration: {', '.join(self.missing)}", stage)


class InvalidConfigurationError(ReportError):
    kind = ErrorKind.INVALID_CONFIGURATION
    hint = "Check the option values (days must be a non-negative integer)."


class AuthenticationError(ReportError):
    kind = ErrorKind.AUTHENTICATION
    hint = "The provided GitHub token is invalid or has expired. Generate a new token and retry."


class AccessForbiddenError(ReportError):
    kind = ErrorKind.ACCESS_FORBIDDEN
    hint = "The token lacks access to this repository. Grant it the 'repo' (or read) scope."


class RepositoryNotFoundError(ReportError):
    kind = ErrorKind.REPOSITORY_NOT_FOUND
    hint = "Check the repository name and that the token can see it."


class RateLimitExceededError(ReportError):
    """Quota exhausted; reset_at is when the API says it refills."""

    kind = ErrorKind.RATE_LIMIT_EXCEEDED
    hint = "Rate limit exceeded. Wait for the quota to reset or use a token with a higher limit."

    def __init__(self, message: str, reset_at: datetime | None = None, stage: str | None = None) -> None:
        super().__init__(message, stage)
        self.reset_at = reset_at


class TransportError(ReportError):
    kind = ErrorKind.TRANSPORT
    hint = "Check your network connection and retry."


class MalformedResponseError(ReportError):
    kind = ErrorKind.MALFORMED_RESPONSE
    hint = "The API returned unexpected data. Check --api-url or retry later."


class UnexpectedApiError(ReportError):
    """Any other non-success response."""

    kind = ErrorKind.UNEXPECTED_API
    hint = "Retry later; if it persists, check the GitHub status page."

    def __init__(self, message: str, status_code: int | None = None, stage: str | None = None) -> None:
        super().__init__(message, stage)
        self.status_code = status_code
