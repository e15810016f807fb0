"""Repository identity (owner/name) and repository metadata."""

from pydantic import BaseModel, ConfigDict

from pr_report.errors import InvalidRepositoryFormatError


class RepositoryIdentifier(BaseModel):
    """Validated ``owner/name`` pair."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @classmethod
    def parse(cls, raw: str | None) -> "RepositoryIdentifier":
        """Parse ``owner/name``.

        Raises InvalidRepositoryFormatError for an empty string, zero or
        several slashes, or an empty owner or name.
        """
        text = (raw or "").strip()
        if not text:
            raise InvalidRepositoryFormatError("Repository is empty; expected 'owner/name'")
        if text.count("/") != 1:
            raise InvalidRepositoryFormatError(f"Invalid repository '{text}'; expected exactly one '/' as in 'owner/name'")
        owner, name = text.split("/")
        if not owner or not name:
            raise InvalidRepositoryFormatError(f"Invalid repository '{text}'; owner and name must both be non-empty")
        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name


class RepositoryMetadata(BaseModel):
    """Subset of the repository lookup used to confirm existence and access."""

    model_config = ConfigDict(frozen=True)

    full_name: str
    private: bool = False
    default_branch: str = "main"
    html_url: str | None = None
