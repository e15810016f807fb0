"""Configuration loading from call-site values, environment and a config file.

Priority: explicit arguments > environment (PR_REPORT_*) > config file >
defaults. The config file is either YAML (``.yaml``/``.yml``) or key=value
lines (``.env`` style, read with python-dotenv); ``.env`` in the working
directory is used when no path is given. The token may also come from a
file named by PR_REPORT_TOKEN_FILE (Docker secrets).

The pipeline only ever sees the immutable ReportSettings built by
resolve_settings; it never reads the environment itself.
"""

import io
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from pr_report.errors import InvalidConfigurationError, MissingConfigurationError
from pr_report.models import RepositoryIdentifier

ENV_PREFIX = "PR_REPORT_"
DEFAULT_CONFIG_FILE = Path(".env")
DEFAULT_DAYS = 7


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="PR_REPORT_LOGGING_", extra="ignore")

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class ReportConfig(BaseSettings):
    """Merged, not yet validated, configuration."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    token: str | None = Field(default=None, description="GitHub token; prefer env or secret file")
    repo: str | None = Field(default=None, description="Target repository, owner/name")
    days_ago: int = Field(default=DEFAULT_DAYS, description="Days to look back")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    timeout: float = Field(default=10.0, gt=0, description="Per-request connect/read timeout in seconds")
    per_page: int = Field(default=100, description="Pull requests per listing page")
    mail_from: str | None = Field(default=None, description="From: line of the report")
    mail_to: str | None = Field(default=None, description="To: line of the report")
    debug: bool = Field(default=False, description="Debug logging")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ReportSettings(BaseModel):
    """Fully resolved input of one pipeline run."""

    model_config = ConfigDict(frozen=True)

    token: SecretStr
    repository: RepositoryIdentifier
    days: int = Field(default=DEFAULT_DAYS, ge=0)
    api_url: str = "https://api.github.com"
    timeout: float = 10.0
    per_page: int = Field(default=100, ge=1, le=100)
    mail_from: str | None = None
    mail_to: str | None = None


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidConfigurationError(f"Cannot read {path}: {e}") from e


def _read_secret_file(env_key: str) -> str | None:
    file_path = os.environ.get(env_key)
    if file_path:
        return _read_text(Path(file_path)).strip() or None
    return None


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return os.environ.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return os.environ.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


KEY_ALIASES = {"days": "days_ago", "repository": "repo"}


def _normalize_key(key: str) -> str:
    key = key.strip()
    if key.upper().startswith(ENV_PREFIX):
        key = key[len(ENV_PREFIX) :]
    key = key.lower()
    return KEY_ALIASES.get(key, key)


def _read_config_file(path: Path) -> dict[str, Any]:
    """Raw values from a YAML or key=value file, keyed by field name."""
    text = _read_text(path)
    if path.suffix in (".yaml", ".yml"):
        try:
            raw = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise InvalidConfigurationError(f"Cannot parse {path}: {e}") from e
        if not isinstance(raw, dict):
            raise InvalidConfigurationError(f"{path} must contain a mapping of options")
        raw = _substitute_env(raw)
    else:
        raw = {k: v for k, v in dotenv_values(stream=io.StringIO(text)).items() if v is not None}

    logging_section = raw.pop("logging", None) or {}
    if not isinstance(logging_section, dict):
        raise InvalidConfigurationError(f"{path}: 'logging' must be a mapping of options")
    values: dict[str, Any] = {}
    logging_values: dict[str, Any] = dict(logging_section)
    for key, value in raw.items():
        name = _normalize_key(str(key))
        if name.startswith("logging_"):
            logging_values[name[len("logging_") :]] = value
        else:
            values[name] = value
    if logging_values:
        values["logging"] = logging_values
    return values


def _env_has(name: str) -> bool:
    # pydantic-settings matches env names case-insensitively
    wanted = f"{ENV_PREFIX}{name}".upper()
    return any(key.upper() == wanted and value for key, value in os.environ.items())


def load_config(config_path: Path | None = None, **overrides: Any) -> ReportConfig:
    """Merge overrides (None means not given), environment, file and defaults."""
    path = config_path
    if path is None and DEFAULT_CONFIG_FILE.is_file():
        path = DEFAULT_CONFIG_FILE
    if path is not None and not path.is_file():
        raise InvalidConfigurationError(f"Config file not found: {path}")

    file_values = _read_config_file(path) if path is not None else {}
    # Init kwargs beat the environment in BaseSettings, so drop file values the environment already sets
    merged = {k: v for k, v in file_values.items() if k == "logging" or not _env_has(k)}
    if isinstance(merged.get("logging"), dict):
        logging_file = {k: v for k, v in merged["logging"].items() if not _env_has(f"logging_{k}")}
        merged["logging"] = LoggingConfig(**logging_file)
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        config = ReportConfig(**merged)
    except ValidationError as e:
        raise InvalidConfigurationError(f"Invalid configuration: {e}") from e

    if not config.token:
        secret = _read_secret_file(f"{ENV_PREFIX}TOKEN_FILE")
        if secret:
            config = config.model_copy(update={"token": secret})
    return config


def resolve_settings(config: ReportConfig) -> ReportSettings:
    """Validate the merged config into ReportSettings.

    Raises MissingConfigurationError, InvalidRepositoryFormatError or
    InvalidConfigurationError.
    """
    missing = []
    if not config.token:
        missing.append("token")
    if not config.repo:
        missing.append("repository")
    if missing:
        raise MissingConfigurationError(missing)

    repository = RepositoryIdentifier.parse(config.repo)
    if config.days_ago < 0:
        raise InvalidConfigurationError(f"days must be >= 0, got {config.days_ago}")
    if not 1 <= config.per_page <= 100:
        raise InvalidConfigurationError(f"per_page must be between 1 and 100, got {config.per_page}")

    return ReportSettings(
        token=SecretStr(config.token or ""),
        repository=repository,
        days=config.days_ago,
        api_url=config.api_url,
        timeout=config.timeout,
        per_page=config.per_page,
        mail_from=config.mail_from,
        mail_to=config.mail_to,
    )
