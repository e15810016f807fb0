"""Diagnostics for a report run, written to stderr.

stdout carries only the report, so every record goes to stderr. What shows
up at each level:
- WARNING (default): rate-limit waits
- INFO: pages fetched and the per-run summary
- DEBUG: every request with its status, urllib3 connection chatter

Set the level with logging.level in the config file,
PR_REPORT_LOGGING_LEVEL, or --debug / PR_REPORT_DEBUG.
"""

import logging
import sys

from pr_report.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "WARNING"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers kept at INFO or above unless the run is at DEBUG
NOISY_LOGGERS = ("urllib3",)


def _resolve_level(name: str) -> int:
    """Level constant for a name; unrecognised names give the WARNING default."""
    return LEVELS.get(name.strip().upper(), LEVELS[DEFAULT_LEVEL])


class ReportLogging:
    """Root logger setup for one pr-report invocation."""

    def __init__(self, config: LoggingConfig, debug: bool = False) -> None:
        self.level = logging.DEBUG if debug else _resolve_level(config.level)
        self.format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(self.format))
        logging.basicConfig(level=self.level, handlers=[handler], force=True)
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(max(self.level, logging.INFO))
        logging.getLogger("pr_report").debug("Logging at %s", logging.getLevelName(self.level))
