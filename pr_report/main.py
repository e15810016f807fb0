"""pr-report entry point.

Prints a summary of the pull requests opened, closed and merged in one
repository over the last N days. Usage:
pr-report --repo owner/name [--days 7] [--token TOKEN] [--config .env]
"""

import argparse
import sys
from pathlib import Path

from pr_report.config import load_config, resolve_settings
from pr_report.errors import ReportError
from pr_report.logging import ReportLogging
from pr_report.services.pipeline import generate_report

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2
EXIT_INTERRUPTED = 130


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pr-report",
        description="Summarize recent pull request activity of a GitHub repository",
    )
    parser.add_argument("--token", "-t", help="GitHub token (env: PR_REPORT_TOKEN)")
    parser.add_argument("--repo", "-r", help="Repository as owner/name (env: PR_REPORT_REPO)")
    parser.add_argument("--days", "-d", type=int, help="Days to look back, default 7 (env: PR_REPORT_DAYS_AGO)")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Config file: YAML or key=value lines (default: ./.env if present)",
    )
    parser.add_argument("--api-url", help="GitHub API base URL (env: PR_REPORT_API_URL)")
    parser.add_argument("--from", dest="mail_from", help="From: line of the report")
    parser.add_argument("--to", dest="mail_to", help="To: line of the report")
    parser.add_argument("--debug", action="store_true", default=None, help="Debug logging to stderr")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv if argv is not None else sys.argv[1:])


def _print_error(err: ReportError) -> None:
    print(str(err), file=sys.stderr)
    if err.hint:
        print(err.hint, file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Resolve config, run the pipeline, print the report. Returns an exit code."""
    args = parse_args(argv)

    try:
        config = load_config(
            args.config,
            token=args.token,
            repo=args.repo,
            days_ago=args.days,
            api_url=args.api_url,
            mail_from=args.mail_from,
            mail_to=args.mail_to,
            debug=args.debug,
        )
        ReportLogging(config.logging, debug=config.debug).setup()
        settings = resolve_settings(config)
    except ReportError as e:
        _print_error(e)
        return EXIT_CONFIG

    if args.check:
        print("Config OK:", settings.repository, f"last {settings.days} days")
        return EXIT_OK

    try:
        result = generate_report(settings)
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED

    if not result.ok:
        _print_error(result.error)
        return EXIT_FAILURE
    sys.stdout.write(result.text or "")
    return EXIT_OK


def main_entry() -> None:
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
