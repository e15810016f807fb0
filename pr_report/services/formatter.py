"""Render a Report as the plain-text summary e-mail."""

from typing import List, Sequence

from pr_report.models import Category, PullRequest, Report
from pr_report.models.timestamps import format_utc

NOT_AVAILABLE = "not available"
NO_TITLE = "(no title)"
EMPTY_SECTION = "(none)"


def _plural(days: int, word: str) -> str:
    return word if days == 1 else f"{word}s"


def _submitted_by(pr: PullRequest) -> str:
    # login in parentheses only next to a distinct display name
    if pr.author_name and pr.author_login:
        return f"{pr.author_name} ({pr.author_login})"
    return pr.submitter or NOT_AVAILABLE


def _pr_lines(pr: PullRequest) -> List[str]:
    category = pr.category
    lines = [
        f"- {pr.title or NO_TITLE} (#{pr.number})",
        f"  URL: {pr.url or NOT_AVAILABLE}",
        f"  Submitted by: {_submitted_by(pr)}",
        f"  Email: {pr.author_email or NOT_AVAILABLE}",
        f"  Submitted at: {format_utc(pr.created_at)}",
        f"  Status: {category.value} at {format_utc(pr.category_timestamp)}",
    ]
    if pr.labels:
        lines.append(f"  Labels: {', '.join(pr.labels)}")
    return lines


def _section(category: Category, pulls: Sequence[PullRequest]) -> List[str]:
    lines = [f"{category.value} PRs ({len(pulls)}):"]
    if not pulls:
        lines.append(EMPTY_SECTION)
    for pr in pulls:
        lines.extend(_pr_lines(pr))
    lines.append("")
    return lines


def render_report(report: Report, sender: str | None = None, recipient: str | None = None) -> str:
    """Build the report text.

    Output: optional From/To lines, subject, greeting, one section per
    category (count plus per-PR details), total line and sign-off. Missing
    optional fields are replaced by placeholders, so this never fails on a
    valid Report and is byte-for-byte repeatable.
    """
    repo = report.window.repository.full_name
    days = report.window.days
    lines: List[str] = []
    if sender:
        lines.append(f"From: {sender}")
    if recipient:
        lines.append(f"To: {recipient}")
    lines.append(f"Subject: Pull Request Summary for {repo} (Last {days} {_plural(days, 'Day')})")
    lines.append("")
    lines.append("Hello,")
    lines.append("")
    lines.append(
        f"Here's a summary of pull request activity in the {repo} repository "
        f"for the past {days} {_plural(days, 'day')}:"
    )
    lines.append("")
    lines.extend(_section(Category.OPENED, report.opened))
    lines.extend(_section(Category.CLOSED, report.closed))
    lines.extend(_section(Category.MERGED, report.merged))
    lines.append(f"Total PRs: {report.total}")
    lines.append("")
    lines.append("Best regards,")
    lines.append("Your GitHub Reporter")
    return "\n".join(lines) + "\n"
