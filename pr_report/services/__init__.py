"""Report pipeline stages (fetch, filter, categorize, render)."""

from pr_report.services.categorizer import CategorizedPulls, build_report, categorize
from pr_report.services.fetcher import FETCH_STAGE, VERIFY_STAGE, PullRequestFetcher
from pr_report.services.formatter import render_report
from pr_report.services.pipeline import PipelineResult, generate_report
from pr_report.services.window import filter_recent

__all__ = [
    "CategorizedPulls",
    "build_report",
    "categorize",
    "FETCH_STAGE",
    "VERIFY_STAGE",
    "PullRequestFetcher",
    "render_report",
    "PipelineResult",
    "generate_report",
    "filter_recent",
]
