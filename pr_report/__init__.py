"""Pull request activity report for a single GitHub repository.

Fetches every pull request of ``owner/name``, keeps those created in the
last N days, splits them into opened / closed / merged and renders a
plain-text summary. See ``pr_report.main`` for the command line.
"""

__version__ = "0.1.0"
