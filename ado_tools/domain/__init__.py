"""
Domain Models - Type-safe data structures returned by the ADO tools

Usage:
    from ado_tools.domain import PullRequestSummary, WorkItemSummary

    item = WorkItemSummary(id=123, title="Test", state="Active")
"""

from .summaries import PullRequestSummary, Repository, WorkItemSummary

__all__ = [
    "PullRequestSummary",
    "Repository",
    "WorkItemSummary",
]
