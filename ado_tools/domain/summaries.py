"""
Summary domain models - what the tools hand back to callers

Each model is a trimmed view of an Azure DevOps REST payload. They are
created per tool invocation and never persisted.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class WorkItemSummary:
    """
    A work item reduced to id, title and state.

    Example:
        item = WorkItemSummary(id=1001, title="Login fails", state="Active")
        item.to_dict()  # {"id": 1001, "title": "Login fails", "state": "Active"}
    """

    id: int
    title: str
    state: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "state": self.state}


@dataclass(frozen=True)
class Repository:
    """A Git repository; only the identifier is consumed."""

    id: str


@dataclass(frozen=True)
class PullRequestSummary:
    """
    A pull request reduced to the fields callers need.

    Attributes:
        repository_id: Owning repository GUID
        pull_request_id: Pull request number
        title: Pull request title
        status: active, completed or abandoned
        created_by: Author display name
        creation_date: ISO 8601 timestamp exactly as returned by the API
    """

    repository_id: str
    pull_request_id: int
    title: str
    status: str
    created_by: str
    creation_date: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the API's camelCase key names."""
        return {
            "repositoryId": self.repository_id,
            "pullRequestId": self.pull_request_id,
            "title": self.title,
            "status": self.status,
            "createdBy": self.created_by,
            "creationDate": self.creation_date,
        }
