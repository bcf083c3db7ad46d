"""
Azure DevOps REST API Response Transformers

Projects raw REST JSON payloads onto the summary domain models.

Every field read is strict: a missing key or a value of the wrong type raises
MalformedResponseError naming the field path, so a schema drift fails the
whole tool invocation instead of producing half-filled summaries.

Usage:
    from ado_tools.ado_rest_transformers import WorkItemTransformer

    ids = WorkItemTransformer.extract_work_item_ids(wiql_response)
    items = WorkItemTransformer.transform_work_items_response(batch_response)
"""

from typing import Any

from ado_tools.domain import PullRequestSummary, Repository, WorkItemSummary
from ado_tools.errors import MalformedResponseError


def _require(container: Any, key: str, expected: type, path: str) -> Any:
    """
    Read container[key] and check its type.

    Args:
        container: Decoded JSON object expected to hold key
        key: Field name
        expected: Required Python type (int excludes bool)
        path: Dotted path used in error messages

    Raises:
        MalformedResponseError: If container is not an object, key is absent, or type differs
    """
    if not isinstance(container, dict):
        raise MalformedResponseError(path, f"expected object holding '{key}', got {type(container).__name__}")
    if key not in container:
        raise MalformedResponseError(path, "field missing")

    value = container[key]
    if expected is int and isinstance(value, bool):
        raise MalformedResponseError(path, "expected int, got bool")
    if not isinstance(value, expected):
        raise MalformedResponseError(path, f"expected {expected.__name__}, got {type(value).__name__}")
    return value


class WorkItemTransformer:
    """
    Transform work item REST responses.

    Handles:
    - WIQL query results (id extraction)
    - Work items batch fetch results (id/title/state projection)
    """

    @staticmethod
    def extract_work_item_ids(rest_response: dict[str, Any]) -> list[int]:
        """
        Extract matched work item IDs from a WIQL response.

        REST Response:
        {
            "queryType": "flat",
            "workItems": [{"id": 1001, "url": "..."}, {"id": 1002, "url": "..."}]
        }

        Returns:
            [1001, 1002]
        """
        work_items = _require(rest_response, "workItems", list, "workItems")
        return [_require(item, "id", int, f"workItems[{i}].id") for i, item in enumerate(work_items)]

    @staticmethod
    def transform_work_items_response(rest_response: dict[str, Any]) -> list[WorkItemSummary]:
        """
        Project a batch work items response onto WorkItemSummary, keeping response order.

        REST Response:
        {
            "count": 2,
            "value": [
                {"id": 1001, "fields": {"System.Title": "Bug 1", "System.State": "Active"}},
                {"id": 1002, "fields": {"System.Title": "Bug 2", "System.State": "Closed"}}
            ]
        }
        """
        records = _require(rest_response, "value", list, "value")
        summaries = []
        for i, record in enumerate(records):
            fields = _require(record, "fields", dict, f"value[{i}].fields")
            summaries.append(
                WorkItemSummary(
                    id=_require(record, "id", int, f"value[{i}].id"),
                    title=_require(fields, "System.Title", str, f"value[{i}].fields.System.Title"),
                    state=_require(fields, "System.State", str, f"value[{i}].fields.System.State"),
                )
            )
        return summaries


class GitTransformer:
    """Transform Git repository and pull request REST responses."""

    @staticmethod
    def transform_repositories_response(rest_response: dict[str, Any]) -> list[Repository]:
        """
        REST Response:
        {"count": 2, "value": [{"id": "repo-guid-1", "name": "Api"}, {"id": "repo-guid-2", "name": "Web"}]}
        """
        records = _require(rest_response, "value", list, "value")
        return [Repository(id=_require(record, "id", str, f"value[{i}].id")) for i, record in enumerate(records)]

    @staticmethod
    def transform_pull_requests_response(rest_response: dict[str, Any]) -> list[PullRequestSummary]:
        """
        Project a pull request listing onto PullRequestSummary, keeping response order.

        REST Response:
        {
            "count": 1,
            "value": [
                {
                    "pullRequestId": 42,
                    "title": "Fix bug",
                    "status": "active",
                    "creationDate": "2026-02-10T10:00:00Z",
                    "createdBy": {"displayName": "John Doe"},
                    "repository": {"id": "repo-guid"}
                }
            ]
        }
        """
        records = _require(rest_response, "value", list, "value")
        summaries = []
        for i, pr in enumerate(records):
            prefix = f"value[{i}]"
            repository = _require(pr, "repository", dict, f"{prefix}.repository")
            created_by = _require(pr, "createdBy", dict, f"{prefix}.createdBy")
            summaries.append(
                PullRequestSummary(
                    repository_id=_require(repository, "id", str, f"{prefix}.repository.id"),
                    pull_request_id=_require(pr, "pullRequestId", int, f"{prefix}.pullRequestId"),
                    title=_require(pr, "title", str, f"{prefix}.title"),
                    status=_require(pr, "status", str, f"{prefix}.status"),
                    created_by=_require(created_by, "displayName", str, f"{prefix}.createdBy.displayName"),
                    creation_date=_require(pr, "creationDate", str, f"{prefix}.creationDate"),
                )
            )
        return summaries
