"""
List Work Items By WIQL Tool

Runs a WIQL (Work Item Query Language) query against the configured project
and returns id/title/state summaries of the matching work items.
"""

import json

from ado_tools.ado_rest_client import AzureDevOpsRESTClient
from ado_tools.ado_rest_transformers import WorkItemTransformer
from ado_tools.core import get_logger

logger = get_logger(__name__)


async def list_work_items_by_wiql(client: AzureDevOpsRESTClient, wiql_query: str) -> str:
    """
    Retrieve work items matching a WIQL query.

    Two calls at most: the WIQL query resolves matching IDs, then one batch
    request fetches their fields. No matches means no second call.

    Args:
        client: Shared REST client for the configured project
        wiql_query: WIQL query string (e.g., "SELECT [System.Id] FROM WorkItems WHERE [System.State] = 'Active'")

    Returns:
        JSON array text, in batch response order:
        [{"id": 1001, "title": "Login fails", "state": "Active"}, ...]

    Raises:
        RemoteRequestError: If either ADO call returns a non-success status
        MalformedResponseError: If a response lacks an expected field

    Example:
        >>> result = await list_work_items_by_wiql(
        ...     client,
        ...     "SELECT [System.Id] FROM WorkItems WHERE [System.WorkItemType] = 'Bug'"
        ... )
        >>> bugs = json.loads(result)
    """
    query_result = await client.query_by_wiql(wiql_query)
    work_item_ids = WorkItemTransformer.extract_work_item_ids(query_result)

    if not work_item_ids:
        logger.info(f"WIQL query matched no work items in project '{client.project}'")
        return "[]"

    details = await client.get_work_items(work_item_ids)
    summaries = WorkItemTransformer.transform_work_items_response(details)

    logger.info(f"WIQL query returned {len(summaries)} work items from project '{client.project}'")
    return json.dumps([summary.to_dict() for summary in summaries])
