"""
Azure DevOps REST API Client

Direct REST API v7.1 access for the endpoints the ado-skill tools use.
Requests go through one shared AsyncSecureHTTPClient whose auth and accept
headers are fixed when the server starts.

Usage:
    from ado_tools.ado_rest_client import AzureDevOpsRESTClient

    async with AsyncSecureHTTPClient(headers=build_auth_headers(config.pat)) as http_client:
        client = AzureDevOpsRESTClient(config, http_client)
        result = await client.query_by_wiql("SELECT [System.Id] FROM WorkItems")

No retry, paging or rate-limit handling: every non-2xx status or transport
failure raises RemoteRequestError for the caller.

API Documentation:
    https://learn.microsoft.com/en-us/rest/api/azure/devops/?view=azure-devops-rest-7.1
"""

from typing import Any
from urllib.parse import quote, urlencode

import httpx

from ado_tools.async_http_client import AsyncSecureHTTPClient
from ado_tools.core import get_logger
from ado_tools.errors import MalformedResponseError, RemoteRequestError
from ado_tools.secure_config import AzureDevOpsConfig

logger = get_logger(__name__)

# Azure DevOps rejects work item batch requests above this many ids
MAX_WORK_ITEM_IDS = 200


class AzureDevOpsRESTClient:
    """
    Azure DevOps REST API v7.1 client bound to one organization and project.

    Holds no per-call state, so a single instance is safe to share across
    concurrent tool invocations.
    """

    API_VERSION = "7.1"

    def __init__(self, config: AzureDevOpsConfig, http_client: AsyncSecureHTTPClient):
        """
        Initialize Azure DevOps REST client.

        Args:
            config: Validated credentials and project
            http_client: Opened client carrying the Basic auth header
        """
        self.config = config
        self.http_client = http_client

    @property
    def project(self) -> str:
        return self.config.project

    def _build_url(self, resource: str, **params: Any) -> str:
        """
        Build a project-scoped REST API URL with query parameters.

        Args:
            resource: Resource path (e.g., "wit/wiql", "git/repositories")
            **params: Query parameters (None values are filtered out)

        Example:
            _build_url("wit/wiql")
            -> "https://dev.azure.com/org/My%20Project/_apis/wit/wiql?api-version=7.1"
        """
        url = f"{self.config.organization_url}/{quote(self.project, safe='')}/_apis/{resource}"

        filtered_params = {k: v for k, v in params.items() if v is not None}
        filtered_params["api-version"] = self.API_VERSION
        return f"{url}?{urlencode(filtered_params, safe=',')}"

    async def _handle_api_call(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        """
        Execute one API call and decode the JSON object it returns.

        Args:
            method: HTTP method (GET or POST)
            url: Full API URL
            **kwargs: Additional arguments for the HTTP client

        Returns:
            Parsed JSON object

        Raises:
            RemoteRequestError: Non-success status or network failure
            MalformedResponseError: Body is not a JSON object
        """
        logger.debug(f"{method} {url}")

        try:
            if method.upper() == "GET":
                response = await self.http_client.get(url, **kwargs)
            elif method.upper() == "POST":
                response = await self.http_client.post(url, **kwargs)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")

            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code in (401, 403):
                logger.error(f"Authentication failed (HTTP {status_code}) for {url}; check AZURE_DEVOPS_PAT scopes")
            else:
                logger.error(f"HTTP error {status_code} for {url}")
            raise RemoteRequestError(url, status_code, e.response.text) from e

        except httpx.RequestError as e:
            logger.error(f"Network error for {url}: {e}")
            raise RemoteRequestError(url) from e

        try:
            payload = response.json()
        except ValueError as e:
            # A 203 HTML sign-in page is what an expired PAT usually looks like
            logger.error(f"Non-JSON response (HTTP {response.status_code}) for {url}")
            raise MalformedResponseError("$", f"response body is not JSON (HTTP {response.status_code})") from e

        if not isinstance(payload, dict):
            raise MalformedResponseError("$", f"expected JSON object, got {type(payload).__name__}")
        return payload

    # ==============================
    # Work Item Tracking APIs
    # ==============================

    async def query_by_wiql(self, wiql_query: str) -> dict[str, Any]:
        """
        Execute WIQL (Work Item Query Language) query.

        REST Endpoint: POST {org}/{project}/_apis/wit/wiql?api-version=7.1

        Returns:
            {"queryType": "flat", "workItems": [{"id": 1001, "url": "..."}]}
        """
        url = self._build_url("wit/wiql")
        return await self._handle_api_call("POST", url, json={"query": wiql_query})

    async def get_work_items(self, ids: list[int]) -> dict[str, Any]:
        """
        Get work items by IDs in a single request.

        REST Endpoint: GET {org}/{project}/_apis/wit/workitems?ids={ids}&api-version=7.1

        Returns:
            {"count": 2, "value": [{"id": 1001, "fields": {"System.Title": "...", "System.State": "..."}}]}
        """
        if len(ids) > MAX_WORK_ITEM_IDS:
            logger.warning(
                f"Requested {len(ids)} items, but API limit is {MAX_WORK_ITEM_IDS}. Narrow the WIQL query."
            )

        url = self._build_url("wit/workitems", ids=",".join(str(id) for id in ids))
        return await self._handle_api_call("GET", url)

    # ==============================
    # Git APIs
    # ==============================

    async def get_repositories(self) -> dict[str, Any]:
        """
        Get repositories for the project.

        REST Endpoint: GET {org}/{project}/_apis/git/repositories?api-version=7.1

        Returns:
            {"count": 5, "value": [{"id": "repo-guid", "name": "MyRepo", "url": "..."}]}
        """
        url = self._build_url("git/repositories")
        return await self._handle_api_call("GET", url)

    async def get_pull_requests(self, repository_id: str) -> dict[str, Any]:
        """
        Get pull requests for a repository.

        REST Endpoint: GET {org}/{project}/_apis/git/repositories/{repoId}/pullrequests?api-version=7.1

        Returns:
            {
                "count": 10,
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
        url = self._build_url(f"git/repositories/{quote(repository_id, safe='')}/pullrequests")
        return await self._handle_api_call("GET", url)
