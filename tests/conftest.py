"""
Pytest configuration and shared fixtures

Provides credentials, canned REST payloads, and httpx response builders.
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from ado_tools.secure_config import AzureDevOpsConfig

ADO_ENV_VARS = (
    "AZURE_DEVOPS_ORG",
    "AZURE_DEVOPS_PROJECT",
    "AZURE_DEVOPS_PAT",
    "AZURE_DEVOPS_BASE_URL",
    "AZURE_DEVOPS_MAX_CONCURRENCY",
    "AZURE_DEVOPS_TIMEOUT",
)


def make_response(
    status_code: int = 200,
    json_data=None,
    text: str | None = None,
    method: str = "GET",
    url: str = "https://dev.azure.com/contoso/Fabrikam/_apis/test",
) -> httpx.Response:
    """Build a real httpx.Response bound to a request so raise_for_status works"""
    request = httpx.Request(method, url)
    if json_data is not None:
        return httpx.Response(status_code, json=json_data, request=request)
    return httpx.Response(status_code, text=text or "", request=request)


@pytest.fixture
def response_factory():
    """Expose make_response to tests"""
    return make_response


# ===== Configuration Fixtures =====


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every ADO variable so each test sets exactly what it needs"""
    for name in ADO_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's local .env out of the tests
    monkeypatch.setattr("ado_tools.secure_config.load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setattr("ado_tools.secure_config._config_instance", None)
    return monkeypatch


@pytest.fixture
def ado_config():
    """Provide validated credentials for a sample organization"""
    return AzureDevOpsConfig(organization="contoso", project="Fabrikam", pat="test-pat-token-123")


# ===== HTTP Fixtures =====


@pytest.fixture
def mock_http_client():
    """AsyncSecureHTTPClient stand-in with awaitable get/post"""
    client = AsyncMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    return client


# ===== REST Payload Fixtures =====


@pytest.fixture
def wiql_response():
    """WIQL response matching two work items"""
    return {
        "queryType": "flat",
        "queryResultType": "workItem",
        "workItems": [
            {"id": 1, "url": "https://dev.azure.com/contoso/_apis/wit/workItems/1"},
            {"id": 2, "url": "https://dev.azure.com/contoso/_apis/wit/workItems/2"},
        ],
    }


@pytest.fixture
def work_items_response():
    """Batch work items response for ids 1 and 2"""
    return {
        "count": 2,
        "value": [
            {"id": 1, "fields": {"System.Title": "Login fails", "System.State": "Active", "System.WorkItemType": "Bug"}},
            {"id": 2, "fields": {"System.Title": "Add SSO", "System.State": "New", "System.WorkItemType": "User Story"}},
        ],
    }


@pytest.fixture
def pull_request_payload():
    """Factory for a single pull request record as the API returns it"""

    def _make(repository_id: str, pull_request_id: int, title: str = "Fix bug", status: str = "active"):
        return {
            "pullRequestId": pull_request_id,
            "title": title,
            "status": status,
            "creationDate": "2026-02-10T10:00:00.1234567Z",
            "createdBy": {"displayName": "Jordan Lee", "id": "user-guid"},
            "repository": {"id": repository_id, "name": f"repo-{repository_id}"},
            "sourceRefName": "refs/heads/feature",
        }

    return _make
