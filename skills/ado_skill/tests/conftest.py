"""
Shared fixtures for ado-skill tool tests

FakeAdoService stands in for the HTTP layer under a real
AzureDevOpsRESTClient, so URL building, error mapping and projection all
run exactly as in production.
"""

import asyncio
from dataclasses import dataclass, field

import httpx
import pytest

from ado_tools.ado_rest_client import AzureDevOpsRESTClient
from ado_tools.secure_config import AzureDevOpsConfig

BASE = "https://dev.azure.com/contoso/Fabrikam/_apis"


@dataclass
class Route:
    status_code: int = 200
    json_data: object = None
    delay: float = 0.0


@dataclass
class FakeAdoService:
    """
    Async stub of AsyncSecureHTTPClient routing on URL path.

    Records every call and the peak number of requests in flight.
    """

    routes: dict[str, Route] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)
    in_flight: int = 0
    max_in_flight: int = 0

    def add(self, path: str, json_data=None, status_code: int = 200, delay: float = 0.0) -> None:
        self.routes[path] = Route(status_code=status_code, json_data=json_data, delay=delay)

    def calls_to(self, path: str) -> int:
        return sum(1 for _, url in self.calls if url.split("?")[0] == f"{BASE}/{path}")

    async def _respond(self, method: str, url: str) -> httpx.Response:
        self.calls.append((method, url))
        path = url.split("?")[0].removeprefix(f"{BASE}/")
        route = self.routes.get(path)
        if route is None:
            raise AssertionError(f"Unexpected request: {method} {url}")

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(route.delay)
        finally:
            self.in_flight -= 1

        request = httpx.Request(method, url)
        if route.json_data is None:
            return httpx.Response(route.status_code, text="server error", request=request)
        return httpx.Response(route.status_code, json=route.json_data, request=request)

    async def get(self, url: str, **kwargs) -> httpx.Response:
        return await self._respond("GET", url)

    async def post(self, url: str, **kwargs) -> httpx.Response:
        return await self._respond("POST", url)


@pytest.fixture
def ado_service():
    return FakeAdoService()


@pytest.fixture
def rest_client(ado_service):
    config = AzureDevOpsConfig(organization="contoso", project="Fabrikam", pat="test-pat-token-123")
    return AzureDevOpsRESTClient(config, ado_service)


@pytest.fixture
def pull_request():
    """Factory for a pull request record as the API returns it"""

    def _make(repository_id: str, pull_request_id: int, title: str | None = None):
        return {
            "pullRequestId": pull_request_id,
            "title": title or f"PR {pull_request_id}",
            "status": "active",
            "creationDate": "2026-02-10T10:00:00Z",
            "createdBy": {"displayName": "Jordan Lee"},
            "repository": {"id": repository_id},
        }

    return _make
