"""
Async Secure HTTP Client Wrapper

Provides async HTTP methods with enforced SSL verification and timeouts.
Built on httpx for concurrent API calls over one pooled connection set.

Usage:
    from ado_tools.async_http_client import AsyncSecureHTTPClient

    async with AsyncSecureHTTPClient(headers={"Accept": "application/json"}) as client:
        response = await client.get(url)
        response = await client.post(url, json=data)

Security Features:
    - SSL verification always enabled (verify=True)
    - Default 30-second timeout on all requests
    - Default headers fixed at construction, never changed per request
"""

import base64
from collections.abc import Mapping

import httpx


def build_auth_headers(pat: str) -> dict[str, str]:
    """
    Build Basic Authentication headers from a PAT.

    Azure DevOps uses Basic Auth with empty username and PAT as password.

    Example:
        {"Authorization": "Basic OnBhdA==", "Accept": "application/json"}
    """
    credentials = f":{pat}"  # Empty username, PAT as password
    b64_credentials = base64.b64encode(credentials.encode()).decode()  # nosec B108
    return {
        "Authorization": f"Basic {b64_credentials}",
        "Accept": "application/json",
    }


class AsyncSecureHTTPClient:
    """
    Async HTTP client with enforced SSL verification and connection pooling.

    One instance is opened at server start and shared by every tool
    invocation; nothing about it changes after __aenter__.
    """

    DEFAULT_TIMEOUT = 30  # seconds
    DEFAULT_MAX_CONNECTIONS = 100
    DEFAULT_MAX_KEEPALIVE = 20

    def __init__(
        self,
        headers: Mapping[str, str] | None = None,
        max_connections: int = DEFAULT_MAX_CONNECTIONS,
        max_keepalive_connections: int = DEFAULT_MAX_KEEPALIVE,
        timeout: float = DEFAULT_TIMEOUT,
        http2: bool = True,
    ):
        """
        Initialize async HTTP client.

        Args:
            headers: Default headers sent with every request
            max_connections: Maximum number of concurrent connections (default: 100)
            max_keepalive_connections: Max persistent connections (default: 20)
            timeout: Default timeout in seconds (default: 30)
            http2: Enable HTTP/2 support (default: True)
        """
        self.headers = dict(headers or {})
        self.limits = httpx.Limits(max_connections=max_connections, max_keepalive_connections=max_keepalive_connections)
        self.timeout = httpx.Timeout(timeout)
        self.http2 = http2
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "AsyncSecureHTTPClient":
        """Context manager entry - create async client"""
        self.client = httpx.AsyncClient(
            headers=self.headers,
            limits=self.limits,
            timeout=self.timeout,
            verify=True,  # CRITICAL: Force SSL verification
            http2=self.http2,
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, *args):
        """Context manager exit - close connections"""
        if self.client:
            await self.client.aclose()
            self.client = None

    def _require_client(self) -> httpx.AsyncClient:
        if not self.client:
            raise RuntimeError("Client not initialized. Use 'async with AsyncSecureHTTPClient()' context manager")
        return self.client

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """
        Async GET request with SSL verification enforced.

        Args:
            url: URL to fetch
            **kwargs: Additional arguments to pass to httpx.AsyncClient.get()

        Returns:
            httpx.Response: HTTP response
        """
        return await self._require_client().get(url, **kwargs)

    async def post(self, url: str, **kwargs) -> httpx.Response:
        """
        Async POST request with SSL verification enforced.

        Args:
            url: URL to post to
            **kwargs: Additional arguments to pass to httpx.AsyncClient.post()

        Returns:
            httpx.Response: HTTP response
        """
        return await self._require_client().post(url, **kwargs)
