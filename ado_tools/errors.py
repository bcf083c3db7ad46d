"""
Error types raised by ADO tool operations.

ConfigurationError is fatal at startup. Everything deriving from AdoToolError
aborts only the current tool invocation; the server keeps serving.
"""

from ado_tools.secure_config import ConfigurationError

# Response bodies can be large HTML error pages; keep messages readable
MAX_BODY_CHARS = 500


class AdoToolError(Exception):
    """Base class for failures of a single tool invocation"""

    pass


class RemoteRequestError(AdoToolError):
    """
    Raised when an Azure DevOps call fails.

    Attributes:
        url: Request URL
        status_code: HTTP status, or None for transport failures (DNS, timeout, reset)
        body: Truncated response body, empty for transport failures
    """

    def __init__(self, url: str, status_code: int | None = None, body: str = ""):
        self.url = url
        self.status_code = status_code
        self.body = body[:MAX_BODY_CHARS]

        if status_code is None:
            message = f"Request to {url} failed before a response was received"
        else:
            message = f"HTTP {status_code} from {url}"
            if self.body:
                message = f"{message}: {self.body}"
        super().__init__(message)


class MalformedResponseError(AdoToolError):
    """Raised when a response is not JSON or lacks an expected field"""

    def __init__(self, field_path: str, detail: str):
        self.field_path = field_path
        super().__init__(f"Malformed response at '{field_path}': {detail}")


__all__ = [
    "AdoToolError",
    "ConfigurationError",
    "MalformedResponseError",
    "RemoteRequestError",
]
