"""
Secure Configuration Management

Provides centralized, validated configuration for the ADO tool server.
Replaces ad-hoc os.getenv() calls with strict validation and fail-fast behavior.

Usage:
    from ado_tools.secure_config import get_config

    config = get_config()
    ado_config = config.get_ado_config()
    print(ado_config.organization_url)

Environment Variables:
    AZURE_DEVOPS_ORG              Organization name (required)
    AZURE_DEVOPS_PROJECT          Project name (required)
    AZURE_DEVOPS_PAT              Personal Access Token (required)
    AZURE_DEVOPS_BASE_URL         Service root (default: https://dev.azure.com)
    AZURE_DEVOPS_MAX_CONCURRENCY  Cap on concurrent per-repository requests (default: unbounded)
    AZURE_DEVOPS_TIMEOUT          HTTP timeout in seconds (default: 30)

Raises:
    ConfigurationError: If configuration is missing or invalid
"""

import math
import os
from dataclasses import dataclass, field
from urllib.parse import quote

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://dev.azure.com"
DEFAULT_TIMEOUT_SECONDS = 30.0

ORG_ENV = "AZURE_DEVOPS_ORG"
PROJECT_ENV = "AZURE_DEVOPS_PROJECT"
PAT_ENV = "AZURE_DEVOPS_PAT"
BASE_URL_ENV = "AZURE_DEVOPS_BASE_URL"
MAX_CONCURRENCY_ENV = "AZURE_DEVOPS_MAX_CONCURRENCY"
TIMEOUT_ENV = "AZURE_DEVOPS_TIMEOUT"


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass(frozen=True)
class AzureDevOpsConfig:
    """
    Validated Azure DevOps credentials.

    Immutable once constructed; shared by every tool invocation.
    """

    organization: str
    project: str
    pat: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """
        Validate Azure DevOps configuration.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        missing = [
            env_name
            for env_name, value in ((ORG_ENV, self.organization), (PROJECT_ENV, self.project), (PAT_ENV, self.pat))
            if not value or not value.strip()
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}. "
                f"Please set {ORG_ENV}, {PROJECT_ENV}, and {PAT_ENV}"
            )

        if not self.base_url.startswith("https://"):
            raise ConfigurationError(f"{BASE_URL_ENV} must use HTTPS: {self.base_url}")

    @property
    def organization_url(self) -> str:
        """Organization root, e.g. https://dev.azure.com/contoso"""
        return f"{self.base_url.rstrip('/')}/{quote(self.organization, safe='')}"


@dataclass(frozen=True)
class ServerConfig:
    """
    Optional tuning knobs for the tool server.

    max_concurrency of None means one in-flight request per repository.
    """

    max_concurrency: int | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self):
        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise ConfigurationError(f"{MAX_CONCURRENCY_ENV} must be a positive integer: {self.max_concurrency}")
        if not math.isfinite(self.timeout_seconds) or self.timeout_seconds <= 0:
            raise ConfigurationError(f"{TIMEOUT_ENV} must be a positive finite number: {self.timeout_seconds}")


def _read_number(env_name: str, parse):
    raw = os.getenv(env_name)
    if raw is None or not raw.strip():
        return None
    try:
        return parse(raw.strip())
    except ValueError as e:
        raise ConfigurationError(f"{env_name} must be numeric: {raw!r}") from e


class SecureConfig:
    """
    Centralized secure configuration manager.

    Loads and validates configuration from environment variables.
    Provides fail-fast behavior to catch configuration issues early.
    """

    def __init__(self):
        """Initialize configuration (loads .env file)."""
        load_dotenv()

    def get_ado_config(self) -> AzureDevOpsConfig:
        """
        Get validated Azure DevOps configuration.

        Returns:
            AzureDevOpsConfig: Validated configuration

        Raises:
            ConfigurationError: If any required variable is missing or empty
        """
        return AzureDevOpsConfig(
            organization=(os.getenv(ORG_ENV) or "").strip(),
            project=(os.getenv(PROJECT_ENV) or "").strip(),
            pat=(os.getenv(PAT_ENV) or "").strip(),
            base_url=(os.getenv(BASE_URL_ENV) or "").strip() or DEFAULT_BASE_URL,
        )

    def get_server_config(self) -> ServerConfig:
        """
        Get validated server tuning configuration.

        Raises:
            ConfigurationError: If a value is non-numeric or not positive
        """
        max_concurrency = _read_number(MAX_CONCURRENCY_ENV, int)
        timeout = _read_number(TIMEOUT_ENV, float)

        return ServerConfig(
            max_concurrency=max_concurrency,
            timeout_seconds=timeout if timeout is not None else DEFAULT_TIMEOUT_SECONDS,
        )


_config_instance = None


def get_config() -> SecureConfig:
    """
    Get the global configuration loader (singleton pattern).

    Returns:
        SecureConfig: The configuration manager
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = SecureConfig()
    return _config_instance


def validate_config_on_startup() -> tuple[AzureDevOpsConfig, ServerConfig]:
    """
    Validate required configuration at application startup.

    Call this before serving anything so a misconfigured process never
    accepts a tool call.

    Returns:
        Tuple of (credentials, server tuning)

    Raises:
        ConfigurationError: If any configuration is missing or invalid
    """
    config = get_config()
    return config.get_ado_config(), config.get_server_config()
