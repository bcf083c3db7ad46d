"""
Core Infrastructure - Logging and configuration

Usage:
    from ado_tools.core import get_logger, get_config

    logger = get_logger(__name__)
    ado_config = get_config().get_ado_config()
"""

from ..secure_config import (
    AzureDevOpsConfig,
    ConfigurationError,
    SecureConfig,
    ServerConfig,
    get_config,
    validate_config_on_startup,
)
from .logging_config import get_logger, log_with_context, setup_logging

__all__ = [
    # Configuration
    "get_config",
    "validate_config_on_startup",
    "ConfigurationError",
    "SecureConfig",
    "AzureDevOpsConfig",
    "ServerConfig",
    # Logging
    "get_logger",
    "log_with_context",
    "setup_logging",
]
