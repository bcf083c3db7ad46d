#!/usr/bin/env python3
"""
Azure DevOps MCP Skill Server

Exposes two Azure DevOps tools over the Model Context Protocol (stdio):
- list_work_items_by_wiql: WIQL query -> id/title/state summaries
- list_all_pull_requests: pull requests across every repository in the project

Configuration comes from AZURE_DEVOPS_ORG, AZURE_DEVOPS_PROJECT and
AZURE_DEVOPS_PAT (a .env file is honored). The process refuses to start if
any of them is missing.

Run:
    ado-mcp-server
    python -m skills.ado_skill.server
"""

import asyncio
import os
import sys
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from ado_tools.ado_rest_client import AzureDevOpsRESTClient
from ado_tools.async_http_client import AsyncSecureHTTPClient, build_auth_headers
from ado_tools.core import (
    ConfigurationError,
    ServerConfig,
    get_config,
    get_logger,
    setup_logging,
    validate_config_on_startup,
)
from skills.ado_skill.tools.list_all_pull_requests import list_all_pull_requests
from skills.ado_skill.tools.list_work_items_by_wiql import list_work_items_by_wiql

logger = get_logger(__name__)

SERVER_NAME = "ado-skill"

TOOLS = [
    Tool(
        name="list_work_items_by_wiql",
        description="Retrieves work items based on a WIQL query for the project.",
        inputSchema={
            "type": "object",
            "properties": {
                "wiql_query": {
                    "type": "string",
                    "description": "WIQL query string (e.g., 'SELECT [System.Id] FROM WorkItems WHERE [System.State] = 'Active'')",
                }
            },
            "required": ["wiql_query"],
        },
    ),
    Tool(
        name="list_all_pull_requests",
        description="Retrieves all pull requests across all repositories in the project.",
        inputSchema={"type": "object", "properties": {}},
    ),
]


def _require_string_argument(arguments: dict[str, Any] | None, name: str) -> str:
    value = (arguments or {}).get(name)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Argument '{name}' is required and must be a non-empty string")
    return value


async def dispatch_tool(
    client: AzureDevOpsRESTClient,
    server_config: ServerConfig,
    name: str,
    arguments: dict[str, Any] | None,
) -> list[TextContent]:
    """
    Execute an ADO tool.

    Args:
        client: Shared REST client
        server_config: Server tuning (fan-out concurrency cap)
        name: Tool name (e.g., "list_work_items_by_wiql")
        arguments: Tool arguments as dictionary

    Returns:
        Single TextContent holding the JSON result

    Raises:
        ValueError: If tool name is unknown or arguments are invalid
        RemoteRequestError: If an ADO API call fails
        MalformedResponseError: If an ADO response lacks expected fields
    """
    logger.info(f"Tool call: {name}")

    if name == "list_work_items_by_wiql":
        result = await list_work_items_by_wiql(client, _require_string_argument(arguments, "wiql_query"))
    elif name == "list_all_pull_requests":
        result = await list_all_pull_requests(client, max_concurrency=server_config.max_concurrency)
    else:
        raise ValueError(f"Unknown tool: {name}")

    return [TextContent(type="text", text=result)]


def create_server(client: AzureDevOpsRESTClient, server_config: ServerConfig | None = None) -> Server:
    """
    Build the MCP server with both ADO tools bound to one shared client.

    Args:
        client: REST client for the configured organization and project
        server_config: Optional tuning (fan-out concurrency cap)

    Returns:
        Server ready to run on any MCP transport
    """
    server_config = server_config or ServerConfig()
    app = Server(SERVER_NAME)

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        """List all available ADO tools."""
        return TOOLS

    @app.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        # Errors propagate; the mcp framework reports them as tool errors
        return await dispatch_tool(client, server_config, name, arguments)

    return app


async def serve() -> None:
    """
    Validate configuration, open the shared HTTP client, and serve over stdio.

    Raises:
        ConfigurationError: Before any connection is opened, if configuration is invalid
    """
    ado_config, server_config = validate_config_on_startup()

    async with AsyncSecureHTTPClient(
        headers=build_auth_headers(ado_config.pat),
        timeout=server_config.timeout_seconds,
    ) as http_client:
        client = AzureDevOpsRESTClient(ado_config, http_client)
        app = create_server(client, server_config)

        logger.info(f"Serving {SERVER_NAME} for {ado_config.organization_url}/{ado_config.project}")
        async with stdio_server() as (read_stream, write_stream):
            await app.run(read_stream, write_stream, app.create_initialization_options())


def main() -> int:
    """Console entry point. Returns the process exit status."""
    get_config()  # loads .env so LOG_* settings apply
    log_file = os.getenv("LOG_FILE", "").strip()
    setup_logging(
        level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=Path(log_file) if log_file else None,
        json_output=os.getenv("LOG_FORMAT", "text").lower() == "json",
    )

    try:
        asyncio.run(serve())
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
