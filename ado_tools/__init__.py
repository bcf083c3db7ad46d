"""
Azure DevOps Tools - Library Layer

REST access and response shaping behind the ado-skill MCP server.

Package Structure:
    - core: Infrastructure (config, logging)
    - domain: Summary models returned to tool callers
    - async_http_client: Shared, pre-authenticated HTTP client
    - ado_rest_client: Azure DevOps REST v7.1 endpoints
    - ado_rest_transformers: Strict projection of REST payloads into summaries
"""

__version__ = "1.0.0"
