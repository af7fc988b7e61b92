"""MCP server for the swagger validator.

Exposes document validation as an MCP tool over stdio transport.  The tool
runs the same submission handler as ``POST /validate``.
"""
from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from src.shared.config import ValidatorConfig
from src.swagger_validator.services.submission import submit_document, to_response

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# MCP application
# ---------------------------------------------------------------------------
mcp = FastMCP("Swagger Validator")

_config = ValidatorConfig()


# ---------------------------------------------------------------------------
# Tool definitions
# ---------------------------------------------------------------------------


@mcp.tool(name="validate_api_document")
async def validate_api_document(content: str) -> dict:
    """Validate an OpenAPI 3.x or Swagger 2.0 document.

    Args:
        content: The raw document text, YAML or JSON.

    Returns:
        ``{"message": "API is valid", "api": {...}}`` with the dereferenced
        document, or ``{"message": "API validation failed", "error": "..."}``.
    """
    outcome = await submit_document(content, _config)
    response, _ = to_response(outcome)
    return response.to_payload()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    mcp.run()
