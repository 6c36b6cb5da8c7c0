# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the single MCP tool, get_items.  The tool is a thin wrapper
#   around core.items.get_items(): it gathers the arguments, logs the call,
#   JSON-encodes the result and flattens every failure into "Error: ...".
#
# HOW IT WORKS (the flow):
#   1. An MCP client calls "get_items" with optional filter arguments
#   2. FastMCP routes the call to the decorated function below
#   3. handle_get_items() runs the core pipeline
#        validate -> build URL -> one GET -> project each item
#   4. Success: the projected items come back as pretty-printed JSON text
#      Failure: a ToolError("Error: <message>") which FastMCP reports as a
#      text result with isError=true
#
# ERROR KINDS AT THE BOUNDARY:
#   ValidationError, RequestError and httpx transport errors all end up as
#   the same "Error: <message>" text.  A client can only tell them apart by
#   reading the message.
#
# RUNNING THIS SERVER:
#     a) python main.py              (loads .env first)
#     b) python -m tools.mcp_server  (uses the process environment as-is)
# =============================================================================

import json
import logging
import sys
from typing import Any, Mapping, Optional, Union

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

# The tools layer depends on core/ and nothing else.
from core.config import VERSION
from core.errors import ItemsError
from core.items import get_items as fetch_and_project_items

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT is the MCP transport, so every log line goes to STDERR.
#   - CYAN for incoming requests (tool name + parameters)
#   - GREEN for response summaries
#   - YELLOW for intermediate status
#   - RED for errors returned to the client
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, items: list) -> list:
    """Log how many items are being returned in GREEN, then return them."""
    logging.info(f"{_GREEN}  ← {tool_name} response: {len(items)} items{_RESET}")
    return items


def _log_error(tool_name: str, error: Exception) -> None:
    logging.error(f"{_RED}  ← {tool_name} failed: {error}{_RESET}")


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("qiita-api-mcp", version=VERSION)


async def handle_get_items(arguments: Mapping[str, Any], **core_options) -> str:
    """Run the items pipeline and return the JSON text sent to the client.

    ``core_options`` (client, base_url, access_token) are passed through to
    core.items.get_items; tests use them to swap in a fake transport.

    Raises:
        ToolError: carrying "Error: <message>" for any pipeline failure.
    """
    try:
        items = await fetch_and_project_items(arguments, **core_options)
    except (ItemsError, httpx.HTTPError) as exc:
        _log_error("get_items", exc)
        raise ToolError(f"Error: {exc}") from exc

    _log_status(f"Projected {len(items)} items")
    return json.dumps(_log_response("get_items", items), indent=2, ensure_ascii=False)


# =============================================================================
# TOOL: get_items
# =============================================================================
# page and per_page accept numbers, strings ("5", "") and booleans (kept as
# booleans so the strict stage rejects them); dates arrive as strings.
# core/params.py normalizes and validates all of them.
# =============================================================================
@mcp.tool()
async def get_items(
    page: Optional[Union[bool, int, float, str]] = None,
    per_page: Optional[Union[bool, int, float, str]] = None,
    created_from: Optional[str] = None,
    created_to: Optional[str] = None,
    tags: Optional[list[str]] = None,
    additional_fields: Optional[list[str]] = None,
) -> str:
    """Fetch Qiita items with optional pagination, date and tag filters.

    By default each item contains only: title, url, created_at, user.name.
    Use additional_fields to include more fields.

    Args:
        page: Page number, 1-100.
        per_page: Items per page, 1-100.
        created_from: Only items created on or after this date (YYYY-MM-DD).
        created_to: Only items created on or before this date (YYYY-MM-DD).
        tags: Only items with these tags, e.g. ["Python", "FastAPI"].
        additional_fields: Extra fields to include in each item,
            e.g. ["id", "tags", "likes_count", "user.id"].  Use "user" for
            the whole user object.  Unknown fields are ignored.

    Returns:
        A JSON array of items, or "Error: <message>" flagged as an error.
    """
    arguments = {
        "page": page,
        "per_page": per_page,
        "created_from": created_from,
        "created_to": created_to,
        "tags": tags,
        "additional_fields": additional_fields,
    }
    _log_request("get_items", **{k: v for k, v in arguments.items() if v is not None})
    return await handle_get_items(arguments)


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    mcp.run()
