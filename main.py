# =============================================================================
# main.py  -  Entry Point for the Qiita items MCP server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Environment variables are loaded from .env (QIITA_API_ACCESS_TOKEN)
#   2. The FastMCP server from tools/mcp_server.py is imported
#   3. The server runs on the stdio transport until the client disconnects
#
# An MCP client (Claude Desktop, an agent framework, ...) starts this file
# as a subprocess and talks JSON-RPC over its stdin/stdout.
# =============================================================================

from dotenv import load_dotenv

# Must happen BEFORE importing core/, which reads the token at import time.
load_dotenv()

from tools.mcp_server import mcp  # noqa: E402


def main() -> None:
    """Run the MCP server over stdio."""
    mcp.run()


if __name__ == "__main__":
    main()
