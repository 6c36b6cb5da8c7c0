# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrapper.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between MCP and core/.  It:
#     1. Receives loosely-typed arguments from the MCP client
#     2. Hands them to core.items.get_items()
#     3. Serializes the projected items to JSON text
#     4. Turns every failure into an "Error: <message>" tool error
#
# WHAT TOOLS DO NOT DO:
#   - No validation rules, no query building, no projection (all in core/)
#   - No configuration loading (main.py does that before import)
# =============================================================================
