# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between the MCP host and core/.
#   mcp_server.py:
#     1. Imports the Inklink calls from core/
#     2. Wraps each one in a FastMCP tool decorator
#     3. Turns replies into MCP text content
#     4. Decides which failures surface and which collapse into a message
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build URLs or bodies (that's core/inklink.py)
#   - They do NOT know which host is calling them
# =============================================================================
