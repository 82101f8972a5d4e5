# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL adapter logic for the Inklink proof service.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any other MCP/orchestration
#   framework.  The only third-party import is httpx (the outbound HTTP call).
#
#   core/ knows how to talk to https://app.inklink.dev and how to turn its
#   JSON replies into text.  It does NOT know that the text ends up inside
#   an MCP tool result: that wiring lives in tools/.
# =============================================================================
