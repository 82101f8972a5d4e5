# =============================================================================
# tools/mcp_server.py - FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the four MCP tools that front the Inklink proof service.  Each
#   tool is a thin wrapper around a core/inklink.py coroutine: it logs the
#   call, awaits the single HTTP round trip, and turns the reply into text
#   content for the host runtime.
#
# HOW IT WORKS (the flow):
#   1. The host runtime (an assistant or any other MCP client) calls a
#      tool by name via MCP (e.g., "createRequest")
#   2. FastMCP validates the arguments against the function signature.
#      Missing or non-string arguments are rejected before our code runs.
#   3. The decorated coroutine below calls core/, then formats the result
#   4. The host receives a list of text segments
#
# TOOL NAMES:
#   The names are camelCase (createRequest, retrieveResults, ...) because
#   existing Inklink integrations already call them by these names.
#
# FAILURE POSTURE (not uniform across tools):
#   - createRequest / createSessionId do not catch anything.  A network or
#     JSON failure becomes an MCP tool error.  A reply with an "error"
#     field becomes a normal single-segment result.
#   - retrieveResults / retrieveSessionResults catch EVERYTHING and answer
#     "Proof has not been completed".  The caller is expected to poll them
#     until the proof is done, so "not ready", "unreachable" and "garbled"
#     all read the same.
#
# RUNNING THIS SERVER:
#     python -m tools.mcp_server   (or: inklink-mcp)
#   MCP hosts launch it as a subprocess and talk to it over stdio.
# =============================================================================

import logging
import sys

from dotenv import load_dotenv
from fastmcp import FastMCP
from mcp.types import TextContent

# --- Import core logic ---
# The tools layer depends on core/ and nothing else.
from core import inklink
from core.config import get_settings
from core.models import NOT_COMPLETED, js_truthy

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because stdout IS the MCP transport.  Anything printed to
# stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for the returned text segments
#     - YELLOW for intermediate status messages
#
# The api_key parameter is NEVER logged; it is shown as "***".
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (text segments)
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

_SECRET_PARAMS = {"api_key"}

load_dotenv()

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger("inklink.mcp")


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN (secrets masked)."""
    param_str = ", ".join(
        f"{k}={'***' if k in _SECRET_PARAMS else repr(v)}" for k, v in params.items()
    )
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _respond(tool_name: str, segments: list[str]) -> list[TextContent]:
    """Log the outgoing segments in GREEN and wrap them as MCP text content."""
    logger.info(f"{_GREEN}  ← {tool_name} response: {segments!r}{_RESET}")
    return [TextContent(type="text", text=text) for text in segments]


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
# "inklink-api" is the server identity the host sees during MCP initialize.
mcp = FastMCP("inklink-api", version="1.0.0")


# =============================================================================
# TOOL 1: createRequest
# =============================================================================
# Starts a new proof request.  Returns the request id and the URL where the
# proof can be completed: both are needed by the later tools.
# =============================================================================
@mcp.tool(
    name="createRequest",
    title="Proof request tool",
    description="Creates an inklink proof request with the given title category and description",
    output_schema=None,
)
async def create_request(
    title: str,
    category: str,
    description: str,
    api_key: str,
) -> list[TextContent]:
    _log_request("createRequest", title=title, category=category,
                 description=description, api_key=api_key)

    reply = await inklink.create_request(title, category, description, api_key)
    if js_truthy(reply.error):
        _log_status("Remote reported an error")
    return _respond("createRequest", reply.segments())


# =============================================================================
# TOOL 2: createSessionId
# =============================================================================
# Ties a request to one end user's session and sets where the user is sent
# back to after completing the proof.
# =============================================================================
@mcp.tool(
    name="createSessionId",
    title="Request session id tool",
    description=(
        "Creates a session id for an inklink proof request and sets a return url. "
        "Used to track a specific user's request"
    ),
    output_schema=None,
)
async def create_session_id(id: str, url: str, api_key: str) -> list[TextContent]:
    _log_request("createSessionId", id=id, url=url, api_key=api_key)

    reply = await inklink.create_session_id(id, url, api_key)
    if js_truthy(reply.error):
        _log_status("Remote reported an error")
    return _respond("createSessionId", reply.segments())


# =============================================================================
# TOOL 3: retrieveResults
# =============================================================================
# Polled by the caller until a credibility level is available.  Every kind
# of failure is reported as "not completed" (see FAILURE POSTURE above).
# =============================================================================
@mcp.tool(
    name="retrieveResults",
    title="Retrieve request results tool",
    description="Retrieves the results of an inklink proof request",
    output_schema=None,
)
async def retrieve_results(id: str, api_key: str) -> list[TextContent]:
    _log_request("retrieveResults", id=id, api_key=api_key)

    try:
        result = await inklink.retrieve_results(id, api_key)
    except Exception as exc:
        _log_status(f"No result yet ({type(exc).__name__}: {exc})")
        return _respond("retrieveResults", [NOT_COMPLETED])
    return _respond("retrieveResults", result.segments())


# =============================================================================
# TOOL 4: retrieveSessionResults
# =============================================================================
@mcp.tool(
    name="retrieveSessionResults",
    title="Retrieve request session results tool",
    description="Retrieves the results of an inklink proof request session",
    output_schema=None,
)
async def retrieve_session_results(id: str, sid: str, api_key: str) -> list[TextContent]:
    _log_request("retrieveSessionResults", id=id, sid=sid, api_key=api_key)

    try:
        result = await inklink.retrieve_session_results(id, sid, api_key)
    except Exception as exc:
        _log_status(f"No result yet ({type(exc).__name__}: {exc})")
        return _respond("retrieveSessionResults", [NOT_COMPLETED])
    return _respond("retrieveSessionResults", result.segments())


# =============================================================================
# Server entry point
# =============================================================================
# python -m tools.mcp_server   → stdio transport (what MCP hosts expect)
# =============================================================================
def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
