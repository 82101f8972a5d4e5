# =============================================================================
# core/inklink.py - Inklink API calls (one HTTP request per operation)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Talks to the Inklink proof service.  Each public coroutine performs
#   exactly ONE HTTP round trip and returns a model from core/models.py.
#
# THE FOUR ENDPOINTS:
#   POST /api/request              → create_request()
#   POST /api/request-session-id   → create_session_id()
#   GET  /api/request-result/{id}  → retrieve_results()
#   GET  /api/request-result/{id}?session_id{sid}
#                                  → retrieve_session_results()
#
#   The session variant's query string has no "=" between key and value.
#   That is the URL the service has always been called with; it is built
#   by plain concatenation and kept as-is.
#
# CREDENTIALS:
#   The caller's API key travels in the x-api-key header and nowhere else.
#   It is never put in a body and never logged.
#
# ERRORS:
#   Nothing is caught here.  httpx transport errors, JSON decode errors and
#   ProofNotReady propagate to the caller (tools/mcp_server.py), which
#   decides per tool whether to surface or collapse them.
#
#   The HTTP status code is NOT inspected.  A 4xx/5xx reply is parsed like
#   any other; the body's "error" field is what signals failure.
# =============================================================================

import logging
from typing import Any, Optional

import httpx

from core.config import Settings, get_settings
from core.models import ProofResult, RequestCreated, SessionCreated

logger = logging.getLogger(__name__)

REQUEST_PATH = "/api/request"
SESSION_ID_PATH = "/api/request-session-id"
RESULT_PATH = "/api/request-result/"


def _headers(api_key: str, *, json_body: bool) -> dict[str, str]:
    headers = {"x-api-key": api_key}
    if json_body:
        headers["Content-Type"] = "application/json"
    return headers


def result_url(base_url: str, request_id: str, session_id: Optional[str] = None) -> str:
    """Build the result URL; the session form is `?session_id<sid>` (no '=')."""
    url = base_url + RESULT_PATH + request_id
    if session_id is not None:
        url += "?session_id" + session_id
    return url


async def _send(
    method: str,
    url: str,
    api_key: str,
    body: Optional[dict[str, Any]] = None,
) -> Any:
    """Perform one request and return the decoded JSON body."""
    logger.debug("%s %s", method, url)
    # No timeout: the call waits for the transport to resolve or fail.
    async with httpx.AsyncClient(timeout=None) as client:
        response = await client.request(
            method,
            url,
            headers=_headers(api_key, json_body=body is not None),
            json=body,
        )
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response.json()


# =============================================================================
# PUBLIC API
# =============================================================================
async def create_request(
    title: str,
    category: str,
    description: str,
    api_key: str,
    settings: Optional[Settings] = None,
) -> RequestCreated:
    """Create a proof request.

    The category is upper-cased before it is sent ("health" → "HEALTH").
    """
    settings = settings or get_settings()
    payload = await _send(
        "POST",
        settings.base_url + REQUEST_PATH,
        api_key,
        body={
            "proof_request_description": description,
            "proof_title": title,
            "category": category.upper(),
        },
    )
    return RequestCreated.from_payload(payload)


async def create_session_id(
    request_id: str,
    return_url: str,
    api_key: str,
    settings: Optional[Settings] = None,
) -> SessionCreated:
    """Create a session id for an existing request, with a return url."""
    settings = settings or get_settings()
    payload = await _send(
        "POST",
        settings.base_url + SESSION_ID_PATH,
        api_key,
        body={"request_id": request_id, "return_url": return_url},
    )
    return SessionCreated.from_payload(payload)


async def retrieve_results(
    request_id: str,
    api_key: str,
    settings: Optional[Settings] = None,
) -> ProofResult:
    """Fetch the result of a request.

    Raises ProofNotReady when the reply carries no data entry yet.
    """
    settings = settings or get_settings()
    payload = await _send("GET", result_url(settings.base_url, request_id), api_key)
    return ProofResult.from_payload(payload)


async def retrieve_session_results(
    request_id: str,
    session_id: str,
    api_key: str,
    settings: Optional[Settings] = None,
) -> ProofResult:
    settings = settings or get_settings()
    payload = await _send(
        "GET", result_url(settings.base_url, request_id, session_id), api_key
    )
    return ProofResult.from_payload(payload)
