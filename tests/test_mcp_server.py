from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from tools.mcp_server import mcp


def _call(tool: str, arguments: dict[str, Any]) -> list[str]:
    async def _run() -> list[str]:
        async with Client(mcp) as client:
            result = await client.call_tool(tool, arguments)
        assert all(block.type == "text" for block in result.content)
        return [block.text for block in result.content]

    return asyncio.run(_run())


def _list_tools() -> dict[str, Any]:
    async def _run() -> dict[str, Any]:
        async with Client(mcp) as client:
            tools = await client.list_tools()
        return {tool.name: tool for tool in tools}

    return asyncio.run(_run())


CREATE_ARGS = {
    "title": "Vaccine claim",
    "category": "health",
    "description": "Prove the study exists",
    "api_key": "key-123",
}


def test_tools_are_registered_with_string_parameters() -> None:
    tools = _list_tools()

    assert set(tools) == {"createRequest", "createSessionId", "retrieveResults", "retrieveSessionResults"}
    expected = {
        "createRequest": {"title", "category", "description", "api_key"},
        "createSessionId": {"id", "url", "api_key"},
        "retrieveResults": {"id", "api_key"},
        "retrieveSessionResults": {"id", "sid", "api_key"},
    }
    for name, params in expected.items():
        schema = tools[name].inputSchema
        assert set(schema["required"]) == params
        assert all(schema["properties"][p]["type"] == "string" for p in params)
    assert tools["createRequest"].title == "Proof request tool"
    assert tools["retrieveResults"].description == "Retrieves the results of an inklink proof request"


def test_create_request_returns_id_and_url(inklink_api) -> None:
    inklink_api.reply = {"request_id": "req_1", "request_url": "https://app.inklink.dev/r/req_1"}

    segments = _call("createRequest", CREATE_ARGS)

    assert segments == ["req_1", "https://app.inklink.dev/r/req_1"]
    assert inklink_api.last_body()["category"] == "HEALTH"


def test_create_request_returns_remote_error(inklink_api) -> None:
    inklink_api.reply = {"error": "Invalid API key", "request_id": "ignored"}

    assert _call("createRequest", CREATE_ARGS) == ["Invalid API key"]


def test_create_request_missing_fields_render_undefined(inklink_api) -> None:
    inklink_api.reply = {"request_id": 17}

    assert _call("createRequest", CREATE_ARGS) == ["17", "undefined"]


def test_create_request_transport_failure_is_a_tool_error(inklink_api) -> None:
    inklink_api.reply = httpx.ConnectError("connection refused")

    with pytest.raises(ToolError):
        _call("createRequest", CREATE_ARGS)


def test_create_session_id_returns_session_and_url(inklink_api) -> None:
    inklink_api.reply = {"session_id": "sess_1", "request_url": "https://app.inklink.dev/s/sess_1"}

    segments = _call("createSessionId", {"id": "req_1", "url": "https://example.com/back", "api_key": "k"})

    assert segments == ["sess_1", "https://app.inklink.dev/s/sess_1"]
    assert inklink_api.last_body() == {"request_id": "req_1", "return_url": "https://example.com/back"}


def test_create_session_id_returns_remote_error(inklink_api) -> None:
    inklink_api.reply = {"error": "Request not found"}

    assert _call("createSessionId", {"id": "nope", "url": "u", "api_key": "k"}) == ["Request not found"]


def test_create_session_id_invalid_json_is_a_tool_error(inklink_api) -> None:
    inklink_api.reply = "not json"

    with pytest.raises(ToolError):
        _call("createSessionId", {"id": "req_1", "url": "u", "api_key": "k"})


def test_retrieve_results_completed(inklink_api) -> None:
    inklink_api.reply = {"data": [{"credibility_category": "HIGH"}]}

    assert _call("retrieveResults", {"id": "req_1", "api_key": "k"}) == [
        "Proof was completed with a credibility level of:HIGH"
    ]


def test_retrieve_results_first_entry_without_category(inklink_api) -> None:
    inklink_api.reply = {"data": ["x"]}

    assert _call("retrieveResults", {"id": "req_1", "api_key": "k"}) == [
        "Proof was completed with a credibility level of:undefined"
    ]


@pytest.mark.parametrize(
    "reply",
    [{"data": []}, httpx.ConnectError("connection refused"), "<html>502</html>", {"message": "x"}],
)
def test_retrieve_results_not_completed(inklink_api, reply: Any) -> None:
    inklink_api.reply = reply

    assert _call("retrieveResults", {"id": "req_1", "api_key": "k"}) == ["Proof has not been completed"]


def test_retrieve_session_results_uses_literal_query(inklink_api) -> None:
    inklink_api.reply = {"data": [{"credibility_category": "LOW"}]}

    segments = _call("retrieveSessionResults", {"id": "req_1", "sid": "sess_9", "api_key": "k"})

    assert segments == ["Proof was completed with a credibility level of:LOW"]
    assert str(inklink_api.last.url) == "https://app.inklink.dev/api/request-result/req_1?session_idsess_9"
    assert inklink_api.last.headers["x-api-key"] == "k"


def test_retrieve_session_results_not_completed(inklink_api) -> None:
    inklink_api.reply = httpx.ReadTimeout("timed out")

    assert _call("retrieveSessionResults", {"id": "r", "sid": "s", "api_key": "k"}) == [
        "Proof has not been completed"
    ]


def test_missing_parameter_is_rejected_before_any_request(inklink_api) -> None:
    with pytest.raises(ToolError):
        _call("createRequest", {"title": "t", "category": "c", "api_key": "k"})

    assert inklink_api.requests == []


def test_api_key_is_not_logged(inklink_api, caplog: pytest.LogCaptureFixture) -> None:
    inklink_api.reply = {"data": [{"credibility_category": "HIGH"}]}

    with caplog.at_level("INFO", logger="inklink.mcp"):
        _call("retrieveResults", {"id": "req_1", "api_key": "super-secret"})

    assert "retrieveResults called with" in caplog.text
    assert "super-secret" not in caplog.text
