from __future__ import annotations

import json
from typing import Any

import httpx
import pytest


class FakeInklink:
    """Stands in for app.inklink.dev behind an httpx.MockTransport.

    `reply` is what the next request gets back:
      - a dict/list  → JSON body
      - a str        → raw text body (use it for invalid JSON)
      - an exception → raised from the transport
    """

    def __init__(self) -> None:
        self.reply: Any = {}
        self.status_code = 200
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.reply, Exception):
            raise self.reply
        if isinstance(self.reply, str):
            return httpx.Response(self.status_code, text=self.reply)
        return httpx.Response(self.status_code, json=self.reply)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def inklink_api(monkeypatch: pytest.MonkeyPatch) -> FakeInklink:
    fake = FakeInklink()
    real_client = httpx.AsyncClient

    def _client(**kwargs: Any) -> httpx.AsyncClient:
        return real_client(transport=httpx.MockTransport(fake.handler), **kwargs)

    monkeypatch.delenv("INKLINK_BASE_URL", raising=False)
    monkeypatch.setattr("core.inklink.httpx.AsyncClient", _client)
    return fake
