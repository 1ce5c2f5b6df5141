"""Pytest configuration and shared fixtures."""

import json
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from coinbase_trade import ClientConfig, CoinbaseTradeClient
from coinbase_trade.api.config import ENV_HOST, ENV_KEY, ENV_PATH, ENV_SECRET

TEST_KEY = "test-key"
TEST_SECRET = "test-secret"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (run offline)")
    config.addinivalue_line("markers", "live: Tests against the real Coinbase API")


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless explicitly requested."""
    for item in items:
        if "test_live" in str(item.fspath):
            if "COINBASE_LIVE_TESTS" not in os.environ:
                item.add_marker(
                    pytest.mark.skip(reason="Live tests skipped by default. Set COINBASE_LIVE_TESTS=1")
                )


@pytest.fixture(autouse=True)
def clean_env(request, monkeypatch):
    """Keep real credentials out of offline tests."""
    if "test_live" in str(request.node.fspath):
        return
    for name in (ENV_KEY, ENV_SECRET, ENV_HOST, ENV_PATH):
        monkeypatch.delenv(name, raising=False)


@dataclass
class RecordedRequest:
    method: str
    path: str
    query: Any
    headers: Any
    body: bytes


Reply = Union[dict, str, bytes, tuple]


class FakeCoinbase:
    """In-process stand-in for the REST API.

    Routes map ``(method, path)`` to a reply or to a callable taking the
    RecordedRequest and returning one. A reply is a dict (sent as JSON),
    raw str/bytes, or a ``(status, reply)`` tuple.
    """

    def __init__(self):
        self.requests: list[RecordedRequest] = []
        self.routes: dict[tuple[str, str], Union[Reply, Callable[[RecordedRequest], Reply]]] = {}
        self.host = ""
        self.app = web.Application()
        self.app.router.add_route("*", "/{tail:.*}", self._dispatch)

    def route(self, method: str, path: str, reply) -> None:
        self.routes[(method, path)] = reply

    def last(self) -> Optional[RecordedRequest]:
        return self.requests[-1] if self.requests else None

    async def _dispatch(self, request: web.Request) -> web.Response:
        recorded = RecordedRequest(
            method=request.method,
            path=request.path,
            query=request.query,
            headers=request.headers,
            body=await request.read(),
        )
        self.requests.append(recorded)

        reply = self.routes.get((request.method, request.path))
        if reply is None:
            return web.Response(status=404, text=json.dumps({"message": "route not found"}))
        if callable(reply):
            reply = reply(recorded)

        status = 200
        if isinstance(reply, tuple):
            status, reply = reply
        if isinstance(reply, dict):
            reply = json.dumps(reply)
        if isinstance(reply, str):
            reply = reply.encode("utf-8")
        return web.Response(status=status, body=reply, content_type="application/json")


@pytest_asyncio.fixture
async def fake_api():
    fake = FakeCoinbase()
    server = TestServer(fake.app, host="127.0.0.1")
    await server.start_server()
    fake.host = f"http://127.0.0.1:{server.port}"
    yield fake
    await server.close()


@pytest_asyncio.fixture
async def client(fake_api):
    config = ClientConfig(key=TEST_KEY, secret=TEST_SECRET, host=fake_api.host, min_interval=0)
    async with CoinbaseTradeClient(config) as c:
        yield c
