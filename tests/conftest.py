"""
Shared fixtures: an in-process fake of the HIBP APIs and a stub client.
"""

import asyncio
import threading
from contextlib import asynccontextmanager, contextmanager

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from breachguard.config import GatewayConfig
from breachguard.exceptions import UpstreamError, UpstreamNotFound
from breachguard.hibp.client import HIBPClient
from breachguard.hibp.matcher import parse_range_body
from breachguard.hibp.models import StrengthResult

# SHA-1("password") = 5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8
PASSWORD_PREFIX = "5BAA6"
PASSWORD_SUFFIX = "1E4C9B93F3F0682250B6CF8331B7EE68FD8"

RANGE_BODY = "\r\n".join([
    "003D68EB55068C33ACE09247EE4C639306B:3",
    "012C192B2F16F82EA0EB9EF18D9D539B0DD:1",
    f"{PASSWORD_SUFFIX}:3",
    "01330C689E5D64F660D6947A93AD634EF8F:0",
])


@asynccontextmanager
async def fake_hibp(range_handler=None, breach_handler=None):
    """Serve fake range and breach endpoints; yields the base URL."""
    app = web.Application()
    if range_handler is not None:
        app.router.add_get("/range/{prefix}", range_handler)
    if breach_handler is not None:
        app.router.add_get("/api/v3/breachedaccount/{email}", breach_handler)

    async with TestServer(app) as server:
        yield str(server.make_url("/")).rstrip("/")


@contextmanager
def threaded_hibp(range_handler=None, breach_handler=None):
    """Serve the fake HIBP endpoints from a background event loop.

    For callers that run their own event loop per request, such as the
    Flask gateway. Yields the base URL.
    """
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()

    def call(coro):
        return asyncio.run_coroutine_threadsafe(coro, loop).result(timeout=10)

    app = web.Application()
    if range_handler is not None:
        app.router.add_get("/range/{prefix}", range_handler)
    if breach_handler is not None:
        app.router.add_get("/api/v3/breachedaccount/{email}", breach_handler)

    runner = web.AppRunner(app)
    try:
        call(runner.setup())
        call(web.TCPSite(runner, "127.0.0.1", 0).start())
        host, port = runner.addresses[0][:2]
        yield f"http://{host}:{port}"
    finally:
        call(runner.cleanup())
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout=10)
        loop.close()


def client_for(base_url: str, **kwargs) -> HIBPClient:
    kwargs.setdefault("api_key", "test-key")
    return HIBPClient(
        breach_api_base=f"{base_url}/api/v3",
        range_api_base=base_url,
        **kwargs,
    )


class StubClient:
    """Stands in for HIBPClient; records every upstream call."""

    def __init__(self, range_body: str = "", range_error=None,
                 breaches=None, breach_error=None):
        self.range_body = range_body
        self.range_error = range_error
        self.breaches = breaches or []
        self.breach_error = breach_error
        self.calls = []

    async def range_query(self, prefix):
        self.calls.append(("range", prefix))
        if self.range_error is not None:
            raise self.range_error
        return parse_range_body(self.range_body)

    async def breach_query(self, email):
        self.calls.append(("breach", email))
        if self.breach_error is not None:
            raise self.breach_error
        return self.breaches


def stub_scorer(score=0, warning="This is a top-10 common password."):
    calls = []

    def scorer(password):
        calls.append(password)
        return StrengthResult(score=score, suggestions=["Add another word or two."], warning=warning)

    scorer.calls = calls
    return scorer


@pytest.fixture
def config():
    return GatewayConfig(
        hibp_api_key="test-key",
        allowed_origins=("https://app.example.com",),
        rate_limit_max=100,
        rate_limit_window=60.0,
    )


@pytest.fixture
def not_found():
    return UpstreamNotFound("No breaches on record")


@pytest.fixture
def server_error():
    return UpstreamError("HIBP breach query failed", status=500)
