"""
Tests for the HTTP status endpoint.
"""

import asyncio

from aiohttp import test_utils

from src.price_ticker.state import Trend
from src.price_ticker.status_server import StatusServer


def get_status(state, method="GET", path="/"):
    async def scenario():
        server = StatusServer(state)
        async with test_utils.TestClient(test_utils.TestServer(server.create_app())) as client:
            response = await client.request(method, path)
            body = await response.json() if response.status == 200 else None
            return response.status, body

    return asyncio.run(scenario())


class TestStatusEndpoint:
    """Test GET / payload."""

    def test_before_first_fetch(self, state):
        status, body = get_status(state)
        assert status == 200
        assert body == {
            "message": "Crypto Bot is running",
            "token": "ASTER",
            "price_php": None,
            "trend": "⬈",
            "interval_seconds": 30,
        }

    def test_after_fetch(self, state):
        state.last_price = 12.34567
        state.trend = Trend.DOWN
        state.refresh_interval_ms = 10000
        _, body = get_status(state)
        assert body["price_php"] == "12.3457"
        assert body["trend"] == "⬊"
        assert body["interval_seconds"] == 10

    def test_reflects_live_state(self, state):
        _, before = get_status(state)
        state.symbol = "MYTOK"
        _, after = get_status(state)
        assert before["token"] == "ASTER"
        assert after["token"] == "MYTOK"

    def test_only_root_is_served(self, state):
        status, _ = get_status(state, path="/status")
        assert status == 404

    def test_post_not_allowed(self, state):
        status, _ = get_status(state, method="POST")
        assert status == 405


class TestServerLifecycle:
    """Test start/stop on an ephemeral port."""

    def test_start_and_stop(self, state):
        async def scenario():
            server = StatusServer(state, host="127.0.0.1", port=test_utils.unused_port())
            await server.start()
            await server.stop()
            await server.stop()

        asyncio.run(scenario())
