"""
Read-only HTTP status endpoint.

    GET /  -> JSON snapshot of the tracker state
"""

import logging
from typing import Optional

from aiohttp import web

from .formatters import format_status_payload
from .state import TrackerState

logger = logging.getLogger(__name__)


class StatusServer:
    """aiohttp server sharing the bot's event loop."""

    def __init__(self, state: TrackerState, host: str = "0.0.0.0", port: int = 3000):
        self.state = state
        self.host = host
        self.port = port
        self._runner: Optional[web.AppRunner] = None

    def create_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/", self._handle_status)
        return app

    async def start(self) -> None:
        self._runner = web.AppRunner(self.create_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info(f"Status server running on port {self.port}")

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None

    async def _handle_status(self, request: web.Request) -> web.Response:
        return web.json_response(format_status_payload(self.state))
