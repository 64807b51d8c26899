"""
Price tracker: one refresh cycle and the timer that repeats it.

fetch_and_apply() reads the pool selection up front and reads the display
symbol again after the network calls, so a !setpool that lands mid-cycle
labels the old pool's price with the new symbol. This mirrors the unlocked
single-loop design; cycles are not serialized.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Iterable, Optional

import aiohttp
import discord

from .formatters import format_price
from .presence import PresenceUpdater
from .price_client import PriceClient, PriceFetchError
from .scheduler import RefreshScheduler
from .state import TrackerState

logger = logging.getLogger(__name__)


class PriceTracker:
    """Connects the price client, shared state, presence updater and scheduler."""

    def __init__(
        self,
        state: TrackerState,
        client: PriceClient,
        presence: PresenceUpdater,
        guilds: Callable[[], Iterable[discord.Guild]],
    ):
        """
        Args:
            state: Shared tracker state
            client: Upstream price client
            presence: Guild nickname/role updater
            guilds: Returns the guilds the bot currently belongs to
        """
        self.state = state
        self.client = client
        self.presence = presence
        self._guilds = guilds
        self.scheduler = RefreshScheduler(self.fetch_and_apply)

    async def fetch_and_apply(self) -> Optional[float]:
        """
        Run one refresh cycle.

        Returns:
            The converted price, or None if the cycle failed and state was left untouched
        """
        network = self.state.network
        pool_address = self.state.pool_address
        price_field = self.state.tracked_side.price_field

        try:
            price_usd = await self.client.fetch_pool_price_usd(network, pool_address, price_field)
            usd_rate = await self.client.fetch_usd_rate()
        except (PriceFetchError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error fetching pool price: {str(e) or type(e).__name__}")
            return None

        converted = price_usd * usd_rate
        self.state.trend = self.state.next_trend(converted)

        logger.info(
            f"Fetched {self.state.symbol}: ${price_usd:.4f} -> {format_price(converted)} "
            f"{self.state.trend.glyph} | {datetime.now().strftime('%H:%M:%S')}"
        )

        await self.presence.sync(self._guilds(), self.state.symbol, converted, self.state.trend)

        self.state.last_price = converted
        return converted

    def start(self, interval_ms: Optional[int] = None) -> None:
        """(Re)arm the refresh timer, recording the interval in state."""
        if interval_ms is not None:
            self.state.refresh_interval_ms = interval_ms
        self.scheduler.start(self.state.refresh_interval_ms)

    def stop(self) -> None:
        self.scheduler.stop()
