"""
In-memory tracker state shared by the fetcher, command handler and status endpoint.

A single TrackerState instance is created at startup and passed explicitly to
every component. There is no locking: all mutation happens on the bot's event
loop, so handlers only interleave at await points.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import TickerConfig


class Trend(str, Enum):
    """Two-state price direction. There is no flat state."""

    UP = "up"
    DOWN = "down"

    @property
    def glyph(self) -> str:
        return TREND_GLYPHS[self]


TREND_GLYPHS = {
    Trend.UP: "⬈",
    Trend.DOWN: "⬊",
}


class TrackedSide(str, Enum):
    """Which token of the pool to read the USD price of."""

    BASE = "base"
    QUOTE = "quote"

    @classmethod
    def parse(cls, value: Optional[str]) -> "TrackedSide":
        """Anything other than 'quote' (case-insensitive) means base."""
        if value and value.lower() == "quote":
            return cls.QUOTE
        return cls.BASE

    @property
    def price_field(self) -> str:
        return f"{self.value}_token_price_usd"


@dataclass
class TrackerState:
    """Mutable process-wide ticker state."""

    network: str
    pool_address: str
    tracked_side: TrackedSide
    symbol: str
    refresh_interval_ms: int
    last_price: Optional[float] = None
    trend: Trend = Trend.UP

    @classmethod
    def from_config(cls, config: TickerConfig) -> "TrackerState":
        return cls(
            network=config.network,
            pool_address=config.pool_address,
            tracked_side=TrackedSide.parse(config.tracked_side),
            symbol=config.symbol,
            refresh_interval_ms=config.refresh_interval_ms,
        )

    @property
    def has_price(self) -> bool:
        return self.last_price is not None

    @property
    def refresh_interval_seconds(self) -> int:
        return self.refresh_interval_ms // 1000

    def set_pool(self, network: str, pool_address: str, side: TrackedSide, symbol: str) -> None:
        self.network = network
        self.pool_address = pool_address
        self.tracked_side = side
        self.symbol = symbol

    def next_trend(self, new_price: float) -> Trend:
        """
        Derive the trend for a freshly fetched price.

        Compares against last_price before it is overwritten. Equal prices,
        and the very first price, keep the current trend.
        """
        if self.last_price is None:
            return self.trend
        if new_price > self.last_price:
            return Trend.UP
        if new_price < self.last_price:
            return Trend.DOWN
        return self.trend
