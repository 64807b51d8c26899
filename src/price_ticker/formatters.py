"""
Discord and HTTP text formatting for the price ticker.
"""

from typing import Optional

from .state import TrackerState, Trend

CURRENCY_SIGN = "₱"
STATUS_MESSAGE = "Crypto Bot is running"

PRICE_UNAVAILABLE = "Price not available yet, please wait..."
SETPOOL_USAGE = "Usage: !setpool <network> <pool_address> <base|quote> <symbol>"
SETINTERVAL_USAGE = "Usage: !setinterval <seconds>"
MIN_INTERVAL_MESSAGE = "Minimum refresh interval is 5 seconds."

HELP_TEXT = (
    "**Commands:**\n"
    "`!price` → shows current price\n"
    "`!trend` → shows current trend (⬈ / ⬊)\n"
    "`!setpool <network> <pool_address> <base|quote> <symbol>` → change pool/token\n"
    "`!setinterval <seconds>` → change refresh interval\n"
    "`!help` → show this help menu"
)


def format_price(price: float) -> str:
    """Format a converted price with the currency sign and 4 decimals."""
    return f"{CURRENCY_SIGN}{price:.4f}"


def format_nickname(symbol: str, price: float, trend: Trend) -> str:
    return f"{symbol} {trend.glyph} {format_price(price)}"


def format_price_reply(state: TrackerState) -> str:
    if state.last_price is None:
        return PRICE_UNAVAILABLE
    return f"{state.symbol} Price: {format_price(state.last_price)} {state.trend.glyph}"


def format_trend_reply(state: TrackerState) -> str:
    return f"Current trend: {state.trend.glyph}"


def format_status_payload(state: TrackerState) -> dict:
    """Build the JSON body served by the status endpoint."""
    price: Optional[str] = None
    if state.last_price is not None:
        price = f"{state.last_price:.4f}"
    return {
        "message": STATUS_MESSAGE,
        "token": state.symbol,
        "price_php": price,
        "trend": state.trend.glyph,
        "interval_seconds": state.refresh_interval_seconds,
    }
