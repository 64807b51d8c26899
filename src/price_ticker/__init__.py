"""
Price Ticker - Discord presence bot for a single liquidity pool.

Polls GeckoTerminal for the pool's token price, converts it from USD to PHP,
and mirrors the latest price and trend into the bot's nickname and the
ticker-green / ticker-red roles of every guild it belongs to. A small HTTP
endpoint exposes the same state for external polling.

All state lives in memory and resets on restart.
"""

__version__ = "0.1.0"
