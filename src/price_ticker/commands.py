"""
Prefix command handling for guild and DM messages.

Messages are split on whitespace with no quoting; the first token,
lowercased, selects the command. Unknown commands are ignored silently.
"""

import logging
import re
from typing import Awaitable, Callable, Dict, List, Optional

import discord

from .config import MIN_REFRESH_SECONDS
from .formatters import (
    HELP_TEXT,
    MIN_INTERVAL_MESSAGE,
    SETINTERVAL_USAGE,
    SETPOOL_USAGE,
    format_price_reply,
    format_trend_reply,
)
from .state import TrackedSide
from .tracker import PriceTracker

logger = logging.getLogger(__name__)

NUMERIC = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
LEADING_INT = re.compile(r"[+-]?\d+")


def parse_seconds(arg: str) -> Optional[int]:
    """
    Parse a seconds argument. The whole argument must be a decimal number,
    and only its leading integer digits count ("7.9" -> 7, "1e3" -> 1).
    """
    if not NUMERIC.fullmatch(arg):
        return None
    match = LEADING_INT.match(arg)
    if match is None:
        return None
    return int(match.group())


class CommandHandler:
    """Dispatches !commands against the shared tracker state."""

    def __init__(self, tracker: PriceTracker):
        self.tracker = tracker
        self.state = tracker.state
        self._commands: Dict[str, Callable[[List[str]], Awaitable[Optional[str]]]] = {
            "!price": self._price,
            "!trend": self._trend,
            "!setpool": self._setpool,
            "!setinterval": self._setinterval,
            "!help": self._help,
        }

    async def handle_message(self, message: discord.Message) -> Optional[str]:
        """
        Handle one inbound message.

        Returns:
            The reply text that was sent, or None when the message was ignored
        """
        if message.author.bot:
            return None

        args = message.content.split()
        if not args:
            return None

        command = self._commands.get(args[0].lower())
        if command is None:
            return None

        logger.info(f"Command {args[0].lower()} from {message.author} in {message.channel}")
        reply = await command(args)
        if reply is not None:
            try:
                await message.reply(reply)
            except discord.HTTPException as e:
                logger.error(f"Failed to reply to {args[0].lower()}: {e}")
        return reply

    async def _price(self, args: List[str]) -> str:
        return format_price_reply(self.state)

    async def _trend(self, args: List[str]) -> str:
        return format_trend_reply(self.state)

    async def _setpool(self, args: List[str]) -> str:
        if len(args) < 5:
            return SETPOOL_USAGE

        side = TrackedSide.parse(args[3])
        symbol = args[4].upper() or "TOKEN"
        self.state.set_pool(args[1], args[2], side, symbol)
        logger.info(
            f"Pool changed: network={args[1]} pool={args[2]} side={side.value} symbol={symbol}"
        )

        await self.tracker.fetch_and_apply()
        return f"Now tracking {self.state.symbol} ({self.state.tracked_side.value.upper()})"

    async def _setinterval(self, args: List[str]) -> str:
        if len(args) < 2:
            return SETINTERVAL_USAGE
        seconds = parse_seconds(args[1])
        if seconds is None:
            return SETINTERVAL_USAGE
        if seconds < MIN_REFRESH_SECONDS:
            return MIN_INTERVAL_MESSAGE

        self.tracker.start(seconds * 1000)
        return f"Refresh interval set to {seconds} seconds."

    async def _help(self, args: List[str]) -> str:
        return HELP_TEXT
