"""
Price Ticker Discord Bot - Main entry point.

Tracks one GeckoTerminal pool, shows the PHP price and trend in the bot's
nickname and roles, answers !commands, and serves a JSON status endpoint.

Usage:
    python -m src.price_ticker.main

Environment Variables Required:
    DISCORD_TOKEN - Discord bot token
    PORT - Status endpoint port (optional, default 3000)
"""

import asyncio
import base64
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

import discord
from dotenv import load_dotenv

from .commands import CommandHandler
from .config import TickerConfig, load_config
from .presence import PresenceUpdater
from .price_client import PriceClient
from .state import TrackerState
from .status_server import StatusServer
from .tracker import PriceTracker

LOGGER_NAME = __package__ or "price_ticker"

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(log_dir: Path) -> logging.Logger:
    """
    Set up logging with both file and stdout handlers.

    Creates rotating log files in log_dir with format:
    price_ticker_YYYYMMDD.log
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    log_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    log_file = log_dir / f"price_ticker_{datetime.now().strftime('%Y%m%d')}.log"
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(log_format)
    logger.addHandler(file_handler)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.INFO)
    stdout_handler.setFormatter(log_format)
    logger.addHandler(stdout_handler)

    discord_logger = logging.getLogger("discord")
    discord_logger.setLevel(logging.WARNING)
    discord_logger.addHandler(file_handler)

    return logger


def validate_discord_token(token: str) -> tuple[bool, str]:
    """
    Validate Discord token format.

    Discord tokens have three dot-separated parts, the first being the
    base64 encoded bot user ID.
    """
    if not token:
        return False, "Discord token is empty"

    parts = token.split(".")
    if len(parts) != 3:
        return False, "Discord token format invalid (expected 3 parts separated by dots)"

    try:
        padded = parts[0] + "=" * (-len(parts[0]) % 4)
        base64.b64decode(padded, validate=True)
    except ValueError:
        return False, "Discord token format invalid (first part not valid base64)"

    return True, "Token format valid"


def build_intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.guilds = True
    intents.members = True
    intents.guild_messages = True
    intents.message_content = True
    return intents


class PriceTickerBot(discord.Client):
    """Discord client wiring the tracker, command handler and status server together."""

    def __init__(self, config: TickerConfig):
        super().__init__(intents=build_intents())
        self.config = config
        self.state = TrackerState.from_config(config)
        self.price_client = PriceClient(
            config.geckoterminal_api,
            config.exchange_rate_api,
            timeout=config.http_timeout,
        )
        self.tracker = PriceTracker(
            self.state,
            self.price_client,
            PresenceUpdater(),
            guilds=lambda: self.guilds,
        )
        self.command_handler = CommandHandler(self.tracker)
        self.status_server = StatusServer(self.state, host=config.host, port=config.port)

    async def setup_hook(self):
        """Open the HTTP session and start the status endpoint on the bot's loop."""
        await self.price_client.start()
        await self.status_server.start()

    async def on_ready(self):
        logger.info("=" * 60)
        logger.info(f"Logged in as {self.user} (ID: {self.user.id})")
        logger.info(f"  Guilds: {len(self.guilds)}")
        for guild in self.guilds:
            logger.info(f"    - {guild.name} (ID: {guild.id})")
        logger.info(
            f"  Tracking {self.state.symbol} ({self.state.tracked_side.value}) "
            f"on {self.state.network}: {self.state.pool_address}"
        )
        logger.info("=" * 60)

        self.tracker.start()
        await self.tracker.fetch_and_apply()

    async def on_disconnect(self):
        logger.warning("Disconnected from Discord gateway")

    async def on_resumed(self):
        logger.info("Session resumed after disconnect")

    async def on_error(self, event_method: str, *args, **kwargs):
        logger.error(f"Error in event {event_method}", exc_info=True)

    async def on_message(self, message: discord.Message):
        await self.command_handler.handle_message(message)

    async def close(self):
        self.tracker.stop()
        await self.status_server.stop()
        await self.price_client.close()
        await super().close()


async def run_bot(config: TickerConfig):
    bot = PriceTickerBot(config)
    try:
        async with bot:
            await bot.start(config.discord_token)

    except discord.LoginFailure as e:
        logger.error(f"AUTHENTICATION FAILED: {e}")
        logger.error("Please check your DISCORD_TOKEN is valid")
        sys.exit(1)

    except discord.PrivilegedIntentsRequired as e:
        logger.error(f"PRIVILEGED INTENTS REQUIRED: {e}")
        logger.error("Enable SERVER MEMBERS and MESSAGE CONTENT intents for the bot in the developer portal")
        sys.exit(1)


def main():
    """Main entry point with validation."""
    load_dotenv()
    config = load_config()
    setup_logging(config.log_dir)
    logger.info(f"Price ticker starting (PID {os.getpid()}), logging to {config.log_dir}")

    token_valid, token_msg = validate_discord_token(config.discord_token)
    if not token_valid:
        logger.error(f"Discord token validation failed: {token_msg}")
        sys.exit(1)

    is_valid, error_msg = config.validate()
    if not is_valid:
        logger.error(f"Configuration validation failed: {error_msg}")
        sys.exit(1)

    logger.info(
        f"Tracking {config.symbol} ({config.tracked_side}) on {config.network}: {config.pool_address}, "
        f"every {config.refresh_seconds}s, HTTP timeout {config.http_timeout}s, "
        f"status on {config.host}:{config.port}"
    )

    try:
        asyncio.run(run_bot(config))
    except KeyboardInterrupt:
        logger.info("Bot shutdown by keyboard interrupt (Ctrl+C)")


if __name__ == "__main__":
    main()
