"""
Pytest fixtures for price ticker tests.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.price_ticker.config import TickerConfig
from src.price_ticker.presence import PresenceUpdater
from src.price_ticker.price_client import PriceClient
from src.price_ticker.state import TrackedSide, TrackerState
from src.price_ticker.tracker import PriceTracker


@pytest.fixture
def mock_config(tmp_path):
    """Create a configuration for testing."""
    return TickerConfig(
        discord_token="test_token",
        port=3000,
        network="bsc",
        pool_address="0xpool",
        tracked_side="base",
        symbol="aster",
        refresh_seconds=30,
        http_timeout=5.0,
        log_dir=tmp_path,
    )


@pytest.fixture
def state():
    """Fresh tracker state with no price yet."""
    return TrackerState(
        network="bsc",
        pool_address="0xpool",
        tracked_side=TrackedSide.BASE,
        symbol="ASTER",
        refresh_interval_ms=30000,
    )


@pytest.fixture
def mock_price_client():
    """Price client whose network calls return 2.0 USD at 50.0 PHP/USD."""
    client = MagicMock(spec=PriceClient)
    client.fetch_pool_price_usd = AsyncMock(return_value=2.0)
    client.fetch_usd_rate = AsyncMock(return_value=50.0)
    return client


@pytest.fixture
def mock_presence():
    presence = MagicMock(spec=PresenceUpdater)
    presence.sync = AsyncMock()
    return presence


@pytest.fixture
def tracker(state, mock_price_client, mock_presence):
    """Tracker wired to mocks, with a scheduler that never really starts."""
    tracker = PriceTracker(state, mock_price_client, mock_presence, guilds=lambda: [])
    tracker.scheduler = MagicMock()
    return tracker


def make_message(content, bot=False):
    """Create a mock Discord message."""
    message = MagicMock()
    message.content = content
    message.author.bot = bot
    message.author.__str__ = MagicMock(return_value="TestUser#1234")
    message.reply = AsyncMock()
    return message


def make_role(name):
    role = MagicMock()
    role.name = name
    return role


def make_guild(roles=(), held=(), manage_nicknames=True, has_me=True):
    """Create a mock guild whose bot member holds the `held` roles."""
    guild = MagicMock()
    guild.name = "Test Guild"
    guild.roles = list(roles)
    if has_me:
        me = MagicMock()
        me.guild_permissions.manage_nicknames = manage_nicknames
        me.roles = list(held)
        me.edit = AsyncMock()
        me.add_roles = AsyncMock()
        me.remove_roles = AsyncMock()
        guild.me = me
    else:
        guild.me = None
    return guild


@pytest.fixture
def message_factory():
    return make_message


@pytest.fixture
def role_factory():
    return make_role


@pytest.fixture
def guild_factory():
    return make_guild
