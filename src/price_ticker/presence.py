"""
Guild presence sync: nickname and trend roles.

For every guild the bot is in, the bot's own member gets its nickname set to
the current price and exactly one of the ticker-green / ticker-red roles.
Guilds are processed sequentially.
"""

import logging
from typing import Iterable, Optional

import discord

from .formatters import format_nickname
from .state import Trend

logger = logging.getLogger(__name__)

GREEN_ROLE = "ticker-green"
RED_ROLE = "ticker-red"


class PresenceUpdater:
    """Applies price/trend presence to the bot's member in each guild."""

    def __init__(self, green_role: str = GREEN_ROLE, red_role: str = RED_ROLE):
        self.green_role = green_role
        self.red_role = red_role

    async def sync(
        self,
        guilds: Iterable[discord.Guild],
        symbol: str,
        price: float,
        trend: Trend,
    ) -> None:
        nickname = format_nickname(symbol, price, trend)
        for guild in guilds:
            me = guild.me
            if me is None:
                continue
            await self._set_nickname(me, nickname)
            await self._sync_roles(guild, me, trend)

    async def _set_nickname(self, me: discord.Member, nickname: str) -> None:
        if not me.guild_permissions.manage_nicknames:
            return
        try:
            await me.edit(nick=nickname)
        except discord.HTTPException:
            # Permission and rate-limit failures are routine here
            pass

    async def _sync_roles(self, guild: discord.Guild, me: discord.Member, trend: Trend) -> None:
        green = discord.utils.get(guild.roles, name=self.green_role)
        red = discord.utils.get(guild.roles, name=self.red_role)

        if trend is Trend.UP:
            wanted, unwanted = green, red
        else:
            wanted, unwanted = red, green

        await self._add_role(guild, me, wanted)
        if unwanted is not None and unwanted in me.roles:
            await self._remove_role(guild, me, unwanted)

    async def _add_role(self, guild: discord.Guild, me: discord.Member, role: Optional[discord.Role]) -> None:
        if role is None:
            return
        try:
            await me.add_roles(role)
        except discord.HTTPException as e:
            logger.error(f"Role update error in {guild.name}: could not add {role.name}: {e}")

    async def _remove_role(self, guild: discord.Guild, me: discord.Member, role: discord.Role) -> None:
        try:
            await me.remove_roles(role)
        except discord.HTTPException as e:
            logger.error(f"Role update error in {guild.name}: could not remove {role.name}: {e}")
