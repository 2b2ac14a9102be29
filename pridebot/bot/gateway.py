"""
pridebot.bot.gateway — Snapshot Interface over the Live Client
===============================================================

The HTTP API never touches ``discord.Client`` directly.  It receives a
:class:`DiscordGateway` through dependency injection and asks it for:

- a :class:`BotSnapshot` of cached guild/member counts,
- a voter's identity (:class:`DiscordIdentity`),
- a channel by ID,
- the number of registered application commands.

Tests substitute a fake with the same four methods.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import discord

from pridebot.errors import DiscordError

if TYPE_CHECKING:
    from pridebot.bot.core import PridebotBot

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BotSnapshot:
    """Point-in-time view of the client's guild cache."""
    guild_count: int
    member_count: int
    started_at: int | None  # unix seconds, None before on_ready


@dataclass(frozen=True, slots=True)
class DiscordIdentity:
    """The parts of a Discord user shown in notifications."""
    id: int
    name: str
    avatar_url: str


class DiscordGateway:
    """Adapter between the API and a running :class:`PridebotBot`."""

    def __init__(self, bot: PridebotBot) -> None:
        self.bot = bot

    def snapshot(self) -> BotSnapshot:
        guilds = list(self.bot.guilds)
        return BotSnapshot(
            guild_count=len(guilds),
            member_count=sum(g.member_count or 0 for g in guilds),
            started_at=self.bot.started_at,
        )

    async def resolve_user(self, user_id: str) -> DiscordIdentity:
        """Fetch a user from Discord.

        Raises
        ------
        DiscordError
            If *user_id* isn't a snowflake or the fetch fails.
        """
        try:
            user = await self.bot.fetch_user(int(user_id))
        except (ValueError, discord.HTTPException) as exc:
            raise DiscordError(f"Could not fetch Discord user {user_id!r}") from exc
        return DiscordIdentity(
            id=user.id,
            name=user.name,
            avatar_url=user.display_avatar.url,
        )

    async def get_channel(self, channel_id: int):
        """Return a channel from cache or the API; None if it doesn't exist.

        Raises
        ------
        DiscordError
            If the lookup itself fails (permissions, outage).
        """
        channel = self.bot.get_channel(channel_id)
        if channel is not None:
            return channel
        try:
            return await self.bot.fetch_channel(channel_id)
        except discord.NotFound:
            return None
        except discord.HTTPException as exc:
            raise DiscordError(f"Could not fetch channel {channel_id}") from exc

    async def registered_command_count(self) -> int:
        """Number of application commands registered with Discord.

        Counts the dev guild's commands when ``dev_guild_id`` is configured,
        since that is where :meth:`PridebotBot.on_ready` syncs them.
        """
        dev_guild_id = self.bot.cfg.dev_guild_id
        guild = discord.Object(id=dev_guild_id) if dev_guild_id else None
        try:
            commands = await self.bot.tree.fetch_commands(guild=guild)
        except discord.HTTPException as exc:
            raise DiscordError("Could not fetch application commands") from exc
        return len(commands)
