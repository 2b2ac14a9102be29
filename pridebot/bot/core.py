"""
pridebot.bot.core — Bot Instance, Command Loader & API Host
============================================================

Defines :class:`PridebotBot`, a ``commands.Bot`` subclass that:

1. Stores the shared config (``bot.cfg``), DB engine (``bot.engine``) and
   command registry (``bot.registry``) so command modules can reach them.
2. Loads every slash-command module listed in the registry and installs
   the translator that localizes their names and descriptions.
3. Syncs the application command tree (guild-scoped when
   ``dev_guild_id`` is configured, global otherwise).
4. Serves the HTTP API on the bot's own event loop, handing it a
   :class:`DiscordGateway` instead of the raw client.
5. Counts every completed application command in ``command_usage``.
"""

from __future__ import annotations

import asyncio
import logging
import time

import discord
import uvicorn
from discord import app_commands
from discord.ext import commands
from sqlalchemy import Engine

from pridebot.bot.gateway import DiscordGateway
from pridebot.bot.translations import BundleTranslator
from pridebot.config import PridebotConfig
from pridebot.database.engine import run_db
from pridebot.services.registry import CommandRegistry
from pridebot.services.usage_service import record_command_usage

logger = logging.getLogger(__name__)


class PridebotBot(commands.Bot):
    """Custom Bot subclass that carries project-wide state.

    Parameters
    ----------
    cfg:
        The parsed :class:`PridebotConfig` from ``config.yaml``.
    engine:
        A SQLAlchemy :class:`Engine` connected to PostgreSQL.
    registry:
        Command registry scanned at startup.
    """

    def __init__(
        self,
        cfg: PridebotConfig,
        engine: Engine,
        registry: CommandRegistry,
    ) -> None:
        intents = discord.Intents.default()
        intents.members = False      # member_count comes from the guild payload
        intents.presences = False

        super().__init__(
            command_prefix=cfg.bot_prefix,
            intents=intents,
            description=cfg.bot_name,
        )

        self.cfg = cfg
        self.engine = engine
        self.registry = registry
        self.gateway = DiscordGateway(self)

        # Unix seconds; set on the first on_ready
        self.started_at: int | None = None

        self._api_server: uvicorn.Server | None = None
        self._api_task: asyncio.Task | None = None

    # -----------------------------------------------------------------------
    # Lifecycle hooks
    # -----------------------------------------------------------------------
    async def setup_hook(self) -> None:
        """Load command modules and start the HTTP API before connecting.

        One broken command module is logged and skipped rather than taking
        the whole bot down.
        """
        await self.tree.set_translator(BundleTranslator())

        for ext in self.registry.extensions():
            try:
                await self.load_extension(ext)
                logger.info("Loaded extension: %s", ext)
            except Exception as exc:
                logger.error("Failed to load extension %s: %s", ext, exc)

        self.start_api()

    async def on_ready(self) -> None:
        """Fired when the bot has connected and the cache is populated."""
        assert self.user is not None  # guaranteed after on_ready
        if self.started_at is None:
            self.started_at = int(time.time())
        logger.info(
            "Logged in as %s (ID: %s) — %d guilds",
            self.user.name, self.user.id, len(self.guilds),
        )

        if self.cfg.dev_guild_id:
            guild = discord.Object(id=self.cfg.dev_guild_id)
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            logger.info("Synced %d commands to dev guild %s", len(synced), self.cfg.dev_guild_id)
        else:
            synced = await self.tree.sync()
            logger.info("Synced %d commands globally", len(synced))

    async def on_app_command_completion(
        self,
        interaction: discord.Interaction,
        command: app_commands.Command | app_commands.ContextMenu,
    ) -> None:
        """Count every successful application command."""
        try:
            await run_db(record_command_usage, self.engine, command.name)
        except Exception:
            logger.exception("Failed to record usage for /%s", command.name)

    async def close(self) -> None:
        """Graceful shutdown — stop the API server, then disconnect."""
        logger.info("Bot shutting down…")
        if self._api_server is not None:
            self._api_server.should_exit = True
        if self._api_task is not None:
            await asyncio.gather(self._api_task, return_exceptions=True)
        await super().close()

    # -----------------------------------------------------------------------
    # HTTP API
    # -----------------------------------------------------------------------
    def start_api(self) -> None:
        """Serve :mod:`pridebot.api.main` on this bot's event loop."""
        from pridebot.api.main import app

        app.state.gateway = self.gateway
        app.state.registry = self.registry
        app.state.engine = self.engine
        app.state.config = self.cfg

        config = uvicorn.Config(
            app,
            host=self.cfg.api_host,
            port=self.cfg.api_port,
            log_config=None,   # keep the root logging configuration
        )
        self._api_server = uvicorn.Server(config)
        self._api_task = asyncio.create_task(self._api_server.serve())
        logger.info("Bot API is running on port %d", self.cfg.api_port)
