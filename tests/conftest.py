"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock

import discord
import pytest
from sqlalchemy import Engine, create_engine

# ---------------------------------------------------------------------------
# Make JSONB columns work in SQLite for testing.
# ---------------------------------------------------------------------------
from sqlalchemy.dialects.postgresql import JSONB as PG_JSONB
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from pridebot.bot.gateway import BotSnapshot, DiscordIdentity
from pridebot.config import PridebotConfig
from pridebot.database.models import Base
from pridebot.database.seed import seed_voting_record
from pridebot.errors import DiscordError
from pridebot.services.registry import CommandRegistry

_jsonb_sqlite_registered = False

VOTE_CHANNEL_ID = 1224815141921624186
GITHUB_CHANNEL_ID = 1101742377372237906
BOTLIST_SECRET = "botlist-test-secret"


def _register_jsonb_sqlite_compat():
    """Register SQLite compilation for PG JSONB type (idempotent)."""
    global _jsonb_sqlite_registered
    if _jsonb_sqlite_registered:
        return
    from sqlalchemy.ext.compiler import compiles

    @compiles(PG_JSONB, "sqlite")
    def _compile_jsonb_as_text(type_, compiler, **kw):
        return "TEXT"

    _jsonb_sqlite_registered = True


_register_jsonb_sqlite_compat()


def run_async(coro):
    """Run a coroutine to completion without pytest-asyncio."""
    return asyncio.run(coro)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------
@pytest.fixture
def empty_engine() -> Engine:
    """In-memory SQLite engine with all tables but no voting record.

    StaticPool keeps one shared connection so ``asyncio.to_thread`` workers
    (``run_db``) see the same in-memory database.
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_engine(empty_engine: Engine) -> Engine:
    """In-memory engine with the singleton voting record seeded."""
    seed_voting_record(empty_engine)
    return empty_engine


@pytest.fixture
def db_session(db_engine: Engine):
    with Session(db_engine) as session:
        yield session
        session.rollback()


# ---------------------------------------------------------------------------
# Discord
# ---------------------------------------------------------------------------
def make_channel(
    channel_id: int,
    channel_type: discord.ChannelType = discord.ChannelType.text,
) -> AsyncMock:
    channel = AsyncMock()
    channel.id = channel_id
    channel.type = channel_type
    channel.send = AsyncMock()
    return channel


class FakeGateway:
    """Stand-in for :class:`pridebot.bot.gateway.DiscordGateway`."""

    def __init__(
        self,
        *,
        channels: dict[int, object] | None = None,
        member_counts: list[int] | None = None,
        command_count: int = 10,
        started_at: int = 1_700_000_000,
        fail_users: bool = False,
    ) -> None:
        self.channels = channels if channels is not None else {
            VOTE_CHANNEL_ID: make_channel(VOTE_CHANNEL_ID),
            GITHUB_CHANNEL_ID: make_channel(GITHUB_CHANNEL_ID),
        }
        self.member_counts = member_counts if member_counts is not None else [120, 30, 50]
        self.command_count = command_count
        self.started_at = started_at
        self.fail_users = fail_users
        self.resolved: list[str] = []

    def snapshot(self) -> BotSnapshot:
        return BotSnapshot(
            guild_count=len(self.member_counts),
            member_count=sum(self.member_counts),
            started_at=self.started_at,
        )

    async def resolve_user(self, user_id: str) -> DiscordIdentity:
        if self.fail_users:
            raise DiscordError(f"Could not fetch Discord user {user_id!r}")
        self.resolved.append(user_id)
        return DiscordIdentity(
            id=int(user_id),
            name=f"user{user_id}",
            avatar_url=f"https://cdn.discordapp.com/embed/avatars/{int(user_id) % 6}.png",
        )

    async def get_channel(self, channel_id: int):
        return self.channels.get(channel_id)

    async def registered_command_count(self) -> int:
        return self.command_count

    def sent_embeds(self, channel_id: int) -> list[discord.Embed]:
        channel = self.channels[channel_id]
        return [c.kwargs["embed"] for c in channel.send.await_args_list]


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def test_config() -> PridebotConfig:
    return PridebotConfig(
        bot_name="Pridebot",
        bot_prefix="!",
        api_host="127.0.0.1",
        api_port=2610,
        vote_channel_id=VOTE_CHANNEL_ID,
        github_channel_id=GITHUB_CHANNEL_ID,
        github_owner="Sdriver1",
    )


# ---------------------------------------------------------------------------
# Command registry
# ---------------------------------------------------------------------------
def write_commands(root: Path, layout: dict[str, list[str]]) -> Path:
    """Create ``<root>/<type>/<name>.py`` files for *layout*."""
    for command_type, names in layout.items():
        type_dir = root / command_type
        type_dir.mkdir(parents=True)
        (type_dir / "__init__.py").write_text("")
        for name in names:
            (type_dir / f"{name}.py").write_text("async def setup(bot):\n    pass\n")
    return root


@pytest.fixture
def registry(tmp_path: Path) -> CommandRegistry:
    root = write_commands(tmp_path / "commands", {
        "pride": ["genderfluid", "lesbian", "transgender"],
        "fun": ["gaydar"],
    })
    return CommandRegistry.scan(root, package="testcommands")


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------
@pytest.fixture
def client(db_engine, gateway, test_config, registry):
    """FastAPI TestClient wired to the in-memory DB and the fake gateway."""
    from fastapi.testclient import TestClient

    from pridebot.api.deps import (
        get_botlist_secret,
        get_config,
        get_engine,
        get_gateway,
        get_registry,
    )
    from pridebot.api.main import app

    app.dependency_overrides[get_engine] = lambda: db_engine
    app.dependency_overrides[get_config] = lambda: test_config
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_botlist_secret] = lambda: BOTLIST_SECRET
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
