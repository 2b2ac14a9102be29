"""
pridebot.api.deps — FastAPI dependency injection
=================================================

The live bot, the command registry, the DB engine and the config are
attached to ``app.state`` at startup and handed to routes through these
functions, so tests can swap any of them with ``app.dependency_overrides``.
"""

from __future__ import annotations

import secrets
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from pridebot.bot.gateway import DiscordGateway
from pridebot.config import PridebotConfig, botlist_secret, load_config
from pridebot.database.engine import create_db_engine
from pridebot.errors import DiscordError
from pridebot.services.registry import CommandRegistry


@lru_cache(maxsize=1)
def _standalone_engine() -> Engine:
    return create_db_engine()


@lru_cache(maxsize=1)
def _standalone_config() -> PridebotConfig:
    return load_config()


def get_engine(request: Request) -> Engine:
    """The bot's engine; one built from ``DATABASE_URL`` when the API runs alone."""
    engine = getattr(request.app.state, "engine", None)
    return engine if engine is not None else _standalone_engine()


def get_config(request: Request) -> PridebotConfig:
    config = getattr(request.app.state, "config", None)
    return config if config is not None else _standalone_config()


def get_session(engine: Annotated[Engine, Depends(get_engine)]):
    with Session(engine) as session:
        yield session


def get_gateway(request: Request) -> DiscordGateway:
    """The gateway the bot attached when it started the API."""
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise DiscordError("Discord client is not connected")
    return gateway


def get_registry(request: Request) -> CommandRegistry:
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        registry = CommandRegistry.scan()
        request.app.state.registry = registry
    return registry


def get_botlist_secret() -> str:
    return botlist_secret()


def require_botlist_auth(
    authorization: Annotated[str | None, Header()] = None,
    secret: str = Depends(get_botlist_secret),
) -> None:
    """Reject Botlist.me deliveries without the shared secret. Raises 401."""
    if not secret or not authorization or not secrets.compare_digest(
        authorization.encode(), secret.encode()
    ):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED)
