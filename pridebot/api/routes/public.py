"""
pridebot.api.routes.public — Read-only public endpoints
========================================================
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from pridebot.api.deps import get_engine, get_gateway, get_registry, get_session
from pridebot.bot.gateway import DiscordGateway
from pridebot.constants import EXTRA_COMMAND_COUNT
from pridebot.database.engine import get_session as db_session
from pridebot.database.engine import run_db
from pridebot.errors import NotFound
from pridebot.services.profile_service import get_profile
from pridebot.services.registry import CommandRegistry
from pridebot.services.usage_service import get_command_usage, total_command_usage
from pridebot.services.voting_service import get_user_votes, get_voting_totals

logger = logging.getLogger(__name__)

router = APIRouter(tags=["public"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _load_totals(engine: Engine) -> tuple[int, dict]:
    """Command usage sum + vote totals in one worker-thread hop."""
    with db_session(engine) as session:
        usage = total_command_usage(session)
    totals = get_voting_totals(engine)
    return usage, totals.to_dict()


# ---------------------------------------------------------------------------
# GET /stats
# ---------------------------------------------------------------------------
@router.get("/stats")
async def get_stats(
    engine: Engine = Depends(get_engine),
    gateway: DiscordGateway = Depends(get_gateway),
):
    """Bot-wide counters for the website's stats page."""
    snapshot = gateway.snapshot()
    total_usage, votes = await run_db(_load_totals, engine)
    commands_count = await gateway.registered_command_count() + EXTRA_COMMAND_COUNT

    return {
        "totalUserCount": snapshot.member_count,
        "currentGuildCount": snapshot.guild_count,
        "totalUsage": total_usage,
        "commandsCount": commands_count,
        "botuptime": snapshot.started_at,
        "vote": {
            "votingtotal": votes["OverallTotal"],
            "topggtotal": votes["TopGGTotal"],
            "wumpustotal": votes["WumpusTotal"],
            "botlisttotal": votes["BotListTotal"],
        },
    }


# ---------------------------------------------------------------------------
# GET /profiles/{user_id}
# ---------------------------------------------------------------------------
@router.get("/profiles/{user_id}")
def get_user_profile(user_id: str, session: Session = Depends(get_session)):
    profile = get_profile(session, user_id)
    if profile is None:
        raise NotFound("Profile not found")
    return profile


# ---------------------------------------------------------------------------
# GET /votes/{user_id}
# ---------------------------------------------------------------------------
@router.get("/votes/{user_id}")
def get_user_vote_record(user_id: str, session: Session = Depends(get_session)):
    voter = get_user_votes(session, user_id)
    if voter is None:
        raise NotFound("User has not voted yet!")
    return voter.to_dict()


# ---------------------------------------------------------------------------
# GET /commands[/{command_type}[/{command_name}]]
# ---------------------------------------------------------------------------
@router.get("/commands")
def list_commands(registry: CommandRegistry = Depends(get_registry)):
    """Every command type with its commands and their count."""
    return {
        command_type: {"commands": names, "count": len(names)}
        for command_type, names in registry.types().items()
    }


@router.get("/commands/{command_type}")
def list_commands_of_type(
    command_type: str,
    registry: CommandRegistry = Depends(get_registry),
):
    names = registry.commands(command_type)
    if names is None:
        raise NotFound("Command type not found")
    return {command_type: {"commands": names}}


@router.get("/commands/{command_type}/{command_name}")
def get_command(
    command_type: str,
    command_name: str,
    registry: CommandRegistry = Depends(get_registry),
    session: Session = Depends(get_session),
):
    """Usage count for one command (0 if it has never run)."""
    if registry.get(command_type, command_name) is None:
        raise NotFound("Command not found")
    return {
        "command_name": command_name,
        "command_usage": get_command_usage(session, command_name),
    }
