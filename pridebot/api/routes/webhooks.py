"""
pridebot.api.routes.webhooks — Inbound webhooks
================================================

- ``POST /topgg-votes``   — Top.gg vote      ``{user, bot}``
- ``POST /wumpus-votes``  — Wumpus.Store     ``{userId, botId}``
- ``POST /botlist-votes`` — Botlist.me       ``{user, bot}`` + shared secret
- ``POST /github``        — GitHub ``push`` / ``star`` events

Duplicate deliveries are not deduplicated: a retried webhook counts twice.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from sqlalchemy import Engine

from pridebot.api.deps import get_config, get_engine, get_gateway, require_botlist_auth
from pridebot.bot.gateway import DiscordGateway
from pridebot.config import PridebotConfig, github_token
from pridebot.database.models import VoteSource
from pridebot.services.notifier import GitHubOutcome, notify_github, notify_vote

router = APIRouter(tags=["webhooks"])

SUCCESS = "Success!"


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------
class ListingVote(BaseModel):
    """Top.gg and Botlist.me vote body."""
    model_config = ConfigDict(extra="ignore")

    user: str
    bot: str


class WumpusVote(BaseModel):
    model_config = ConfigDict(extra="ignore")

    userId: str  # noqa: N815
    botId: str  # noqa: N815


class GitHubCommit(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    url: str
    message: str


class GitHubRepository(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    full_name: str = ""


class GitHubPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    repository: GitHubRepository | None = None
    action: str | None = None
    pusher: dict | None = None
    sender: dict | None = None
    commits: list[GitHubCommit] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Vote webhooks
# ---------------------------------------------------------------------------
@router.post("/topgg-votes", response_class=PlainTextResponse)
async def topgg_vote(
    body: ListingVote,
    gateway: DiscordGateway = Depends(get_gateway),
    engine: Engine = Depends(get_engine),
    cfg: PridebotConfig = Depends(get_config),
):
    await notify_vote(gateway, engine, cfg, VoteSource.TOPGG, body.user, body.bot)
    return SUCCESS


@router.post("/wumpus-votes", response_class=PlainTextResponse)
async def wumpus_vote(
    body: WumpusVote,
    gateway: DiscordGateway = Depends(get_gateway),
    engine: Engine = Depends(get_engine),
    cfg: PridebotConfig = Depends(get_config),
):
    await notify_vote(gateway, engine, cfg, VoteSource.WUMPUS, body.userId, body.botId)
    return SUCCESS


@router.post(
    "/botlist-votes",
    response_class=PlainTextResponse,
    dependencies=[Depends(require_botlist_auth)],
)
async def botlist_vote(
    request: Request,
    gateway: DiscordGateway = Depends(get_gateway),
    engine: Engine = Depends(get_engine),
    cfg: PridebotConfig = Depends(get_config),
):
    """Votes from Botlist.me.

    The body is parsed only after the shared secret has been accepted, so an
    unauthenticated request gets 401 whatever it carries.
    """
    try:
        body = ListingVote.model_validate_json(await request.body())
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc

    await notify_vote(gateway, engine, cfg, VoteSource.BOTLIST, body.user, body.bot)
    return SUCCESS


# ---------------------------------------------------------------------------
# GitHub webhook
# ---------------------------------------------------------------------------
@router.post("/github", response_class=PlainTextResponse)
async def github_event(
    body: GitHubPayload,
    x_github_event: Annotated[str | None, Header()] = None,
    gateway: DiscordGateway = Depends(get_gateway),
    cfg: PridebotConfig = Depends(get_config),
):
    """Announce pushes and new stars; other events get 204 No Content."""
    outcome = await notify_github(
        gateway, cfg, x_github_event, body.model_dump(), token=github_token(),
    )
    if outcome is GitHubOutcome.IGNORED:
        return Response(status_code=204)
    return SUCCESS
