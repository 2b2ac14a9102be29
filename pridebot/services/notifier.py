"""
pridebot.services.notifier — Webhook Notifications
===================================================

Turns inbound webhooks into Discord embeds:

- **Votes** (Top.gg, Wumpus.Store, Botlist.me): resolve the voter, count
  the vote, post a thank-you with the updated counters and the time the
  next vote becomes available.
- **GitHub** (``push`` / ``star``): post the pushed commits or thank the
  stargazer.

Discord failures are raised as :class:`DiscordError`; a missing or
non-text target channel as :class:`BadUpstream`.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import TYPE_CHECKING, Any

import discord

from pridebot.constants import VOTE_COOLDOWN_HOURS
from pridebot.database.engine import run_db
from pridebot.errors import BadUpstream, DiscordError
from pridebot.services.embeds import build_push_embed, build_star_embed, build_vote_embed
from pridebot.services.github_service import format_commit_index, total_commits_for_repo
from pridebot.services.voting_service import VoteTally, record_vote

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from pridebot.bot.gateway import DiscordGateway
    from pridebot.config import PridebotConfig
    from pridebot.database.models import VoteSource

logger = logging.getLogger(__name__)


class GitHubOutcome(Enum):
    """What happened to a GitHub webhook delivery."""
    SENT = "sent"
    IGNORED = "ignored"


def next_vote_timestamp(now: float | None = None) -> int:
    """Unix time at which the voter may vote again."""
    now = time.time() if now is None else now
    return int(now) + VOTE_COOLDOWN_HOURS * 3600


# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------
async def deliver(gateway: DiscordGateway, channel_id: int, embed: discord.Embed) -> None:
    """Post *embed* to a text channel.

    Raises
    ------
    BadUpstream
        If the channel doesn't exist or isn't a guild text channel.
    DiscordError
        If the lookup or the send fails.
    """
    channel = await gateway.get_channel(channel_id)
    if channel is None or getattr(channel, "type", None) != discord.ChannelType.text:
        raise BadUpstream("Channel not found or is not a text channel")

    try:
        await channel.send(embed=embed)
    except discord.HTTPException as exc:
        raise DiscordError(f"Failed to send message to channel {channel_id}") from exc


# ---------------------------------------------------------------------------
# Votes
# ---------------------------------------------------------------------------
async def notify_vote(
    gateway: DiscordGateway,
    engine: Engine,
    cfg: PridebotConfig,
    source: VoteSource,
    voter_id: str,
    bot_id: str,
) -> VoteTally:
    """Count a vote and announce it in the vote channel."""
    identity = await gateway.resolve_user(voter_id)

    tally = await run_db(record_vote, engine, voter_id, source)

    embed = build_vote_embed(
        source,
        voter_id=voter_id,
        bot_id=bot_id,
        avatar_url=identity.avatar_url,
        user_votes=tally.user_votes,
        source_total=tally.source_total,
        next_vote_at=next_vote_timestamp(),
    )
    await deliver(gateway, cfg.vote_channel_id, embed)
    logger.info("%s vote by %s (%s) announced", source, identity.name, voter_id)
    return tally


# ---------------------------------------------------------------------------
# GitHub
# ---------------------------------------------------------------------------
async def notify_github(
    gateway: DiscordGateway,
    cfg: PridebotConfig,
    event: str | None,
    payload: dict[str, Any],
    token: str | None = None,
) -> GitHubOutcome:
    """Announce a GitHub ``push`` or new ``star``; ignore everything else."""
    repo = payload.get("repository") or {}
    repo_name = repo.get("name", "")

    if event == "push":
        total = await total_commits_for_repo(repo_name, cfg.github_owner, token)
        embed = build_push_embed(
            repo_name=repo_name,
            pusher_name=(payload.get("pusher") or {}).get("name", "unknown"),
            commits=payload.get("commits") or [],
            commit_index=format_commit_index(repo_name, total),
        )
    elif event == "star" and payload.get("action") == "created":
        embed = build_star_embed(
            sender_login=(payload.get("sender") or {}).get("login", "unknown"),
            repo_name=repo_name,
            repo_full_name=repo.get("full_name", repo_name),
        )
    elif event == "star" and payload.get("action") == "deleted":
        logger.info(
            "%s removed their star from %s",
            (payload.get("sender") or {}).get("login", "unknown"), repo_name,
        )
        return GitHubOutcome.IGNORED
    else:
        logger.info("Unhandled GitHub event: %s", event)
        return GitHubOutcome.IGNORED

    await deliver(gateway, cfg.github_channel_id, embed)
    return GitHubOutcome.SENT
