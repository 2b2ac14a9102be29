"""
pridebot.services.embeds — Discord embed builders for notifications
====================================================================

All embed construction lives here so the notifier and command modules
only need to supply data — no layout concerns.
"""

from __future__ import annotations

import discord

from pridebot.constants import (
    EMBED_FIELD_LIMIT,
    GITHUB_ICON_URL,
    NOTIFY_COLOR,
    PRIDE_COLOR,
    VOTE_SITES,
)
from pridebot.database.models import VoteSource


def build_vote_embed(
    source: VoteSource,
    voter_id: str,
    bot_id: str,
    avatar_url: str | None,
    user_votes: int,
    source_total: int,
    next_vote_at: int,
) -> discord.Embed:
    """Thank-you embed for a vote reported by a bot-listing site."""
    site = VOTE_SITES[source.value]
    vote_url = site.vote_url.format(bot_id=bot_id)
    embed = discord.Embed(
        description=(
            f"**Thank you <@{voter_id}> for voting for <@{bot_id}> on "
            f"[{site.display_name}]({vote_url}) {site.emoji}**\n"
            f"You can vote again <t:{next_vote_at}:R>.\n\n"
            f"**<@{voter_id}> {site.counter_label} Votes: {user_votes}**\n"
            f"**Total {site.counter_label} Votes: {source_total}**"
        ),
        color=NOTIFY_COLOR,
        timestamp=discord.utils.utcnow(),
    )
    if avatar_url:
        embed.set_thumbnail(url=avatar_url)
    return embed


def _commit_lines(commits: list[dict]) -> str:
    lines = [
        f"[`{c['id'][:7]}`]({c['url']}) - **{c['message']}**"
        for c in commits
    ]
    text = "\n".join(lines)
    if len(text) > EMBED_FIELD_LIMIT:
        text = text[: EMBED_FIELD_LIMIT - 1] + "…"
    return text


def build_push_embed(
    repo_name: str,
    pusher_name: str,
    commits: list[dict],
    commit_index: str,
) -> discord.Embed:
    """Embed listing the commits of a ``push`` event."""
    count = len(commits)
    noun = "Commits" if count > 1 else "Commit"
    embed = discord.Embed(
        title=f"{count} New {repo_name} {noun} (# {commit_index})",
        color=NOTIFY_COLOR,
        timestamp=discord.utils.utcnow(),
    )
    embed.set_author(
        name=pusher_name,
        icon_url=GITHUB_ICON_URL,
        url=f"https://github.com/{pusher_name}",
    )
    embed.add_field(name=noun, value=_commit_lines(commits) or "\u200b", inline=False)
    return embed


def build_star_embed(sender_login: str, repo_name: str, repo_full_name: str) -> discord.Embed:
    """Thank-you embed for a new repository star."""
    return discord.Embed(
        description=(
            "## :star: New Star\n"
            f"**Thank you [{sender_login}](https://github.com/{sender_login}) for "
            f"starring [{repo_name}](https://github.com/{repo_full_name})**"
        ),
        color=NOTIFY_COLOR,
        timestamp=discord.utils.utcnow(),
    )


def build_info_embed(
    title: str,
    description: str,
    fields: list[tuple[str, str]],
) -> discord.Embed:
    """Informational embed used by the pride slash commands."""
    embed = discord.Embed(title=title, description=description, color=PRIDE_COLOR)
    for name, value in fields:
        embed.add_field(name=name, value=value, inline=False)
    return embed
