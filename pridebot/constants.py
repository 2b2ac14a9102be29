"""
pridebot.constants — Shared Constants
======================================

Presentation constants for notification embeds, the vote-site catalogue
and the GitHub repositories whose pushes are announced.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Embed presentation
# ---------------------------------------------------------------------------
NOTIFY_COLOR = 0xFF00EA
PRIDE_COLOR = 0xFF00AE

GITHUB_ICON_URL = "https://cdn.discordapp.com/emojis/1226912165982638174.png"

# Discord caps a single embed field value at 1024 characters
EMBED_FIELD_LIMIT = 1024


# ---------------------------------------------------------------------------
# Voting
# ---------------------------------------------------------------------------
VOTE_COOLDOWN_HOURS = 12


@dataclass(frozen=True, slots=True)
class VoteSite:
    """How a bot-listing site is presented in vote notifications."""
    display_name: str
    vote_url: str        # formatted with ``bot_id``
    emoji: str
    counter_label: str   # "<@user> {label} Votes: n" / "Total {label} Votes: n"


# Keyed by ``VoteSource.value``
VOTE_SITES: dict[str, VoteSite] = {
    "TopGG": VoteSite(
        display_name="Top.gg",
        vote_url="https://top.gg/bot/{bot_id}/vote",
        emoji="<:_:1195866944482590731>",
        counter_label="Top.gg",
    ),
    "Wumpus": VoteSite(
        display_name="Wumpus.Store",
        vote_url="https://wumpus.store/bot/{bot_id}/vote",
        emoji="<:_:1198663251580440697>",
        counter_label="Wumpus.Store",
    ),
    "BotList": VoteSite(
        display_name="Botlist.me",
        vote_url="https://botlist.me/bots/{bot_id}/vote",
        emoji="<:_:1227425669642719282>",
        counter_label="Botlist",
    ),
}


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
# Context-menu commands are registered outside the slash-command tree
EXTRA_COMMAND_COUNT = 2


# ---------------------------------------------------------------------------
# GitHub
# ---------------------------------------------------------------------------
# Webhook repository name → repository whose commits are counted
TRACKED_REPOSITORIES: dict[str, str] = {
    "Pridebot": "Pridebot",
    "Pridebot-Website": "Pridebot-Website",
}

# Leading digit prepended to the commit index of specific repositories
COMMIT_INDEX_PREFIX: dict[str, str] = {
    "Pridebot": "2",
}
