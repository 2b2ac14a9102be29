"""
tests/test_embeds.py — Notification Embed Tests
================================================
"""

from __future__ import annotations

from pridebot.constants import EMBED_FIELD_LIMIT, NOTIFY_COLOR, PRIDE_COLOR
from pridebot.database.models import VoteSource
from pridebot.services.embeds import (
    build_info_embed,
    build_push_embed,
    build_star_embed,
    build_vote_embed,
)
from pridebot.services.notifier import next_vote_timestamp


def _commit(n: int, message: str = "Update") -> dict:
    sha = f"{n:07d}" + "f" * 33
    return {"id": sha, "url": f"https://github.com/Sdriver1/Pridebot/commit/{sha}", "message": message}


class TestVoteEmbed:

    def test_botlist_wording(self):
        embed = build_vote_embed(
            VoteSource.BOTLIST,
            voter_id="7",
            bot_id="9",
            avatar_url=None,
            user_votes=3,
            source_total=40,
            next_vote_at=1_700_043_200,
        )

        assert embed.colour.value == NOTIFY_COLOR
        assert "[Botlist.me](https://botlist.me/bots/9/vote)" in embed.description
        assert "You can vote again <t:1700043200:R>." in embed.description
        assert "**<@7> Botlist Votes: 3**" in embed.description
        assert "**Total Botlist Votes: 40**" in embed.description
        assert embed.thumbnail.url is None

    def test_next_vote_is_twelve_hours_later(self):
        assert next_vote_timestamp(1_700_000_000.7) == 1_700_043_200


class TestPushEmbed:

    def test_single_commit(self):
        embed = build_push_embed("Pridebot-Website", "Sdriver1", [_commit(1, "Add stats page")], "05")

        assert embed.title == "1 New Pridebot-Website Commit (# 05)"
        assert embed.author.url == "https://github.com/Sdriver1"
        (field,) = embed.fields
        assert field.name == "Commit"
        assert field.value.startswith("[`0000001`](https://github.com/Sdriver1/Pridebot/commit/0000001")
        assert field.value.endswith(" - **Add stats page**")

    def test_long_commit_list_is_truncated(self):
        commits = [_commit(i, "x" * 80) for i in range(30)]

        embed = build_push_embed("Pridebot", "Sdriver1", commits, "230")

        assert embed.title.startswith("30 New Pridebot Commits")
        assert len(embed.fields[0].value) == EMBED_FIELD_LIMIT
        assert embed.fields[0].value.endswith("…")

    def test_no_commits(self):
        embed = build_push_embed("Pridebot", "Sdriver1", [], "200")

        assert embed.title.startswith("0 New Pridebot Commit ")
        assert embed.fields[0].value == "\u200b"


class TestOtherEmbeds:

    def test_star(self):
        embed = build_star_embed("octocat", "Pridebot", "Sdriver1/Pridebot")
        assert embed.description.startswith("## :star: New Star")
        assert "[Pridebot](https://github.com/Sdriver1/Pridebot)" in embed.description

    def test_info(self):
        embed = build_info_embed("Title", "Intro", [("A", "1"), ("B", "2")])
        assert embed.colour.value == PRIDE_COLOR
        assert [(f.name, f.value, f.inline) for f in embed.fields] == [
            ("A", "1", False),
            ("B", "2", False),
        ]
