"""
/genderfluid — What genderfluidity is, its history, flag and days.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from pridebot.bot.translations import command_key, resolve_translations
from pridebot.services.embeds import build_info_embed

if TYPE_CHECKING:
    from pridebot.bot.core import PridebotBot

logger = logging.getLogger(__name__)

COMMAND_TYPE = "pride"
COMMAND_NAME = "genderfluid"
SECTIONS = ("what_is_genderfluid", "history", "flag", "days")
TITLE_EMOJI = "<:_:1112196520477999226>"


def build_embed(text: dict) -> discord.Embed:
    return build_info_embed(
        title=f"{TITLE_EMOJI} {text['title']}",
        description=text["description"],
        fields=[(text[key]["name"], text[key]["value"]) for key in SECTIONS],
    )


class Genderfluid(commands.Cog, name="Genderfluid"):

    def __init__(self, bot: PridebotBot) -> None:
        self.bot = bot

    @app_commands.command(
        name=app_commands.locale_str(
            COMMAND_NAME, key=command_key(COMMAND_TYPE, COMMAND_NAME, "name"),
        ),
        description=app_commands.locale_str(
            "Who stole my fluid!!!", key=command_key(COMMAND_TYPE, COMMAND_NAME, "description"),
        ),
    )
    async def genderfluid(self, interaction: discord.Interaction) -> None:
        logger.info(
            "/%s — guild=%s user=%s (%s)",
            COMMAND_NAME,
            interaction.guild_id,
            interaction.user,
            interaction.user.id,
        )

        locale = str(interaction.locale or "en-US")
        text, fell_back = resolve_translations(locale, COMMAND_TYPE, COMMAND_NAME)
        embed = build_embed(text)

        if fell_back:
            await interaction.response.send_message(
                f"Your language ({locale}) is not set up. Defaulting to English.",
                embed=embed,
            )
        else:
            await interaction.response.send_message(embed=embed)


async def setup(bot: PridebotBot) -> None:
    await bot.add_cog(Genderfluid(bot))
