"""
pridebot.bot.translations — Per-locale command text
====================================================

Command text lives in JSON bundles under
``pridebot/languages/<locale>/<command type>/<command>.json`` so
translators never touch Python code.  Each bundle may also carry a
``command`` block with the localized slash-command name and description,
which :class:`BundleTranslator` hands to Discord when the tree is synced.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path

import discord
from discord import app_commands

logger = logging.getLogger(__name__)

LANGUAGES_ROOT = Path(__file__).resolve().parent.parent / "languages"
DEFAULT_LOCALE = "en-US"


class TranslationNotFound(LookupError):
    """No bundle exists for the requested locale/command."""


@lru_cache(maxsize=256)
def load_translations(
    locale: str,
    command_type: str,
    command_name: str,
    root: Path = LANGUAGES_ROOT,
) -> dict:
    """Load the text bundle for one command in one locale.

    Raises
    ------
    TranslationNotFound
        If the bundle file doesn't exist.
    """
    path = root / locale / command_type / f"{command_name}.json"
    if not path.is_file():
        raise TranslationNotFound(f"No {locale} text for {command_type}/{command_name}")
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def resolve_translations(
    locale: str,
    command_type: str,
    command_name: str,
    root: Path = LANGUAGES_ROOT,
) -> tuple[dict, bool]:
    """Bundle for *locale*, falling back to :data:`DEFAULT_LOCALE`.

    Returns ``(bundle, fell_back)``.
    """
    try:
        return load_translations(locale, command_type, command_name, root), False
    except TranslationNotFound:
        logger.info("No %s bundle for /%s — using %s", locale, command_name, DEFAULT_LOCALE)
        return load_translations(DEFAULT_LOCALE, command_type, command_name, root), True


def command_key(command_type: str, command_name: str, field: str) -> str:
    """Extras key that :class:`BundleTranslator` resolves, e.g. ``pride/genderfluid/description``."""
    return f"{command_type}/{command_name}/{field}"


class BundleTranslator(app_commands.Translator):
    """Localize slash-command metadata from the ``command`` block of each bundle.

    Only strings declared as ``locale_str(..., key=command_key(...))`` are
    translated; everything else keeps its English text.
    """

    def __init__(self, root: Path = LANGUAGES_ROOT) -> None:
        self.root = root

    async def translate(
        self,
        string: app_commands.locale_str,
        locale: discord.Locale,
        context: app_commands.TranslationContext,
    ) -> str | None:
        key = string.extras.get("key")
        if not key:
            return None
        command_type, command_name, field = key.split("/")
        try:
            bundle = load_translations(locale.value, command_type, command_name, self.root)
        except TranslationNotFound:
            return None
        return bundle.get("command", {}).get(field)
