"""
pridebot.config — YAML Configuration Loader
============================================

Reads ``config.yaml`` for the non-secret settings (command prefix, API
bind address, notification channels).  Secrets such as the Discord token,
the Botlist.me shared secret and the GitHub token live in ``.env`` and are
read through :func:`botlist_secret` / :func:`github_token`.

Usage::

    from pridebot.config import load_config

    cfg = load_config()          # reads ./config.yaml by default
    print(cfg.api_port)          # 2610
    print(cfg.vote_channel_id)   # 1224815141921624186
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class PridebotConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    # Identity
    bot_name: str

    # Discord
    bot_prefix: str

    # HTTP API
    api_host: str
    api_port: int

    # Notification channels
    vote_channel_id: int
    github_channel_id: int

    # GitHub account that owns the tracked repositories
    github_owner: str

    # Optional
    dev_guild_id: int | None = None  # Sync slash commands to one guild only


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path = "config.yaml") -> PridebotConfig:
    """Read *path* and return a :class:`PridebotConfig` instance.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    KeyError
        If a required key is missing from the YAML file.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh)

    return PridebotConfig(
        bot_name=raw["bot_name"],
        bot_prefix=raw["bot_prefix"],
        api_host=raw.get("api_host", "0.0.0.0"),
        api_port=int(raw["api_port"]),
        vote_channel_id=int(raw["vote_channel_id"]),
        github_channel_id=int(raw["github_channel_id"]),
        github_owner=raw["github_owner"],
        dev_guild_id=(
            int(raw["dev_guild_id"]) if raw.get("dev_guild_id") else None
        ),
    )


def botlist_secret() -> str:
    """Shared secret Botlist.me sends in the ``Authorization`` header."""
    return os.getenv("BOTLIST_AUTH", "").strip()


def github_token() -> str | None:
    """Personal access token used for GitHub API calls, if configured."""
    return os.getenv("GITHUB_TOKEN", "").strip() or None
