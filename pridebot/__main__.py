"""
pridebot.__main__ — Entry point for ``python -m pridebot``
===========================================================

Wiring:
1. Load .env (secrets).
2. Load config.yaml (soft settings).
3. Create the SQLAlchemy engine, ensure tables exist, seed the voting record.
4. Scan the command registry.
5. Create the PridebotBot and run it; the HTTP API starts with it.

Run with::

    python -m pridebot
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

from pridebot.bot.core import PridebotBot
from pridebot.config import load_config
from pridebot.database.engine import create_db_engine, init_db
from pridebot.services.registry import CommandRegistry

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("pridebot")


def main() -> None:
    """Bootstrap and run Pridebot."""

    # 1. Environment variables (secrets).
    load_dotenv()

    token = os.getenv("DISCORD_TOKEN")
    if not token or token == "your-discord-bot-token-here":
        logger.critical(
            "DISCORD_TOKEN is not set.  "
            "Copy .env.example → .env and paste your bot token."
        )
        sys.exit(1)

    if not os.getenv("BOTLIST_AUTH"):
        logger.warning("BOTLIST_AUTH is not set — /botlist-votes will reject every request.")

    # 2. Soft configuration.
    cfg = load_config()
    logger.info("Config loaded — %s (API port %d)", cfg.bot_name, cfg.api_port)

    # 3. Database.
    engine = create_db_engine()
    init_db(engine)

    # 4. Command registry.
    registry = CommandRegistry.scan()

    # 5. Bot (blocks until Ctrl+C or SIGTERM).
    bot = PridebotBot(cfg=cfg, engine=engine, registry=registry)
    logger.info("Starting Pridebot…")
    try:
        bot.run(token, log_handler=None)
    except KeyboardInterrupt:
        logger.info("Shutting down gracefully…")


if __name__ == "__main__":
    main()
