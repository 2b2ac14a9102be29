"""
Alembic environment for the Pridebot schema
============================================

Migrations run against the same ``DATABASE_URL`` the bot uses (read from
``.env``); ``sqlalchemy.url`` in ``alembic.ini`` is only a fallback for
generating offline SQL.

    alembic upgrade head            # apply
    alembic upgrade head --sql      # print the DDL instead
"""

from __future__ import annotations

import logging
import os
from logging.config import fileConfig

from dotenv import load_dotenv
from sqlalchemy import create_engine, pool

from alembic import context
from pridebot.database.models import Base

load_dotenv()

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

logger = logging.getLogger("alembic.env")


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    logger.warning("DATABASE_URL is not set; using sqlalchemy.url from alembic.ini")
    return context.config.get_main_option("sqlalchemy.url")


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        compare_server_default=True,
        **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    _configure(
        url=_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    engine = create_engine(_database_url(), poolclass=pool.NullPool)
    with engine.connect() as connection:
        _configure(connection=connection)
    engine.dispose()
