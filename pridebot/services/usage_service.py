"""
pridebot.services.usage_service — Command Usage Counters
=========================================================

The bot bumps a counter every time an application command completes; the
API reads the counters back for ``/api/stats`` and the per-command
endpoint.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from pridebot.database.engine import dialect_insert
from pridebot.database.models import CommandUsage

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


def record_command_usage(engine: Engine, command_name: str) -> None:
    """Increment the usage counter for *command_name*, creating it at 1."""
    with Session(engine) as session:
        session.execute(
            dialect_insert(session, CommandUsage)
            .values(command_name=command_name, count=0)
            .on_conflict_do_nothing(index_elements=[CommandUsage.command_name])
        )
        session.execute(
            update(CommandUsage)
            .where(CommandUsage.command_name == command_name)
            .values(count=CommandUsage.count + 1, last_used_at=datetime.now(UTC))
        )
        session.commit()
    logger.debug("Command usage recorded: /%s", command_name)


def total_command_usage(session: Session) -> int:
    """Sum of every command's usage counter."""
    return session.scalar(select(func.coalesce(func.sum(CommandUsage.count), 0))) or 0


def get_command_usage(session: Session, command_name: str) -> int:
    """Usage count for one command; 0 if it has never run."""
    usage = session.get(CommandUsage, command_name)
    return usage.count if usage else 0
