"""
pridebot.services.voting_service — Vote Aggregation
====================================================

Webhooks from the bot-listing sites land here.  Each accepted vote bumps
three counters: the voter's per-site count, the site total and the
overall total.

All counter changes are single ``UPDATE … SET col = col + 1`` statements
executed in one transaction, so concurrent webhook deliveries never lose
an increment and ``overall_total`` always equals the sum of the site
totals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pridebot.database.engine import dialect_insert
from pridebot.database.models import (
    VOTE_COLUMNS,
    VOTING_RECORD_ID,
    VoteSource,
    VotingTotals,
    VotingUser,
)
from pridebot.errors import StorageError, VotingRecordMissing

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VoteTally:
    """Counters observed right after a vote was recorded."""
    source: VoteSource
    user_votes: int    # the voter's count for this site
    source_total: int  # everyone's votes for this site
    overall_total: int


def _ensure_voting_user(session: Session, user_id: str) -> None:
    """Insert an all-zero row for *user_id* unless one already exists."""
    session.execute(
        dialect_insert(session, VotingUser)
        .values(user_id=user_id, topgg=0, wumpus=0, botlist=0)
        .on_conflict_do_nothing(index_elements=[VotingUser.user_id])
    )


def record_vote(engine: Engine, user_id: str, source: VoteSource) -> VoteTally:
    """Count one vote by *user_id* on *source* and return the new counters.

    Raises
    ------
    VotingRecordMissing
        If the singleton voting record was never seeded.
    StorageError
        If the database is unreachable or rejects the update.
    """
    user_col, total_col = VOTE_COLUMNS[source]
    now = datetime.now(UTC)

    try:
        with Session(engine) as session:
            _ensure_voting_user(session, user_id)

            totals_result = session.execute(
                update(VotingTotals)
                .where(VotingTotals.id == VOTING_RECORD_ID)
                .values({
                    total_col: getattr(VotingTotals, total_col) + 1,
                    "overall_total": VotingTotals.overall_total + 1,
                })
            )
            if totals_result.rowcount == 0:
                session.rollback()
                raise VotingRecordMissing()

            session.execute(
                update(VotingUser)
                .where(VotingUser.user_id == user_id)
                .values({
                    user_col: getattr(VotingUser, user_col) + 1,
                    "last_voted_at": now,
                })
            )

            user_votes = session.scalar(
                select(getattr(VotingUser, user_col))
                .where(VotingUser.user_id == user_id)
            )
            totals = session.execute(
                select(
                    getattr(VotingTotals, total_col),
                    VotingTotals.overall_total,
                ).where(VotingTotals.id == VOTING_RECORD_ID)
            ).one()
            session.commit()
    except SQLAlchemyError as exc:
        raise StorageError(f"Failed to record {source} vote for {user_id}") from exc

    logger.info(
        "Recorded %s vote for %s (user=%d, site=%d, overall=%d)",
        source, user_id, user_votes, totals[0], totals[1],
    )
    return VoteTally(
        source=source,
        user_votes=user_votes,
        source_total=totals[0],
        overall_total=totals[1],
    )


def get_voting_totals(engine: Engine) -> VotingTotals:
    """Load the singleton aggregate record (detached)."""
    try:
        with Session(engine) as session:
            totals = session.get(VotingTotals, VOTING_RECORD_ID)
            if totals is not None:
                session.expunge(totals)
    except SQLAlchemyError as exc:
        raise StorageError("Failed to load voting totals") from exc

    if totals is None:
        raise VotingRecordMissing()
    return totals


def get_user_votes(session: Session, user_id: str) -> VotingUser | None:
    """Per-user vote counters, or None if *user_id* has never voted."""
    voter = session.get(VotingUser, user_id)
    if voter is None or voter.topgg + voter.wumpus + voter.botlist == 0:
        return None
    return voter
