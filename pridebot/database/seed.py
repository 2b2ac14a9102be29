"""
pridebot.database.seed — Voting Record Seeder
==============================================

The vote aggregator only ever *updates* the singleton ``voting_totals``
row.  This seeder creates it once; re-running it leaves existing counters
untouched.
"""

from __future__ import annotations

import logging

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from pridebot.database.models import VOTING_RECORD_ID, VotingTotals

logger = logging.getLogger(__name__)


def seed_voting_record(engine: Engine) -> bool:
    """Insert the singleton voting record if it doesn't exist.

    Returns True when a row was created.
    """
    with Session(engine) as session:
        if session.get(VotingTotals, VOTING_RECORD_ID) is not None:
            return False
        session.add(VotingTotals(
            id=VOTING_RECORD_ID,
            overall_total=0,
            topgg_total=0,
            wumpus_total=0,
            botlist_total=0,
        ))
        session.commit()

    logger.info("Seeded voting record (id=%d).", VOTING_RECORD_ID)
    return True
