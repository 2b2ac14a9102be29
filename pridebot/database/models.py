"""
pridebot.database.models — SQLAlchemy 2.0 Data Models
======================================================

Tables:
- voting_totals   — Singleton row of aggregate vote counters (id = 1)
- voting_users    — Per-user vote counters, one column per vote site
- command_usage   — Per-command execution counter
- profiles        — Free-form user profile fields (JSONB)
"""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Integer,
    String,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Primary key of the one and only voting_totals row
VOTING_RECORD_ID = 1


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all Pridebot ORM models."""


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class VoteSource(enum.StrEnum):
    """Bot-listing sites that report votes through webhooks."""
    TOPGG = "TopGG"
    WUMPUS = "Wumpus"
    BOTLIST = "BotList"


# ---------------------------------------------------------------------------
# VotingTotals — aggregate counters (singleton)
# ---------------------------------------------------------------------------
class VotingTotals(Base):
    __tablename__ = "voting_totals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    overall_total: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    topgg_total: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    wumpus_total: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    botlist_total: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint(f"id = {VOTING_RECORD_ID}", name="ck_voting_totals_singleton"),
    )

    def to_dict(self) -> dict:
        return {
            "OverallTotal": self.overall_total,
            "TopGGTotal": self.topgg_total,
            "WumpusTotal": self.wumpus_total,
            "BotListTotal": self.botlist_total,
        }

    def __repr__(self) -> str:
        return f"<VotingTotals overall={self.overall_total}>"


# ---------------------------------------------------------------------------
# VotingUser — per-user counters
# ---------------------------------------------------------------------------
class VotingUser(Base):
    __tablename__ = "voting_users"

    user_id: Mapped[str] = mapped_column(String(32), primary_key=True)  # Discord snowflake
    topgg: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    wumpus: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    botlist: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    last_voted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )

    __table_args__ = (
        CheckConstraint(
            "topgg >= 0 AND wumpus >= 0 AND botlist >= 0",
            name="ck_voting_users_non_negative",
        ),
    )

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "votingTopGG": self.topgg,
            "votingWumpus": self.wumpus,
            "votingBotList": self.botlist,
        }

    def __repr__(self) -> str:
        return f"<VotingUser id={self.user_id} topgg={self.topgg} wumpus={self.wumpus} botlist={self.botlist}>"


# VoteSource → (VotingUser column, VotingTotals column)
VOTE_COLUMNS: dict[VoteSource, tuple[str, str]] = {
    VoteSource.TOPGG: ("topgg", "topgg_total"),
    VoteSource.WUMPUS: ("wumpus", "wumpus_total"),
    VoteSource.BOTLIST: ("botlist", "botlist_total"),
}


# ---------------------------------------------------------------------------
# CommandUsage — one row per slash command
# ---------------------------------------------------------------------------
class CommandUsage(Base):
    __tablename__ = "command_usage"

    command_name: Mapped[str] = mapped_column(String(100), primary_key=True)
    count: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    last_used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )

    def __repr__(self) -> str:
        return f"<CommandUsage {self.command_name!r} count={self.count}>"


# ---------------------------------------------------------------------------
# Profile — free-form fields owned by the profile commands
# ---------------------------------------------------------------------------
class Profile(Base):
    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    data: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def to_dict(self) -> dict:
        return {**(self.data or {}), "userId": self.user_id}

    def __repr__(self) -> str:
        return f"<Profile user={self.user_id}>"
