"""Initial schema: voting totals/users, command usage, profiles

Revision ID: 5c2e7a91d4b0
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "5c2e7a91d4b0"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "voting_totals",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("overall_total", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("topgg_total", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("wumpus_total", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("botlist_total", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("id = 1", name="ck_voting_totals_singleton"),
    )
    # The aggregator only updates this row; it never creates it
    op.execute(
        "INSERT INTO voting_totals (id, overall_total, topgg_total, wumpus_total, botlist_total) "
        "VALUES (1, 0, 0, 0, 0)"
    )

    op.create_table(
        "voting_users",
        sa.Column("user_id", sa.String(32), primary_key=True),
        sa.Column("topgg", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("wumpus", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("botlist", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_voted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "topgg >= 0 AND wumpus >= 0 AND botlist >= 0",
            name="ck_voting_users_non_negative",
        ),
    )

    op.create_table(
        "command_usage",
        sa.Column("command_name", sa.String(100), primary_key=True),
        sa.Column("count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "profiles",
        sa.Column("user_id", sa.String(32), primary_key=True),
        sa.Column("data", postgresql.JSONB(), nullable=False, server_default="{}"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )


def downgrade() -> None:
    op.drop_table("profiles")
    op.drop_table("command_usage")
    op.drop_table("voting_users")
    op.drop_table("voting_totals")
