"""create tickets table

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 10:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "20261018_0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "tickets",
        sa.Column("seq", sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("ticket_code", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("priority", sa.String(length=10), nullable=False, server_default="MEDIUM"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="SCHEDULED"),
        sa.Column("category", sa.String(length=100), nullable=False, server_default="General"),
        sa.Column("deadline", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("csam_name", sa.Text(), nullable=False, server_default=""),
        sa.Column("tpid", sa.Text(), nullable=False, server_default=""),
        sa.Column("agreement_id", sa.Text(), nullable=False, server_default=""),
        sa.Column("customer_name", sa.Text(), nullable=False, server_default=""),
        sa.Column("customer_type", sa.String(length=20), nullable=False, server_default="SMB"),
        sa.Column("notes", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column(
            "subtasks",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("assigned_to", sa.Text(), nullable=True),
        sa.Column("tags", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.CheckConstraint(
            "priority IN ('LOW', 'MEDIUM', 'HIGH', 'URGENT')",
            name="ck_tickets_priority_valid",
        ),
        sa.CheckConstraint(
            "status IN ('SCHEDULED', 'IN_PROGRESS', 'ACTIVE', 'OVERDUE', 'COMPLETED')",
            name="ck_tickets_status_valid",
        ),
        sa.CheckConstraint(
            "customer_type IN ('ENTERPRISE', 'SMB', 'STARTUP')",
            name="ck_tickets_customer_type_valid",
        ),
        sa.CheckConstraint("updated_at >= created_at", name="ck_tickets_updated_after_created"),
    )

    op.create_index("uk_tickets_ticket_code", "tickets", ["ticket_code"], unique=True)
    op.create_index("idx_tickets_seq", "tickets", ["seq"], unique=True)
    op.create_index("idx_tickets_status", "tickets", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_tickets_status", table_name="tickets")
    op.drop_index("idx_tickets_seq", table_name="tickets")
    op.drop_index("uk_tickets_ticket_code", table_name="tickets")
    op.drop_table("tickets")
