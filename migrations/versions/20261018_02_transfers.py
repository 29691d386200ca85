"""transfers table keyed by transfer id

Revision ID: 8b1e4c6f2a93
Revises: 3f9c2a7d1b40
Create Date: 2026-10-18 16:45:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "8b1e4c6f2a93"
down_revision = "3f9c2a7d1b40"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "transfers",
        sa.Column("transfer_id", sa.String(length=64), primary_key=True),
        sa.Column("sender_id", sa.String(length=36), nullable=False),
        sa.Column("recipient_id", sa.String(length=36), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(length=10), nullable=False, server_default="PKR"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_transfers_sender_id", "transfers", ["sender_id"])
    op.create_index("ix_transfers_recipient_id", "transfers", ["recipient_id"])

    # Earlier transfers are known only through their send legs.
    op.execute(
        """
        INSERT INTO transfers (transfer_id, sender_id, recipient_id, amount_cents, currency, created_at)
        SELECT transfer_id, account_id, counterparty_id, amount_cents, currency, created_at
        FROM transaction_records
        WHERE type = 'send'
        """
    )


def downgrade() -> None:
    op.drop_index("ix_transfers_recipient_id", table_name="transfers")
    op.drop_index("ix_transfers_sender_id", table_name="transfers")
    op.drop_table("transfers")
