"""accounts, transaction history, notifications and revoked tokens

Revision ID: 3f9c2a7d1b40
Revises: 
Create Date: 2026-10-18 09:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c2a7d1b40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=100), nullable=False),
        sa.Column("father_name", sa.String(length=100)),
        sa.Column("cnic", sa.String(length=15)),
        sa.Column("balance_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("currency", sa.String(length=10), nullable=False, server_default="PKR"),
        sa.Column("email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
        sa.CheckConstraint("balance_cents >= 0", name="ck_accounts_balance_non_negative"),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)
    op.create_index("ix_accounts_cnic", "accounts", ["cnic"], unique=True)

    op.create_table(
        "transaction_records",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("transfer_id", sa.String(length=64), nullable=False),
        sa.Column("account_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(length=10), nullable=False, server_default="PKR"),
        sa.Column("counterparty_id", sa.String(length=36), nullable=False),
        sa.Column("counterparty_name", sa.String(length=100)),
        sa.Column("counterparty_email", sa.String(length=255)),
        sa.Column("counterparty_cnic", sa.String(length=15)),
        sa.Column("note", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="completed"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("transfer_id", "account_id", name="uq_transaction_records_transfer_account"),
    )
    op.create_index("ix_transaction_records_transfer_id", "transaction_records", ["transfer_id"])
    op.create_index("ix_transaction_records_account_id", "transaction_records", ["account_id"])
    op.create_index("ix_transaction_records_created_at", "transaction_records", ["created_at"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("account_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("type", sa.String(length=40), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("message", sa.String(length=255), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("transfer_id", sa.String(length=64), nullable=False),
        sa.Column("counterparty_name", sa.String(length=100)),
        sa.Column("counterparty_email", sa.String(length=255)),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("transfer_id", "account_id", name="uq_notifications_transfer_account"),
    )
    op.create_index("ix_notifications_account_id", "notifications", ["account_id"])
    op.create_index("ix_notifications_created_at", "notifications", ["created_at"])

    op.create_table(
        "revoked_tokens",
        sa.Column("jti", sa.String(length=64), primary_key=True),
        sa.Column("account_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revoked_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_revoked_tokens_account_id", "revoked_tokens", ["account_id"])


def downgrade() -> None:
    op.drop_index("ix_revoked_tokens_account_id", table_name="revoked_tokens")
    op.drop_table("revoked_tokens")
    op.drop_index("ix_notifications_created_at", table_name="notifications")
    op.drop_index("ix_notifications_account_id", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_transaction_records_created_at", table_name="transaction_records")
    op.drop_index("ix_transaction_records_account_id", table_name="transaction_records")
    op.drop_index("ix_transaction_records_transfer_id", table_name="transaction_records")
    op.drop_table("transaction_records")
    op.drop_index("ix_accounts_cnic", table_name="accounts")
    op.drop_index("ix_accounts_email", table_name="accounts")
    op.drop_table("accounts")
