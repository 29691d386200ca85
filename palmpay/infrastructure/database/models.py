"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from palmpay.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (CheckConstraint("balance_cents >= 0", name="ck_accounts_balance_non_negative"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(100), nullable=False)
    father_name = Column(String(100))
    cnic = Column(String(15), unique=True, index=True)
    balance_cents = Column(Integer, nullable=False, default=0)
    currency = Column(String(10), nullable=False, default="PKR")
    email_verified = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    last_login_at = Column(DateTime(timezone=True))


class Transfer(Base):
    __tablename__ = "transfers"

    transfer_id = Column(String(64), primary_key=True)
    sender_id = Column(String(36), nullable=False, index=True)
    recipient_id = Column(String(36), nullable=False, index=True)
    amount_cents = Column(Integer, nullable=False)
    currency = Column(String(10), nullable=False, default="PKR")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class TransactionRecord(Base):
    __tablename__ = "transaction_records"
    __table_args__ = (UniqueConstraint("transfer_id", "account_id", name="uq_transaction_records_transfer_account"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    transfer_id = Column(String(64), nullable=False, index=True)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # send, receive
    amount_cents = Column(Integer, nullable=False)
    currency = Column(String(10), nullable=False, default="PKR")
    counterparty_id = Column(String(36), nullable=False)
    counterparty_name = Column(String(100))
    counterparty_email = Column(String(255))
    counterparty_cnic = Column(String(15))
    note = Column(String(255), nullable=False, default="")
    status = Column(String(20), nullable=False, default="completed")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)


class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (UniqueConstraint("transfer_id", "account_id", name="uq_notifications_transfer_account"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    type = Column(String(40), nullable=False)  # transaction_sent, transaction_received
    title = Column(String(100), nullable=False)
    message = Column(String(255), nullable=False)
    amount_cents = Column(Integer, nullable=False)
    transfer_id = Column(String(64), nullable=False)
    counterparty_name = Column(String(100))
    counterparty_email = Column(String(255))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)


class RevokedToken(Base):
    __tablename__ = "revoked_tokens"

    jti = Column(String(64), primary_key=True)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), server_default=func.now())
