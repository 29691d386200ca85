"""Domain models for notifications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

TYPE_TRANSACTION_SENT = "transaction_sent"
TYPE_TRANSACTION_RECEIVED = "transaction_received"


@dataclass(slots=True)
class Notification:
    id: str
    account_id: str
    type: str
    title: str
    message: str
    amount_cents: int
    transfer_id: str
    counterparty_name: Optional[str]
    counterparty_email: Optional[str]
    created_at: datetime


@dataclass(slots=True, frozen=True)
class NotificationDraft:
    account_id: str
    type: str
    title: str
    message: str
    amount_cents: int
    transfer_id: str
    counterparty_name: Optional[str] = None
    counterparty_email: Optional[str] = None
