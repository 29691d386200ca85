"""Domain models for transaction history legs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

LEG_SEND = "send"
LEG_RECEIVE = "receive"
STATUS_COMPLETED = "completed"

Direction = Literal["all", "sent", "received"]
Period = Literal["all", "today", "week", "month"]

DIRECTION_TO_LEG = {"sent": LEG_SEND, "received": LEG_RECEIVE}


@dataclass(slots=True)
class TransactionLeg:
    id: str
    transfer_id: str
    account_id: str
    type: str
    amount_cents: int
    currency: str
    counterparty_id: str
    counterparty_name: Optional[str]
    counterparty_email: Optional[str]
    counterparty_cnic: Optional[str]
    note: str
    status: str
    created_at: datetime

    @property
    def signed_amount_cents(self) -> int:
        return -self.amount_cents if self.type == LEG_SEND else self.amount_cents


@dataclass(slots=True, frozen=True)
class LegInput:
    transfer_id: str
    account_id: str
    type: str
    amount_cents: int
    currency: str
    counterparty_id: str
    counterparty_name: Optional[str]
    counterparty_email: Optional[str]
    counterparty_cnic: Optional[str]
    note: str
    status: str = STATUS_COMPLETED


@dataclass(slots=True)
class RecentRecipient:
    id: str
    name: str
    email: str
    cnic: str
    last_amount_cents: int
