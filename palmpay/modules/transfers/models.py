"""Domain models for peer-to-peer transfers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from palmpay.core.money import AmountInput


@dataclass(slots=True, frozen=True)
class PartySnapshot:
    """Identity of one side of a transfer as it looked when the transfer committed."""

    id: str
    name: str
    email: Optional[str] = None
    cnic: Optional[str] = None


@dataclass(slots=True, frozen=True)
class TransferRequest:
    sender_id: str
    recipient_id: str
    amount: AmountInput
    note: str = ""
    transfer_id: Optional[str] = None


@dataclass(slots=True, frozen=True)
class TransferReceipt:
    """Everything the post-commit audit and notification steps need."""

    transfer_id: str
    amount_cents: int
    currency: str
    note: str
    sender: PartySnapshot
    recipient: PartySnapshot
    sender_balance_cents: int
    recipient_balance_cents: int


@dataclass(slots=True)
class TransferResult:
    transfer_id: str
    amount_cents: int
    currency: str
    sender_balance_cents: int
    legs_recorded: int = 0
    notifications_created: int = 0
