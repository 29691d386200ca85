"""Transaction history service: audit legs, filtered history and recent recipients."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from .models import (
    DIRECTION_TO_LEG,
    LEG_RECEIVE,
    LEG_SEND,
    Direction,
    LegInput,
    Period,
    RecentRecipient,
    TransactionLeg,
)
from .repository import TransactionRepository

if TYPE_CHECKING:
    from palmpay.modules.transfers.models import TransferReceipt

logger = logging.getLogger(__name__)

RECENT_SCAN_LIMIT = 20
DASHBOARD_LIMIT = 5


def period_start(period: Period, now: datetime) -> datetime | None:
    if period == "today":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == "week":
        return now - timedelta(days=7)
    if period == "month":
        return now - timedelta(days=30)
    return None


def build_legs(receipt: TransferReceipt) -> list[LegInput]:
    """Sender ``send`` leg first, then the recipient ``receive`` leg."""
    sender, recipient = receipt.sender, receipt.recipient
    return [
        LegInput(
            transfer_id=receipt.transfer_id,
            account_id=sender.id,
            type=LEG_SEND,
            amount_cents=receipt.amount_cents,
            currency=receipt.currency,
            counterparty_id=recipient.id,
            counterparty_name=recipient.name,
            counterparty_email=recipient.email,
            counterparty_cnic=recipient.cnic,
            note=receipt.note,
        ),
        LegInput(
            transfer_id=receipt.transfer_id,
            account_id=recipient.id,
            type=LEG_RECEIVE,
            amount_cents=receipt.amount_cents,
            currency=receipt.currency,
            counterparty_id=sender.id,
            counterparty_name=sender.name,
            counterparty_email=sender.email,
            counterparty_cnic=sender.cnic,
            note=receipt.note,
        ),
    ]


@dataclass(slots=True)
class TransactionService:
    repository: TransactionRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "TransactionService":
        from palmpay.infrastructure.database.repositories.transaction_repository import SqlTransactionRepository

        return cls(SqlTransactionRepository(session))

    async def record_leg(self, leg: LegInput) -> tuple[TransactionLeg, bool]:
        record, created = await self.repository.append_leg(leg)
        if not created:
            logger.info("Leg for transfer %s on account %s already recorded", leg.transfer_id, leg.account_id)
        return record, created

    async def record_transfer_legs(self, receipt: TransferReceipt) -> int:
        created = 0
        for leg in build_legs(receipt):
            _, was_created = await self.record_leg(leg)
            created += int(was_created)
        return created

    async def get_leg(self, account_id: str, transfer_id: str) -> TransactionLeg | None:
        return await self.repository.get_leg(account_id, transfer_id)

    async def list_history(
        self,
        account_id: str,
        *,
        direction: Direction = "all",
        period: Period = "all",
        limit: int = 50,
        offset: int = 0,
        now: datetime | None = None,
    ) -> list[TransactionLeg]:
        since = period_start(period, now or datetime.now(timezone.utc))
        rows = await self.repository.list_legs(
            account_id,
            leg_type=DIRECTION_TO_LEG.get(direction),
            since=since,
            limit=limit,
            offset=offset,
        )
        return list(rows)

    async def recent_transactions(self, account_id: str, limit: int = DASHBOARD_LIMIT) -> list[TransactionLeg]:
        return await self.list_history(account_id, limit=limit)

    async def recent_recipients(self, account_id: str) -> list[RecentRecipient]:
        rows = await self.repository.list_legs(
            account_id,
            leg_type=LEG_SEND,
            since=None,
            limit=RECENT_SCAN_LIMIT,
            offset=0,
        )
        recipients: list[RecentRecipient] = []
        seen: set[str] = set()
        for leg in rows:
            if leg.counterparty_id in seen:
                continue
            seen.add(leg.counterparty_id)
            recipients.append(
                RecentRecipient(
                    id=leg.counterparty_id,
                    name=leg.counterparty_name or "Unknown",
                    email=leg.counterparty_email or "",
                    cnic=leg.counterparty_cnic or "",
                    last_amount_cents=leg.amount_cents,
                )
            )
        return recipients
