"""SQLAlchemy implementation for transaction history legs."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from palmpay.infrastructure.database.models import TransactionRecord
from palmpay.modules.transactions.models import LegInput, TransactionLeg


class SqlTransactionRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def append_leg(self, leg: LegInput) -> tuple[TransactionLeg, bool]:
        existing = await self.get_leg(leg.account_id, leg.transfer_id)
        if existing is not None:
            return existing, False

        record = TransactionRecord(
            transfer_id=leg.transfer_id,
            account_id=leg.account_id,
            type=leg.type,
            amount_cents=leg.amount_cents,
            currency=leg.currency,
            counterparty_id=leg.counterparty_id,
            counterparty_name=leg.counterparty_name,
            counterparty_email=leg.counterparty_email,
            counterparty_cnic=leg.counterparty_cnic,
            note=leg.note,
            status=leg.status,
        )
        self.session.add(record)
        try:
            await self.session.flush()
        except IntegrityError:
            # A concurrent retry won the insert; the unique key makes it the same leg.
            await self.session.rollback()
            existing = await self.get_leg(leg.account_id, leg.transfer_id)
            if existing is None:
                raise
            return existing, False
        return self._to_domain(record), True

    async def get_leg(self, account_id: str, transfer_id: str) -> TransactionLeg | None:
        stmt = select(TransactionRecord).where(
            TransactionRecord.account_id == account_id,
            TransactionRecord.transfer_id == transfer_id,
        )
        result = await self.session.execute(stmt)
        record = result.scalars().first()
        return self._to_domain(record) if record else None

    async def list_legs(
        self,
        account_id: str,
        *,
        leg_type: str | None,
        since: datetime | None,
        limit: int,
        offset: int,
    ) -> Sequence[TransactionLeg]:
        stmt = select(TransactionRecord).where(TransactionRecord.account_id == account_id)
        if leg_type is not None:
            stmt = stmt.where(TransactionRecord.type == leg_type)
        if since is not None:
            stmt = stmt.where(TransactionRecord.created_at >= since)
        stmt = stmt.order_by(desc(TransactionRecord.created_at)).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(record) for record in result.scalars().all()]

    @staticmethod
    def _to_domain(model: TransactionRecord) -> TransactionLeg:
        return TransactionLeg(
            id=model.id,
            transfer_id=model.transfer_id,
            account_id=model.account_id,
            type=model.type,
            amount_cents=model.amount_cents,
            currency=model.currency,
            counterparty_id=model.counterparty_id,
            counterparty_name=model.counterparty_name,
            counterparty_email=model.counterparty_email,
            counterparty_cnic=model.counterparty_cnic,
            note=model.note or "",
            status=model.status,
            created_at=model.created_at,
        )
