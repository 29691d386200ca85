"""SQLAlchemy implementation of the balance ledger."""

from __future__ import annotations

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from palmpay.infrastructure.database.models import Account, Transfer
from palmpay.modules.transfers.models import PartySnapshot


class SqlLedgerRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def claim_transfer(
        self,
        transfer_id: str,
        sender_id: str,
        recipient_id: str,
        amount_cents: int,
        currency: str,
    ) -> None:
        stmt = insert(Transfer).values(
            transfer_id=transfer_id,
            sender_id=sender_id,
            recipient_id=recipient_id,
            amount_cents=amount_cents,
            currency=currency,
        )
        await self.session.execute(stmt)

    async def credit(self, account_id: str, amount_cents: int) -> int | None:
        stmt = (
            update(Account)
            .where(Account.id == account_id)
            .values(balance_cents=Account.balance_cents + amount_cents)
            .returning(Account.balance_cents)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def debit_if_sufficient(self, account_id: str, amount_cents: int) -> int | None:
        stmt = (
            update(Account)
            .where(Account.id == account_id, Account.balance_cents >= amount_cents)
            .values(balance_cents=Account.balance_cents - amount_cents)
            .returning(Account.balance_cents)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def account_exists(self, account_id: str) -> bool:
        result = await self.session.execute(select(Account.id).where(Account.id == account_id))
        return result.scalar_one_or_none() is not None

    async def snapshots(self, *account_ids: str) -> dict[str, PartySnapshot]:
        stmt = select(Account.id, Account.full_name, Account.email, Account.cnic).where(Account.id.in_(account_ids))
        result = await self.session.execute(stmt)
        return {
            row.id: PartySnapshot(id=row.id, name=row.full_name or "User", email=row.email, cnic=row.cnic)
            for row in result.all()
        }
