"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from palmpay.infrastructure.database.models import Account as AccountModel, RevokedToken
from palmpay.modules.accounts.exceptions import AccountAlreadyExistsError, AccountNotFoundError
from palmpay.modules.accounts.models import Account
from palmpay.modules.accounts.repository import AccountRepository, RevokedTokenRepository


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def get_by_email(self, email: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.email == email)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def get_by_cnic(self, cnic: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.cnic == cnic)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def find_by_email(self, email: str, *, exclude_id: str | None = None) -> Sequence[Account]:
        return await self._find(AccountModel.email == email, exclude_id)

    async def find_by_cnic(self, cnic: str, *, exclude_id: str | None = None) -> Sequence[Account]:
        return await self._find(AccountModel.cnic == cnic, exclude_id)

    async def create_account(
        self,
        *,
        email: str,
        password_hash: str,
        full_name: str,
        father_name: str | None,
        cnic: str | None,
        balance_cents: int,
        currency: str,
    ) -> Account:
        model = AccountModel(
            email=email,
            password_hash=password_hash,
            full_name=full_name,
            father_name=father_name,
            cnic=cnic,
            balance_cents=balance_cents,
            currency=currency,
            email_verified=False,
            is_active=True,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            # A concurrent sign-up took the e-mail or CNIC after the lookups.
            await self._session.rollback()
            raise AccountAlreadyExistsError(f"Email or CNIC already registered: {email}") from exc
        await self._session.refresh(model)
        return self._to_domain(model)

    async def set_password_hash(self, account_id: str, password_hash: str) -> None:
        await self._update(account_id, password_hash=password_hash)

    async def mark_email_verified(self, account_id: str) -> None:
        await self._update(account_id, email_verified=True)

    async def set_last_login(self, account_id: str, timestamp: datetime) -> None:
        await self._update(account_id, last_login_at=timestamp)

    async def _update(self, account_id: str, **values) -> None:
        stmt = update(AccountModel).where(AccountModel.id == account_id).values(**values)
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise AccountNotFoundError(account_id)

    async def _find(self, criterion, exclude_id: str | None) -> list[Account]:
        stmt = select(AccountModel).where(criterion, AccountModel.is_active.is_(True))
        if exclude_id is not None:
            stmt = stmt.where(AccountModel.id != exclude_id)
        stmt = stmt.order_by(AccountModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            email=model.email,
            full_name=model.full_name,
            balance_cents=int(model.balance_cents or 0),
            currency=model.currency,
            is_active=bool(model.is_active),
            password_hash=model.password_hash,
            father_name=model.father_name,
            cnic=model.cnic,
            email_verified=bool(model.email_verified),
            created_at=model.created_at,
            updated_at=model.updated_at,
            last_login_at=model.last_login_at,
        )


class SqlRevokedTokenRepository(RevokedTokenRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def revoke(self, *, jti: str, account_id: str, expires_at: datetime) -> None:
        if await self.is_revoked(jti):
            return
        self._session.add(RevokedToken(jti=jti, account_id=account_id, expires_at=expires_at))
        await self._session.flush()

    async def is_revoked(self, jti: str) -> bool:
        stmt = select(RevokedToken.jti).where(RevokedToken.jti == jti)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def purge_expired(self, now: datetime) -> int:
        result = await self._session.execute(delete(RevokedToken).where(RevokedToken.expires_at < now))
        return result.rowcount or 0
