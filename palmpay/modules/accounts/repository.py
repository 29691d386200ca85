"""Repository protocol for accounts."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .models import Account


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_id(self, account_id: str) -> Account | None:
        ...

    async def get_by_email(self, email: str) -> Account | None:
        ...

    async def get_by_cnic(self, cnic: str) -> Account | None:
        ...

    async def find_by_email(self, email: str, *, exclude_id: str | None = None) -> Sequence[Account]:
        ...

    async def find_by_cnic(self, cnic: str, *, exclude_id: str | None = None) -> Sequence[Account]:
        ...

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
        ...

    async def set_password_hash(self, account_id: str, password_hash: str) -> None:
        ...

    async def mark_email_verified(self, account_id: str) -> None:
        ...

    async def set_last_login(self, account_id: str, timestamp: datetime) -> None:
        ...


class RevokedTokenRepository(Protocol):
    async def revoke(self, *, jti: str, account_id: str, expires_at: datetime) -> None:
        ...

    async def is_revoked(self, jti: str) -> bool:
        ...

    async def purge_expired(self, now: datetime) -> int:
        ...
