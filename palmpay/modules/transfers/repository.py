"""Repository protocol for the balance ledger used inside the atomic transfer step."""

from __future__ import annotations

from typing import Mapping, Protocol

from .models import PartySnapshot


class LedgerRepository(Protocol):
    async def claim_transfer(
        self,
        transfer_id: str,
        sender_id: str,
        recipient_id: str,
        amount_cents: int,
        currency: str,
    ) -> None:
        """Insert the transfer row; raises ``IntegrityError`` if the id was already used."""
        ...

    async def credit(self, account_id: str, amount_cents: int) -> int | None:
        """Add to a balance; return the new balance or ``None`` if the account is missing."""
        ...

    async def debit_if_sufficient(self, account_id: str, amount_cents: int) -> int | None:
        """Subtract only if the balance covers it; ``None`` when the guard or lookup fails."""
        ...

    async def account_exists(self, account_id: str) -> bool:
        ...

    async def snapshots(self, *account_ids: str) -> Mapping[str, PartySnapshot]:
        ...
