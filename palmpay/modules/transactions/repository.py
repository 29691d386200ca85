"""Repository protocol for transaction history."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .models import LegInput, TransactionLeg


class TransactionRepository(Protocol):
    async def append_leg(self, leg: LegInput) -> tuple[TransactionLeg, bool]:
        """Insert ``leg`` unless one exists for its transfer and account; report whether it was created."""
        ...

    async def get_leg(self, account_id: str, transfer_id: str) -> TransactionLeg | None:
        ...

    async def list_legs(
        self,
        account_id: str,
        *,
        leg_type: str | None,
        since: datetime | None,
        limit: int,
        offset: int,
    ) -> Sequence[TransactionLeg]:
        ...
