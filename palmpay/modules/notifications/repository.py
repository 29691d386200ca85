"""Repository protocol for notifications."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Notification, NotificationDraft


class NotificationRepository(Protocol):
    async def append(self, draft: NotificationDraft) -> tuple[Notification, bool]:
        ...

    async def list_for_account(self, account_id: str, limit: int, offset: int) -> Sequence[Notification]:
        ...
