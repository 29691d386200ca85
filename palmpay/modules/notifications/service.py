"""Notification service: append-only records plus creation-time dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from palmpay.core.money import format_amount
from palmpay.realtime import EVENT_NOTIFICATION, RealtimeEvent, SubscriptionManager

from .models import TYPE_TRANSACTION_RECEIVED, TYPE_TRANSACTION_SENT, Notification, NotificationDraft
from .repository import NotificationRepository

if TYPE_CHECKING:
    from palmpay.modules.transfers.models import TransferReceipt

logger = logging.getLogger(__name__)


def build_transfer_notifications(receipt: TransferReceipt, currency_symbol: str = "Rs.") -> list[NotificationDraft]:
    amount = format_amount(receipt.amount_cents, currency_symbol)
    sender, recipient = receipt.sender, receipt.recipient
    return [
        NotificationDraft(
            account_id=sender.id,
            type=TYPE_TRANSACTION_SENT,
            title="Money Sent",
            message=f"You sent {amount} to {recipient.name}",
            amount_cents=receipt.amount_cents,
            transfer_id=receipt.transfer_id,
            counterparty_name=recipient.name,
            counterparty_email=recipient.email,
        ),
        NotificationDraft(
            account_id=recipient.id,
            type=TYPE_TRANSACTION_RECEIVED,
            title="Money Received",
            message=f"You received {amount} from {sender.name}",
            amount_cents=receipt.amount_cents,
            transfer_id=receipt.transfer_id,
            counterparty_name=sender.name,
            counterparty_email=sender.email,
        ),
    ]


@dataclass(slots=True)
class NotificationService:
    repository: NotificationRepository
    dispatcher: Optional[SubscriptionManager] = None
    sound: Optional[str] = None

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        dispatcher: Optional[SubscriptionManager] = None,
        sound: Optional[str] = None,
    ) -> "NotificationService":
        from palmpay.infrastructure.database.repositories.notification_repository import SqlNotificationRepository

        return cls(SqlNotificationRepository(session), dispatcher, sound)

    async def record(self, draft: NotificationDraft) -> tuple[Notification, bool]:
        return await self.repository.append(draft)

    async def create_for_transfer(self, receipt: TransferReceipt, currency_symbol: str = "Rs.") -> list[Notification]:
        """Store both notifications of a transfer; return only the newly created ones."""
        created = []
        for draft in build_transfer_notifications(receipt, currency_symbol):
            notification, was_created = await self.record(draft)
            if was_created:
                created.append(notification)
        return created

    async def list_notifications(self, account_id: str, limit: int = 50, offset: int = 0) -> list[Notification]:
        rows = await self.repository.list_for_account(account_id, limit, offset)
        return list(rows)

    def dispatch(self, notification: Notification) -> int:
        """Emit a push-style event for a freshly stored notification."""
        if self.dispatcher is None:
            return 0
        payload = {
            "type": notification.type,
            "notification_id": notification.id,
            "transfer_id": notification.transfer_id,
            "amount_cents": notification.amount_cents,
        }
        data = {"title": notification.title, "body": notification.message, "payload": payload}
        if self.sound:
            data["sound"] = self.sound
        delivered = self.dispatcher.publish(notification.account_id, RealtimeEvent(EVENT_NOTIFICATION, data))
        logger.debug("Notification %s dispatched to %d subscriber(s)", notification.id, delivered)
        return delivered
