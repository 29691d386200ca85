"""SQLAlchemy implementation for notifications."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from palmpay.infrastructure.database.models import Notification as NotificationModel
from palmpay.modules.notifications.models import Notification, NotificationDraft


class SqlNotificationRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def append(self, draft: NotificationDraft) -> tuple[Notification, bool]:
        existing = await self._get(draft.account_id, draft.transfer_id)
        if existing is not None:
            return existing, False

        model = NotificationModel(
            account_id=draft.account_id,
            type=draft.type,
            title=draft.title,
            message=draft.message,
            amount_cents=draft.amount_cents,
            transfer_id=draft.transfer_id,
            counterparty_name=draft.counterparty_name,
            counterparty_email=draft.counterparty_email,
        )
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            existing = await self._get(draft.account_id, draft.transfer_id)
            if existing is None:
                raise
            return existing, False
        return self._to_domain(model), True

    async def list_for_account(self, account_id: str, limit: int, offset: int) -> Sequence[Notification]:
        stmt = (
            select(NotificationModel)
            .where(NotificationModel.account_id == account_id)
            .order_by(desc(NotificationModel.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def _get(self, account_id: str, transfer_id: str) -> Notification | None:
        stmt = select(NotificationModel).where(
            NotificationModel.account_id == account_id,
            NotificationModel.transfer_id == transfer_id,
        )
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model else None

    @staticmethod
    def _to_domain(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            account_id=model.account_id,
            type=model.type,
            title=model.title,
            message=model.message,
            amount_cents=model.amount_cents,
            transfer_id=model.transfer_id,
            counterparty_name=model.counterparty_name,
            counterparty_email=model.counterparty_email,
            created_at=model.created_at,
        )
