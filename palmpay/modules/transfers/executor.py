"""Peer-to-peer transfer executor.

A transfer has a strict part and a best-effort part. The strict part moves
the money: the recipient credit and the guarded sender debit run in one
database transaction, so both balances change or neither does. Once that
transaction commits the transfer has happened. The two history legs and the
two notifications are then appended as independent writes whose failures are
logged and never turn a committed transfer into a reported failure.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from palmpay.core.config import TransferSettings
from palmpay.core.money import AmountError, parse_amount
from palmpay.modules.notifications import NotificationService, build_transfer_notifications
from palmpay.modules.transactions import TransactionService, build_legs
from palmpay.realtime import EVENT_ACCOUNT, RealtimeEvent, SubscriptionManager

from .exceptions import (
    DuplicateTransferError,
    InsufficientBalanceError,
    InvalidAmountError,
    NoteTooLongError,
    SelfTransferError,
    TransferAccountNotFoundError,
    TransferError,
    TransferOutcomeUnknownError,
    TransferStoreError,
    TransferValidationError,
)
from .models import PartySnapshot, TransferReceipt, TransferRequest, TransferResult
from .repository import LedgerRepository

logger = logging.getLogger(__name__)

MAX_TRANSFER_ID_LENGTH = 64


def new_transfer_id() -> str:
    return f"tx_{uuid.uuid4().hex}"


class TransferExecutor:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: TransferSettings,
        *,
        dispatcher: Optional[SubscriptionManager] = None,
        notification_sound: Optional[str] = None,
        ledger_factory: Optional[Callable[[AsyncSession], LedgerRepository]] = None,
        transactions_factory: Callable[[AsyncSession], TransactionService] = TransactionService.with_session,
        notifications_factory: Optional[Callable[[AsyncSession], NotificationService]] = None,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings
        self._dispatcher = dispatcher
        if ledger_factory is None:
            from palmpay.infrastructure.database.repositories.ledger_repository import SqlLedgerRepository

            ledger_factory = SqlLedgerRepository
        self._ledger_factory = ledger_factory
        self._transactions_factory = transactions_factory
        self._notifications_factory = notifications_factory or (
            lambda session: NotificationService.with_session(session, dispatcher, notification_sound)
        )

    async def execute(self, request: TransferRequest) -> TransferResult:
        amount_cents, note = self.validate(request)
        transfer_id = request.transfer_id or new_transfer_id()

        receipt = await self._move_funds_with_timeout(
            transfer_id, request.sender_id, request.recipient_id, amount_cents, note
        )
        logger.info(
            "Transfer %s committed: %s -> %s, %d minor units",
            transfer_id,
            request.sender_id,
            request.recipient_id,
            amount_cents,
        )
        self._publish_balances(receipt)

        legs = await self.append_audit_trail(receipt)
        notifications = await self.append_notifications(receipt)
        return TransferResult(
            transfer_id=transfer_id,
            amount_cents=amount_cents,
            currency=receipt.currency,
            sender_balance_cents=receipt.sender_balance_cents,
            legs_recorded=legs,
            notifications_created=notifications,
        )

    def validate(self, request: TransferRequest) -> tuple[int, str]:
        """Check the request without touching the store; return ``(amount_cents, note)``."""
        if not request.sender_id or not request.recipient_id:
            raise TransferValidationError("Please select a recipient")
        if request.sender_id == request.recipient_id:
            raise SelfTransferError("You cannot send money to yourself")
        try:
            amount_cents = parse_amount(request.amount, maximum_cents=self._settings.max_amount_cents)
        except AmountError as exc:
            raise InvalidAmountError(str(exc)) from exc
        note = (request.note or "").strip()
        if len(note) > self._settings.note_max_length:
            raise NoteTooLongError(f"Note cannot be longer than {self._settings.note_max_length} characters")
        if request.transfer_id is not None and not 0 < len(request.transfer_id) <= MAX_TRANSFER_ID_LENGTH:
            raise TransferValidationError("Transfer id must be between 1 and 64 characters")
        return amount_cents, note

    async def append_audit_trail(self, receipt: TransferReceipt) -> int:
        """Append both legs; safe to call again for the same transfer."""
        recorded = 0
        for leg in build_legs(receipt):
            try:
                async with self._session_factory() as session:
                    service = self._transactions_factory(session)
                    await service.record_leg(leg)
                    await session.commit()
            except Exception:  # pylint: disable=broad-except
                logger.exception("Failed to record %s leg for transfer %s", leg.type, receipt.transfer_id)
                continue
            recorded += 1
        return recorded

    async def append_notifications(self, receipt: TransferReceipt) -> int:
        created = 0
        for draft in build_transfer_notifications(receipt, self._settings.currency_symbol):
            try:
                async with self._session_factory() as session:
                    service = self._notifications_factory(session)
                    notification, was_created = await service.record(draft)
                    await session.commit()
                if was_created:
                    service.dispatch(notification)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Failed to create %s notification for transfer %s", draft.type, receipt.transfer_id)
                continue
            created += 1
        return created

    async def _move_funds_with_timeout(
        self,
        transfer_id: str,
        sender_id: str,
        recipient_id: str,
        amount_cents: int,
        note: str,
    ) -> TransferReceipt:
        operation = self._move_funds(transfer_id, sender_id, recipient_id, amount_cents, note)
        if self._settings.timeout_seconds is None:
            return await operation
        try:
            return await asyncio.wait_for(operation, timeout=self._settings.timeout_seconds)
        except asyncio.TimeoutError as exc:
            logger.error("Transfer %s timed out; outcome unknown", transfer_id)
            raise TransferOutcomeUnknownError(transfer_id) from exc

    async def _move_funds(
        self,
        transfer_id: str,
        sender_id: str,
        recipient_id: str,
        amount_cents: int,
        note: str,
    ) -> TransferReceipt:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    ledger = self._ledger_factory(session)
                    # Claiming the id is the first write, so a reused id never moves money.
                    try:
                        await ledger.claim_transfer(
                            transfer_id, sender_id, recipient_id, amount_cents, self._settings.currency
                        )
                    except IntegrityError as exc:
                        raise DuplicateTransferError(f"Transfer {transfer_id} has already been processed") from exc
                    sender_balance, recipient_balance = await self._apply(
                        ledger, sender_id, recipient_id, amount_cents
                    )
                    parties = await ledger.snapshots(sender_id, recipient_id)
        except TransferError:
            raise
        except SQLAlchemyError as exc:
            logger.warning("Transfer %s failed in the store: %s", transfer_id, exc)
            raise TransferStoreError("Failed to process payment. Please try again.") from exc

        return TransferReceipt(
            transfer_id=transfer_id,
            amount_cents=amount_cents,
            currency=self._settings.currency,
            note=note,
            sender=parties.get(sender_id, PartySnapshot(id=sender_id, name="User")),
            recipient=parties.get(recipient_id, PartySnapshot(id=recipient_id, name="User")),
            sender_balance_cents=sender_balance,
            recipient_balance_cents=recipient_balance,
        )

    @staticmethod
    async def _apply(
        ledger: LedgerRepository,
        sender_id: str,
        recipient_id: str,
        amount_cents: int,
    ) -> tuple[int, int]:
        # Rows are written in id order so opposite transfers between the same
        # pair of accounts lock them in the same order.
        if sender_id < recipient_id:
            sender_balance = await ledger.debit_if_sufficient(sender_id, amount_cents)
            if sender_balance is None:
                await TransferExecutor._raise_debit_failure(ledger, sender_id, recipient_id)
            recipient_balance = await ledger.credit(recipient_id, amount_cents)
            if recipient_balance is None:
                raise TransferAccountNotFoundError(recipient_id, "recipient")
        else:
            recipient_balance = await ledger.credit(recipient_id, amount_cents)
            if recipient_balance is None:
                raise TransferAccountNotFoundError(recipient_id, "recipient")
            sender_balance = await ledger.debit_if_sufficient(sender_id, amount_cents)
            if sender_balance is None:
                await TransferExecutor._raise_debit_failure(ledger, sender_id, recipient_id)
        return sender_balance, recipient_balance

    @staticmethod
    async def _raise_debit_failure(ledger: LedgerRepository, sender_id: str, recipient_id: str) -> None:
        if not await ledger.account_exists(sender_id):
            raise TransferAccountNotFoundError(sender_id, "sender")
        if not await ledger.account_exists(recipient_id):
            raise TransferAccountNotFoundError(recipient_id, "recipient")
        raise InsufficientBalanceError("Insufficient balance")

    def _publish_balances(self, receipt: TransferReceipt) -> None:
        if self._dispatcher is None:
            return
        for account_id, balance in (
            (receipt.sender.id, receipt.sender_balance_cents),
            (receipt.recipient.id, receipt.recipient_balance_cents),
        ):
            self._dispatcher.publish(
                account_id,
                RealtimeEvent(
                    EVENT_ACCOUNT,
                    {
                        "account_id": account_id,
                        "balance_cents": balance,
                        "currency": receipt.currency,
                        "transfer_id": receipt.transfer_id,
                    },
                ),
            )
