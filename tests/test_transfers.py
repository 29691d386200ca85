"""
Transfer executor tests.

Tests cover:
- Balance movement and the two history legs
- Rejections that leave every balance untouched
- Concurrency protection (overspending races)
- Best-effort audit trail and notifications after commit
"""

import asyncio
import logging
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from palmpay.core.config import TransferSettings
from palmpay.infrastructure.database.session import session_scope
from palmpay.modules.notifications import NotificationService
from palmpay.modules.transactions import LEG_RECEIVE, LEG_SEND, TransactionService
from palmpay.modules.transfers import (
    DuplicateTransferError,
    InsufficientBalanceError,
    InvalidAmountError,
    NoteTooLongError,
    PartySnapshot,
    SelfTransferError,
    TransferAccountNotFoundError,
    TransferExecutor,
    TransferOutcomeUnknownError,
    TransferReceipt,
    TransferRequest,
    TransferStoreError,
)
from palmpay.realtime import EVENT_ACCOUNT, EVENT_NOTIFICATION


async def _history(container, account_id):
    async with session_scope(container.session_factory) as session:
        return await TransactionService.with_session(session).list_history(account_id)


async def _notifications(container, account_id):
    async with session_scope(container.session_factory) as session:
        return await NotificationService.with_session(session).list_notifications(account_id)


def _offline_executor():
    """Executor whose store access fails the test if it is ever reached."""
    session_factory = Mock(side_effect=AssertionError("store must not be touched"))
    return TransferExecutor(session_factory, TransferSettings(), ledger_factory=Mock())


@pytest.fixture
async def ali(make_account):
    return await make_account("ali@example.com", full_name="Ali Raza", balance_cents=100_000)


@pytest.fixture
async def sara(make_account):
    return await make_account("sara@example.com", full_name="Sara Khan")


async def test_transfer_moves_funds_and_records_both_legs(container, ali, sara, balance_of):
    executor = container.transfer_executor()

    result = await executor.execute(TransferRequest(ali.id, sara.id, "300", note="lunch"))

    assert result.amount_cents == 30_000
    assert result.sender_balance_cents == 70_000
    assert result.legs_recorded == 2
    assert result.notifications_created == 2
    assert await balance_of(ali.id) == 70_000
    assert await balance_of(sara.id) == 30_000

    [sent] = await _history(container, ali.id)
    [received] = await _history(container, sara.id)
    assert sent.transfer_id == received.transfer_id == result.transfer_id
    assert sent.type == LEG_SEND and received.type == LEG_RECEIVE
    assert sent.counterparty_id == sara.id
    assert sent.counterparty_name == "Sara Khan"
    assert received.counterparty_email == "ali@example.com"
    assert sent.note == received.note == "lunch"
    assert sent.signed_amount_cents == -30_000


async def test_transfer_accepts_fractional_amounts(container, ali, sara, balance_of):
    executor = container.transfer_executor()

    await executor.execute(TransferRequest(ali.id, sara.id, "12.50"))

    assert await balance_of(ali.id) == 100_000 - 1_250
    assert await balance_of(sara.id) == 1_250


async def test_insufficient_balance_changes_nothing(container, make_account, sara, balance_of):
    poor = await make_account("poor@example.com", balance_cents=10_000)
    executor = container.transfer_executor()

    with pytest.raises(InsufficientBalanceError):
        await executor.execute(TransferRequest(poor.id, sara.id, 150))

    assert await balance_of(poor.id) == 10_000
    assert await balance_of(sara.id) == 0
    assert await _history(container, poor.id) == []
    assert await _notifications(container, sara.id) == []


async def test_exact_balance_can_be_sent(container, make_account, sara, balance_of):
    sender = await make_account("exact@example.com", balance_cents=5_000)

    await container.transfer_executor().execute(TransferRequest(sender.id, sara.id, "50"))

    assert await balance_of(sender.id) == 0
    assert await balance_of(sara.id) == 5_000


async def test_unknown_recipient_is_rejected(container, ali, balance_of):
    with pytest.raises(TransferAccountNotFoundError) as excinfo:
        await container.transfer_executor().execute(TransferRequest(ali.id, "missing-account", "10"))

    assert excinfo.value.role == "recipient"
    assert str(excinfo.value) == "Recipient account not found"
    assert await balance_of(ali.id) == 100_000
    assert await _history(container, ali.id) == []


async def test_unknown_sender_is_rejected(container, sara, balance_of):
    with pytest.raises(TransferAccountNotFoundError) as excinfo:
        await container.transfer_executor().execute(TransferRequest("ghost-account", sara.id, "10"))

    assert excinfo.value.role == "sender"
    assert await balance_of(sara.id) == 0


async def test_self_transfer_is_rejected_before_the_store():
    with pytest.raises(SelfTransferError, match="yourself"):
        await _offline_executor().execute(TransferRequest("acc-1", "acc-1", "10"))


@pytest.mark.parametrize("amount", ["0", "-5", "abc", "", "1.234", "NaN", "Infinity", "1e20", None, True])
async def test_invalid_amounts_are_rejected(amount):
    with pytest.raises(InvalidAmountError):
        await _offline_executor().execute(TransferRequest("acc-1", "acc-2", amount))


async def test_note_length_is_bounded():
    executor = _offline_executor()

    assert executor.validate(TransferRequest("acc-1", "acc-2", "1", note="x" * 100)) == (100, "x" * 100)
    with pytest.raises(NoteTooLongError):
        await executor.execute(TransferRequest("acc-1", "acc-2", "1", note="x" * 101))


async def test_amount_is_capped_per_transfer():
    session_factory = Mock(side_effect=AssertionError("store must not be touched"))
    executor = TransferExecutor(session_factory, TransferSettings(max_amount_cents=1_000), ledger_factory=Mock())

    assert executor.validate(TransferRequest("acc-1", "acc-2", "10")) == (1_000, "")
    with pytest.raises(InvalidAmountError, match="cannot exceed"):
        await executor.execute(TransferRequest("acc-1", "acc-2", "10.01"))


async def test_concurrent_transfers_never_overspend(container, make_account, sara, balance_of):
    sender = await make_account("racer@example.com", balance_cents=10_000)
    executor = container.transfer_executor()

    results = await asyncio.gather(
        *(executor.execute(TransferRequest(sender.id, sara.id, "60")) for _ in range(5)),
        return_exceptions=True,
    )

    succeeded = [result for result in results if not isinstance(result, BaseException)]
    rejected = [result for result in results if isinstance(result, InsufficientBalanceError)]
    assert len(succeeded) == 1
    assert len(rejected) == 4
    assert await balance_of(sender.id) == 4_000
    assert await balance_of(sara.id) == 6_000


async def test_opposite_transfers_conserve_money(container, ali, make_account, balance_of):
    other = await make_account("other@example.com", balance_cents=50_000)
    executor = container.transfer_executor()

    await asyncio.gather(
        executor.execute(TransferRequest(ali.id, other.id, "100")),
        executor.execute(TransferRequest(other.id, ali.id, "250")),
        executor.execute(TransferRequest(ali.id, other.id, "75.25")),
    )

    assert await balance_of(ali.id) + await balance_of(other.id) == 150_000
    assert await balance_of(ali.id) == 100_000 - 10_000 + 25_000 - 7_525


async def test_audit_trail_append_is_idempotent(container, ali, sara):
    executor = container.transfer_executor()
    result = await executor.execute(TransferRequest(ali.id, sara.id, "20", transfer_id="tx_fixed"))
    receipt = TransferReceipt(
        transfer_id=result.transfer_id,
        amount_cents=result.amount_cents,
        currency=result.currency,
        note="",
        sender=PartySnapshot(id=ali.id, name="Ali Raza", email=ali.email),
        recipient=PartySnapshot(id=sara.id, name="Sara Khan", email=sara.email),
        sender_balance_cents=result.sender_balance_cents,
        recipient_balance_cents=2_000,
    )

    await executor.append_audit_trail(receipt)
    await executor.append_notifications(receipt)

    assert len(await _history(container, ali.id)) == 1
    assert len(await _history(container, sara.id)) == 1
    assert len(await _notifications(container, ali.id)) == 1
    assert len(await _notifications(container, sara.id)) == 1


async def test_duplicate_transfer_id_is_rejected(container, ali, sara, balance_of):
    executor = container.transfer_executor()
    await executor.execute(TransferRequest(ali.id, sara.id, "10", transfer_id="tx_once"))

    with pytest.raises(DuplicateTransferError):
        await executor.execute(TransferRequest(ali.id, sara.id, "10", transfer_id="tx_once"))

    assert await balance_of(sara.id) == 1_000


class _BrokenTransactions:
    async def record_leg(self, leg):
        raise RuntimeError("history store unavailable")


class _BrokenNotifications:
    async def record(self, draft):
        raise RuntimeError("notification store unavailable")


async def test_history_failure_does_not_fail_committed_transfer(container, ali, sara, balance_of, caplog):
    executor = TransferExecutor(
        container.session_factory,
        container.settings.transfers,
        transactions_factory=lambda session: _BrokenTransactions(),
    )

    with caplog.at_level(logging.ERROR):
        result = await executor.execute(TransferRequest(ali.id, sara.id, "5"))

    assert result.legs_recorded == 0
    assert result.notifications_created == 2
    assert await balance_of(sara.id) == 500
    assert "Failed to record" in caplog.text


async def test_notification_failure_does_not_fail_committed_transfer(container, ali, sara, balance_of):
    executor = TransferExecutor(
        container.session_factory,
        container.settings.transfers,
        notifications_factory=lambda session: _BrokenNotifications(),
    )

    result = await executor.execute(TransferRequest(ali.id, sara.id, "5"))

    assert result.notifications_created == 0
    assert result.legs_recorded == 2
    assert await balance_of(ali.id) == 99_500
    assert await _notifications(container, sara.id) == []


async def test_reused_transfer_id_is_rejected_even_without_history(container, ali, sara, balance_of):
    executor = TransferExecutor(
        container.session_factory,
        container.settings.transfers,
        transactions_factory=lambda session: _BrokenTransactions(),
    )
    await executor.execute(TransferRequest(ali.id, sara.id, "300", transfer_id="client-key-1"))

    with pytest.raises(DuplicateTransferError):
        await executor.execute(TransferRequest(ali.id, sara.id, "300", transfer_id="client-key-1"))

    assert await balance_of(ali.id) == 70_000
    assert await balance_of(sara.id) == 30_000


async def test_concurrent_retries_of_one_transfer_move_money_once(container, ali, sara, balance_of):
    executor = container.transfer_executor()

    results = await asyncio.gather(
        *(executor.execute(TransferRequest(ali.id, sara.id, "300", transfer_id="client-key-2")) for _ in range(2)),
        return_exceptions=True,
    )

    assert sum(isinstance(result, DuplicateTransferError) for result in results) == 1
    assert await balance_of(ali.id) == 70_000
    assert await balance_of(sara.id) == 30_000
    assert len(await _history(container, ali.id)) == 1


class _FailingLedger:
    def __init__(self, session):
        pass

    async def claim_transfer(self, transfer_id, sender_id, recipient_id, amount_cents, currency):
        raise SQLAlchemyError("database is locked")


class _SlowLedger(_FailingLedger):
    async def claim_transfer(self, transfer_id, sender_id, recipient_id, amount_cents, currency):
        await asyncio.sleep(1)


async def test_store_failure_is_retryable(container, ali, sara):
    executor = TransferExecutor(container.session_factory, container.settings.transfers, ledger_factory=_FailingLedger)

    with pytest.raises(TransferStoreError) as excinfo:
        await executor.execute(TransferRequest(ali.id, sara.id, "5"))

    assert excinfo.value.retryable is True


async def test_slow_store_reports_unknown_outcome(container, ali, sara):
    settings = container.settings.transfers.model_copy(update={"timeout_seconds": 0.05})
    executor = TransferExecutor(container.session_factory, settings, ledger_factory=_SlowLedger)

    with pytest.raises(TransferOutcomeUnknownError) as excinfo:
        await executor.execute(TransferRequest(ali.id, sara.id, "5", transfer_id="tx_slow"))

    assert excinfo.value.transfer_id == "tx_slow"


async def test_subscribers_see_balance_and_notification(container, ali, sara):
    executor = container.transfer_executor()

    async with container.subscriptions.subscribe(sara.id) as subscription:
        await executor.execute(TransferRequest(ali.id, sara.id, "300"))
        balance_event = subscription.get_nowait()
        notification_event = subscription.get_nowait()

    assert balance_event.type == EVENT_ACCOUNT
    assert balance_event.data["balance_cents"] == 30_000
    assert notification_event.type == EVENT_NOTIFICATION
    assert notification_event.data["title"] == "Money Received"
    assert notification_event.data["body"] == "You received Rs. 300 from Ali Raza"
    assert notification_event.data["sound"] == container.settings.notifications.sound


async def test_documented_example_balances(container, ali, make_account, balance_of):
    recipient = await make_account("recipient@example.com", balance_cents=50_000)

    await container.transfer_executor().execute(TransferRequest(ali.id, recipient.id, "300"))

    assert await balance_of(ali.id) == 70_000
    assert await balance_of(recipient.id) == 80_000
    assert [leg.amount_cents for leg in await _history(container, recipient.id)] == [30_000]
    assert len(await _notifications(container, ali.id)) == 1
