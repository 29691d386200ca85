from datetime import datetime, timedelta, timezone

import pytest

from palmpay.infrastructure.database.session import session_scope
from palmpay.modules.transactions import LEG_RECEIVE, LEG_SEND, TransactionService, period_start
from palmpay.modules.transfers import PartySnapshot, TransferReceipt, TransferRequest


@pytest.fixture
async def parties(container, make_account):
    ali = await make_account("ali@example.com", full_name="Ali Raza", balance_cents=100_000)
    sara = await make_account("sara@example.com", full_name="Sara Khan", balance_cents=100_000)
    omar = await make_account("omar@example.com", full_name="Omar Sheikh")
    executor = container.transfer_executor()
    await executor.execute(TransferRequest(ali.id, sara.id, "100", transfer_id="tx_1"))
    await executor.execute(TransferRequest(ali.id, omar.id, "50", transfer_id="tx_2"))
    await executor.execute(TransferRequest(sara.id, ali.id, "30", transfer_id="tx_3"))
    await executor.execute(TransferRequest(ali.id, sara.id, "25", transfer_id="tx_4"))
    return ali, sara, omar


@pytest.fixture
def history(container):
    async def _run(method, *args, **kwargs):
        async with session_scope(container.session_factory) as session:
            return await getattr(TransactionService.with_session(session), method)(*args, **kwargs)

    return _run


async def test_history_is_newest_first(parties, history):
    ali, _, _ = parties

    legs = await history("list_history", ali.id)

    assert [leg.transfer_id for leg in legs] == ["tx_4", "tx_3", "tx_2", "tx_1"]
    assert [leg.type for leg in legs] == [LEG_SEND, LEG_RECEIVE, LEG_SEND, LEG_SEND]


async def test_history_direction_filter(parties, history):
    ali, _, _ = parties

    sent = await history("list_history", ali.id, direction="sent")
    received = await history("list_history", ali.id, direction="received")

    assert {leg.transfer_id for leg in sent} == {"tx_1", "tx_2", "tx_4"}
    assert [leg.transfer_id for leg in received] == ["tx_3"]
    assert received[0].counterparty_name == "Sara Khan"


async def test_history_period_filter(parties, history):
    ali, _, _ = parties
    now = datetime.now(timezone.utc)

    assert len(await history("list_history", ali.id, period="week", now=now)) == 4
    assert await history("list_history", ali.id, period="week", now=now + timedelta(days=8)) == []
    assert await history("list_history", ali.id, period="month", now=now + timedelta(days=31)) == []
    assert await history("list_history", ali.id, period="today", now=now + timedelta(days=2)) == []


async def test_history_pagination(parties, history):
    ali, _, _ = parties

    page = await history("list_history", ali.id, limit=2, offset=1)

    assert [leg.transfer_id for leg in page] == ["tx_3", "tx_2"]


async def test_get_leg_is_scoped_to_the_owner(parties, history):
    ali, sara, omar = parties

    leg = await history("get_leg", sara.id, "tx_1")

    assert leg.type == LEG_RECEIVE
    assert leg.amount_cents == 10_000
    assert await history("get_leg", omar.id, "tx_1") is None


async def test_recent_recipients_are_unique_and_newest_first(parties, history):
    ali, sara, omar = parties

    recipients = await history("recent_recipients", ali.id)

    assert [recipient.id for recipient in recipients] == [sara.id, omar.id]
    assert recipients[0].last_amount_cents == 2_500
    assert recipients[0].email == "sara@example.com"


async def test_recent_transactions_limit(parties, history):
    ali, _, _ = parties

    assert len(await history("recent_transactions", ali.id, limit=3)) == 3


def test_period_start():
    now = datetime(2026, 10, 18, 15, 30, tzinfo=timezone.utc)

    assert period_start("all", now) is None
    assert period_start("today", now) == datetime(2026, 10, 18, tzinfo=timezone.utc)
    assert period_start("week", now) == now - timedelta(days=7)
    assert period_start("month", now) == now - timedelta(days=30)


async def test_record_transfer_legs_is_idempotent(container, make_account, history):
    ali = await make_account("ali@example.com", full_name="Ali Raza")
    sara = await make_account("sara@example.com", full_name="Sara Khan")
    receipt = TransferReceipt(
        transfer_id="tx_manual",
        amount_cents=1_000,
        currency="PKR",
        note="books",
        sender=PartySnapshot(id=ali.id, name="Ali Raza", email=ali.email),
        recipient=PartySnapshot(id=sara.id, name="Sara Khan", email=sara.email),
        sender_balance_cents=0,
        recipient_balance_cents=1_000,
    )

    assert await history("record_transfer_legs", receipt) == 2
    assert await history("record_transfer_legs", receipt) == 0
    assert (await history("get_leg", ali.id, "tx_manual")).type == LEG_SEND
    assert len(await history("list_history", sara.id)) == 1
