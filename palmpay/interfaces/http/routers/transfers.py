"""Peer-to-peer transfer endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from palmpay.interfaces.http.deps import get_current_account, get_transaction_service, get_transfer_executor
from palmpay.modules.accounts import Account
from palmpay.modules.transactions import TransactionService
from palmpay.modules.transfers import (
    DuplicateTransferError,
    InsufficientBalanceError,
    TransferAccountNotFoundError,
    TransferError,
    TransferExecutor,
    TransferOutcomeUnknownError,
    TransferRequest,
    TransferStoreError,
    TransferValidationError,
)
from palmpay.schemas import (
    RecentRecipientListResponse,
    RecentRecipientResponse,
    TransferCreateRequest,
    TransferResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _status_for(exc: TransferError) -> int:
    if isinstance(exc, TransferAccountNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, (InsufficientBalanceError, DuplicateTransferError)):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, TransferValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, TransferOutcomeUnknownError):
        return status.HTTP_504_GATEWAY_TIMEOUT
    if isinstance(exc, TransferStoreError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.post(
    "",
    response_model=TransferResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send money to another account",
)
async def create_transfer(
    payload: TransferCreateRequest,
    account: Account = Depends(get_current_account),
    executor: TransferExecutor = Depends(get_transfer_executor),
) -> TransferResponse:
    try:
        result = await executor.execute(
            TransferRequest(
                sender_id=account.id,
                recipient_id=payload.recipient_id,
                amount=payload.amount,
                note=payload.note,
                transfer_id=payload.transfer_id,
            )
        )
    except TransferError as exc:
        logger.info("Transfer from %s rejected: %s", account.id, exc)
        raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc

    return TransferResponse(
        transfer_id=result.transfer_id,
        amount_cents=result.amount_cents,
        currency=result.currency,
        balance_cents=result.sender_balance_cents,
        legs_recorded=result.legs_recorded,
        notifications_created=result.notifications_created,
    )


@router.get(
    "/recipients/recent",
    response_model=RecentRecipientListResponse,
    summary="People the account recently paid",
)
async def recent_recipients(
    account: Account = Depends(get_current_account),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> RecentRecipientListResponse:
    recipients = await transaction_service.recent_recipients(account.id)
    return RecentRecipientListResponse(
        recipients=[RecentRecipientResponse.model_validate(recipient) for recipient in recipients]
    )
