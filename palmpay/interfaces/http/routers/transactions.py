"""Transaction history endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from palmpay.interfaces.http.deps import get_current_account, get_transaction_service
from palmpay.modules.accounts import Account
from palmpay.modules.transactions import TransactionService
from palmpay.modules.transactions.models import Direction, Period
from palmpay.schemas import TransactionListResponse, TransactionResponse

router = APIRouter()


@router.get("", response_model=TransactionListResponse, summary="Transaction history")
async def list_transactions(
    direction: Direction = Query("all"),
    period: Period = Query("all"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    account: Account = Depends(get_current_account),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> TransactionListResponse:
    legs = await transaction_service.list_history(
        account.id,
        direction=direction,
        period=period,
        limit=limit,
        offset=offset,
    )
    return TransactionListResponse(transactions=[TransactionResponse.model_validate(leg) for leg in legs])


@router.get("/{transfer_id}", response_model=TransactionResponse, summary="One transaction by transfer id")
async def get_transaction(
    transfer_id: str = Path(..., min_length=1, max_length=64),
    account: Account = Depends(get_current_account),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    leg = await transaction_service.get_leg(account.id, transfer_id)
    if leg is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return TransactionResponse.model_validate(leg)
