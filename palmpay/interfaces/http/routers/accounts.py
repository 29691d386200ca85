"""Endpoints for the signed-in account: profile, dashboard and password."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from palmpay.interfaces.http.deps import (
    get_account_service,
    get_current_account,
    get_db_session,
    get_transaction_service,
)
from palmpay.modules.accounts import (
    Account,
    AccountService,
    AccountValidationError,
    InvalidCredentialsError,
)
from palmpay.modules.transactions import TransactionService
from palmpay.schemas import (
    AccountResponse,
    DashboardResponse,
    MessageResponse,
    PasswordChangeRequest,
    TransactionResponse,
)

router = APIRouter()


@router.get("/me", response_model=AccountResponse, summary="Current account profile and balance")
async def profile(account: Account = Depends(get_current_account)) -> AccountResponse:
    return AccountResponse.model_validate(account)


@router.get("/me/dashboard", response_model=DashboardResponse, summary="Profile, balance and latest activity")
async def dashboard(
    account: Account = Depends(get_current_account),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> DashboardResponse:
    legs = await transaction_service.recent_transactions(account.id)
    return DashboardResponse(
        account=AccountResponse.model_validate(account),
        recent_transactions=[TransactionResponse.model_validate(leg) for leg in legs],
    )


@router.post("/me/password", response_model=MessageResponse, summary="Change password")
async def change_password(
    payload: PasswordChangeRequest,
    account: Account = Depends(get_current_account),
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    try:
        await account_service.change_password(account.id, payload.current_password, payload.new_password)
    except (InvalidCredentialsError, AccountValidationError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    await db.commit()
    return MessageResponse(detail="Password updated")
