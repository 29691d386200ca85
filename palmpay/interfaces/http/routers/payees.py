"""Payee search and QR code resolution."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from palmpay.interfaces.http.deps import get_current_account, get_payee_service
from palmpay.modules.accounts import Account
from palmpay.modules.payees import InvalidScanCodeError, PayeeNotFoundError, PayeeService
from palmpay.schemas import PayeeListResponse, PayeeResponse, ScanRequest

router = APIRouter()


@router.get("/search", response_model=PayeeListResponse, summary="Find payees by e-mail or CNIC")
async def search_payees(
    q: str = Query("", max_length=255),
    account: Account = Depends(get_current_account),
    payee_service: PayeeService = Depends(get_payee_service),
) -> PayeeListResponse:
    payees = await payee_service.search(q, account.id)
    return PayeeListResponse(payees=[PayeeResponse.model_validate(payee) for payee in payees])


@router.post("/scan", response_model=PayeeResponse, summary="Resolve a scanned QR code to a payee")
async def scan_payee(
    payload: ScanRequest,
    account: Account = Depends(get_current_account),
    payee_service: PayeeService = Depends(get_payee_service),
) -> PayeeResponse:
    try:
        payee = await payee_service.resolve_scan(payload.data, account.id)
    except InvalidScanCodeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except PayeeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return PayeeResponse.model_validate(payee)
