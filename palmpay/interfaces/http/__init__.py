from fastapi import APIRouter

from palmpay.interfaces.http.routers import accounts, auth, notifications, payees, transactions, transfers


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
    router.include_router(transfers.router, prefix="/transfers", tags=["transfers"])
    router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
    router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
    router.include_router(payees.router, prefix="/payees", tags=["payees"])
    return router


__all__ = [
    "create_api_router",
]
