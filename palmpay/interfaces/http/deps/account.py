"""Account related dependency providers."""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from palmpay.core.config import Settings
from palmpay.core.security import TokenData, decode_access_token
from palmpay.modules.accounts import Account, AccountService

from .database import get_app_settings, get_db_session

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(slots=True)
class AuthenticatedAccount:
    account: Account
    token: TokenData


def get_account_service(
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> AccountService:
    return AccountService.with_session(db, settings.security)


async def resolve_token(service: AccountService, settings: Settings, token: str) -> AuthenticatedAccount:
    """Decode an access token and load the live account behind it."""
    token_data = decode_access_token(settings.security, token)
    if await service.is_token_revoked(token_data.jti):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session has ended, please sign in again")
    account = await service.get_by_id(token_data.account_id)
    if account is None or not account.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account not found or disabled")
    return AuthenticatedAccount(account=account, token=token_data)


async def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_app_settings),
) -> AuthenticatedAccount:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return await resolve_token(service, settings, credentials.credentials)


async def get_current_account(session: AuthenticatedAccount = Depends(get_current_session)) -> Account:
    return session.account


__all__ = [
    "AuthenticatedAccount",
    "get_account_service",
    "get_current_account",
    "get_current_session",
    "resolve_token",
]
