"""JWT helpers for access, password-reset and e-mail verification tokens."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, status
from jose import JWTError, jwt
from pydantic import BaseModel

from palmpay.core.config import SecuritySettings

ACCESS_PURPOSE = "access"
PASSWORD_RESET_PURPOSE = "password_reset"
EMAIL_VERIFICATION_PURPOSE = "email_verification"


class TokenData(BaseModel):
    account_id: str
    email: str
    jti: str
    expires_at: datetime


class PurposeToken(BaseModel):
    account_id: str
    purpose: str
    fingerprint: Optional[str] = None


class InvalidTokenError(ValueError):
    """Raised when a single-purpose token is malformed, expired or for another purpose."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(
    settings: SecuritySettings,
    account_id: str,
    email: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": account_id,
        "email": email,
        "purpose": ACCESS_PURPOSE,
        "jti": uuid.uuid4().hex,
        "exp": _now() + expire_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(settings: SecuritySettings, token: str) -> TokenData:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials") from exc

    account_id = payload.get("sub")
    email = payload.get("email")
    jti = payload.get("jti")
    exp = payload.get("exp")
    if payload.get("purpose") != ACCESS_PURPOSE or not all([account_id, email, jti, exp]):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")
    return TokenData(
        account_id=account_id,
        email=email,
        jti=jti,
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
    )


def create_purpose_token(
    settings: SecuritySettings,
    account_id: str,
    purpose: str,
    expires_minutes: int,
    fingerprint: Optional[str] = None,
) -> str:
    payload = {
        "sub": account_id,
        "purpose": purpose,
        "exp": _now() + timedelta(minutes=expires_minutes),
    }
    if fingerprint is not None:
        payload["fp"] = fingerprint
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_purpose_token(settings: SecuritySettings, token: str, purpose: str) -> PurposeToken:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise InvalidTokenError("Token is invalid or has expired") from exc

    if payload.get("purpose") != purpose or not payload.get("sub"):
        raise InvalidTokenError("Token is invalid or has expired")
    return PurposeToken(account_id=payload["sub"], purpose=purpose, fingerprint=payload.get("fp"))
