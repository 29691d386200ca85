"""Domain services for account management and identity."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from palmpay.core.config import SecuritySettings
from palmpay.core.crypto import hash_password, password_fingerprint, verify_password
from palmpay.core.security import (
    EMAIL_VERIFICATION_PURPOSE,
    PASSWORD_RESET_PURPOSE,
    InvalidTokenError,
    TokenData,
    create_purpose_token,
    decode_purpose_token,
)

from .exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AccountValidationError,
    InvalidAccountTokenError,
    InvalidCredentialsError,
)
from .identity import MIN_PASSWORD_LENGTH, format_cnic, is_valid_email, normalize_email, password_strength
from .models import Account, AccountCreateInput, Registration
from .repository import AccountRepository, RevokedTokenRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Encapsulates sign-up, sign-in and credential management."""

    def __init__(
        self,
        repository: AccountRepository,
        revoked_tokens: RevokedTokenRepository,
        security: SecuritySettings,
    ) -> None:
        self._repository = repository
        self._revoked_tokens = revoked_tokens
        self._security = security

    @classmethod
    def with_session(cls, session: AsyncSession, security: SecuritySettings) -> "AccountService":
        from palmpay.infrastructure.database.repositories.account_repository import (
            SqlAccountRepository,
            SqlRevokedTokenRepository,
        )

        return cls(SqlAccountRepository(session), SqlRevokedTokenRepository(session), security)

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def get_by_email(self, email: str) -> Account | None:
        return await self._repository.get_by_email(normalize_email(email))

    async def authenticate(self, email: str, password: str) -> Account | None:
        account = await self._repository.get_by_email(normalize_email(email))
        if account is None or not account.is_active:
            return None
        if not verify_password(password, account.password_hash):
            return None
        return account

    async def register(self, payload: AccountCreateInput) -> Registration:
        email = normalize_email(payload.email)
        full_name = payload.full_name.strip()
        father_name = payload.father_name.strip()
        if not all([email, payload.password, full_name, father_name, payload.cnic]):
            raise AccountValidationError("Please fill in all fields")
        if not is_valid_email(email):
            raise AccountValidationError("Please enter a valid email address")
        cnic = format_cnic(payload.cnic)
        if cnic is None:
            raise AccountValidationError("Please enter a valid CNIC")
        if len(payload.password) < MIN_PASSWORD_LENGTH:
            raise AccountValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if payload.opening_balance_cents < 0:
            raise AccountValidationError("Opening balance cannot be negative")

        if await self._repository.get_by_email(email) is not None:
            raise AccountAlreadyExistsError(f"Email already registered: {email}")
        if await self._repository.get_by_cnic(cnic) is not None:
            raise AccountAlreadyExistsError(f"CNIC already registered: {cnic}")

        account = await self._repository.create_account(
            email=email,
            password_hash=hash_password(payload.password),
            full_name=full_name,
            father_name=father_name,
            cnic=cnic,
            balance_cents=payload.opening_balance_cents,
            currency=payload.currency,
        )
        logger.info("Account %s registered", account.id)
        return Registration(
            account=account,
            verification_token=self.issue_email_verification(account),
            password_strength=password_strength(payload.password),
        )

    async def set_last_login(self, account_id: str) -> None:
        await self._repository.set_last_login(account_id, datetime.now(timezone.utc))

    async def change_password(self, account_id: str, current_password: str, new_password: str) -> None:
        account = await self._repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        if not verify_password(current_password, account.password_hash):
            raise InvalidCredentialsError("Current password is incorrect")
        self._check_new_password(new_password)
        await self._repository.set_password_hash(account_id, hash_password(new_password))
        logger.info("Password changed for account %s", account_id)

    def issue_email_verification(self, account: Account) -> str:
        token = create_purpose_token(
            self._security,
            account.id,
            EMAIL_VERIFICATION_PURPOSE,
            self._security.email_verification_expire_minutes,
        )
        logger.info("Email verification issued for account %s", account.id)
        return token

    async def verify_email(self, token: str) -> Account:
        claims = self._decode(token, EMAIL_VERIFICATION_PURPOSE)
        account = await self._repository.get_by_id(claims.account_id)
        if account is None:
            raise InvalidAccountTokenError("Token is invalid or has expired")
        if not account.email_verified:
            await self._repository.mark_email_verified(account.id)
            account.email_verified = True
        return account

    async def issue_password_reset(self, email: str) -> str | None:
        """Return a single-use reset token, or ``None`` for unknown addresses."""
        account = await self._repository.get_by_email(normalize_email(email))
        if account is None or not account.is_active:
            logger.info("Password reset requested for unknown or inactive address")
            return None
        token = create_purpose_token(
            self._security,
            account.id,
            PASSWORD_RESET_PURPOSE,
            self._security.password_reset_expire_minutes,
            fingerprint=password_fingerprint(account.password_hash),
        )
        logger.info("Password reset issued for account %s", account.id)
        return token

    async def reset_password(self, token: str, new_password: str) -> Account:
        claims = self._decode(token, PASSWORD_RESET_PURPOSE)
        account = await self._repository.get_by_id(claims.account_id)
        # The fingerprint pins the token to the hash it was issued against,
        # so a completed reset invalidates every outstanding link.
        if account is None or claims.fingerprint != password_fingerprint(account.password_hash):
            raise InvalidAccountTokenError("Token is invalid or has expired")
        self._check_new_password(new_password)
        await self._repository.set_password_hash(account.id, hash_password(new_password))
        logger.info("Password reset completed for account %s", account.id)
        return account

    async def sign_out(self, token: TokenData) -> None:
        await self._revoked_tokens.revoke(
            jti=token.jti,
            account_id=token.account_id,
            expires_at=token.expires_at,
        )
        await self._revoked_tokens.purge_expired(datetime.now(timezone.utc))
        logger.info("Account %s signed out", token.account_id)

    async def is_token_revoked(self, jti: str) -> bool:
        return await self._revoked_tokens.is_revoked(jti)

    def _decode(self, token: str, purpose: str):
        try:
            return decode_purpose_token(self._security, token, purpose)
        except InvalidTokenError as exc:
            raise InvalidAccountTokenError(str(exc)) from exc

    @staticmethod
    def _check_new_password(password: str) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AccountValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
