"""Payee lookup by typed search term or scanned QR code."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from palmpay.modules.accounts.identity import CNIC_DIGITS, cnic_digits, format_cnic, is_valid_email, normalize_email
from palmpay.modules.accounts.models import Account
from palmpay.modules.accounts.repository import AccountRepository

from .exceptions import InvalidScanCodeError, PayeeNotFoundError
from .models import Payee

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 3


def parse_scanned_code(text: str) -> str:
    """Extract the payee e-mail from QR text.

    Codes generated by the app are JSON objects with an ``email`` key; plain
    codes carry the address itself.
    """
    raw = (text or "").strip()
    candidate = raw
    try:
        decoded = json.loads(raw)
    except ValueError:
        decoded = None
    if isinstance(decoded, dict) and decoded.get("email"):
        candidate = str(decoded["email"])
    email = normalize_email(candidate)
    if not is_valid_email(email):
        raise InvalidScanCodeError("Invalid QR code. Please scan a valid Palm Pay QR code.")
    return email


def _to_payee(account: Account) -> Payee:
    return Payee(id=account.id, name=account.display_name, email=account.email, cnic=account.cnic or "")


@dataclass(slots=True)
class PayeeService:
    accounts: AccountRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "PayeeService":
        from palmpay.infrastructure.database.repositories.account_repository import SqlAccountRepository

        return cls(SqlAccountRepository(session))

    async def search(self, term: str, requester_id: str) -> list[Payee]:
        term = (term or "").strip()
        if len(term) < MIN_SEARCH_LENGTH:
            return []
        if "@" in term:
            matches = await self.accounts.find_by_email(normalize_email(term), exclude_id=requester_id)
        else:
            # Users type CNICs with or without dashes.
            cnic = format_cnic(term) if len(cnic_digits(term)) == CNIC_DIGITS else term
            matches = await self.accounts.find_by_cnic(cnic, exclude_id=requester_id)
        return [_to_payee(account) for account in matches]

    async def resolve_scan(self, text: str, requester_id: str) -> Payee:
        email = parse_scanned_code(text)
        matches = await self.accounts.find_by_email(email, exclude_id=requester_id)
        if not matches:
            logger.info("Scanned code did not match any account")
            raise PayeeNotFoundError("User not found")
        return _to_payee(matches[0])
