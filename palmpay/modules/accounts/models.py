"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Account:
    id: str
    email: str
    full_name: str
    balance_cents: int
    currency: str
    is_active: bool
    password_hash: str = field(repr=False)
    father_name: Optional[str] = None
    cnic: Optional[str] = None
    email_verified: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.full_name or "User"


@dataclass(slots=True)
class AccountCreateInput:
    email: str
    password: str
    full_name: str
    father_name: str
    cnic: str
    # Sign-up always opens at zero; seeding tools may fund an account up front.
    opening_balance_cents: int = 0
    currency: str = "PKR"


@dataclass(slots=True)
class Registration:
    account: Account
    verification_token: str
    password_strength: str
