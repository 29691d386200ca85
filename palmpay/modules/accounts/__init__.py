"""Account domain: identity, credentials and profile lookup."""

from .exceptions import (
    AccountAlreadyExistsError,
    AccountError,
    AccountNotFoundError,
    AccountValidationError,
    InvalidAccountTokenError,
    InvalidCredentialsError,
)
from .models import Account, AccountCreateInput, Registration
from .service import AccountService

__all__ = [
    "Account",
    "AccountAlreadyExistsError",
    "AccountCreateInput",
    "AccountError",
    "AccountNotFoundError",
    "AccountService",
    "AccountValidationError",
    "InvalidAccountTokenError",
    "InvalidCredentialsError",
    "Registration",
]
