"""Reusable FastAPI dependencies."""

from .account import (
    AuthenticatedAccount,
    get_account_service,
    get_current_account,
    get_current_session,
    resolve_token,
)
from .database import get_app_settings, get_container, get_db_session
from .services import (
    get_notification_service,
    get_payee_service,
    get_transaction_service,
    get_transfer_executor,
)

__all__ = [
    "AuthenticatedAccount",
    "get_account_service",
    "get_app_settings",
    "get_container",
    "get_current_account",
    "get_current_session",
    "get_db_session",
    "get_notification_service",
    "get_payee_service",
    "get_transaction_service",
    "get_transfer_executor",
    "resolve_token",
]
