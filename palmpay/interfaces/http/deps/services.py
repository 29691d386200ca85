"""Providers for the money-movement and history services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from palmpay.core.container import ApplicationContainer
from palmpay.modules.notifications import NotificationService
from palmpay.modules.payees import PayeeService
from palmpay.modules.transactions import TransactionService
from palmpay.modules.transfers import TransferExecutor

from .database import get_container, get_db_session


def get_transaction_service(db: AsyncSession = Depends(get_db_session)) -> TransactionService:
    return TransactionService.with_session(db)


def get_notification_service(db: AsyncSession = Depends(get_db_session)) -> NotificationService:
    return NotificationService.with_session(db)


def get_payee_service(db: AsyncSession = Depends(get_db_session)) -> PayeeService:
    return PayeeService.with_session(db)


def get_transfer_executor(container: ApplicationContainer = Depends(get_container)) -> TransferExecutor:
    # The executor opens its own sessions; the request session only serves reads.
    return container.transfer_executor()


__all__ = [
    "get_notification_service",
    "get_payee_service",
    "get_transaction_service",
    "get_transfer_executor",
]
