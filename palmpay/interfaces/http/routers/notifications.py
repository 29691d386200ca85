"""Notification history endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from palmpay.core.config import Settings
from palmpay.interfaces.http.deps import get_app_settings, get_current_account, get_notification_service
from palmpay.modules.accounts import Account
from palmpay.modules.notifications import NotificationService
from palmpay.schemas import NotificationListResponse, NotificationResponse

router = APIRouter()


@router.get("", response_model=NotificationListResponse, summary="Latest notifications, newest first")
async def list_notifications(
    limit: Optional[int] = Query(None, ge=1, le=200),
    offset: int = Query(0, ge=0),
    account: Account = Depends(get_current_account),
    notification_service: NotificationService = Depends(get_notification_service),
    settings: Settings = Depends(get_app_settings),
) -> NotificationListResponse:
    notifications = await notification_service.list_notifications(
        account.id,
        limit or settings.notifications.history_limit,
        offset,
    )
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(item) for item in notifications]
    )
