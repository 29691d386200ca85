from .models import TYPE_TRANSACTION_RECEIVED, TYPE_TRANSACTION_SENT, Notification, NotificationDraft
from .service import NotificationService, build_transfer_notifications

__all__ = [
    "Notification",
    "NotificationDraft",
    "NotificationService",
    "TYPE_TRANSACTION_RECEIVED",
    "TYPE_TRANSACTION_SENT",
    "build_transfer_notifications",
]
