from .manager import (
    EVENT_ACCOUNT,
    EVENT_NOTIFICATION,
    RealtimeEvent,
    Subscription,
    SubscriptionManager,
)

__all__ = [
    "EVENT_ACCOUNT",
    "EVENT_NOTIFICATION",
    "RealtimeEvent",
    "Subscription",
    "SubscriptionManager",
]
