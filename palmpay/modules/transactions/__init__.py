from .models import LEG_RECEIVE, LEG_SEND, LegInput, RecentRecipient, TransactionLeg
from .service import TransactionService, build_legs, period_start

__all__ = [
    "LEG_RECEIVE",
    "LEG_SEND",
    "LegInput",
    "RecentRecipient",
    "TransactionLeg",
    "TransactionService",
    "build_legs",
    "period_start",
]
