from .exceptions import (
    DuplicateTransferError,
    InsufficientBalanceError,
    InvalidAmountError,
    NoteTooLongError,
    SelfTransferError,
    TransferAccountNotFoundError,
    TransferError,
    TransferOutcomeUnknownError,
    TransferStoreError,
    TransferValidationError,
)
from .executor import TransferExecutor, new_transfer_id
from .models import PartySnapshot, TransferReceipt, TransferRequest, TransferResult

__all__ = [
    "DuplicateTransferError",
    "InsufficientBalanceError",
    "InvalidAmountError",
    "NoteTooLongError",
    "PartySnapshot",
    "SelfTransferError",
    "TransferAccountNotFoundError",
    "TransferError",
    "TransferExecutor",
    "TransferOutcomeUnknownError",
    "TransferReceipt",
    "TransferRequest",
    "TransferResult",
    "TransferStoreError",
    "TransferValidationError",
    "new_transfer_id",
]
