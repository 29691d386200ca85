"""Transfer domain exceptions.

Validation errors are raised before the store is touched, account and
balance errors abort the atomic step, and store errors are retryable.
"""

from palmpay.modules.accounts.exceptions import AccountNotFoundError


class TransferError(Exception):
    """Base class for transfer errors."""

    retryable = False


class TransferValidationError(TransferError):
    """Raised for malformed transfer input."""


class SelfTransferError(TransferValidationError):
    """Raised when sender and recipient are the same account."""


class InvalidAmountError(TransferValidationError):
    """Raised when the amount is not a positive exact monetary value."""


class NoteTooLongError(TransferValidationError):
    """Raised when the note exceeds the configured bound."""


class DuplicateTransferError(TransferValidationError):
    """Raised when a caller-supplied transfer id has already been used."""


class TransferAccountNotFoundError(TransferError, AccountNotFoundError):
    """Raised when the sender or recipient account does not exist."""

    def __init__(self, account_id: str, role: str) -> None:
        super().__init__(f"{role.capitalize()} account not found")
        self.account_id = account_id
        self.role = role


class InsufficientBalanceError(TransferError):
    """Raised when the sender balance would go negative."""


class TransferStoreError(TransferError):
    """Raised when the backing store fails during the atomic step."""

    retryable = True


class TransferOutcomeUnknownError(TransferError):
    """Raised when the atomic step did not answer in time; it may still have committed."""

    def __init__(self, transfer_id: str) -> None:
        super().__init__("Transfer status is unknown, refresh your balance before retrying")
        self.transfer_id = transfer_id
