"""Payee lookup errors."""


class PayeeError(Exception):
    """Base class for payee lookup errors."""


class InvalidScanCodeError(PayeeError):
    """Raised when scanned text does not carry a usable e-mail address."""


class PayeeNotFoundError(PayeeError):
    """Raised when no account matches a scanned code."""
