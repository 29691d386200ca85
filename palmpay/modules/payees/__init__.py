"""Payee lookup: search by e-mail or CNIC and QR code resolution."""

from .exceptions import InvalidScanCodeError, PayeeError, PayeeNotFoundError
from .models import Payee
from .service import PayeeService, parse_scanned_code

__all__ = [
    "InvalidScanCodeError",
    "Payee",
    "PayeeError",
    "PayeeNotFoundError",
    "PayeeService",
    "parse_scanned_code",
]
