"""Exact monetary parsing and formatting in integer minor units."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Union

MINOR_UNITS = 100
# Largest value a signed 64-bit INTEGER column holds.
MAX_MINOR_UNITS = 2**63 - 1
_QUANTUM = Decimal("0.01")

AmountInput = Union[str, int, Decimal, float]


class AmountError(ValueError):
    """Raised when an amount cannot be represented as a positive exact value."""


def parse_amount(value: AmountInput, *, maximum_cents: int = MAX_MINOR_UNITS) -> int:
    """Convert user input such as ``"300"`` or ``"12.50"`` into minor units.

    Floats are accepted only through their shortest repr, so ``0.1`` means
    ten paisa rather than its binary approximation. Anything that is not a
    finite, positive number with at most two decimal places is rejected, as is
    anything above ``maximum_cents``.
    """
    if isinstance(value, bool):
        raise AmountError("Please enter a valid amount")
    if isinstance(value, float):
        value = repr(value)
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise AmountError("Please enter a valid amount") from exc

    if not amount.is_finite() or amount <= 0:
        raise AmountError("Please enter a valid amount")
    if amount > Decimal(maximum_cents) / MINOR_UNITS:
        raise AmountError(f"Amount cannot exceed {format_amount(maximum_cents)}")
    try:
        exact = amount == amount.quantize(_QUANTUM)
    except InvalidOperation as exc:
        raise AmountError("Please enter a valid amount") from exc
    if not exact:
        raise AmountError("Amount cannot have more than two decimal places")
    return int(amount * MINOR_UNITS)


def to_decimal(amount_cents: int) -> Decimal:
    return (Decimal(amount_cents) / MINOR_UNITS).quantize(_QUANTUM)


def format_amount(amount_cents: int, symbol: str = "Rs.") -> str:
    """Render minor units the way the app displays them: ``Rs. 1,250`` or ``Rs. 12.50``."""
    whole, cents = divmod(abs(amount_cents), MINOR_UNITS)
    sign = "-" if amount_cents < 0 else ""
    text = f"{whole:,}" if cents == 0 else f"{whole:,}.{cents:02d}"
    return f"{symbol} {sign}{text}"


__all__ = ["AmountError", "MAX_MINOR_UNITS", "MINOR_UNITS", "format_amount", "parse_amount", "to_decimal"]
