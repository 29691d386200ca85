from decimal import Decimal

import pytest

from palmpay.core.money import MAX_MINOR_UNITS, AmountError, format_amount, parse_amount, to_decimal


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("300", 30_000),
        (" 1,250 ", 125_000),
        ("12.5", 1_250),
        ("0.01", 1),
        (150, 15_000),
        (0.1, 10),
        (Decimal("99.99"), 9_999),
    ],
)
def test_parse_amount_returns_minor_units(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.parametrize("value", ["", "abc", "0", "-1", "0.00", "NaN", "-Infinity", None, False])
def test_parse_amount_rejects_invalid_input(value):
    with pytest.raises(AmountError, match="valid amount"):
        parse_amount(value)


def test_parse_amount_rejects_sub_cent_precision():
    with pytest.raises(AmountError, match="two decimal places"):
        parse_amount("10.005")


def test_parse_amount_rejects_amounts_the_balance_column_cannot_hold():
    assert parse_amount("92233720368547758.07") == MAX_MINOR_UNITS
    with pytest.raises(AmountError, match="cannot exceed"):
        parse_amount("1e20")


def test_parse_amount_honours_a_lower_ceiling():
    assert parse_amount("10", maximum_cents=1_000) == 1_000
    with pytest.raises(AmountError, match="cannot exceed Rs. 10"):
        parse_amount("10.01", maximum_cents=1_000)


def test_format_amount_matches_app_display():
    assert format_amount(125_000) == "Rs. 1,250"
    assert format_amount(1_250) == "Rs. 12.50"
    assert format_amount(-30_000) == "Rs. -300"
    assert format_amount(500, "PKR") == "PKR 5"


def test_to_decimal():
    assert to_decimal(1_250) == Decimal("12.50")
