from decimal import Decimal

import pytest

from fairshare.errors import ValidationError
from fairshare.money import format_money, is_zero, round2, to_decimal


def test_round2_half_away_from_zero():
    assert round2("2.675") == Decimal("2.68")
    assert round2("-2.675") == Decimal("-2.68")
    assert round2("1.004") == Decimal("1.00")


def test_round2_float_input_uses_shortest_repr():
    assert round2(0.1 + 0.2) == Decimal("0.30")
    assert round2(19.99) == Decimal("19.99")


@pytest.mark.parametrize("value", ["0.005", "-0.015", "123.456", "7", "0.1", "-99.995"])
def test_round2_idempotent(value):
    assert round2(round2(value)) == round2(value)


def test_is_zero_epsilon():
    assert is_zero(Decimal("0.009"))
    assert is_zero(Decimal("-0.009"))
    assert not is_zero(Decimal("0.01"))
    assert not is_zero(Decimal("-0.01"))


def test_to_decimal_accepts_comma_separator():
    assert to_decimal("12,50") == Decimal("12.50")


@pytest.mark.parametrize("value", ["abc", "", "nan", "inf", True])
def test_to_decimal_rejects_garbage(value):
    with pytest.raises(ValidationError):
        to_decimal(value)


def test_format_money():
    assert format_money(Decimal("10")) == "Rs.10.00"
    assert format_money(Decimal("3.456"), "€") == "€3.46"


def test_round2_rejects_amounts_beyond_decimal_precision():
    with pytest.raises(ValidationError):
        round2("1e30")
