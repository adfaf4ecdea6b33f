from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from business.utils import parse_amounts, sap_date, to_amount, to_decimal


@pytest.mark.parametrize("value, expected", [
    ("1 000,50", Decimal("1000.50")),
    ("1000.50", Decimal("1000.50")),
    (500, Decimal("500")),
    (Decimal("7.25"), Decimal("7.25")),
])
def test_to_decimal(value, expected) -> None:
    assert to_decimal(value) == expected


def test_to_decimal_rejects_float_and_garbage() -> None:
    with pytest.raises(TypeError):
        to_decimal(0.1)
    with pytest.raises(ValueError):
        to_decimal("12a")


def test_to_amount_keeps_two_decimals() -> None:
    assert str(to_amount(500)) == "500.00"


def test_parse_amounts_prefers_semicolon() -> None:
    assert parse_amounts("10,50;20") == [Decimal("10.50"), Decimal("20")]
    assert parse_amounts("100,200,") == [Decimal("100"), Decimal("200")]


def test_sap_date() -> None:
    assert sap_date(datetime.date(2026, 1, 5)) == "20260105"
