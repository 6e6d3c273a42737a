from __future__ import annotations

from decimal import Decimal

import pytest

from ledger_classifier.amounts import extract_amount


def test_plain_decimal_with_dot() -> None:
    result = extract_amount("gastei 23.50 no supermercado")
    assert result.detected is True
    assert result.amount == Decimal("23.50")


def test_comma_and_dot_are_equivalent() -> None:
    assert extract_amount("gastei 23,50").amount == extract_amount("gastei 23.50").amount


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("€23 no café", Decimal("23")),
        ("$15 uber", Decimal("15")),
        ("r$ 40 na farmácia", Decimal("40")),
        ("100 euros de renda", Decimal("100")),
        ("paid 7.5 dollars", Decimal("7.5")),
        ("jantar 80 reais", Decimal("80")),
    ],
)
def test_currency_markers(text: str, expected: Decimal) -> None:
    result = extract_amount(text)
    assert result.detected is True
    assert result.amount == expected


def test_no_number_is_not_detected() -> None:
    result = extract_amount("sem valor aqui")
    assert result.detected is False
    assert result.amount is None


def test_first_mention_wins() -> None:
    assert extract_amount("2 cafés por 3.20").amount == Decimal("2")


def test_leading_zero_mention_is_not_detected() -> None:
    # Only the first numeric mention is considered, even if a later one is valid.
    result = extract_amount("0 multas e 15 de taxa")
    assert result.detected is False
    assert result.amount is None


def test_only_two_decimal_places_are_captured() -> None:
    assert extract_amount("12.345").amount == Decimal("12.34")
