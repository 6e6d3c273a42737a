from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from ledger_classifier import (
    AmountNotDetected,
    ClassificationRequest,
    TransactionType,
    UserContext,
    WalletNotFound,
    parse_and_create_transaction,
)
from ledger_classifier.legacy import (
    LEGACY_AMOUNT_MESSAGE,
    detect_legacy_category,
    detect_legacy_subcategory,
)

from tests.helpers.catalog import USER_ID, WALLET_ID, RecordingSink


def _store(text: str, wallets, today: dt.date, sink: RecordingSink, wallet_id: int = WALLET_ID):
    return parse_and_create_transaction(
        ClassificationRequest(wallet_id=wallet_id, text=text),
        UserContext(user_id=USER_ID),
        wallets=wallets,
        sink=sink,
        today=today,
    )


def test_parse_and_store_grocery(wallets, today) -> None:
    sink = RecordingSink()
    stored = _store("Gastei 23,50 no supermercado ontem", wallets, today, sink)

    assert stored.id == 1
    assert stored.wallet_id == WALLET_ID
    assert stored.type is TransactionType.DEBIT
    assert stored.amount == Decimal("23.50")
    assert (stored.category, stored.subcategory) == ("Food", "Groceries")
    assert stored.date == today - dt.timedelta(days=1)
    assert stored.description == "Gastei 23,50 no supermercado ontem"
    assert sink.stored == [stored]


def test_legacy_dates_ignore_offsets(wallets, today) -> None:
    sink = RecordingSink()
    stored = _store("uber 8 há 3 dias", wallets, today, sink)
    assert stored.date == today
    assert (stored.category, stored.subcategory) == ("Transport", "Ride")


def test_legacy_explicit_iso_date(wallets, today) -> None:
    stored = _store("paguei 50 na farmácia em 2024-01-10", wallets, today, RecordingSink())
    assert stored.date == dt.date(2024, 1, 10)
    assert (stored.category, stored.subcategory) == ("Health", "Pharmacy")


def test_legacy_missing_amount_stores_nothing(wallets, today) -> None:
    sink = RecordingSink()
    with pytest.raises(AmountNotDetected) as excinfo:
        _store("jantar fora", wallets, today, sink)
    assert str(excinfo.value) == LEGACY_AMOUNT_MESSAGE
    assert sink.stored == []


def test_legacy_foreign_wallet_stores_nothing(wallets, today) -> None:
    sink = RecordingSink()
    with pytest.raises(WalletNotFound):
        _store("café 2", wallets, today, sink, wallet_id=WALLET_ID + 1)
    assert sink.stored == []


@pytest.mark.parametrize(
    ("text", "category", "subcategory"),
    [
        ("salário 1000", "Income", "Salary"),
        ("conta da luz 40", "Bills", "Electricity"),
        ("netflix 9", "Entertainment", "Streaming"),
        ("loja 15", "Shopping", "General"),
        ("qualquer coisa 3", "Other", "General"),
        # "gas" does not fire inside "gastei"
        ("gastei 30", "Other", "General"),
    ],
)
def test_legacy_vocabulary(text: str, category: str, subcategory: str) -> None:
    assert detect_legacy_category(text) == category
    assert detect_legacy_subcategory(text, category) == subcategory


def test_legacy_subcategory_rules_are_ordered() -> None:
    # Groceries is checked before Coffee.
    assert detect_legacy_subcategory("café no mercado", "Food") == "Groceries"
