"""Legacy one-step flow: parse an utterance and store it immediately.

Kept for callers that predate the draft/confirm workflow. It shares the
normalizer, type classifier and amount extractor with :func:`classify`, but:

- dates only understand today/yesterday and explicit ISO or ``DD/MM/YYYY``;
- categories come from a reduced vocabulary (Food, Transport, Income,
  Entertainment, Shopping, Bills, Health) and are not validated against the
  catalog;
- subcategories follow fixed per-category rules, defaulting to ``"General"``;
- the result is handed to a ``TransactionSink`` and the stored row returned.
"""

from __future__ import annotations

import datetime as dt

from .amounts import extract_amount
from .catalog import TransactionSink, WalletDirectory
from .dates import resolve_date_legacy
from .errors import AmountNotDetected
from .keywords import LEGACY_CATEGORY_KEYWORDS, LEGACY_SUBCATEGORY_RULES, contains_word
from .logging_setup import get_logger
from .models import ClassificationRequest, StoredTransaction, TransactionRecord, UserContext
from .normalize import normalize_text
from .taxonomy import FALLBACK_CATEGORY, FALLBACK_SUBCATEGORY
from .type_classifier import classify_type

_logger = get_logger("ledger_classifier.legacy")

LEGACY_AMOUNT_MESSAGE = "Could not extract a valid amount from the text"


def detect_legacy_category(text: str) -> str:
    hit = LEGACY_CATEGORY_KEYWORDS.match(text)
    return hit.target if hit is not None else FALLBACK_CATEGORY


def detect_legacy_subcategory(text: str, category: str) -> str:
    for subcategory, keywords in LEGACY_SUBCATEGORY_RULES.get(category, ()):
        if any(contains_word(text, kw) for kw in keywords):
            return subcategory
    return FALLBACK_SUBCATEGORY


def parse_and_create_transaction(
    request: ClassificationRequest,
    user: UserContext,
    *,
    wallets: WalletDirectory,
    sink: TransactionSink,
    today: dt.date | None = None,
) -> StoredTransaction:
    """Parse ``request.text`` and persist it through ``sink`` in one step.

    Raises ``WalletNotFound`` for a foreign/missing wallet and
    ``AmountNotDetected`` when no positive amount is present; nothing is
    stored in either case.
    """

    wallet = wallets.resolve_wallet(request.wallet_id, user.user_id)
    text = normalize_text(request.text)

    tx_type = classify_type(text)
    amount = extract_amount(text)
    if not amount.detected or amount.amount is None:
        raise AmountNotDetected(LEGACY_AMOUNT_MESSAGE)

    category = detect_legacy_category(text)
    record = TransactionRecord(
        wallet_id=wallet.id,
        type=tx_type,
        amount=amount.amount,
        date=resolve_date_legacy(text, request.text, today=today).date,
        category=category,
        subcategory=detect_legacy_subcategory(text, category),
        description=request.text,
    )
    stored = sink.create_transaction(record)
    _logger.info(
        "stored legacy transaction id=%s wallet=%s category=%s/%s",
        stored.id,
        stored.wallet_id,
        stored.category,
        stored.subcategory,
    )
    return stored


__all__ = [
    "LEGACY_AMOUNT_MESSAGE",
    "detect_legacy_category",
    "detect_legacy_subcategory",
    "parse_and_create_transaction",
]
