"""DEBIT/CREDIT detection from transaction verbs and nouns."""

from __future__ import annotations

from .keywords import TYPE_KEYWORDS
from .logging_setup import get_logger
from .models import TransactionType

_logger = get_logger("ledger_classifier.type_classifier")


def classify_type(text: str) -> TransactionType:
    """Classify normalized ``text`` as CREDIT or DEBIT.

    CREDIT keywords are scanned first, so an utterance mentioning both
    ("recebi o reembolso do que paguei") is CREDIT. Keywords are matched as
    plain substrings. With no keyword at all the result is DEBIT.
    """

    for tx_type, keywords in TYPE_KEYWORDS:
        for keyword in keywords:
            if keyword in text:
                _logger.debug("type %s from keyword %r", tx_type.value, keyword)
                return tx_type
    return TransactionType.DEBIT


__all__ = ["classify_type"]
