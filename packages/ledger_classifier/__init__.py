"""Public interface for the ``ledger_classifier`` package.

This module exposes the package's entry points and public models/types as the
stable import surface. There is no runtime logic here, only symbol re-exports.
"""

from .classify import classify, classify_many, classify_text
from .errors import AmountNotDetected, ClassificationError, WalletNotFound
from .legacy import parse_and_create_transaction
from .models import (
    AmountResult,
    ClassificationRequest,
    DateResult,
    StoredTransaction,
    TaxonomyMatch,
    TransactionDraft,
    TransactionRecord,
    TransactionType,
    UserContext,
)

__all__ = [
    # Entry points
    "classify",
    "classify_text",
    "classify_many",
    "parse_and_create_transaction",
    # Errors
    "ClassificationError",
    "AmountNotDetected",
    "WalletNotFound",
    # Models
    "TransactionType",
    "ClassificationRequest",
    "UserContext",
    "TransactionDraft",
    "AmountResult",
    "DateResult",
    "TaxonomyMatch",
    "TransactionRecord",
    "StoredTransaction",
]
