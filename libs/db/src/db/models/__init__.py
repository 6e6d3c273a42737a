"""Shared SQLAlchemy models registry for the ledger database.

Currently includes the catalog, wallet and transaction models used by
``ledger_classifier``.
"""

from .ledger import Base, Category, Subcategory, Transaction, Wallet

__all__ = [
    "Base",
    "Category",
    "Subcategory",
    "Transaction",
    "Wallet",
]
