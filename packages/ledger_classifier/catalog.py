"""Collaborator interfaces the classifier reads from (and the legacy flow writes to).

The classifier never talks to storage directly. Callers inject objects that
satisfy these protocols: :mod:`ledger_classifier.persistence` provides the
SQLAlchemy-backed implementations and the test suite uses an in-memory fake.

Ownership scoping
-----------------
Categories and subcategories with ``owner_id is None`` are defaults visible to
every user; rows with an ``owner_id`` are visible only to that user. Every
lookup below is restricted to ``default OR owned by user_id``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from .models import StoredTransaction, TransactionRecord, TransactionType


@dataclass(frozen=True, slots=True)
class CatalogCategory:
    id: int
    name: str
    type: TransactionType
    owner_id: int | None = None

    @property
    def is_default(self) -> bool:
        return self.owner_id is None


@dataclass(frozen=True, slots=True)
class CatalogSubcategory:
    id: int
    name: str
    category_id: int
    owner_id: int | None = None

    @property
    def is_default(self) -> bool:
        return self.owner_id is None


@dataclass(frozen=True, slots=True)
class WalletRef:
    id: int
    user_id: int
    name: str = ""


class WalletDirectory(Protocol):
    def resolve_wallet(self, wallet_id: int, user_id: int) -> WalletRef:
        """Return the wallet when owned by ``user_id``.

        Raises :class:`~ledger_classifier.errors.WalletNotFound` when the wallet
        does not exist or belongs to someone else.
        """
        ...


class CategoryCatalog(Protocol):
    def find_category_by_name_for_user(
        self, name: str, user_id: int
    ) -> CatalogCategory | None:
        """Exact-name lookup across default and user-owned categories."""
        ...

    def find_category_named(
        self, name: str, type: TransactionType, user_id: int
    ) -> CatalogCategory | None:
        """Exact-name lookup restricted to categories of ``type``."""
        ...

    def find_subcategory_by_name_for_category_and_user(
        self, name: str, category_id: int, user_id: int
    ) -> CatalogSubcategory | None: ...

    def list_available_subcategories_for_category(
        self, category_id: int, user_id: int
    ) -> Sequence[CatalogSubcategory]:
        """Subcategories of a category: defaults first, then user rows, each by id."""
        ...


class TransactionSink(Protocol):
    def create_transaction(self, record: TransactionRecord) -> StoredTransaction: ...


__all__ = [
    "CatalogCategory",
    "CatalogSubcategory",
    "WalletRef",
    "WalletDirectory",
    "CategoryCatalog",
    "TransactionSink",
]
