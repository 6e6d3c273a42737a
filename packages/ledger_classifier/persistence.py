# ruff: noqa: I001
"""SQLAlchemy-backed collaborators for the classifier.

These classes implement the protocols from :mod:`ledger_classifier.catalog`
over the shared database owned by ``libs/db``. Lookups open a short
read-only session per call (``db.client.read_scope``), so instances can be
shared by concurrent classification threads without sharing a session.

Ordering rules:
- Name lookups that could match both a default row and a user-owned row
  return the default row first, then the lowest id.
- ``list_available_subcategories_for_category`` lists default rows first and
  then the user's rows, each by ascending id.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import or_, select
from sqlalchemy.sql.elements import ColumnElement

from db.client import read_scope, session_scope
from db.models.ledger import Category, Subcategory, Transaction, Wallet
from .catalog import CatalogCategory, CatalogSubcategory, WalletRef
from .errors import WalletNotFound
from .logging_setup import get_logger
from .models import StoredTransaction, TransactionRecord, TransactionType

_logger = get_logger("ledger_classifier.persistence")


def _visible_to(owner_col: ColumnElement[int | None], user_id: int) -> ColumnElement[bool]:
    return or_(owner_col.is_(None), owner_col == user_id)


def _to_category(row: Category) -> CatalogCategory:
    return CatalogCategory(
        id=row.id, name=row.name, type=TransactionType(row.type), owner_id=row.user_id
    )


def _to_subcategory(row: Subcategory) -> CatalogSubcategory:
    return CatalogSubcategory(
        id=row.id, name=row.name, category_id=row.category_id, owner_id=row.user_id
    )


class SqlCategoryCatalog:
    """Read-only category/subcategory lookups scoped to ``default OR user``."""

    def __init__(self, *, database_url: str | None = None) -> None:
        self._database_url = database_url

    def find_category_by_name_for_user(
        self, name: str, user_id: int
    ) -> CatalogCategory | None:
        stmt = (
            select(Category)
            .where(Category.name == name, _visible_to(Category.user_id, user_id))
            .order_by(Category.user_id.is_not(None), Category.id)
            .limit(1)
        )
        with read_scope(database_url=self._database_url) as session:
            row = session.scalars(stmt).first()
            return _to_category(row) if row is not None else None

    def find_category_named(
        self, name: str, type: TransactionType, user_id: int
    ) -> CatalogCategory | None:
        stmt = (
            select(Category)
            .where(
                Category.name == name,
                Category.type == type.value,
                _visible_to(Category.user_id, user_id),
            )
            .order_by(Category.user_id.is_not(None), Category.id)
            .limit(1)
        )
        with read_scope(database_url=self._database_url) as session:
            row = session.scalars(stmt).first()
            return _to_category(row) if row is not None else None

    def find_subcategory_by_name_for_category_and_user(
        self, name: str, category_id: int, user_id: int
    ) -> CatalogSubcategory | None:
        stmt = (
            select(Subcategory)
            .where(
                Subcategory.name == name,
                Subcategory.category_id == category_id,
                _visible_to(Subcategory.user_id, user_id),
            )
            .order_by(Subcategory.user_id.is_not(None), Subcategory.id)
            .limit(1)
        )
        with read_scope(database_url=self._database_url) as session:
            row = session.scalars(stmt).first()
            return _to_subcategory(row) if row is not None else None

    def list_available_subcategories_for_category(
        self, category_id: int, user_id: int
    ) -> Sequence[CatalogSubcategory]:
        stmt = (
            select(Subcategory)
            .where(
                Subcategory.category_id == category_id,
                _visible_to(Subcategory.user_id, user_id),
            )
            .order_by(Subcategory.user_id.is_not(None), Subcategory.id)
        )
        with read_scope(database_url=self._database_url) as session:
            return [_to_subcategory(r) for r in session.scalars(stmt)]


class SqlWalletDirectory:
    def __init__(self, *, database_url: str | None = None) -> None:
        self._database_url = database_url

    def resolve_wallet(self, wallet_id: int, user_id: int) -> WalletRef:
        stmt = select(Wallet).where(Wallet.id == wallet_id, Wallet.user_id == user_id)
        with read_scope(database_url=self._database_url) as session:
            row = session.scalars(stmt).first()
            if row is None:
                _logger.debug("wallet %s not visible to user %s", wallet_id, user_id)
                raise WalletNotFound(wallet_id)
            return WalletRef(id=row.id, user_id=row.user_id, name=row.name)


class SqlTransactionSink:
    """Inserts one ``transactions`` row per call, committing immediately."""

    def __init__(self, *, database_url: str | None = None) -> None:
        self._database_url = database_url

    def create_transaction(self, record: TransactionRecord) -> StoredTransaction:
        with session_scope(database_url=self._database_url) as session:
            row = Transaction(
                wallet_id=record.wallet_id,
                type=record.type.value,
                amount=record.amount,
                date=record.date,
                category=record.category,
                subcategory=record.subcategory,
                description=record.description,
            )
            session.add(row)
            session.flush()
            return StoredTransaction(
                id=row.id,
                wallet_id=row.wallet_id,
                type=TransactionType(row.type),
                amount=row.amount,
                date=row.date,
                category=row.category,
                subcategory=row.subcategory,
                description=row.description or "",
            )


__all__ = [
    "SqlCategoryCatalog",
    "SqlWalletDirectory",
    "SqlTransactionSink",
]
