"""In-memory collaborators for tests: catalog, wallet directory, transaction sink."""

from __future__ import annotations

import datetime as dt
import threading
from collections.abc import Iterable, Sequence

from ledger_classifier.catalog import CatalogCategory, CatalogSubcategory, WalletRef
from ledger_classifier.errors import WalletNotFound
from ledger_classifier.models import StoredTransaction, TransactionRecord, TransactionType
from ledger_classifier.seed_taxonomy import load_taxonomy_seed

TODAY = dt.date(2024, 3, 15)
USER_ID = 1
OTHER_USER_ID = 2
WALLET_ID = 10


def _visible(owner_id: int | None, user_id: int) -> bool:
    return owner_id is None or owner_id == user_id


def _catalog_order(owner_id: int | None, row_id: int) -> tuple[bool, int]:
    # Defaults first, then user rows; each by ascending id.
    return (owner_id is not None, row_id)


class InMemoryCatalog:
    """Dict-backed ``CategoryCatalog`` mirroring the SQL implementation's rules."""

    def __init__(self) -> None:
        self.categories: list[CatalogCategory] = []
        self.subcategories: list[CatalogSubcategory] = []
        self._next_id = 1
        self.calls: list[str] = []

    @classmethod
    def with_default_taxonomy(cls) -> InMemoryCatalog:
        cat = cls()
        for seed in load_taxonomy_seed():
            cat.add_category(seed.name, seed.type, subcategories=("General", *seed.subcategories))
        return cat

    def _new_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    def add_category(
        self,
        name: str,
        type: TransactionType,
        *,
        owner_id: int | None = None,
        subcategories: Iterable[str] = (),
    ) -> CatalogCategory:
        category = CatalogCategory(id=self._new_id(), name=name, type=type, owner_id=owner_id)
        self.categories.append(category)
        for sub in subcategories:
            self.add_subcategory(sub, category.id, owner_id=owner_id)
        return category

    def add_subcategory(
        self, name: str, category_id: int, *, owner_id: int | None = None
    ) -> CatalogSubcategory:
        sub = CatalogSubcategory(
            id=self._new_id(), name=name, category_id=category_id, owner_id=owner_id
        )
        self.subcategories.append(sub)
        return sub

    def remove_subcategory(self, name: str, category_id: int) -> None:
        self.subcategories = [
            s for s in self.subcategories if not (s.name == name and s.category_id == category_id)
        ]

    def category(self, name: str) -> CatalogCategory:
        return next(c for c in self.categories if c.name == name)

    # ---- CategoryCatalog protocol -------------------------------------------

    def find_category_by_name_for_user(self, name: str, user_id: int) -> CatalogCategory | None:
        self.calls.append(f"category:{name}")
        rows = [c for c in self.categories if c.name == name and _visible(c.owner_id, user_id)]
        rows.sort(key=lambda c: _catalog_order(c.owner_id, c.id))
        return rows[0] if rows else None

    def find_category_named(
        self, name: str, type: TransactionType, user_id: int
    ) -> CatalogCategory | None:
        self.calls.append(f"category_named:{name}:{type.value}")
        rows = [
            c
            for c in self.categories
            if c.name == name and c.type == type and _visible(c.owner_id, user_id)
        ]
        rows.sort(key=lambda c: _catalog_order(c.owner_id, c.id))
        return rows[0] if rows else None

    def find_subcategory_by_name_for_category_and_user(
        self, name: str, category_id: int, user_id: int
    ) -> CatalogSubcategory | None:
        self.calls.append(f"subcategory:{name}")
        rows = [
            s
            for s in self.subcategories
            if s.name == name and s.category_id == category_id and _visible(s.owner_id, user_id)
        ]
        rows.sort(key=lambda s: _catalog_order(s.owner_id, s.id))
        return rows[0] if rows else None

    def list_available_subcategories_for_category(
        self, category_id: int, user_id: int
    ) -> Sequence[CatalogSubcategory]:
        self.calls.append("subcategories")
        rows = [
            s
            for s in self.subcategories
            if s.category_id == category_id and _visible(s.owner_id, user_id)
        ]
        return sorted(rows, key=lambda s: _catalog_order(s.owner_id, s.id))


class InMemoryWallets:
    def __init__(self) -> None:
        self._wallets: dict[int, WalletRef] = {}

    def add(self, wallet_id: int, *, user_id: int, name: str = "") -> WalletRef:
        ref = WalletRef(id=wallet_id, user_id=user_id, name=name)
        self._wallets[wallet_id] = ref
        return ref

    def resolve_wallet(self, wallet_id: int, user_id: int) -> WalletRef:
        ref = self._wallets.get(wallet_id)
        if ref is None or ref.user_id != user_id:
            raise WalletNotFound(wallet_id)
        return ref


class RecordingSink:
    """``TransactionSink`` that keeps stored rows in memory (thread-safe ids)."""

    def __init__(self) -> None:
        self.stored: list[StoredTransaction] = []
        self._lock = threading.Lock()

    def create_transaction(self, record: TransactionRecord) -> StoredTransaction:
        with self._lock:
            stored = StoredTransaction(
                id=len(self.stored) + 1,
                wallet_id=record.wallet_id,
                type=record.type,
                amount=record.amount,
                date=record.date,
                category=record.category,
                subcategory=record.subcategory,
                description=record.description,
            )
            self.stored.append(stored)
            return stored
