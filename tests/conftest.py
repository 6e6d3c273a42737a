"""Pytest configuration shared by the whole suite.

- Puts the workspace ``packages/`` dir, the ``db`` library sources and the
  repo root on ``sys.path`` so ``ledger_classifier``, ``db`` and
  ``tests.helpers`` import without an editable install.
- Keeps tests hermetic: no test sees a ``DATABASE_URL`` from the developer's
  environment, and the shared SQLAlchemy engine is disposed after each test
  so the next one may bind a different SQLite file.
"""

# ruff: noqa: E402, I001
from __future__ import annotations

import datetime as dt
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
_DB_SRC = _ROOT / "libs" / "db" / "src"
# Ensure local sources precede any installed copies.
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_DB_SRC), str(_ROOT)] if p not in sys.path]

from db.client import dispose_engine

from tests.helpers.catalog import (
    OTHER_USER_ID,
    TODAY,
    USER_ID,
    WALLET_ID,
    InMemoryCatalog,
    InMemoryWallets,
)


@pytest.fixture(autouse=True)
def _isolate_database(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("LEDGER_CLASSIFIER_MAX_WORKERS", raising=False)
    monkeypatch.delenv("LEDGER_CLASSIFIER_LOG_LEVEL", raising=False)
    yield
    dispose_engine()


@pytest.fixture
def today() -> dt.date:
    return TODAY


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """Default taxonomy (from the bundled seed) with no user-owned rows."""

    return InMemoryCatalog.with_default_taxonomy()


@pytest.fixture
def wallets() -> InMemoryWallets:
    w = InMemoryWallets()
    w.add(WALLET_ID, user_id=USER_ID, name="Main")
    w.add(WALLET_ID + 1, user_id=OTHER_USER_ID, name="Someone else's")
    return w
