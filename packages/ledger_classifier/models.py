"""Data models for ``ledger_classifier``.

Request/draft shapes that cross the package boundary are pydantic models so
callers get validation and a stable JSON shape. Intermediate analyzer results
are small frozen dataclasses; they never leave the package on their own.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionType(str, Enum):
    """Direction of money movement relative to the wallet."""

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


# ---------------------------------------------------------------------------
# Boundary models
# ---------------------------------------------------------------------------


class ClassificationRequest(BaseModel):
    """A single free-text utterance to classify for one wallet."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    wallet_id: int
    text: str

    @field_validator("text")
    @classmethod
    def _text_non_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("text must be non-empty")
        return v


@dataclass(frozen=True, slots=True)
class UserContext:
    """Identity of the requesting user (catalog scoping and wallet ownership)."""

    user_id: int


class TransactionDraft(BaseModel):
    """Structured, unpersisted proposal produced from one utterance.

    Notes
    -----
    - ``description`` carries the original text verbatim (not normalized).
    - ``amount_detected`` is always ``True`` on a produced draft; a missing
      amount is an error, not a draft.
    - ``category``/``subcategory`` are always non-empty, falling back to
      ``"Other"``/``"General"`` and surfacing the fallback via
      ``category_matched``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    wallet_id: int
    type: TransactionType
    amount: Decimal = Field(gt=0)
    category: str = Field(min_length=1)
    subcategory: str = Field(min_length=1)
    date: dt.date
    description: str
    amount_detected: bool
    category_matched: bool
    date_detected: bool


# ---------------------------------------------------------------------------
# Analyzer results
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AmountResult:
    amount: Decimal | None
    detected: bool


@dataclass(frozen=True, slots=True)
class DateResult:
    date: dt.date
    explicitly_detected: bool


@dataclass(frozen=True, slots=True)
class TaxonomyMatch:
    """Outcome of keyword-to-catalog resolution.

    ``category_id`` is ``None`` when the category came from the hard-coded
    ``"Other"`` fallback rather than the catalog.
    """

    category: str
    category_id: int | None
    category_matched: bool
    subcategory: str


# ---------------------------------------------------------------------------
# Legacy one-step flow
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """A transaction ready to be handed to a ``TransactionSink``."""

    wallet_id: int
    type: TransactionType
    amount: Decimal
    date: dt.date
    category: str
    subcategory: str | None
    description: str


@dataclass(frozen=True, slots=True)
class StoredTransaction:
    """A transaction as returned by the sink after insertion."""

    id: int
    wallet_id: int
    type: TransactionType
    amount: Decimal
    date: dt.date
    category: str
    subcategory: str | None
    description: str


__all__ = [
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
