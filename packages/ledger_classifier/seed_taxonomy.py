"""Seeder for the default (ownerless) category/subcategory catalog.

The taxonomy lives in ``seeds/default_taxonomy.v1.json`` as an ordered list of
categories, each with its type, display color and subcategory names. Seeding
inserts every category with ``user_id = NULL`` and ``is_default = True``,
adds a ``"General"`` subcategory first and then the listed ones in order.

Seeding is idempotent: when any default category already exists the catalog
is left untouched.

Usage (example)::

    ledger-classifier seed-taxonomy --database-url sqlite:///ledger.db
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, TypeAdapter, field_validator
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from db.client import session_scope
from db.models.ledger import Category, Subcategory

from .logging_setup import get_logger
from .models import TransactionType
from .taxonomy import FALLBACK_SUBCATEGORY

_logger = get_logger("ledger_classifier.seed_taxonomy")

DEFAULT_SEED_FILE = Path(__file__).resolve().parent / "seeds" / "default_taxonomy.v1.json"


class CategorySeed(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    name: str
    type: TransactionType
    color: str | None = None
    subcategories: tuple[str, ...] = ()

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("category name must be non-empty")
        return v


_SEED_LIST = TypeAdapter(list[CategorySeed])


def load_taxonomy_seed(path: Path = DEFAULT_SEED_FILE) -> list[CategorySeed]:
    """Parse and validate a taxonomy seed file."""

    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("Seed JSON must be a list of categories")
    return _SEED_LIST.validate_python(data)


def seed_default_taxonomy(session: Session, *, file: Path = DEFAULT_SEED_FILE) -> int:
    """Insert the default taxonomy unless one is already present.

    Returns the number of categories inserted (0 when already seeded).
    """

    existing = session.scalar(
        select(func.count()).select_from(Category).where(Category.is_default.is_(True))
    )
    if existing:
        _logger.info("default taxonomy already present (%s categories); skipping", existing)
        return 0

    seeds = load_taxonomy_seed(file)
    for seed in seeds:
        category = Category(
            name=seed.name,
            type=seed.type.value,
            color=seed.color,
            user_id=None,
            is_default=True,
        )
        session.add(category)
        session.flush()

        for name in (FALLBACK_SUBCATEGORY, *seed.subcategories):
            session.add(
                Subcategory(
                    name=name, category_id=category.id, user_id=None, is_default=True
                )
            )
    session.flush()
    _logger.info("seeded %s default categories", len(seeds))
    return len(seeds)


def seed_taxonomy(*, database_url: str | None = None, file: Path = DEFAULT_SEED_FILE) -> int:
    with session_scope(database_url=database_url) as session:
        return seed_default_taxonomy(session, file=file)


__all__ = [
    "DEFAULT_SEED_FILE",
    "CategorySeed",
    "load_taxonomy_seed",
    "seed_default_taxonomy",
    "seed_taxonomy",
]
