"""Keyword → category → subcategory resolution against the user's catalog.

Category step
-------------
The longest category keyword found in the text suggests a category name. The
suggestion is accepted only when the catalog has a category of that exact
name visible to the user *and* of the classified transaction type. Otherwise
the resolver falls back to a catalog category literally named ``"Other"`` of
that type, and finally to the bare string ``"Other"`` with
``category_matched=False``.

Subcategory step
----------------
The longest subcategory keyword suggests a subcategory name. With a resolved
category id the suggestion must exist in that category; otherwise the
category's ``"General"`` subcategory is used, then its first available
subcategory. Without a category id (or with an empty category) the bare
suggestion, or ``"General"``, is returned unvalidated.
"""

from __future__ import annotations

import logging

from .catalog import CategoryCatalog
from .keywords import CATEGORY_KEYWORDS, SUBCATEGORY_KEYWORDS, KeywordTable
from .logging_setup import get_logger
from .models import TaxonomyMatch, TransactionType

_logger = get_logger("ledger_classifier.taxonomy")

FALLBACK_CATEGORY = "Other"
FALLBACK_SUBCATEGORY = "General"


def _log_rejected_keyword(
    keyword: str,
    target: str,
    tx_type: TransactionType,
    user_id: int,
    catalog: CategoryCatalog,
) -> None:
    same_name = catalog.find_category_by_name_for_user(target, user_id)
    if same_name is None:
        _logger.debug("keyword %r suggests unknown category %r", keyword, target)
    else:
        _logger.debug(
            "keyword %r suggests %r, which is %s not %s",
            keyword,
            target,
            same_name.type.value,
            tx_type.value,
        )


def resolve_category(
    text: str,
    tx_type: TransactionType,
    user_id: int,
    catalog: CategoryCatalog,
    *,
    table: KeywordTable = CATEGORY_KEYWORDS,
) -> tuple[str, int | None, bool]:
    """Return ``(category_name, category_id, matched)`` for normalized ``text``."""

    hit = table.match(text)
    if hit is not None:
        found = catalog.find_category_named(hit.target, tx_type, user_id)
        if found is not None:
            _logger.debug("category %r from keyword %r", found.name, hit.keyword)
            return found.name, found.id, True
        if _logger.isEnabledFor(logging.DEBUG):
            _log_rejected_keyword(hit.keyword, hit.target, tx_type, user_id, catalog)

    other = catalog.find_category_named(FALLBACK_CATEGORY, tx_type, user_id)
    if other is not None:
        return other.name, other.id, True
    return FALLBACK_CATEGORY, None, False


def resolve_subcategory(
    text: str,
    category_id: int | None,
    user_id: int,
    catalog: CategoryCatalog,
    *,
    table: KeywordTable = SUBCATEGORY_KEYWORDS,
) -> str:
    """Return the subcategory name for normalized ``text`` within ``category_id``."""

    hit = table.match(text)
    suggested = hit.target if hit is not None else None

    if category_id is not None:
        if suggested is not None:
            found = catalog.find_subcategory_by_name_for_category_and_user(
                suggested, category_id, user_id
            )
            if found is not None:
                return found.name
        general = catalog.find_subcategory_by_name_for_category_and_user(
            FALLBACK_SUBCATEGORY, category_id, user_id
        )
        if general is not None:
            return general.name
        available = catalog.list_available_subcategories_for_category(category_id, user_id)
        if available:
            return available[0].name

    return suggested if suggested is not None else FALLBACK_SUBCATEGORY


def resolve_taxonomy(
    text: str,
    tx_type: TransactionType,
    user_id: int,
    catalog: CategoryCatalog,
) -> TaxonomyMatch:
    name, category_id, matched = resolve_category(text, tx_type, user_id, catalog)
    subcategory = resolve_subcategory(text, category_id, user_id, catalog)
    return TaxonomyMatch(
        category=name,
        category_id=category_id,
        category_matched=matched,
        subcategory=subcategory,
    )


__all__ = [
    "FALLBACK_CATEGORY",
    "FALLBACK_SUBCATEGORY",
    "resolve_category",
    "resolve_subcategory",
    "resolve_taxonomy",
]
