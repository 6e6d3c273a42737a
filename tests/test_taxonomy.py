from __future__ import annotations

from ledger_classifier.models import TransactionType
from ledger_classifier.taxonomy import resolve_category, resolve_subcategory, resolve_taxonomy

from tests.helpers.catalog import OTHER_USER_ID, USER_ID, InMemoryCatalog

DEBIT = TransactionType.DEBIT
CREDIT = TransactionType.CREDIT


def test_keyword_resolves_to_catalog_category(catalog: InMemoryCatalog) -> None:
    match = resolve_taxonomy("gastei 23.50 no supermercado", DEBIT, USER_ID, catalog)
    assert match.category == "Food & Dining"
    assert match.category_id == catalog.category("Food & Dining").id
    assert match.category_matched is True
    assert match.subcategory == "Groceries"


def test_type_mismatch_falls_back_to_other(catalog: InMemoryCatalog) -> None:
    # "salário" suggests Salary (CREDIT) but the transaction is DEBIT.
    name, category_id, matched = resolve_category("salário 100", DEBIT, USER_ID, catalog)
    assert (name, category_id, matched) == ("Other", None, False)


def test_other_category_in_catalog_is_used_as_fallback(catalog: InMemoryCatalog) -> None:
    other = catalog.add_category("Other", DEBIT, subcategories=("General",))
    match = resolve_taxonomy("coisa estranha 10", DEBIT, USER_ID, catalog)
    assert match.category == "Other"
    assert match.category_id == other.id
    assert match.category_matched is True
    assert match.subcategory == "General"


def test_other_of_the_wrong_type_is_ignored(catalog: InMemoryCatalog) -> None:
    catalog.add_category("Other", CREDIT)
    name, category_id, matched = resolve_category("coisa 10", DEBIT, USER_ID, catalog)
    assert (name, category_id, matched) == ("Other", None, False)


def test_user_owned_category_is_visible_only_to_its_owner() -> None:
    catalog = InMemoryCatalog()
    catalog.add_category("Health", DEBIT, owner_id=USER_ID, subcategories=("Pharmacy",))

    mine = resolve_taxonomy("farmácia 12", DEBIT, USER_ID, catalog)
    assert (mine.category, mine.category_matched, mine.subcategory) == (
        "Health",
        True,
        "Pharmacy",
    )

    theirs = resolve_taxonomy("farmácia 12", DEBIT, OTHER_USER_ID, catalog)
    assert (theirs.category, theirs.category_matched) == ("Other", False)


def test_unknown_subcategory_keyword_uses_general(catalog: InMemoryCatalog) -> None:
    # "comida" maps to Food & Dining but has no subcategory keyword.
    match = resolve_taxonomy("comida 15", DEBIT, USER_ID, catalog)
    assert match.category == "Food & Dining"
    assert match.subcategory == "General"


def test_subcategory_from_another_category_is_rejected(catalog: InMemoryCatalog) -> None:
    # "gym" suggests Gym (a Health subcategory) inside Food & Dining.
    food = catalog.category("Food & Dining")
    assert resolve_subcategory("gym", food.id, USER_ID, catalog) == "General"


def test_without_general_first_available_subcategory_is_used(catalog: InMemoryCatalog) -> None:
    food = catalog.category("Food & Dining")
    catalog.remove_subcategory("General", food.id)
    # Defaults come first in id order: Restaurants was seeded right after General.
    assert resolve_subcategory("comida", food.id, USER_ID, catalog) == "Restaurants"


def test_user_subcategories_come_after_defaults() -> None:
    catalog = InMemoryCatalog()
    category = catalog.add_category("Pets", DEBIT)
    catalog.add_subcategory("Vet", category.id, owner_id=USER_ID)
    catalog.add_subcategory("Food", category.id)
    assert resolve_subcategory("x", category.id, USER_ID, catalog) == "Food"


def test_empty_category_returns_suggestion_or_general() -> None:
    catalog = InMemoryCatalog()
    category = catalog.add_category("Transportation", DEBIT)
    assert resolve_subcategory("uber", category.id, USER_ID, catalog) == "Taxi/Uber"
    assert resolve_subcategory("andar", category.id, USER_ID, catalog) == "General"


def test_without_category_id_suggestion_is_unvalidated(catalog: InMemoryCatalog) -> None:
    assert resolve_subcategory("uber", None, USER_ID, catalog) == "Taxi/Uber"
    assert resolve_subcategory("nada", None, USER_ID, catalog) == "General"


def test_user_category_of_matching_type_beats_default_of_other_type() -> None:
    catalog = InMemoryCatalog.with_default_taxonomy()
    mine = catalog.add_category("Investments", DEBIT, owner_id=USER_ID, subcategories=("Stocks",))

    name, category_id, matched = resolve_category("comprei ações 100", DEBIT, USER_ID, catalog)
    assert (name, category_id, matched) == ("Investments", mine.id, True)

    # The default CREDIT row still serves credits and other users.
    default = catalog.category("Investments")
    assert resolve_category("recebi ações 100", CREDIT, USER_ID, catalog)[1] == default.id
    assert resolve_category("comprei ações 100", DEBIT, OTHER_USER_ID, catalog)[1] is None
