"""Classification entry points: free text → :class:`TransactionDraft`.

``classify`` composes the analyzers in a fixed order:

1. wallet ownership (``WalletDirectory.resolve_wallet``)
2. normalization
3. transaction type
4. amount (required; a missing amount raises ``AmountNotDetected``)
5. date
6. category and subcategory against the user's catalog

Nothing is written anywhere. The same input against an unchanged catalog and
the same reference date always yields an equal draft, so calls are safe to
retry and to run concurrently (see ``classify_many``).
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable

from .amounts import extract_amount
from .catalog import CategoryCatalog, WalletDirectory
from .dates import resolve_date
from .errors import AmountNotDetected
from .logging_setup import get_logger
from .models import ClassificationRequest, TransactionDraft, UserContext
from .normalize import normalize_text
from .pmap import default_concurrency, p_map
from .taxonomy import resolve_taxonomy
from .type_classifier import classify_type

_logger = get_logger("ledger_classifier.classify")


def classify(
    request: ClassificationRequest,
    user: UserContext,
    *,
    catalog: CategoryCatalog,
    wallets: WalletDirectory,
    today: dt.date | None = None,
) -> TransactionDraft:
    """Classify one utterance into an unpersisted transaction draft.

    Parameters
    ----------
    request:
        Wallet id and the raw utterance.
    user:
        Requesting user; scopes wallet ownership and catalog visibility.
    catalog, wallets:
        Read-only collaborators (see :mod:`ledger_classifier.catalog`).
    today:
        Reference date for relative date markers. Defaults to the current date.

    Raises
    ------
    WalletNotFound
        The wallet is missing or not owned by ``user``.
    AmountNotDetected
        No positive amount could be extracted from the text.
    """

    wallet = wallets.resolve_wallet(request.wallet_id, user.user_id)

    text = normalize_text(request.text)
    tx_type = classify_type(text)

    amount = extract_amount(text)
    if not amount.detected or amount.amount is None:
        _logger.debug("no amount in %r", request.text)
        raise AmountNotDetected()

    date = resolve_date(text, request.text, today=today)
    taxonomy = resolve_taxonomy(text, tx_type, user.user_id, catalog)

    draft = TransactionDraft(
        wallet_id=wallet.id,
        type=tx_type,
        amount=amount.amount,
        category=taxonomy.category,
        subcategory=taxonomy.subcategory,
        date=date.date,
        description=request.text,
        amount_detected=True,
        category_matched=taxonomy.category_matched,
        date_detected=date.explicitly_detected,
    )
    _logger.info(
        "classified wallet=%s type=%s amount=%s category=%s/%s matched=%s",
        draft.wallet_id,
        draft.type.value,
        draft.amount,
        draft.category,
        draft.subcategory,
        draft.category_matched,
    )
    return draft


def classify_text(
    wallet_id: int,
    text: str,
    user_id: int,
    *,
    catalog: CategoryCatalog,
    wallets: WalletDirectory,
    today: dt.date | None = None,
) -> TransactionDraft:
    """Convenience wrapper building the request/user objects from plain values."""

    return classify(
        ClassificationRequest(wallet_id=wallet_id, text=text),
        UserContext(user_id=user_id),
        catalog=catalog,
        wallets=wallets,
        today=today,
    )


def classify_many(
    requests: Iterable[ClassificationRequest],
    user: UserContext,
    *,
    catalog: CategoryCatalog,
    wallets: WalletDirectory,
    today: dt.date | None = None,
    concurrency: int | None = None,
) -> list[TransactionDraft]:
    """Classify a batch concurrently, returning drafts in input order.

    The first failing request aborts the batch and its exception propagates.
    ``concurrency`` defaults to ``LEDGER_CLASSIFIER_MAX_WORKERS`` (8 when unset).
    """

    # Pin the reference date once so the whole batch agrees on "today".
    ref = today or dt.date.today()
    workers = concurrency if concurrency is not None else default_concurrency()

    def _one(req: ClassificationRequest) -> TransactionDraft:
        return classify(req, user, catalog=catalog, wallets=wallets, today=ref)

    return p_map(requests, _one, concurrency=workers)


__all__ = ["classify", "classify_text", "classify_many"]
