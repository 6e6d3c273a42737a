"""Monetary amount extraction."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from .models import AmountResult

# Optional leading currency marker, the number, optional trailing currency.
# Only group 1 (the number) is used; the markers just anchor common phrasing.
_AMOUNT_RE = re.compile(
    r"(?:€|\$|[rR]\$)?\s*(\d+(?:[.,]\d{1,2})?)\s*(?:euros?|reais|dollars?|€|\$)?"
)

_NOT_DETECTED = AmountResult(amount=None, detected=False)


def extract_amount(text: str) -> AmountResult:
    """Return the first positive amount mentioned in ``text``.

    ``"23,50"`` and ``"23.50"`` parse to the same value. Only the first
    numeric mention is considered: when it is zero the result is not
    detected even if a later number would be valid.
    """

    match = _AMOUNT_RE.search(text)
    if match is None:
        return _NOT_DETECTED
    raw = match.group(1).replace(",", ".")
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        return _NOT_DETECTED
    if amount <= 0:
        return _NOT_DETECTED
    return AmountResult(amount=amount, detected=True)


__all__ = ["extract_amount"]
