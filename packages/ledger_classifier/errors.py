"""Exception types raised by the classifier."""

from __future__ import annotations

AMOUNT_NOT_DETECTED_MESSAGE = (
    "Could not extract a valid amount from the text. "
    "Please include a number like '23.50' or '100 euros'."
)
WALLET_NOT_FOUND_MESSAGE = "Wallet not found or access denied"


class ClassificationError(ValueError):
    """Base class for user-correctable input problems."""


class AmountNotDetected(ClassificationError):
    """The utterance carries no positive monetary amount."""

    def __init__(self, message: str = AMOUNT_NOT_DETECTED_MESSAGE) -> None:
        super().__init__(message)


class WalletNotFound(LookupError):
    """The wallet does not exist or is not owned by the requesting user."""

    def __init__(self, wallet_id: int, message: str = WALLET_NOT_FOUND_MESSAGE) -> None:
        super().__init__(message)
        self.wallet_id = wallet_id


__all__ = [
    "AMOUNT_NOT_DETECTED_MESSAGE",
    "WALLET_NOT_FOUND_MESSAGE",
    "ClassificationError",
    "AmountNotDetected",
    "WalletNotFound",
]
