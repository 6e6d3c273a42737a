"""Text normalization shared by every analyzer."""

from __future__ import annotations


def normalize_text(text: str) -> str:
    """Return the lower-cased, whitespace-trimmed form used for scanning.

    The original text is kept separately by callers; only this form is
    scanned for keywords, amounts and relative-date markers.
    """

    return text.lower().strip()


__all__ = ["normalize_text"]
