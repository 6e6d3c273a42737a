"""Transaction date resolution from explicit and relative date mentions.

Rules are evaluated in a fixed order and the first one that yields a date
wins:

1. ``today`` / ``hoje``
2. ``yesterday`` / ``ontem``
3. ``day before yesterday`` / ``anteontem``
4. ``N days ago`` / ``há N dias``
5. ``N weeks ago`` / ``há N semanas``
6. ``N months ago`` / ``há N meses``
7. ``last week`` / ``semana passada``
8. ``last month`` / ``mês passado``
9. ISO ``YYYY-MM-DD`` in the original text
10. ``DD/MM/YYYY`` in the original text

With no rule firing the date defaults to today and is flagged as not
explicitly detected.

Notes
-----
- Markers match whole words: ``anteontem`` never triggers the ``ontem``
  rule and ``day before yesterday`` never triggers the ``yesterday`` rule.
- Month arithmetic is calendar based with the day clamped to the end of the
  target month (31 March minus one month is 28/29 February).
- A relative offset that falls outside the supported calendar range skips
  its rule; evaluation continues with the next one.
- Invalid explicit dates (``2024-02-30``) skip their rule as well.
"""

from __future__ import annotations

import calendar
import datetime as dt
import re
from collections.abc import Callable

from .logging_setup import get_logger
from .models import DateResult

_logger = get_logger("ledger_classifier.dates")

_PT_AGO = r"(?<!\w)(?:há|ha|á|a)\s+(\d+)\s*"

_TODAY_RE = re.compile(r"(?<!\w)(?:today|hoje)(?!\w)")
_YESTERDAY_RE = re.compile(r"(?<!\w)(?:(?<!day before )yesterday|ontem)(?!\w)")
_DAY_BEFORE_YESTERDAY_RE = re.compile(r"(?<!\w)(?:day before yesterday|anteontem)(?!\w)")
_DAYS_AGO_RES = (
    re.compile(_PT_AGO + r"dias?(?!\w)"),
    re.compile(r"(?<!\w)(\d+)\s*days?\s+ago(?!\w)"),
)
_WEEKS_AGO_RES = (
    re.compile(_PT_AGO + r"semanas?(?!\w)"),
    re.compile(r"(?<!\w)(\d+)\s*weeks?\s+ago(?!\w)"),
)
_MONTHS_AGO_RES = (
    re.compile(_PT_AGO + r"(?:mês|mes|meses)(?!\w)"),
    re.compile(r"(?<!\w)(\d+)\s*months?\s+ago(?!\w)"),
)
_LAST_WEEK_RE = re.compile(r"(?<!\w)(?:last week|semana passada)(?!\w)")
_LAST_MONTH_RE = re.compile(r"(?<!\w)(?:last month|mês passado|mes passado)(?!\w)")
_ISO_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_DMY_DATE_RE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")


def subtract_months(day: dt.date, months: int) -> dt.date:
    """Return ``day`` shifted back by ``months`` calendar months.

    Raises ``ValueError`` when the result falls before year 1.
    """

    total = day.year * 12 + (day.month - 1) - months
    year, month0 = divmod(total, 12)
    month = month0 + 1
    if not dt.MINYEAR <= year <= dt.MAXYEAR:
        raise ValueError(f"year {year} is out of range")
    last = calendar.monthrange(year, month)[1]
    return dt.date(year, month, min(day.day, last))


def _first_count(patterns: tuple[re.Pattern[str], ...], text: str) -> int | None:
    for pattern in patterns:
        m = pattern.search(text)
        if m is not None:
            return int(m.group(1))
    return None


def _days_ago(text: str, today: dt.date) -> dt.date | None:
    n = _first_count(_DAYS_AGO_RES, text)
    return None if n is None else today - dt.timedelta(days=n)


def _weeks_ago(text: str, today: dt.date) -> dt.date | None:
    n = _first_count(_WEEKS_AGO_RES, text)
    return None if n is None else today - dt.timedelta(weeks=n)


def _months_ago(text: str, today: dt.date) -> dt.date | None:
    n = _first_count(_MONTHS_AGO_RES, text)
    return None if n is None else subtract_months(today, n)


type _Rule = Callable[[str, dt.date], dt.date | None]


def _marker(pattern: re.Pattern[str], shift: Callable[[dt.date], dt.date]) -> _Rule:
    def rule(text: str, today: dt.date) -> dt.date | None:
        return shift(today) if pattern.search(text) else None

    return rule


_RELATIVE_RULES: tuple[tuple[str, _Rule], ...] = (
    ("today", _marker(_TODAY_RE, lambda t: t)),
    ("yesterday", _marker(_YESTERDAY_RE, lambda t: t - dt.timedelta(days=1))),
    (
        "day_before_yesterday",
        _marker(_DAY_BEFORE_YESTERDAY_RE, lambda t: t - dt.timedelta(days=2)),
    ),
    ("days_ago", _days_ago),
    ("weeks_ago", _weeks_ago),
    ("months_ago", _months_ago),
    ("last_week", _marker(_LAST_WEEK_RE, lambda t: t - dt.timedelta(weeks=1))),
    ("last_month", _marker(_LAST_MONTH_RE, lambda t: subtract_months(t, 1))),
)


def _iso_date(text: str) -> dt.date | None:
    m = _ISO_DATE_RE.search(text)
    if m is None:
        return None
    try:
        return dt.date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None


def _dmy_date(text: str) -> dt.date | None:
    m = _DMY_DATE_RE.search(text)
    if m is None:
        return None
    try:
        return dt.date(int(m.group(3)), int(m.group(2)), int(m.group(1)))
    except ValueError:
        return None


def resolve_date(
    text: str, original_text: str | None = None, *, today: dt.date | None = None
) -> DateResult:
    """Resolve the transaction date mentioned in ``text``.

    Parameters
    ----------
    text:
        Normalized text, scanned for relative markers.
    original_text:
        Raw text, scanned for explicit ISO and ``DD/MM/YYYY`` dates. Defaults
        to ``text``.
    today:
        Reference date for relative markers. Defaults to ``date.today()``.
    """

    ref = today or dt.date.today()
    raw = text if original_text is None else original_text

    for name, rule in _RELATIVE_RULES:
        try:
            resolved = rule(text, ref)
        except (OverflowError, ValueError):
            _logger.debug("date rule %s out of range; skipping", name)
            continue
        if resolved is not None:
            _logger.debug("date %s from rule %s", resolved.isoformat(), name)
            return DateResult(date=resolved, explicitly_detected=True)

    for parse in (_iso_date, _dmy_date):
        explicit = parse(raw)
        if explicit is not None:
            return DateResult(date=explicit, explicitly_detected=True)

    return DateResult(date=ref, explicitly_detected=False)


# Legacy one-step flow: only today/yesterday and the explicit formats.
def resolve_date_legacy(
    text: str, original_text: str | None = None, *, today: dt.date | None = None
) -> DateResult:
    ref = today or dt.date.today()
    raw = text if original_text is None else original_text
    if _TODAY_RE.search(text):
        return DateResult(date=ref, explicitly_detected=True)
    if _YESTERDAY_RE.search(text):
        return DateResult(date=ref - dt.timedelta(days=1), explicitly_detected=True)
    for parse in (_iso_date, _dmy_date):
        explicit = parse(raw)
        if explicit is not None:
            return DateResult(date=explicit, explicitly_detected=True)
    return DateResult(date=ref, explicitly_detected=False)


__all__ = ["resolve_date", "resolve_date_legacy", "subtract_months"]
